from __future__ import annotations
from datetime import datetime, timedelta, UTC

import pytest

from eventhook.domain.derivation import derive
from eventhook.domain.models import EntityType, PrivacyLevel

START = datetime(2031, 3, 14, 18, 30, tzinfo=UTC)

def _data(**overrides) -> dict:
    d = {"name": "Pi night", "scheduledStartTime": "2031-03-14T18:30:00Z"}
    d.update(overrides)
    return d

@pytest.mark.parametrize("overrides", [{}, {"entityType": 3}])
def test_external_without_end_gets_two_hours(overrides):
    spec = derive(_data(**overrides))
    assert spec.start == START
    assert (spec.end - spec.start) / timedelta(milliseconds=1) == 7_200_000

@pytest.mark.parametrize("entity_type", [1, 2])
def test_stage_and_voice_get_no_synthesized_end(entity_type):
    spec = derive(_data(entityType=entity_type, channelId="42"))
    assert spec.end is None
    assert spec.entity_type == EntityType(entity_type)
    assert spec.channel_id == "42"

def test_explicit_end_is_kept():
    spec = derive(_data(scheduledEndTime="2031-03-14T23:00:00Z"))
    assert spec.end == datetime(2031, 3, 14, 23, 0, tzinfo=UTC)

def test_defaults():
    spec = derive(_data())
    assert spec.privacy_level is PrivacyLevel.GUILD_ONLY
    assert spec.entity_type is EntityType.EXTERNAL
    assert spec.entity_metadata.location == "TBD"
    assert spec.description is None
    assert spec.channel_id is None

def test_defaults_are_independent():
    spec = derive(_data(privacyLevel=1))
    assert spec.privacy_level is PrivacyLevel.PUBLIC
    assert spec.entity_type is EntityType.EXTERNAL
    assert spec.entity_metadata.location == "TBD"

    spec = derive(_data(entityMetadata={"location": "Rooftop"}))
    assert spec.privacy_level is PrivacyLevel.GUILD_ONLY
    assert spec.entity_metadata.location == "Rooftop"

def test_external_metadata_without_location_falls_back_to_tbd():
    assert derive(_data(entityMetadata={})).entity_metadata.location == "TBD"

def test_voice_metadata_without_location_stays_empty():
    spec = derive(_data(entityType=2, entityMetadata={"other": 1}))
    assert spec.entity_metadata.location is None

def test_offset_start_is_normalized_to_utc():
    spec = derive(_data(scheduledStartTime="2031-03-14T20:30:00+02:00"))
    assert spec.start == START
    assert spec.start.utcoffset() == timedelta(0)

def test_derive_is_deterministic():
    assert derive(_data()) == derive(_data())
