# eventhook/domain/validator.py
"""
Validation of the Google Scripts webhook payload.

Every rule appends at most one message; rules are checked in a fixed order
and all of them run, so a caller gets the complete list of problems in one
round trip. Only a missing body or a missing `eventData` stops early, since
nothing further can be read.
"""
from __future__ import annotations
from datetime import datetime
from typing import Any

from . import clock
from .models import (
    DESCRIPTION_MAX,
    LOCATION_MAX,
    NAME_MAX,
    EntityType,
    PrivacyLevel,
    ValidationVerdict,
)

_PRIVACY_VALUES = {int(p) for p in PrivacyLevel}
_ENTITY_VALUES = {int(e) for e in EntityType}

def _is_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()

def _check_name(ev: dict, errors: list[str]) -> None:
    name = ev.get("name")
    if not name:
        errors.append("eventData.name is required")
    elif not isinstance(name, str):
        errors.append("eventData.name must be a string")
    elif len(name) > NAME_MAX:
        errors.append(f"eventData.name must be {NAME_MAX} characters or less")

def _check_times(ev: dict, errors: list[str], now: datetime) -> None:
    start_raw = ev.get("scheduledStartTime")
    start = clock.parse_timestamp(start_raw) if start_raw else None
    if not start_raw:
        errors.append("eventData.scheduledStartTime is required")
    elif start is None:
        errors.append("eventData.scheduledStartTime must be a valid ISO 8601 date")
    elif start <= now:
        errors.append("eventData.scheduledStartTime must be in the future")

    end_raw = ev.get("scheduledEndTime")
    if end_raw:
        end = clock.parse_timestamp(end_raw)
        if end is None:
            errors.append("eventData.scheduledEndTime must be a valid ISO 8601 date")
        elif start is not None and end <= start:
            errors.append("eventData.scheduledEndTime must be after scheduledStartTime")

def _check_description(ev: dict, errors: list[str]) -> None:
    desc = ev.get("description")
    if desc and not isinstance(desc, str):
        errors.append("eventData.description must be a string")
    elif desc and len(desc) > DESCRIPTION_MAX:
        errors.append(f"eventData.description must be {DESCRIPTION_MAX} characters or less")

def _check_enums(ev: dict, errors: list[str]) -> None:
    if "privacyLevel" in ev:
        v = ev["privacyLevel"]
        if not (_is_int(v) and int(v) in _PRIVACY_VALUES):
            errors.append("eventData.privacyLevel must be 1 (public) or 2 (guild only)")
    if "entityType" in ev:
        v = ev["entityType"]
        if not (_is_int(v) and int(v) in _ENTITY_VALUES):
            errors.append(
                "eventData.entityType must be 1 (stage instance), 2 (voice channel), or 3 (external)"
            )

def _check_metadata(ev: dict, errors: list[str]) -> None:
    meta = ev.get("entityMetadata")
    if not meta:
        return
    if not isinstance(meta, dict):
        errors.append("eventData.entityMetadata must be an object")
        return
    loc = meta.get("location")
    if loc and not isinstance(loc, str):
        errors.append("eventData.entityMetadata.location must be a string")
    elif loc and len(loc) > LOCATION_MAX:
        errors.append(f"eventData.entityMetadata.location must be {LOCATION_MAX} characters or less")

def _check_channel(ev: dict, errors: list[str]) -> None:
    ch = ev.get("channelId")
    if ch is not None and not isinstance(ch, str):
        errors.append("eventData.channelId must be a string")

def _event_errors(ev: dict, now: datetime) -> list[str]:
    errors: list[str] = []
    _check_name(ev, errors)
    _check_times(ev, errors, now)
    _check_description(ev, errors)
    _check_enums(ev, errors)
    _check_metadata(ev, errors)
    _check_channel(ev, errors)
    return errors

def validate_event_data(event_data: Any, now: datetime | None = None) -> ValidationVerdict:
    """Rules on the `eventData` object alone (guildId already checked by the caller)."""
    if not isinstance(event_data, dict):
        return ValidationVerdict.from_errors(["eventData object is required"])
    return ValidationVerdict.from_errors(_event_errors(event_data, now or clock.now()))

def validate_request(body: Any, now: datetime | None = None) -> ValidationVerdict:
    """Full webhook body: `{guildId, eventData}`."""
    if not isinstance(body, dict):
        return ValidationVerdict.from_errors(["Request body must be a valid JSON object"])

    errors: list[str] = []
    guild_id = body.get("guildId")
    if not guild_id:
        errors.append("guildId is required")
    elif not isinstance(guild_id, str):
        errors.append("guildId must be a string")

    ev = body.get("eventData")
    if not ev and not isinstance(ev, dict):
        errors.append("eventData is required")
        return ValidationVerdict.from_errors(errors)
    if not isinstance(ev, dict):
        errors.append("eventData must be an object")
        return ValidationVerdict.from_errors(errors)

    errors.extend(_event_errors(ev, now or clock.now()))
    return ValidationVerdict.from_errors(errors)
