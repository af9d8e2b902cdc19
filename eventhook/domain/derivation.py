# eventhook/domain/derivation.py
from __future__ import annotations

from . import clock
from .models import (
    DEFAULT_LOCATION,
    EXTERNAL_DEFAULT_DURATION,
    DerivedEventSpec,
    EntityMetadata,
    EntityType,
    PrivacyLevel,
)

def derive(event_data: dict) -> DerivedEventSpec:
    """
    Fill the optional fields of an already validated `eventData`.
    Each default is applied on its own: giving one field never forces another.
    """
    start = clock.parse_timestamp(event_data["scheduledStartTime"])
    if start is None:
        raise ValueError("scheduledStartTime must be validated before derive()")

    entity_type = EntityType(int(event_data.get("entityType") or EntityType.EXTERNAL))
    privacy = PrivacyLevel(int(event_data.get("privacyLevel") or PrivacyLevel.GUILD_ONLY))

    end = clock.parse_timestamp(event_data["scheduledEndTime"]) if event_data.get("scheduledEndTime") else None
    if end is None and entity_type is EntityType.EXTERNAL:
        end = start + EXTERNAL_DEFAULT_DURATION

    raw_meta = event_data.get("entityMetadata") or {}
    location = raw_meta.get("location") or None
    if location is None and (entity_type is EntityType.EXTERNAL or not raw_meta):
        location = DEFAULT_LOCATION

    return DerivedEventSpec(
        name=event_data["name"],
        description=event_data.get("description") or None,
        start=start,
        end=end,
        privacy_level=privacy,
        entity_type=entity_type,
        entity_metadata=EntityMetadata(location=location),
        channel_id=event_data.get("channelId") or None,
    )
