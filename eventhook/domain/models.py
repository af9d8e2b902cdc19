# eventhook/domain/models.py
from __future__ import annotations
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, Field

class PrivacyLevel(IntEnum):
    PUBLIC = 1
    GUILD_ONLY = 2

class EntityType(IntEnum):
    STAGE = 1
    VOICE = 2
    EXTERNAL = 3

# Discord exige une fin pour les events externes
EXTERNAL_DEFAULT_DURATION = timedelta(hours=2)
DEFAULT_LOCATION = "TBD"
DEFAULT_DESCRIPTION = "Event created via Google Scripts integration"

NAME_MAX = 100
DESCRIPTION_MAX = 1000
LOCATION_MAX = 100

class ValidationVerdict(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationVerdict":
        return cls(is_valid=not errors, errors=list(errors))

class EntityMetadata(BaseModel):
    location: Optional[str] = None

class DerivedEventSpec(BaseModel):
    """Validated eventData with every optional field resolved."""
    name: str
    description: Optional[str] = None
    start: datetime
    end: Optional[datetime] = None
    privacy_level: PrivacyLevel = PrivacyLevel.GUILD_ONLY
    entity_type: EntityType = EntityType.EXTERNAL
    entity_metadata: EntityMetadata = Field(default_factory=lambda: EntityMetadata(location=DEFAULT_LOCATION))
    channel_id: Optional[str] = None

class CreatedEvent(BaseModel):
    """What the webhook needs back from a Discord ScheduledEvent."""
    id: str
    name: str
    start_time: datetime
    end_time: Optional[datetime] = None
    location: Optional[str] = None
    url: str = ""

    @classmethod
    def from_discord(cls, ev) -> "CreatedEvent":
        return cls(
            id=str(ev.id),
            name=ev.name,
            start_time=ev.start_time,
            end_time=getattr(ev, "end_time", None),
            location=getattr(ev, "location", None),
            url=getattr(ev, "url", "") or "",
        )
