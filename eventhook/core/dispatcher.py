# eventhook/core/dispatcher.py
from __future__ import annotations
import logging

import discord

from eventhook.core.readiness import ReadinessGate
from eventhook.domain.errors import CommunityNotFound, NotReady, PermissionDenied, RemoteRejected
from eventhook.domain.models import DEFAULT_DESCRIPTION, CreatedEvent, DerivedEventSpec, EntityType

log = logging.getLogger(__name__)

_ENTITY_TYPES = {
    EntityType.STAGE: discord.EntityType.stage_instance,
    EntityType.VOICE: discord.EntityType.voice,
    EntityType.EXTERNAL: discord.EntityType.external,
}

class EventDispatcher:
    """Turns a DerivedEventSpec into a Discord guild scheduled event."""

    def __init__(self, client: discord.Client, gate: ReadinessGate):
        self.client = client
        self.gate = gate

    def _resolve_guild(self, guild_id: str) -> discord.Guild | None:
        # Cache uniquement: la session reflète déjà les guilds du bot
        try:
            gid = int(guild_id)
        except (TypeError, ValueError):
            return None
        return self.client.get_guild(gid)

    async def dispatch(self, guild_id: str, spec: DerivedEventSpec) -> CreatedEvent:
        if not self.gate.is_ready():
            raise NotReady("Bot is not ready")

        guild = self._resolve_guild(guild_id)
        if guild is None:
            raise CommunityNotFound(f"Guild with ID {guild_id} not found")

        return await self.create(guild, spec)

    def _kwargs(self, guild: discord.Guild, spec: DerivedEventSpec) -> dict:
        kwargs: dict = {
            "name": spec.name,
            "description": spec.description or DEFAULT_DESCRIPTION,
            "start_time": spec.start,
            "entity_type": _ENTITY_TYPES[spec.entity_type],
            "privacy_level": discord.enums.try_enum(discord.PrivacyLevel, int(spec.privacy_level)),
        }
        if spec.end is not None:
            kwargs["end_time"] = spec.end

        # external -> location seule; stage/voice -> channel seul (sinon TypeError côté discord.py)
        if spec.entity_type is EntityType.EXTERNAL:
            if spec.entity_metadata.location:
                kwargs["location"] = spec.entity_metadata.location
        elif spec.channel_id:
            channel = guild.get_channel(int(spec.channel_id)) if spec.channel_id.isdigit() else None
            if channel is None:
                raise RemoteRejected(f"Channel with ID {spec.channel_id} not found in guild {guild.id}")
            kwargs["channel"] = channel
        return kwargs

    async def create(self, guild: discord.Guild, spec: DerivedEventSpec) -> CreatedEvent:
        kwargs = self._kwargs(guild, spec)
        try:
            ev = await guild.create_scheduled_event(**kwargs)
        except discord.Forbidden as e:
            log.error("Error creating scheduled event: %s", e)
            raise PermissionDenied(str(e)) from e
        except Exception as e:
            log.error("Error creating scheduled event: %s", e)
            raise RemoteRejected(str(e)) from e

        created = CreatedEvent.from_discord(ev)
        log.info("Created scheduled event: %s (%s)", created.name, created.id)
        return created

# ── Instance du process, posée au boot par core/client.py
_current: EventDispatcher | None = None

def install(dispatcher: EventDispatcher) -> None:
    global _current
    _current = dispatcher

def current() -> EventDispatcher:
    if _current is None:
        raise RuntimeError("No EventDispatcher installed; call dispatcher.install() at boot")
    return _current
