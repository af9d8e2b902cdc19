# eventhook/core/notify.py
from __future__ import annotations
import logging
import discord

from eventhook.core import embeds
from eventhook.domain.models import CreatedEvent

log = logging.getLogger(__name__)

class NotifyService:
    """
    Poste une annonce dans NOTIFY_CHANNEL_ID après chaque création réussie.
    Désactivé si le channel n'est pas configuré ou pas utilisable.
    """
    enabled: bool = False
    channel_id: int = 0
    channel: discord.abc.Messageable | None = None

    @classmethod
    async def init(cls, client: discord.Client, channel_id: int) -> None:
        cls.channel_id = int(channel_id or 0)
        cls.enabled = False
        cls.channel = None

        if not cls.channel_id:
            log.info("Notifications disabled: NOTIFY_CHANNEL_ID not set.")
            return

        ch = client.get_channel(cls.channel_id)
        if ch is None:
            try:
                ch = await client.fetch_channel(cls.channel_id)
            except discord.HTTPException as e:
                log.warning("Notify channel fetch failed: %s", e)
                return

        guild = getattr(ch, "guild", None)
        if guild is None:
            log.warning("Notify channel %s is not a guild channel.", cls.channel_id)
            return

        me = guild.me
        perms = ch.permissions_for(me) if me is not None else None  # type: ignore[union-attr]
        if perms is None or not perms.send_messages or not perms.embed_links:
            log.warning("Notify channel missing permissions (send_messages, embed_links).")
            return

        cls.channel = ch  # type: ignore[assignment]
        cls.enabled = True
        log.info("Notifications ready: channel=%s guild=%s", cls.channel_id, guild.id)

    @classmethod
    async def post_created(cls, guild_id: str, ev: CreatedEvent) -> bool:
        """Best effort: une erreur d'envoi est loggée, jamais remontée au webhook."""
        if not cls.enabled or cls.channel is None:
            return False
        ch_guild = getattr(cls.channel, "guild", None)
        if ch_guild is not None and str(ch_guild.id) != str(guild_id):
            log.debug("Notify skipped: event guild %s != channel guild %s", guild_id, ch_guild.id)
            return False
        try:
            await cls.channel.send(embed=embeds.build_created(ev))
        except Exception:
            log.exception("Notification post failed for event %s", ev.id)
            return False
        log.info("Sent notification in channel %s", cls.channel_id)
        return True

    @classmethod
    def reset(cls) -> None:
        cls.enabled = False
        cls.channel_id = 0
        cls.channel = None
