from __future__ import annotations
import discord

from eventhook.domain.models import CreatedEvent

FOOTER = "Discord Event Webhook"

def build_generic(title: str, desc: str = "") -> discord.Embed:
    e = discord.Embed(title=title or "Scheduled event", description=desc or "", color=discord.Color.blurple())
    e.set_footer(text=FOOTER)
    return e

def build_created(ev: CreatedEvent) -> discord.Embed:
    """Annonce d'un event créé via le webhook (timestamps Discord <t:...>)."""
    e = build_generic(f"📅 {ev.name}", "New scheduled event created.")
    e.add_field(name="Start", value=f"<t:{int(ev.start_time.timestamp())}:f>")
    if ev.end_time:
        e.add_field(name="End", value=f"<t:{int(ev.end_time.timestamp())}:f>")
    if ev.location:
        e.add_field(name="Location", value=ev.location, inline=False)
    if ev.url:
        e.url = ev.url
    return e
