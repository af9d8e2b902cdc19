from __future__ import annotations
import discord
from discord import app_commands, Interaction

from eventhook.domain import clock

def _latency_ms(inter: Interaction) -> int:
    return max(0, int((clock.now() - inter.created_at).total_seconds() * 1000))

@app_commands.command(name="ping", description="Check if the bot is responsive")
async def ping(inter: Interaction):
    await inter.response.send_message(f"🏓 Pong! Latency: {_latency_ms(inter)}ms")

def register(tree: app_commands.CommandTree, guild_obj: discord.Object | None, client: discord.Client | None = None):
    if guild_obj:
        tree.add_command(ping, guild=guild_obj)
    else:
        tree.add_command(ping)
