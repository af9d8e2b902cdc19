# eventhook/core/client.py
from __future__ import annotations
import asyncio, importlib, logging
import discord
from discord import app_commands

from .config import settings
from .dispatcher import EventDispatcher, install as install_dispatcher
from .logging_setup import configure_logging
from .notify import NotifyService
from .readiness import ReadinessGate

from eventhook.web.server import create_app, start_server

# ── Logging
log = logging.getLogger("eventhook")

# ── Discord client (guilds + guild_scheduled_events sont dans default())
intents = discord.Intents.default()
client = discord.Client(
    intents=intents,
    application_id=int(settings.application_id) if settings.application_id.isdigit() else None,
)
tree = app_commands.CommandTree(client)

# ── Etat partagé avec le webhook (écrit uniquement par on_ready)
gate = ReadinessGate()
dispatcher = EventDispatcher(client, gate)
install_dispatcher(dispatcher)

TEST_GUILDS = [discord.Object(id=g) for g in settings.test_guild_ids]

# ═══════════════════════════════════════════════════════════════════
# Slash commands publiées globalement (copiées sur les guilds de test si définies)
MODULES = [
    "eventhook.modules.system.ping",
    "eventhook.modules.events.test_event",
]

def _register_one_module(dotted: str, guild_obj: discord.Object | None):
    mod = importlib.import_module(dotted)
    if not callable(getattr(mod, "register", None)):
        log.warning("Module %s: no register() found, skipped.", dotted)
        return
    log.info("Register via register(): %s (guild=%s)", dotted, getattr(guild_obj, "id", None))
    mod.register(tree, guild_obj, client)

def _register_modules():
    for dotted in MODULES:
        try:
            _register_one_module(dotted, None)
        except Exception as e:
            log.exception("Failed to register module %s: %s", dotted, e)

async def _sync_commands():
    log.info("Started refreshing application (/) commands.")
    try:
        synced = await tree.sync()
        log.info("Synced %d GLOBAL commands: %s", len(synced), [c.name for c in synced])
        for g in TEST_GUILDS:
            tree.copy_global_to(guild=g)
            g_synced = await tree.sync(guild=g)
            log.info("Copied & synced %d commands to guild %s", len(g_synced), g.id)
        log.info("Successfully reloaded application (/) commands.")
    except discord.Forbidden as e:
        log.error("403 Missing Access on sync. Invite the bot with the applications.commands scope. %s", e)
    except discord.HTTPException as e:
        log.error("Error registering commands: %s", e)

# ═══════════════════════════════════════════════════════════════════

@client.event
async def on_ready():
    if gate.is_ready():
        # Reconnexion: caches déjà peuplés, commandes déjà synchronisées
        log.info("Session resumed as %s", client.user)
        return

    log.info("Bot logged in as %s", client.user)
    gate.mark_ready()

    await NotifyService.init(client, settings.notify_channel_id)
    _register_modules()
    await _sync_commands()

@client.event
async def on_error(event_method: str, *args, **kwargs):
    log.exception("Discord client error in %s", event_method)

@tree.error
async def on_app_command_error(inter: discord.Interaction, error: app_commands.AppCommandError):
    log.error("Error handling interaction: %s", error, exc_info=error)
    msg = "There was an error while executing this command!"
    if inter.response.is_done():
        await inter.followup.send(msg, ephemeral=True)
    else:
        await inter.response.send_message(msg, ephemeral=True)

async def _main():
    # Le serveur HTTP répond dès le boot (503 tant que la session n'est pas prête)
    runner = await start_server(create_app(dispatcher, gate), settings.host, settings.port)
    try:
        async with client:
            await client.start(settings.token)
    finally:
        await runner.cleanup()

def run():
    configure_logging(settings.log_dir, settings.debug)

    missing = settings.missing()
    if missing:
        log.error("%s is not set in environment variables", ", ".join(missing))
        raise SystemExit(1)

    try:
        asyncio.run(_main())
    except discord.LoginFailure as e:
        log.error("Failed to login to Discord: %s", e)
        raise SystemExit(1)
    except KeyboardInterrupt:
        log.info("Shutdown requested")
