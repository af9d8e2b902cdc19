# eventhook/web/server.py
from __future__ import annotations
import logging
from aiohttp import web

from eventhook.core.dispatcher import EventDispatcher
from eventhook.core.readiness import ReadinessGate
from eventhook.web import webhook

log = logging.getLogger(__name__)

def create_app(dispatcher: EventDispatcher, gate: ReadinessGate) -> web.Application:
    app = web.Application()
    app[webhook.DISPATCHER] = dispatcher
    app[webhook.GATE] = gate

    app.router.add_post("/webhook/google-scripts", webhook.google_scripts)
    app.router.add_get("/webhook/health", webhook.webhook_health)
    app.router.add_get("/health", webhook.root_health)
    return app

async def start_server(app: web.Application, host: str, port: int) -> web.AppRunner:
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    log.info("Server running on port %s", port)
    return runner
