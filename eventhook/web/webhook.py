# eventhook/web/webhook.py
"""
Webhook called by the Google Apps Script trigger.

POST /webhook/google-scripts
    {"guildId": "...", "eventData": {"name", "description", "scheduledStartTime",
     "scheduledEndTime", "privacyLevel", "entityType", "entityMetadata"}}

Every request gets exactly one JSON answer; failures are WebhookError
variants carrying their own HTTP status.
"""
from __future__ import annotations
import logging
from typing import Any

from aiohttp import web

from eventhook.core.dispatcher import EventDispatcher
from eventhook.core.notify import NotifyService
from eventhook.core.readiness import ReadinessGate
from eventhook.domain import clock
from eventhook.domain.derivation import derive
from eventhook.domain.errors import ShapeError, ValidationFailed, WebhookError
from eventhook.domain.models import CreatedEvent
from eventhook.domain.validator import validate_event_data

log = logging.getLogger(__name__)

SERVICE_NAME = "Discord Event Webhook"

DISPATCHER = web.AppKey("dispatcher", EventDispatcher)
GATE = web.AppKey("gate", ReadinessGate)

def _fail(status: int, error: str, details: Any) -> web.Response:
    return web.json_response({"success": False, "error": error, "details": details}, status=status)

def _check_shape(body: Any) -> tuple[str, dict]:
    guild_id = body.get("guildId") if isinstance(body, dict) else None
    event_data = body.get("eventData") if isinstance(body, dict) else None

    missing: list[str] = []
    if not guild_id:
        missing.append("guildId is required")
    elif not isinstance(guild_id, str):
        missing.append("guildId must be a string")
    if not isinstance(event_data, dict):
        missing.append("eventData object is required")
    if missing:
        raise ShapeError(missing)
    return guild_id, event_data  # type: ignore[return-value]

async def _create_from_webhook(dispatcher: EventDispatcher, body: Any) -> tuple[str, CreatedEvent]:
    guild_id, event_data = _check_shape(body)

    verdict = validate_event_data(event_data)
    if not verdict.is_valid:
        raise ValidationFailed(verdict.errors)

    spec = derive(event_data)
    return guild_id, await dispatcher.dispatch(guild_id, spec)

async def google_scripts(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except ValueError as e:
        log.error("Webhook body is not valid JSON: %s", e)
        return _fail(400, "Invalid JSON body", [str(e)])

    log.info("Webhook payload received", extra={"data": body})

    try:
        guild_id, created = await _create_from_webhook(request.app[DISPATCHER], body)
    except WebhookError as e:
        log.error("Webhook rejected (%s): %s", e.kind.value, e)
        return _fail(e.status, e.message, e.details)
    except Exception as e:
        log.exception("Error processing webhook")
        return _fail(500, "Internal server error", str(e))

    log.info("Created Scheduled Event %s (%s)", created.name, created.id)
    await NotifyService.post_created(guild_id, created)

    return web.json_response({
        "success": True,
        "eventId": created.id,
        "eventName": created.name,
        "scheduledStartTime": clock.to_iso(created.start_time),
    })

async def webhook_health(request: web.Request) -> web.Response:
    return web.json_response({
        "status": "OK",
        "service": SERVICE_NAME,
        "timestamp": clock.to_iso(clock.now()),
        "botReady": request.app[GATE].is_ready(),
    })

async def root_health(request: web.Request) -> web.Response:
    return web.json_response({"status": "OK", "timestamp": clock.to_iso(clock.now())})
