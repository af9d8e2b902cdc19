"""
Shared fixtures: a fake discord client/guild pair and an aiohttp test client
wired to the real webhook application.
"""
from __future__ import annotations
import logging
from datetime import datetime, timedelta, UTC
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from aiohttp import test_utils

from eventhook.core.dispatcher import EventDispatcher
from eventhook.core.notify import NotifyService
from eventhook.core.readiness import ReadinessGate
from eventhook.domain import clock
from eventhook.web.server import create_app

GUILD_ID = "123456789012345678"
EVENT_ID = 987654321098765432

def iso_in(**delta) -> str:
    return clock.to_iso(datetime.now(UTC) + timedelta(**delta))

async def _fake_create(**kwargs):
    return SimpleNamespace(
        id=EVENT_ID,
        name=kwargs["name"],
        start_time=kwargs["start_time"],
        end_time=kwargs.get("end_time"),
        location=kwargs.get("location"),
        url=f"https://discord.com/events/{GUILD_ID}/{EVENT_ID}",
    )

@pytest.fixture
def guild():
    g = MagicMock()
    g.id = int(GUILD_ID)
    g.create_scheduled_event = AsyncMock(side_effect=_fake_create)
    g.get_channel = MagicMock(return_value=None)
    return g

@pytest.fixture
def discord_client(guild):
    c = MagicMock()
    c.get_guild = MagicMock(side_effect=lambda gid: guild if gid == guild.id else None)
    return c

@pytest.fixture
def gate():
    g = ReadinessGate()
    g.mark_ready()
    return g

@pytest.fixture
def dispatcher(discord_client, gate):
    return EventDispatcher(discord_client, gate)

@pytest.fixture
def app(dispatcher, gate):
    return create_app(dispatcher, gate)

@pytest_asyncio.fixture
async def http(app):
    async with test_utils.TestClient(test_utils.TestServer(app)) as c:
        yield c

@pytest.fixture(autouse=True)
def _reset_notify():
    NotifyService.reset()
    yield
    NotifyService.reset()

@pytest.fixture
def valid_event_data():
    return {
        "name": "Launch",
        "description": "Product launch party",
        "scheduledStartTime": iso_in(days=365),
    }

@pytest.fixture
def eventhook_log_handlers():
    """Retire les handlers fichiers posés par configure_logging()."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    for h in list(root.handlers):
        if getattr(h, "_eventhook", False):
            root.removeHandler(h)
            h.close()
