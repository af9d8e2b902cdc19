"""Slash command callbacks, exercised without a gateway connection."""
from __future__ import annotations
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from eventhook.core import dispatcher as d_dispatcher
from eventhook.domain import clock
from eventhook.domain.errors import PermissionDenied
from eventhook.domain.validator import validate_event_data
from eventhook.modules.events.test_event import build_test_event_data, run_test_event
from eventhook.modules.events import test_event as test_event_module
from eventhook.modules.system import ping

from conftest import EVENT_ID

def _interaction(guild=None):
    inter = MagicMock()
    inter.guild = guild
    inter.response.send_message = AsyncMock()
    return inter

def test_test_event_payload_is_valid():
    data = build_test_event_data()
    assert validate_event_data(data).is_valid
    assert data["entityMetadata"] == {"location": "Test Location"}

@pytest.mark.asyncio
async def test_test_event_outside_a_guild():
    inter = _interaction()
    await run_test_event(inter, MagicMock())
    inter.response.send_message.assert_awaited_once_with("This command can only be used in a server!")

@pytest.mark.asyncio
async def test_test_event_success(dispatcher, guild):
    inter = _interaction(guild)
    await run_test_event(inter, dispatcher)

    kwargs = guild.create_scheduled_event.await_args.kwargs
    assert kwargs["name"] == "Test Event"
    assert kwargs["location"] == "Test Location"
    inter.response.send_message.assert_awaited_once_with(
        f"✅ Test event created successfully! Event ID: {EVENT_ID}"
    )

@pytest.mark.asyncio
async def test_test_event_failure_points_at_permissions(guild):
    dispatcher = MagicMock()
    dispatcher.create = AsyncMock(side_effect=PermissionDenied("403 Forbidden"))
    inter = _interaction(guild)
    await run_test_event(inter, dispatcher)
    inter.response.send_message.assert_awaited_once_with(
        "❌ Failed to create test event. Please check bot permissions."
    )

def test_ping_latency():
    inter = MagicMock()
    inter.created_at = clock.now() - timedelta(milliseconds=250)
    assert ping._latency_ms(inter) >= 250

def test_ping_register_adds_the_command():
    tree = MagicMock()
    ping.register(tree, None)
    tree.add_command.assert_called_once_with(ping.ping)

@pytest.fixture
def installed_dispatcher(dispatcher):
    d_dispatcher.install(dispatcher)
    yield dispatcher
    d_dispatcher._current = None

def test_current_dispatcher_requires_install():
    d_dispatcher._current = None
    with pytest.raises(RuntimeError):
        d_dispatcher.current()

def test_test_event_register_uses_installed_dispatcher(installed_dispatcher):
    tree = MagicMock()
    test_event_module.register(tree, None, MagicMock())
    tree.command.assert_called_once_with(name="test-event", description="Create a test scheduled event")
    assert d_dispatcher.current() is installed_dispatcher

def test_test_event_register_fails_without_dispatcher():
    d_dispatcher._current = None
    with pytest.raises(RuntimeError):
        test_event_module.register(MagicMock(), None, MagicMock())
