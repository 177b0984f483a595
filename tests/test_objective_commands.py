"""Tests for the slash command handlers and the background task bodies."""
from __future__ import annotations

from types import SimpleNamespace

import discord
import pytest

import commands.objective_commands as objective_commands
import state.state as st
import tasks.objective_tasks as objective_tasks
import utility.globals as globals
from utility.errors import StoreError

T = 1_700_000_000  # 2023-11-14 22:13:20 UTC


class FakeTree:
    """Collects slash command callbacks by name instead of registering them with Discord."""

    def __init__(self) -> None:
        self.callbacks = {}

    def command(self, *, name: str, description: str):
        def decorator(func):
            self.callbacks[name] = func
            return func
        return decorator


class FakeResponse:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.messages: list[tuple[str, bool]] = []

    async def send_message(self, content: str, ephemeral: bool = False) -> None:
        if self.fail:
            raise discord.NotFound(SimpleNamespace(status=404, reason="Not Found"), "Unknown interaction")
        self.messages.append((content, ephemeral))


class RefreshCounter:
    def __init__(self) -> None:
        self.calls = 0

    async def __call__(self) -> bool:
        self.calls += 1
        return True


def make_interaction(fail_reply: bool = False) -> SimpleNamespace:
    return SimpleNamespace(
        user=SimpleNamespace(name="alice", id=1),
        command=None,
        namespace=None,
        guild=None,
        channel=None,
        response=FakeResponse(fail=fail_reply),
    )


@pytest.fixture
def slash(monkeypatch, state):
    monkeypatch.setattr(st, "state", state)
    monkeypatch.setattr(objective_commands.time, "time", lambda: T)
    tree = FakeTree()
    objective_commands.register_commands(SimpleNamespace(tree=tree))
    return tree.callbacks


@pytest.fixture
def refresh(monkeypatch):
    counter = RefreshCounter()
    monkeypatch.setattr(objective_commands, "refresh_board_locked", counter)
    return counter


def test_both_commands_are_registered(slash):
    assert set(slash) == {"addobjectives", "clear"}


@pytest.mark.asyncio
async def test_clear_replies_and_redraws_once(slash, refresh, state):
    state.store.insert("4.4 Ore", "Black Monastery", end_time=T + 60)
    state.store.insert("5.4 Ore", "Black Monastery", remaining_seconds=60)
    interaction = make_interaction()

    await slash["clear"](interaction)

    assert interaction.response.messages == [("🗑️ All objectives cleared.", True)]
    assert refresh.calls == 1
    assert state.store.count() == 0


@pytest.mark.asyncio
async def test_clear_redraws_even_when_the_reply_fails(slash, refresh, state):
    state.store.insert("4.4 Ore", "Black Monastery", end_time=T + 60)
    interaction = make_interaction(fail_reply=True)

    with pytest.raises(discord.NotFound):
        await slash["clear"](interaction)

    assert refresh.calls == 1
    assert state.store.count() == 0


@pytest.mark.asyncio
async def test_clear_store_failure_is_reported_without_redraw(slash, refresh, state):
    def failing_clear():
        raise StoreError("disk full")

    state.store.clear_all = failing_clear
    interaction = make_interaction()

    await slash["clear"](interaction)

    assert interaction.response.messages == [("❌ Could not clear the objectives, please try again.", True)]
    assert refresh.calls == 0


@pytest.mark.asyncio
async def test_add_while_online_reports_the_deadline(slash, refresh, state):
    interaction = make_interaction()

    await slash["addobjectives"](interaction, "Rare(Purple) Vortex", "Black Monastery", 2, 30)

    assert interaction.response.messages == [(
        "✅ **alice** added **Rare(Purple) Vortex** in **Black Monastery** (Ends at `00:43 UTC`).", False,
    )]
    assert refresh.calls == 1
    [objective] = state.store.list_ordered()
    assert objective.end_time == T + 9000


@pytest.mark.asyncio
async def test_add_while_offline_reports_the_paused_timer(slash, refresh, state):
    state.server_online = False
    interaction = make_interaction()

    await slash["addobjectives"](interaction, "Rare(Purple) Vortex", "Black Monastery", 2, 30)

    [(content, ephemeral)] = interaction.response.messages
    assert content.endswith("(Timer paused, 2h 30m remaining).")
    assert ephemeral is False
    assert refresh.calls == 1
    [objective] = state.store.list_ordered()
    assert objective.is_paused and objective.remaining_seconds == 9000


@pytest.mark.asyncio
async def test_add_rejects_values_outside_the_lists(slash, refresh, state):
    interaction = make_interaction()

    await slash["addobjectives"](interaction, "4.4 Ore", "Nowhere", 1, 0)

    assert interaction.response.messages == [("❌ Please select valid options from the lists!", True)]
    assert refresh.calls == 0
    assert state.store.count() == 0


@pytest.mark.asyncio
async def test_add_rejects_durations_over_a_week(slash, refresh, state):
    interaction = make_interaction()

    await slash["addobjectives"](interaction, "4.4 Ore", "Black Monastery", 168, 1)

    [(content, ephemeral)] = interaction.response.messages
    assert content == "❌ Objectives cannot last longer than 168 hours"
    assert ephemeral is True
    assert refresh.calls == 0
    assert state.store.count() == 0


@pytest.mark.asyncio
async def test_add_redraws_even_when_the_reply_fails(slash, refresh, state):
    interaction = make_interaction(fail_reply=True)

    with pytest.raises(discord.NotFound):
        await slash["addobjectives"](interaction, "4.4 Ore", "Black Monastery", 1, 0)

    assert refresh.calls == 1
    assert state.store.count() == 1


@pytest.mark.asyncio
async def test_add_survives_a_failed_redraw(slash, monkeypatch, state):
    async def broken_refresh():
        raise StoreError("locked")

    monkeypatch.setattr(objective_commands, "refresh_board_locked", broken_refresh)
    interaction = make_interaction()

    await slash["addobjectives"](interaction, "4.4 Ore", "Black Monastery", 1, 0)

    assert len(interaction.response.messages) == 1
    assert state.store.count() == 1


# ──────────────────────────
# Background tasks
# ──────────────────────────
class FakePublisher:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.refreshed = []

    async def refresh(self, state) -> bool:
        if self.error is not None:
            raise self.error
        self.refreshed.append(state)
        return True


@pytest.mark.asyncio
async def test_refresh_board_locked_redraws_the_current_state(monkeypatch, state):
    publisher = FakePublisher()
    monkeypatch.setattr(st, "state", state)
    monkeypatch.setattr(globals, "board_publisher", publisher)

    assert await objective_tasks.refresh_board_locked() is True

    assert publisher.refreshed == [state]
    assert not state.lock.locked()


@pytest.mark.asyncio
async def test_board_refresh_task_swallows_store_errors(monkeypatch, state):
    monkeypatch.setattr(st, "state", state)
    monkeypatch.setattr(globals, "board_publisher", FakePublisher(StoreError("locked")))

    await objective_tasks.board_refresh_task()

    assert not state.lock.locked()


@pytest.mark.asyncio
async def test_status_tick_task_swallows_unexpected_errors(monkeypatch, state):
    class ExplodingMonitor:
        async def poll(self):
            raise RuntimeError("boom")

    monkeypatch.setattr(st, "state", state)
    monkeypatch.setattr(globals, "availability_monitor", ExplodingMonitor())
    monkeypatch.setattr(globals, "board_publisher", FakePublisher())

    await objective_tasks.status_tick_task()
