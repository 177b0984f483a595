"""Shared fixtures for the objective bot tests."""
from __future__ import annotations

from types import SimpleNamespace

import discord
import pytest

from config.root_config import DEFAULT_OBJECTIVE_KINDS, DEFAULT_ZONES
from state.objective_store import ObjectiveStore
from state.state import State


@pytest.fixture
def store(tmp_path):
    objective_store = ObjectiveStore(str(tmp_path / "objectives.db"), DEFAULT_OBJECTIVE_KINDS, DEFAULT_ZONES)
    yield objective_store
    objective_store.close()


@pytest.fixture
def state(store):
    return State(store=store)


class FakeMessage:
    def __init__(self, channel, message_id: int, embed=None) -> None:
        self.channel = channel
        self.id = message_id
        self.embed = embed

    async def delete(self) -> None:
        self.channel.delete_message(self.id)


class FakeChannel:
    """Stand-in for a discord text channel that records sends and deletes."""

    def __init__(self) -> None:
        self.live: dict[int, FakeMessage] = {}
        self.sent: list[FakeMessage] = []
        self.deleted: list[int] = []
        self.fail_send = False
        self.fail_delete = False
        self._next_id = 1000

    def get_partial_message(self, message_id: int) -> FakeMessage:
        return FakeMessage(self, message_id)

    def delete_message(self, message_id: int) -> None:
        if self.fail_delete:
            raise discord.HTTPException(SimpleNamespace(status=500, reason="Server Error"), "boom")
        if message_id not in self.live:
            raise discord.NotFound(SimpleNamespace(status=404, reason="Not Found"), "Unknown Message")
        del self.live[message_id]
        self.deleted.append(message_id)

    async def send(self, *, embed=None) -> FakeMessage:
        if self.fail_send:
            raise discord.HTTPException(SimpleNamespace(status=503, reason="Unavailable"), "down")
        self._next_id += 1
        message = FakeMessage(self, self._next_id, embed)
        self.live[message.id] = message
        self.sent.append(message)
        return message


@pytest.fixture
def channel():
    return FakeChannel()
