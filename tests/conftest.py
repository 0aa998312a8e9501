"""Shared fixtures for the room sweeper tests."""

from __future__ import annotations

import asyncio

import pytest

from backend import MemoryRoomStore

NOW = 1_760_000_000_000


class FlakyRoomStore(MemoryRoomStore):
    """In-memory store whose removals fail for selected room codes."""

    def __init__(self, rooms=None, failing=()):
        super().__init__(rooms)
        self.failing = set(failing)
        self.remove_calls: list[str] = []

    async def remove(self, room_code: str) -> None:
        self.remove_calls.append(room_code)
        await asyncio.sleep(0)
        if room_code in self.failing:
            raise ConnectionError(f"transport error removing {room_code}")
        await super().remove(room_code)


def room(delete_at=None, **extra) -> dict:
    info = dict(extra)
    if delete_at is not None:
        info["deleteAt"] = delete_at
    return {"roomInfo": info, "players": {"p1": {"name": "ana"}}}


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def scenario_rooms() -> dict:
    return {
        "A": room(NOW - 1000),
        "B": room(NOW + 5000),
        "C": {"players": {}},
        "D": room(NOW - 1),
    }
