"""Tests for the command-line entry point."""

from __future__ import annotations

import sys

import entrypoint
from backend import MemoryRoomStore, Snapshot
from conftest import room
from errors import FetchError


class ClosableStore(MemoryRoomStore):
    """In-memory store that records removals and whether it was closed."""

    def __init__(self, rooms=None, fail_fetch: bool = False):
        super().__init__(rooms)
        self.fail_fetch = fail_fetch
        self.remove_calls: list[str] = []
        self.closed = False

    async def fetch_all(self) -> Snapshot:
        if self.fail_fetch:
            raise FetchError("connection refused")
        return await super().fetch_all()

    async def remove(self, room_code: str) -> None:
        self.remove_calls.append(room_code)
        await super().remove(room_code)

    async def close(self) -> None:
        self.closed = True


class TestRunOnce:
    """Tests for ``--once``."""

    def test_fetch_failure_exits_normally(self, monkeypatch) -> None:
        store = ClosableStore({"A": room(None)}, fail_fetch=True)
        monkeypatch.setattr(entrypoint, "create_store", lambda: store)
        monkeypatch.setattr(sys, "argv", ["room-sweeper", "--once"])

        assert entrypoint.main() is None
        assert store.remove_calls == []
        assert store.closed

    def test_single_sweep_deletes_expired_rooms(self, monkeypatch) -> None:
        store = ClosableStore({"old": room(1), "legacy": {}, "live": room(32_503_680_000_000)})
        monkeypatch.setattr(entrypoint, "create_store", lambda: store)
        monkeypatch.setattr(sys, "argv", ["room-sweeper", "--once"])

        entrypoint.main()

        assert sorted(store.remove_calls) == ["legacy", "old"]
        assert set(store.rooms) == {"live"}
        assert store.closed


class TestServe:
    """Tests for the server path."""

    def test_serves_app_factory(self, monkeypatch) -> None:
        calls = []
        monkeypatch.setattr(entrypoint.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))
        monkeypatch.setattr(sys, "argv", ["room-sweeper"])
        monkeypatch.setenv("PORT", "9000")

        entrypoint.main()

        assert len(calls) == 1
        args, kwargs = calls[0]
        assert args == ("app:create_app",)
        assert kwargs["factory"] is True
        assert kwargs["port"] == 9000

    def test_app_module_builds_nothing_at_import(self) -> None:
        import app as app_module

        assert not hasattr(app_module, "app")
