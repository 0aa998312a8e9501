"""Unit tests for the weekly sweep scheduler."""

from __future__ import annotations

from datetime import datetime

import pytest

from backend import MemoryRoomStore
from scheduler import SWEEP_JOB_ID, SweepScheduler, build_trigger
from sweeper import SweepEngine


class TestBuildTrigger:
    """Tests for the cron trigger configuration."""

    def test_default_is_sunday_midnight_los_angeles(self) -> None:
        trigger = build_trigger()

        fields = {f.name: str(f) for f in trigger.fields}
        assert fields["day_of_week"] == "sun"
        assert fields["hour"] == "0"
        assert fields["minute"] == "0"
        assert str(trigger.timezone) == "America/Los_Angeles"

    def test_custom_schedule(self) -> None:
        trigger = build_trigger(day_of_week="wed", hour=3, minute=30, timezone="UTC")

        fields = {f.name: str(f) for f in trigger.fields}
        assert fields["day_of_week"] == "wed"
        assert fields["hour"] == "3"
        assert fields["minute"] == "30"


class TestSweepScheduler:
    """Tests for the scheduler lifecycle."""

    @pytest.mark.asyncio
    async def test_start_registers_weekly_job(self) -> None:
        scheduler = SweepScheduler(SweepEngine(MemoryRoomStore()))

        scheduler.start()
        try:
            assert scheduler.running
            next_run = datetime.fromisoformat(scheduler.next_run_at())
            assert next_run.weekday() == 6
            assert (next_run.hour, next_run.minute) == (0, 0)
            assert scheduler._scheduler.get_job(SWEEP_JOB_ID).max_instances == 1
        finally:
            scheduler.shutdown()

    @pytest.mark.asyncio
    async def test_start_twice_keeps_one_job(self) -> None:
        scheduler = SweepScheduler(SweepEngine(MemoryRoomStore()))

        scheduler.start()
        scheduler.start()
        try:
            assert len(scheduler._scheduler.get_jobs()) == 1
        finally:
            scheduler.shutdown()

    def test_not_started(self) -> None:
        scheduler = SweepScheduler(SweepEngine(MemoryRoomStore()))

        assert not scheduler.running
        assert scheduler.next_run_at() is None
        scheduler.shutdown()
