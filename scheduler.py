from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from constants import SWEEP_DAY_OF_WEEK, SWEEP_HOUR, SWEEP_MINUTE, SWEEP_TIMEZONE
from sweeper import SweepEngine, cleanup_old_rooms
from logging_config import get_logger

logger = get_logger(__name__)

SWEEP_JOB_ID = "cleanup_old_rooms"


def build_trigger(
    day_of_week: str = SWEEP_DAY_OF_WEEK,
    hour: int = SWEEP_HOUR,
    minute: int = SWEEP_MINUTE,
    timezone: str = SWEEP_TIMEZONE,
) -> CronTrigger:
    return CronTrigger(day_of_week=day_of_week, hour=hour, minute=minute, timezone=timezone)


class SweepScheduler:
    """Fires ``cleanup_old_rooms`` on a weekly cron schedule.

    Must be started from inside a running event loop.
    """

    def __init__(self, engine: SweepEngine, trigger: CronTrigger = None):
        self.engine = engine
        self.trigger = trigger or build_trigger()
        self._scheduler = AsyncIOScheduler(timezone=self.trigger.timezone)

    def start(self) -> None:
        if self._scheduler.running:
            return
        self._scheduler.add_job(
            cleanup_old_rooms,
            trigger=self.trigger,
            args=[self.engine],
            id=SWEEP_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info(f"Room sweep scheduled ({self.trigger}), next run at {self.next_run_at()}")

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Room sweep scheduler stopped")

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def next_run_at(self) -> Optional[str]:
        job = self._scheduler.get_job(SWEEP_JOB_ID)
        if job is None or job.next_run_time is None:
            return None
        return job.next_run_time.isoformat()
