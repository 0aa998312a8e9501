import asyncio
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from backend import RoomRecord, RoomStore
from errors import DeleteError, FetchError
from policy import Verdict, decide, parse_delete_at
from redis_keys import ROOM_DELETE_AT_PATH
from schemas.sweeps import SweepReport
from logging_config import get_logger

logger = get_logger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


def format_ms(timestamp_ms: int) -> str:
    try:
        return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return str(timestamp_ms)


@dataclass
class SweepResult:
    started_at: int
    scanned: int = 0
    kept: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    finished_at: Optional[int] = None

    @property
    def issued_count(self) -> int:
        return len(self.deleted) + len(self.failed)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def partial(self) -> bool:
        return bool(self.failed)

    @property
    def duration_ms(self) -> int:
        if self.finished_at is None:
            return 0
        return max(0, self.finished_at - self.started_at)

    def to_report(self) -> SweepReport:
        return SweepReport(
            started_at=format_ms(self.started_at),
            duration_ms=self.duration_ms,
            scanned=self.scanned,
            issued_count=self.issued_count,
            deleted_count=self.deleted_count,
            failed_count=self.failed_count,
            partial=self.partial,
            kept=sorted(self.kept),
            deleted=sorted(self.deleted),
            failed=dict(self.failed),
        )


class SweepEngine:
    """Runs one full expiration pass over the room collection.

    Every room is judged against a single ``now`` captured at sweep start.
    Deletions fan out concurrently and are joined before the sweep returns;
    a failing deletion is recorded without affecting the others.
    """

    def __init__(self, store: RoomStore, clock: Callable[[], int] = now_ms):
        self.store = store
        self.clock = clock
        self.last_result: Optional[SweepResult] = None

    async def run_sweep(self) -> SweepResult:
        """Run one sweep. Raises ``FetchError`` if the snapshot cannot be read."""
        now = self.clock()
        result = SweepResult(started_at=now)

        snapshot = await self.store.fetch_all()
        if not snapshot.exists():
            logger.info("No rooms found to clean up.")
            return self._finish(result)

        to_delete: List[RoomRecord] = []
        for record in snapshot:
            result.scanned += 1
            delete_at = parse_delete_at(record.child(ROOM_DELETE_AT_PATH))
            decision = decide(delete_at, now)
            when = format_ms(delete_at) if delete_at is not None else None
            logger.info(
                f"Room [{record.key}]: verdict={decision.verdict.value} "
                f"reason={decision.reason.value} deleteAt={when}"
            )
            if decision.verdict is Verdict.DELETE:
                to_delete.append(record)
            else:
                result.kept.append(record.key)

        if to_delete:
            outcomes = await asyncio.gather(
                *(record.remove() for record in to_delete), return_exceptions=True
            )
            for record, outcome in zip(to_delete, outcomes):
                if isinstance(outcome, BaseException):
                    if not isinstance(outcome, Exception):
                        raise outcome
                    error = outcome if isinstance(outcome, DeleteError) else DeleteError(record.key, str(outcome))
                    logger.error(f"Room [{record.key}]: deletion failed: {error}")
                    result.failed[record.key] = str(error)
                else:
                    result.deleted.append(record.key)

        return self._finish(result)

    def _finish(self, result: SweepResult) -> SweepResult:
        result.finished_at = self.clock()
        self.last_result = result
        return result


async def run_sweep_safely(engine: SweepEngine) -> Optional[SweepResult]:
    """Run a sweep without ever raising; ``None`` means the fetch failed."""
    try:
        result = await engine.run_sweep()
    except FetchError as e:
        logger.error(f"Error during room cleanup: {e}")
        return None
    except Exception as e:
        logger.error(f"Error during room cleanup: {e}", exc_info=True)
        return None

    if result.partial:
        logger.warning(
            f"Cleanup finished with failures. Deleted {result.deleted_count} rooms, "
            f"{result.failed_count} deletions failed."
        )
    else:
        logger.info(f"Cleanup complete. Deleted {result.deleted_count} rooms.")
    return result


async def cleanup_old_rooms(engine: SweepEngine) -> None:
    """Scheduler-facing entry point: always completes normally."""
    logger.info("Running weekly room cleanup...")
    await run_sweep_safely(engine)
    return None
