import math
from enum import Enum
from typing import Any, NamedTuple, Optional, Union

Timestamp = Union[int, float]


class Verdict(str, Enum):
    KEEP = "keep"
    DELETE = "delete"


class Reason(str, Enum):
    MISSING_DELETE_AT = "missing_delete_at"
    EXPIRED = "expired"
    NOT_EXPIRED = "not_expired"


class Decision(NamedTuple):
    verdict: Verdict
    reason: Reason

    @property
    def should_delete(self) -> bool:
        return self.verdict is Verdict.DELETE


def parse_delete_at(value: Any) -> Optional[Timestamp]:
    """Normalize a raw ``deleteAt`` value to epoch milliseconds.

    Numbers and numeric strings are compared as numbers; fractional values are
    kept as they are. Booleans, non-numeric strings, NaN and infinities are
    treated as absent.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value) if value.is_integer() else value
    return None


def decide(delete_at: Optional[Timestamp], now: int) -> Decision:
    """Decide whether a room is kept or deleted.

    A room expiring exactly at ``now`` is kept until the next sweep.
    """
    if delete_at is None:
        return Decision(Verdict.DELETE, Reason.MISSING_DELETE_AT)
    if delete_at < now:
        return Decision(Verdict.DELETE, Reason.EXPIRED)
    return Decision(Verdict.KEEP, Reason.NOT_EXPIRED)
