import json
from typing import Any, Dict, Iterator, List, Optional, Protocol

import redis
import redis.asyncio as aioredis

from constants import REDIS_URL
from errors import DeleteError, FetchError
from redis_keys import REDIS_ROOMS_HASH
from logging_config import get_logger

logger = get_logger(__name__)


class RoomStore(Protocol):
    async def fetch_all(self) -> "Snapshot":
        ...

    async def remove(self, room_code: str) -> None:
        ...


class RoomRecord:
    """One room of a snapshot, bound to the store it was read from."""

    def __init__(self, key: str, value: Optional[Dict[str, Any]], store: RoomStore):
        self.key = key
        self.value = value if isinstance(value, dict) else {}
        self._store = store

    def child(self, path: str) -> Any:
        """Look up a nested field by ``/``-separated path, ``None`` when absent."""
        node: Any = self.value
        for part in path.strip("/").split("/"):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    async def remove(self) -> None:
        await self._store.remove(self.key)

    def __repr__(self):
        return f"RoomRecord(key={self.key!r})"


class Snapshot:
    def __init__(self, records: List[RoomRecord]):
        self._records = records

    def exists(self) -> bool:
        return bool(self._records)

    def __len__(self):
        return len(self._records)

    def __iter__(self) -> Iterator[RoomRecord]:
        return iter(self._records)


def decode_room(raw: Any) -> Dict[str, Any]:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    try:
        value = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return {}
    return value if isinstance(value, dict) else {}


class RedisRoomStore:
    """Room collection stored as one Redis hash, one JSON document per room code."""

    def __init__(self, client: aioredis.Redis, rooms_key: str = REDIS_ROOMS_HASH):
        self.redis_client = client
        self.rooms_key = rooms_key

    async def fetch_all(self) -> Snapshot:
        logger.debug(f"Fetching all rooms from {self.rooms_key}")
        try:
            rooms = await self.redis_client.hgetall(self.rooms_key)
        except (redis.RedisError, OSError) as e:
            raise FetchError(f"Failed to read rooms from {self.rooms_key}: {e}") from e

        records = []
        for room_code, raw in rooms.items():
            if isinstance(room_code, bytes):
                room_code = room_code.decode("utf-8")
            records.append(RoomRecord(room_code, decode_room(raw), self))
        logger.debug(f"Fetched {len(records)} rooms from {self.rooms_key}")
        return Snapshot(records)

    async def remove(self, room_code: str) -> None:
        try:
            removed = await self.redis_client.hdel(self.rooms_key, room_code)
        except (redis.RedisError, OSError) as e:
            raise DeleteError(room_code, f"Failed to delete room {room_code}: {e}") from e
        logger.debug(f"Room {room_code} removed: fields={removed}")

    async def close(self) -> None:
        await self.redis_client.aclose()


class MemoryRoomStore:
    """Dict-backed store with the same contract, for local runs and tests."""

    def __init__(self, rooms: Dict[str, Any] = None):
        self.rooms: Dict[str, Any] = dict(rooms or {})

    async def fetch_all(self) -> Snapshot:
        return Snapshot([RoomRecord(code, value, self) for code, value in self.rooms.items()])

    async def remove(self, room_code: str) -> None:
        self.rooms.pop(room_code, None)

    async def close(self) -> None:
        pass


def create_store(url: str = None, rooms_key: str = REDIS_ROOMS_HASH) -> RedisRoomStore:
    url = url or REDIS_URL
    logger.info(f"Initializing RedisRoomStore on hash {rooms_key}")
    client = aioredis.Redis.from_url(url, decode_responses=True)
    return RedisRoomStore(client, rooms_key)
