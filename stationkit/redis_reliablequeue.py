"""Redis list operations used as a reliable queue of JSON values."""

from __future__ import annotations

import json
from typing import Any

import redis

_CONNECT_TIMEOUT = 1


def _dump(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class ReliableQueue:
    """LPUSH, LRANGE and LPOP against a single Redis server."""

    def __init__(self):
        self._client = None

    def connect(self, addr: str) -> None:
        """Connect to the Redis server at addr."""
        try:
            client = redis.Redis.from_url(
                addr, socket_connect_timeout=_CONNECT_TIMEOUT, decode_responses=True
            )
            client.ping()
        except (redis.RedisError, ValueError) as exc:
            raise ConnectionError(f"Failed to connect to {addr}: {exc}") from exc
        self._client = client

    def disconnect(self) -> None:
        """Forget the current connection."""
        self._client = None

    def _require(self):
        if self._client is None:
            raise ConnectionError("Not Connected")
        return self._client

    def lpush(self, key: str, elements: Any) -> int:
        """Push a JSON value, or each item of a list, onto the head of key; returns the new length."""
        client = self._require()
        if elements is None:
            raise ValueError("Failed to perform LPUSH operation: Data sent was null")
        if isinstance(elements, list):
            values = [_dump(item) for item in elements]
        else:
            values = [_dump(elements)]
        return int(client.lpush(key, *values))

    def lrange(self, key: str, start: int = 0, stop: int = -1) -> list[str]:
        """Elements of key from start to stop inclusive, as stored JSON strings."""
        client = self._require()
        return list(client.lrange(key, start, stop))

    def lpop(self, key: str, count: int | None = None):
        """Pop one element, or up to count elements as a list when count is positive."""
        client = self._require()
        if not count or count < 0:
            value = client.lpop(key)
            if value is None:
                raise LookupError(f"Failed to perform LPOP operation: list {key!r} is empty")
            return value
        values = client.lpop(key, count)
        return [] if values is None else list(values)