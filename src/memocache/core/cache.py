"""In-memory memoizing cache with single-flight population.

Return a cached value when present, otherwise run the caller's producer
once, store its result and share it with every concurrent caller asking
for the same key. Entries expire after an optional TTL and the least
recently used entry is evicted when the cache grows past its bound.

All methods must be called from a single asyncio event loop; the cache is
not thread-safe.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import re
import time
from typing import Any, Awaitable, Dict, Optional, TypeVar, overload

from memocache.core.errors import ValidationError
from memocache.core.interfaces import CacheLogger, ClearKey, Producer
from memocache.core.models import CacheConfig, CacheEntry
from memocache.observability import NOTICE

T = TypeVar("T")


class Cache:
    """Get-or-populate cache with per-key single-flight, TTL and size bound.

    Parameters
    ----------
    config: CacheConfig, optional
        Size bound and default TTL. Defaults to ``CacheConfig()``.
    logger: CacheLogger, optional
        Receives leveled messages. Defaults to this module's logger.
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        logger: Optional[CacheLogger] = None,
    ) -> None:
        self.config = config or CacheConfig()
        self._log = logger if logger is not None else logging.getLogger(__name__)
        self._entries: Dict[str, CacheEntry[Any]] = {}
        # Set while a producer runs for the key; waiters block on the event
        self._in_flight: Dict[str, asyncio.Event] = {}
        self._grooming = False

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def clear(self, key: ClearKey = None) -> None:
        """Clear the whole cache, one exact key, or every key matching a pattern.

        Useful when the data behind cached values changes out of band (for
        example a manual database fix) or to drop a key after a write.
        """
        if key is None:
            self._log.log(NOTICE, "cache.clear.all", extra={"entries": len(self._entries)})
            for entry in self._entries.values():
                entry.cancel_expiry()
            self._entries.clear()
            return

        if isinstance(key, str):
            self._log.log(NOTICE, "cache.clear.key", extra={"key": key})
            if self._delete(key):
                self._log.log(logging.INFO, "cache.clear.key.deleted", extra={"key": key})
            else:
                self._log.log(logging.INFO, "cache.clear.key.not_found", extra={"key": key})
            return

        if isinstance(key, re.Pattern):
            self._log.log(NOTICE, "cache.clear.pattern", extra={"pattern": key.pattern})
            for k in list(self._entries):
                if key.search(k):
                    self._log.log(logging.DEBUG, "cache.clear.pattern.matched", extra={"key": k})
                    self._delete(k)
            return

        raise ValidationError(f"clear() expects a str, a compiled pattern or None, got {type(key).__name__}")

    @overload
    def get(self, key: str) -> Optional[Any]:
        ...

    @overload
    def get(
        self,
        key: str,
        producer: Producer[T],
        ttl_seconds: Optional[float] = None,
    ) -> Awaitable[T]:
        ...

    def get(self, key, producer=None, ttl_seconds=None):
        """Return the value stored at ``key``, or populate it with ``producer``.

        Without a producer this is a read-only lookup returning the value or
        None. With a producer it returns an awaitable: the cached value on a
        hit, otherwise the producer's result, which is then cached. The
        producer may be sync or async and runs at most once at a time per key.
        """
        if not isinstance(key, str):
            raise ValidationError(f"cache key must be a str, got {type(key).__name__}")

        if producer is None:
            entry = self._entries.get(key)
            self._log.log(logging.DEBUG, "cache.read", extra={"key": key, "hit": entry is not None})
            return entry.value if entry is not None else None

        if not callable(producer):
            raise ValidationError("producer must be callable")
        if ttl_seconds is not None and (
            isinstance(ttl_seconds, bool) or not isinstance(ttl_seconds, (int, float))
        ):
            raise ValidationError(f"ttl_seconds must be a number, got {ttl_seconds!r}")
        if ttl_seconds is not None and ttl_seconds < 0:
            raise ValidationError(f"ttl_seconds must be >= 0, got {ttl_seconds}")

        return self._get_or_populate(key, producer, ttl_seconds)

    async def _get_or_populate(
        self,
        key: str,
        producer: Producer[T],
        ttl_seconds: Optional[float],
    ) -> T:
        # Loop: after a wait the previous populator may have failed, in which
        # case this caller becomes the next populator.
        while True:
            in_flight = self._in_flight.get(key)
            if in_flight is not None:
                self._log.log(logging.DEBUG, "cache.wait", extra={"key": key})
                await in_flight.wait()
                self._log.log(logging.DEBUG, "cache.released", extra={"key": key})
                continue

            entry = self._entries.get(key)
            if entry is not None:
                entry.stored_at = time.monotonic()
                self._log.log(logging.DEBUG, "cache.hit", extra={"key": key})
                return entry.value

            return await self._populate(key, producer, ttl_seconds)

    async def _populate(
        self,
        key: str,
        producer: Producer[T],
        ttl_seconds: Optional[float],
    ) -> T:
        # No await between the in-flight check and this assignment
        event = asyncio.Event()
        self._in_flight[key] = event
        self._log.log(logging.INFO, "cache.miss", extra={"key": key})

        try:
            value = producer()
            if inspect.isawaitable(value):
                self._log.log(logging.DEBUG, "cache.populate.awaiting", extra={"key": key})
                value = await value

            ttl = ttl_seconds if ttl_seconds is not None else self.config.ttl_seconds
            self._store(key, value, ttl)
        finally:
            del self._in_flight[key]
            event.set()

        self._groom()
        return value

    def _store(self, key: str, value: Any, ttl: float) -> None:
        expiry = None
        if ttl > 0:
            expiry = asyncio.get_running_loop().call_later(ttl, self._expire, key)

        self._entries[key] = CacheEntry(value=value, stored_at=time.monotonic(), expiry=expiry)
        self._log.log(logging.INFO, "cache.store", extra={"key": key, "ttl_seconds": ttl})

    def _expire(self, key: str) -> None:
        entry = self._entries.pop(key, None)
        if entry is not None:
            # The firing handle is spent; nothing to cancel
            entry.expiry = None
            self._log.log(logging.DEBUG, "cache.expire", extra={"key": key})

    def _delete(self, key: str) -> bool:
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        entry.cancel_expiry()
        return True

    def _groom(self) -> None:
        # Remove at most one least-recently-used entry when over the bound
        if self._grooming:
            return

        self._grooming = True
        try:
            size = len(self._entries)
            if size <= self.config.max_entries:
                return

            self._log.log(
                NOTICE,
                "cache.groom",
                extra={"entries": size, "max_entries": self.config.max_entries},
            )
            # min() keeps the first key in insertion order on ties
            victim = min(self._entries, key=lambda k: self._entries[k].stored_at)
            stored_at = self._entries[victim].stored_at
            self._delete(victim)
            self._log.log(
                logging.INFO,
                "cache.groom.evict",
                extra={"key": victim, "stored_at": stored_at},
            )
        finally:
            self._grooming = False


class NullCache(Cache):
    """Cache that never stores anything; every populate runs the producer.

    Drop-in substitute for tests that must exercise the producer path.
    """

    @overload
    def get(self, key: str) -> Optional[Any]:
        ...

    @overload
    def get(
        self,
        key: str,
        producer: Producer[T],
        ttl_seconds: Optional[float] = None,
    ) -> Awaitable[T]:
        ...

    def get(self, key, producer=None, ttl_seconds=None):
        if producer is None:
            return None
        return self._call(producer)

    def clear(self, key: ClearKey = None) -> None:
        return None

    async def _call(self, producer: Producer[T]) -> T:
        value = producer()
        if inspect.isawaitable(value):
            value = await value
        return value
