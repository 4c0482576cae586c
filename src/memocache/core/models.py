"""Dataclasses describing cache configuration and stored entries.

CacheConfig is immutable and validated on construction; CacheEntry holds
a cached value, its last-used monotonic timestamp and its expiry timer.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from memocache.config import (
    DEFAULT_MAX_ENTRIES,
    DEFAULT_TTL_SECONDS,
    max_entries_from_env,
    ttl_seconds_from_env,
)
from memocache.core.errors import ConfigurationError

T = TypeVar("T")


@dataclass(slots=True)
class CacheEntry(Generic[T]):
    # Stores value + monotonic last-used time + pending expiry timer
    value: T
    stored_at: float  # time.monotonic()
    expiry: Optional[asyncio.TimerHandle] = None

    def cancel_expiry(self) -> None:
        if self.expiry is not None:
            self.expiry.cancel()
            self.expiry = None


@dataclass(frozen=True)
class CacheConfig:
    """Cache configuration.

    Fields:
    - max_entries: size bound enforced by grooming after every insert
    - ttl_seconds: default time-to-live, 0 means entries never expire
    """

    max_entries: int = DEFAULT_MAX_ENTRIES
    ttl_seconds: float = DEFAULT_TTL_SECONDS

    def __post_init__(self) -> None:
        if isinstance(self.max_entries, bool) or not isinstance(self.max_entries, int):
            raise ConfigurationError(f"max_entries must be an integer, got {self.max_entries!r}")
        if self.max_entries < 0:
            raise ConfigurationError(f"max_entries must be >= 0, got {self.max_entries}")
        if isinstance(self.ttl_seconds, bool) or not isinstance(self.ttl_seconds, (int, float)):
            raise ConfigurationError(f"ttl_seconds must be a number, got {self.ttl_seconds!r}")
        if self.ttl_seconds < 0:
            raise ConfigurationError(f"ttl_seconds must be >= 0, got {self.ttl_seconds}")

    @classmethod
    def from_env(cls) -> "CacheConfig":
        return cls(max_entries=max_entries_from_env(), ttl_seconds=ttl_seconds_from_env())
