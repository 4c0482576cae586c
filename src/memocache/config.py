"""Configuration and environment helpers for the cache.

Provides small helpers to read typed environment variables and the
environment variable names used to configure a cache at runtime
(maximum entries, default TTL and log level).
"""

from __future__ import annotations

import os

ENV_MAX_ENTRIES = "MEMOCACHE_MAX_ENTRIES"
ENV_TTL_SECONDS = "MEMOCACHE_TTL_SECONDS"
ENV_LOG_LEVEL = "MEMOCACHE_LOG_LEVEL"

DEFAULT_MAX_ENTRIES = 1000
DEFAULT_TTL_SECONDS = 0.0
DEFAULT_LOG_LEVEL = "INFO"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def max_entries_from_env() -> int:
    return _env_int(ENV_MAX_ENTRIES, DEFAULT_MAX_ENTRIES)


def ttl_seconds_from_env() -> float:
    return _env_float(ENV_TTL_SECONDS, DEFAULT_TTL_SECONDS)


def log_level_from_env() -> str:
    return os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).strip() or DEFAULT_LOG_LEVEL
