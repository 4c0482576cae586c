"""Core protocol and interface definitions.

Defines the CacheInterface protocol shared by Cache and NullCache, and
the CacheLogger protocol for the optional logger collaborator.
"""

from __future__ import annotations

import re
from typing import Any, Awaitable, Callable, Optional, Protocol, TypeVar, Union, overload, runtime_checkable

T = TypeVar("T")

Producer = Callable[[], Union[T, Awaitable[T]]]
ClearKey = Union[str, re.Pattern, None]


@runtime_checkable
class CacheLogger(Protocol):
    """Anything accepting leveled messages; a logging.Logger qualifies."""
    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        ...


@runtime_checkable
class CacheInterface(Protocol):
    """Contract for any compute-or-fetch cache (real or null)."""
    def clear(self, key: ClearKey = None) -> None:
        ...

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
