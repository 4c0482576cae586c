import logging
import re

import pytest

from memocache.core.cache import Cache
from memocache.core.models import CacheConfig
from memocache.observability import NOTICE


@pytest.mark.asyncio
async def test_cache_logs_miss_then_hit(recording_logger):
    c = Cache(logger=recording_logger)

    await c.get("k", lambda: 1)
    await c.get("k", lambda: 1)

    msgs = recording_logger.messages()
    assert msgs.index("cache.miss") < msgs.index("cache.store") < msgs.index("cache.hit")


@pytest.mark.asyncio
async def test_cache_logs_clear_levels(recording_logger):
    c = Cache(logger=recording_logger)
    await c.get("user:1", lambda: 1)

    c.clear("missing")
    c.clear(re.compile("^user:"))
    c.clear()

    levels = {msg: level for level, msg, _ in recording_logger.records}
    assert levels["cache.clear.key"] == NOTICE
    assert levels["cache.clear.key.not_found"] == logging.INFO
    assert levels["cache.clear.pattern"] == NOTICE
    assert levels["cache.clear.pattern.matched"] == logging.DEBUG
    assert levels["cache.clear.all"] == NOTICE


@pytest.mark.asyncio
async def test_cache_logs_grooming(recording_logger):
    c = Cache(CacheConfig(max_entries=1), logger=recording_logger)

    await c.get("a", lambda: 1)
    await c.get("b", lambda: 2)

    evictions = [extra for _, msg, extra in recording_logger.records if msg == "cache.groom.evict"]
    assert len(evictions) == 1
    assert evictions[0]["key"] in {"a", "b"}


@pytest.mark.asyncio
async def test_cache_defaults_to_module_logger(caplog):
    c = Cache()

    with caplog.at_level(logging.DEBUG, logger="memocache.core.cache"):
        await c.get("k", lambda: 1)

    assert "cache.miss" in caplog.messages
