import logging

from memocache.observability import NOTICE, setup_logging


def test_notice_level_registered():
    assert logging.getLevelName(NOTICE) == "NOTICE"
    assert logging.INFO < NOTICE < logging.WARNING


def test_setup_logging_uses_env_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    monkeypatch.setenv("MEMOCACHE_LOG_LEVEL", "notice")

    setup_logging()

    assert calls[0]["level"] == NOTICE


def test_setup_logging_unknown_level_falls_back_to_info(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

    setup_logging("chatty")

    assert calls[0]["level"] == logging.INFO
