import pytest


class RecordingLogger:
    """Minimal logger stand-in to capture leveled cache messages."""

    def __init__(self) -> None:
        self.records = []

    def log(self, level, msg, *args, **kwargs):
        self.records.append((level, msg, kwargs.get("extra", {})))

    def messages(self):
        return [msg for _, msg, _ in self.records]


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def fake_clock(monkeypatch):
    import memocache.core.cache as cache_mod

    t = {"now": 0.0}

    def fake_monotonic():
        return t["now"]

    monkeypatch.setattr(cache_mod.time, "monotonic", fake_monotonic)
    return t
