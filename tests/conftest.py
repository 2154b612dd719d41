"""Shared fixtures for bytecap tests."""

from pathlib import Path

import pytest

MB = 1024 * 1024


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path_factory, monkeypatch):
    """Keep every test away from the real settings file."""
    config_dir = tmp_path_factory.mktemp("config")
    path = config_dir / "settings.json"
    monkeypatch.setenv("BYTECAP_CONFIG", str(path))
    return path


def _create_file(path: Path, size: int) -> Path:
    """Create a (sparse) file of an exact size."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.truncate(size)
    return path


@pytest.fixture
def make_file():
    """Factory that creates a (sparse) file of an exact size."""
    return _create_file


@pytest.fixture
def workspace(tmp_path):
    """Workspace with two .caido files (6 MB + 5 MB) and a 3 MB text file."""
    root = tmp_path / "workspace"
    _create_file(root / "a.caido", 6 * MB)
    _create_file(root / "b.caido", 5 * MB)
    _create_file(root / "c.txt", 3 * MB)
    return root


class FakeTimer:
    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False
        self.fired = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.fired = True
        self.function()


class FakeClock:
    """Timer factory whose timers only fire when told to."""

    def __init__(self):
        self.timers: list[FakeTimer] = []

    def __call__(self, interval, function):
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if t.started and not t.cancelled and not t.fired]

    def run_all(self, limit: int = 100) -> None:
        for _ in range(limit):
            if not self.pending:
                return
            self.pending[0].fire()


@pytest.fixture
def clock():
    return FakeClock()
