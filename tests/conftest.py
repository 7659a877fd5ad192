import time
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest

from src.components.config_store import ConfigurationStore, make_loader
from src.components.configuration import ConfigurationSnapshot
from src.components.configuration.adapters import default_filesystem

SAMPLE_TOML = """\
[links.docs]
redirect = "https://example.com/docs"

[links.gh]
redirect = "https://github.com/example"
append_mode = "path"

[links.old]
redirect = "https://example.com/old"
disabled = true

[links.promo]
redirect = "https://example.com/promo?ref=lynx"
invalid_after = 1700000000
append_mode = "path_preserve_query"
"""

# 2023-11-14T22:13:20Z, the promo link's last valid second
PROMO_EXPIRY = 1_700_000_000


class FakeClock:
    """Clock pinned to a settable Unix timestamp."""

    def __init__(self, now: int = PROMO_EXPIRY - 100) -> None:
        self.now = now

    def now_utc(self) -> datetime:
        return datetime.fromtimestamp(self.now, UTC)


class StaticSource:
    """Snapshot source that always returns the same snapshot."""

    def __init__(self, snapshot: ConfigurationSnapshot) -> None:
        self.snapshot = snapshot
        self.calls = 0

    def current_snapshot(self) -> ConfigurationSnapshot:
        self.calls += 1
        return self.snapshot


def wait_for(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    """Poll `predicate` until it is true or `timeout` seconds pass."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def links_file(tmp_path: Path) -> Path:
    path = tmp_path / "links.toml"
    path.write_text(SAMPLE_TOML)
    return path


@pytest.fixture
def store(clock: FakeClock) -> Iterator[ConfigurationStore]:
    """Store reading real files, stamped with the fake clock."""
    s = ConfigurationStore(loader=make_loader(default_filesystem, clock), time_port=clock)
    yield s
    s.stop()
