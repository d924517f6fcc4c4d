"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides settings, clock, sink and aggregator fixtures.

==============================================================================
"""

import pytest
from typing import List

from scan_aggregator.config import Settings
from scan_aggregator.schemas import ScanSnapshot
from scan_aggregator.scanner import ScanAggregator


# ============================================================================
# CLOCK FIXTURES
# ============================================================================

class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 1_000.0, step: float = 0.0):
        self.now = start
        self.step = step

    def advance(self, ms: float) -> None:
        self.now += ms

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current


@pytest.fixture
def clock() -> FakeClock:
    """Clock that only moves when advanced."""
    return FakeClock()


# ============================================================================
# SETTINGS FIXTURES
# ============================================================================

@pytest.fixture
def settings(monkeypatch) -> Settings:
    """Default settings, isolated from the environment and any .env file."""
    for name in Settings.model_fields:
        monkeypatch.delenv(name.upper(), raising=False)
    return Settings(_env_file=None)


# ============================================================================
# AGGREGATOR FIXTURES
# ============================================================================

class RecordingSink:
    """Display sink that keeps every snapshot it receives."""

    def __init__(self):
        self.snapshots: List[ScanSnapshot] = []

    def __call__(self, snapshot: ScanSnapshot) -> None:
        self.snapshots.append(snapshot)

    @property
    def last(self) -> ScanSnapshot:
        return self.snapshots[-1]


@pytest.fixture
def sink() -> RecordingSink:
    """Recording display sink."""
    return RecordingSink()


@pytest.fixture
def aggregator(settings: Settings, clock: FakeClock, sink: RecordingSink) -> ScanAggregator:
    """Aggregator with the bundled validator, fake clock and recording sink."""
    return ScanAggregator(sink=sink, settings=settings, clock=clock)
