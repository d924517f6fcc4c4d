"""
Throughput metrics derived from session timing.

Numerators subtract one observation: the first observation only starts the
clock, so it does not belong to any measured interval.
"""

from __future__ import annotations

import math

from scan_aggregator.schemas import SessionTiming


def _rate(numerator: int, timing: SessionTiming) -> float:
    if timing.elapsed_ms <= 0:
        return math.nan
    return (numerator - 1) / timing.elapsed_seconds


def accept_rate(timing: SessionTiming) -> float:
    """Accepted observations per second, nan before any time has elapsed."""
    return _rate(timing.accepted_total, timing)


def detect_rate(timing: SessionTiming) -> float:
    """All observations per second, nan before any time has elapsed."""
    return _rate(timing.observation_total, timing)


def format_rate(value: float) -> str:
    """Round a rate half-up to one decimal for display."""
    if not math.isfinite(value):
        return "n/a"
    return f"{math.floor(value * 10 + 0.5) / 10}"
