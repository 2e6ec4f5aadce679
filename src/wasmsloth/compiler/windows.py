"""
Time windows used by the generated rules.

Alert windows follow the multiwindow, multi-burn-rate approach from the
Google SRE workbook. The burn factor of each window pair is derived from the
SLO period, so a 30d period gives the classic 14.4 / 6 / 3 / 1 factors.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta

DURATION_PATTERN = re.compile(r"^(\d+)(ms|s|m|h|d|w)$")

_UNIT_SECONDS = {
    "ms": 0.001,
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
    "w": 604800,
}

# Windows every SLI error ratio is recorded for
SLI_WINDOWS = ("5m", "30m", "1h", "2h", "6h", "1d", "3d")


def parse_duration(duration: str) -> timedelta:
    """
    Convert a Prometheus duration string to a timedelta.

    Raises:
        ValueError: If the duration is not a single ``<int><unit>`` value
    """
    match = DURATION_PATTERN.match(duration.strip())
    if not match:
        raise ValueError(f"Invalid duration: {duration!r}")
    value, unit = int(match.group(1)), match.group(2)
    if value <= 0:
        raise ValueError(f"Duration must be positive: {duration!r}")
    return timedelta(seconds=value * _UNIT_SECONDS[unit])


@dataclass(frozen=True)
class AlertWindow:
    """A short/long window pair for one burn rate condition."""

    error_budget_percent: float
    short_window: str
    long_window: str

    def burn_factor(self, period: timedelta) -> float:
        """Burn rate that consumes ``error_budget_percent`` of the budget in ``long_window``."""
        long_window = parse_duration(self.long_window)
        return (self.error_budget_percent / 100) / (long_window / period)


@dataclass(frozen=True)
class AlertWindows:
    """Window pairs for page and ticket alerts."""

    page_quick: AlertWindow
    page_slow: AlertWindow
    ticket_quick: AlertWindow
    ticket_slow: AlertWindow

    def sli_windows(self) -> list[str]:
        """All windows an SLI error ratio must be recorded for, shortest first."""
        windows = list(SLI_WINDOWS)
        for window in (
            self.page_quick,
            self.page_slow,
            self.ticket_quick,
            self.ticket_slow,
        ):
            for w in (window.short_window, window.long_window):
                if w not in windows:
                    windows.append(w)
        windows.sort(key=parse_duration)
        return windows


DEFAULT_ALERT_WINDOWS = AlertWindows(
    page_quick=AlertWindow(error_budget_percent=2, short_window="5m", long_window="1h"),
    page_slow=AlertWindow(error_budget_percent=5, short_window="30m", long_window="6h"),
    ticket_quick=AlertWindow(error_budget_percent=10, short_window="2h", long_window="1d"),
    ticket_slow=AlertWindow(error_budget_percent=10, short_window="6h", long_window="3d"),
)


def format_factor(value: float) -> str:
    """Render a burn factor compactly (``14.4``, ``6``, ``1``)."""
    rounded = round(value, 6)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:g}"
