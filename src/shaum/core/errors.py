from __future__ import annotations

from datetime import date
from typing import Optional


class ShaumError(Exception):
    """Base error."""


class DateOutOfRange(ShaumError):
    """Raised when an (adjusted) Gregorian date lies outside the supported Hijri table."""

    def __init__(self, d: date, min_date: date, max_date: date):
        self.date = d
        self.min = min_date
        self.max = max_date
        super().__init__(f"Date {d} outside supported Hijri range ({min_date} .. {max_date})")


class InvalidConfiguration(ShaumError, ValueError):
    """Raised when a configuration object fails validation."""


class SolarEventNotFound(ShaumError):
    """Raised when the sun never reaches the target altitude inside the search window."""

    def __init__(self, d: date, target_altitude: float, phase: str, detail: Optional[str] = None):
        self.date = d
        self.target_altitude = target_altitude
        self.phase = phase
        msg = f"Sun does not cross {target_altitude:.3f} deg in the {phase} window of {d}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class AnalysisError(ShaumError):
    """Generic wrapper for composed failures."""
