"""Declarative custom rules. Any object with a matching evaluate() works; these cover the common shapes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from shaum.core.errors import InvalidConfiguration
from shaum.core.types import FastingStatus, FastingType


@dataclass(frozen=True)
class HijriDayRule:
    """
    Matches Hijri `month` (None = any month) on any day in `days`.

    Example: the 1st of Sha'ban as Sunnah
        HijriDayRule(month=8, days=(1,), status=FastingStatus.SUNNAH, fasting_type=FastingType("Shaban"))
    """
    month: Optional[int]
    days: Tuple[int, ...]
    status: FastingStatus
    fasting_type: FastingType

    def __post_init__(self):
        if self.month is not None and not 1 <= self.month <= 12:
            raise InvalidConfiguration(f"Hijri month {self.month} outside [1, 12]")
        days = tuple(self.days)
        if not days or any(not 1 <= d <= 30 for d in days):
            raise InvalidConfiguration(f"Hijri days {days} must be non-empty and within [1, 30]")
        object.__setattr__(self, "days", days)
        object.__setattr__(self, "status", FastingStatus.parse(self.status))

    def evaluate(
        self, d: date, hijri_year: int, hijri_month: int, hijri_day: int
    ) -> Optional[Tuple[FastingStatus, FastingType]]:
        if self.month is not None and hijri_month != self.month:
            return None
        if hijri_day not in self.days:
            return None
        return (self.status, self.fasting_type)


@dataclass(frozen=True)
class WeekdayRule:
    """Matches a Gregorian weekday (Monday = 0)."""
    weekday: int
    status: FastingStatus
    fasting_type: FastingType

    def __post_init__(self):
        if not 0 <= self.weekday <= 6:
            raise InvalidConfiguration(f"Weekday {self.weekday} outside [0, 6]")
        object.__setattr__(self, "status", FastingStatus.parse(self.status))

    def evaluate(
        self, d: date, hijri_year: int, hijri_month: int, hijri_day: int
    ) -> Optional[Tuple[FastingStatus, FastingType]]:
        if d.weekday() != self.weekday:
            return None
        return (self.status, self.fasting_type)
