"""
shaum.calendar.hijri
--------------------
Gregorian <-> Hijri conversion with a moon-sighting day adjustment.

The arithmetic itself is the Umm al-Qura month-start table of
`hijridate`: a direct Julian-day lookup, no search. This module adds
the adjustment shift, the supported-range policy and a single-slot memo.
"""

from __future__ import annotations

import logging
import threading
from datetime import date, timedelta
from typing import Optional, Tuple

from hijridate import Gregorian, Hijri

from shaum.core.context import clamp_adjustment
from shaum.core.errors import DateOutOfRange
from shaum.core.types import HijriDate

logger = logging.getLogger(__name__)

HIJRI_MIN_YEAR = 1938
HIJRI_MAX_YEAR = 2076
MIN_DATE = date(HIJRI_MIN_YEAR, 1, 1)
MAX_DATE = date(HIJRI_MAX_YEAR, 12, 31)

MONTH_MUHARRAM = 1
MONTH_RAMADHAN = 9
MONTH_SHAWWAL = 10
MONTH_DHUL_HIJJAH = 12

MONTH_NAMES: Tuple[str, ...] = (
    "Muharram",
    "Safar",
    "Rabi' al-Awwal",
    "Rabi' al-Thani",
    "Jumada al-Ula",
    "Jumada al-Akhirah",
    "Rajab",
    "Sha'ban",
    "Ramadhan",
    "Shawwal",
    "Dhu al-Qi'dah",
    "Dhu al-Hijjah",
)


def month_name(month: int) -> str:
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return "Unknown"


class HijriMemo:
    """
    Most-recent (date, adjustment) -> (year, month, day) slot.

    Thread-safe; an optimization only, callers must not assume it is filled.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._key: Optional[Tuple[date, int]] = None
        self._value: Optional[Tuple[int, int, int]] = None
        self.hits = 0
        self.misses = 0

    def get(self, d: date, adjustment: int) -> Optional[Tuple[int, int, int]]:
        with self._lock:
            if self._key == (d, adjustment):
                self.hits += 1
                logger.debug(f"Memo HIT: {d} adj={adjustment}")
                return self._value
            self.misses += 1
            return None

    def put(self, d: date, adjustment: int, value: Tuple[int, int, int]) -> None:
        with self._lock:
            self._key = (d, adjustment)
            self._value = value

    def clear(self) -> None:
        with self._lock:
            self._key = None
            self._value = None


def _shift(d: date, days: int) -> Optional[date]:
    """d + days, or None when the result leaves the representable date range."""
    try:
        return d + timedelta(days=days)
    except OverflowError:
        return None


def in_supported_range(d: date) -> bool:
    return MIN_DATE <= d <= MAX_DATE


def _convert(adj: date) -> Tuple[int, int, int]:
    h = Gregorian(adj.year, adj.month, adj.day).to_hijri()
    return (h.year, h.month, h.day)


def to_hijri(
    d: date,
    adjustment: int = 0,
    *,
    strict: bool = True,
    memo: Optional[HijriMemo] = None,
) -> HijriDate:
    """
    Convert a Gregorian date to Hijri after shifting it by `adjustment` days.

    Positive adjustment = the Hijri calendar runs ahead (moon seen earlier).
    The adjusted date must lie in [1938-01-01, 2076-12-31]:
      - strict=True raises DateOutOfRange
      - strict=False clamps to the nearest bound and returns clamped=True
    """
    adjustment = clamp_adjustment(adjustment)
    if memo is not None:
        cached = memo.get(d, adjustment)
        if cached is not None:
            return HijriDate(*cached)

    adj = _shift(d, adjustment)
    if adj is None or not in_supported_range(adj):
        if strict:
            raise DateOutOfRange(adj or d, MIN_DATE, MAX_DATE)
        if adj is None:
            bound = MAX_DATE if adjustment > 0 else MIN_DATE
        else:
            bound = MAX_DATE if adj > MAX_DATE else MIN_DATE
        logger.debug(f"Clamping {d} (adj={adjustment}) to {bound}")
        return HijriDate(*_convert(bound), clamped=True)

    value = _convert(adj)
    if memo is not None:
        memo.put(d, adjustment, value)
    return HijriDate(*value)


def to_gregorian(h: HijriDate, adjustment: int = 0) -> date:
    """
    Inverse of to_hijri: the Gregorian date that maps to `h` under `adjustment`.

    Raises ValueError for invalid Hijri labels (e.g. day 30 of a 29-day month).
    """
    g = Hijri(h.year, h.month, h.day).to_gregorian()
    out = _shift(date(g.year, g.month, g.day), -clamp_adjustment(adjustment))
    if out is None:
        raise DateOutOfRange(date(g.year, g.month, g.day), MIN_DATE, MAX_DATE)
    return out


def days_in_month(year: int, month: int) -> int:
    """Length (29 or 30) of a Hijri month in the Umm al-Qura table."""
    return Hijri(year, month, 1).month_length()
