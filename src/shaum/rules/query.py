from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Iterator, List, Optional

from .engine import check
from shaum.calendar.hijri import HijriMemo
from shaum.core.context import RuleContext
from shaum.core.errors import AnalysisError, ShaumError
from shaum.core.types import FastingAnalysis, FastingStatus, FastingType


class FastingQuery:
    """
    Lazy day-by-day scan from `start`, yielding FastingAnalysis values that
    pass every filter. Without until() the scan is open-ended, so bound it
    with until() or itertools.islice / take().

    Filters compose with AND:
        FastingQuery(date(2024, 3, 1)).sunnah().until(date(2024, 3, 31))
    """

    def __init__(self, start: date, context: Optional[RuleContext] = None):
        self.start = start
        self.context = context or RuleContext()
        self._end: Optional[date] = None
        self._filters: List[Callable[[FastingAnalysis], bool]] = []

    def _where(self, pred: Callable[[FastingAnalysis], bool]) -> "FastingQuery":
        self._filters.append(pred)
        return self

    def sunnah(self) -> "FastingQuery":
        return self._where(lambda a: a.status.is_sunnah())

    def wajib(self) -> "FastingQuery":
        return self._where(lambda a: a.status.is_wajib())

    def haram(self) -> "FastingQuery":
        return self._where(lambda a: a.status.is_haram())

    def with_status(self, status) -> "FastingQuery":
        s = FastingStatus.parse(status)
        return self._where(lambda a: a.status is s)

    def with_reason(self, reason: FastingType) -> "FastingQuery":
        return self._where(lambda a: a.has_reason(reason))

    def until(self, end: date) -> "FastingQuery":
        self._end = end
        return self

    def __iter__(self) -> Iterator[FastingAnalysis]:
        memo = HijriMemo()
        d: Optional[date] = self.start
        while d is not None and (self._end is None or d <= self._end):
            try:
                analysis = check(d, self.context, memo=memo)
            except ShaumError as e:
                raise AnalysisError(f"Fasting query failed at {d}: {e}") from e
            if all(f(analysis) for f in self._filters):
                yield analysis
            try:
                d = d + timedelta(days=1)
            except OverflowError:
                d = None

    def take(self, n: int) -> List[FastingAnalysis]:
        out: List[FastingAnalysis] = []
        if n <= 0:
            return out
        for a in self:
            out.append(a)
            if len(out) >= n:
                break
        return out


def upcoming_fasts(start: date, context: Optional[RuleContext] = None) -> FastingQuery:
    """Days from `start` on which fasting is recommended or obligatory."""
    return FastingQuery(start, context)._where(lambda a: a.status.is_sunnah() or a.status.is_wajib())
