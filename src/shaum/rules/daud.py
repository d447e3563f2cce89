"""
shaum.rules.daud
----------------
Daud fasting (one day on, one day off) as a lazy, single-pass date iterator.

A turn that lands on a Haram day is either forfeited (Skip) or carried to
the next day (Postpone). The iterator ends past `end`, or quietly when the
date cannot advance any further.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterator, List, Optional

from .engine import check
from shaum.calendar.hijri import HijriMemo
from shaum.core.context import RuleContext
from shaum.core.errors import AnalysisError, ShaumError
from shaum.core.types import DaudStrategy

logger = logging.getLogger(__name__)

DEFAULT_SPAN_DAYS = 365
_ONE_DAY = timedelta(days=1)


class DaudSchedule:
    """
    Iterator over the days to fast in [start, end].

    State:
        should_fast: whether the next non-Haram day is a fasting turn
        skipped_turns / postponed_turns: Haram interactions so far
    """

    def __init__(self, start: date, end: date, context: Optional[RuleContext] = None):
        self.start = start
        self.end = end
        self.context = context or RuleContext()
        self.should_fast = True
        self.skipped_turns = 0
        self.postponed_turns = 0
        self._cursor: Optional[date] = start
        self._memo = HijriMemo()

    @classmethod
    def starting_from(cls, start: date) -> "DaudScheduleBuilder":
        return DaudScheduleBuilder(start)

    def __iter__(self) -> "DaudSchedule":
        return self

    def _advance(self) -> None:
        try:
            self._cursor = self._cursor + _ONE_DAY
        except OverflowError:
            logger.debug(f"Daud schedule reached the last representable date {self._cursor}")
            self._cursor = None

    def __next__(self) -> date:
        while self._cursor is not None and self._cursor <= self.end:
            d = self._cursor
            self._advance()

            try:
                analysis = check(d, self.context, memo=self._memo)
            except ShaumError as e:
                self._cursor = None
                raise AnalysisError(f"Daud schedule failed at {d}: {e}") from e
            if analysis.status.is_haram():
                if self.context.daud_strategy is DaudStrategy.SKIP:
                    self.should_fast = not self.should_fast
                    self.skipped_turns += 1
                    logger.debug(f"Daud: {d} is Haram, turn skipped (should_fast={self.should_fast})")
                else:
                    self.postponed_turns += 1
                    logger.debug(f"Daud: {d} is Haram, turn postponed (should_fast={self.should_fast})")
                continue

            if self.should_fast:
                self.should_fast = False
                return d
            self.should_fast = True

        self._cursor = None
        raise StopIteration


class DaudScheduleBuilder:
    def __init__(self, start: date):
        self._start = start
        self._end: Optional[date] = None
        self._context = RuleContext()
        self._strategy: Optional[DaudStrategy] = None

    def until(self, end: date) -> "DaudScheduleBuilder":
        self._end = end
        return self

    def skip_haram_days(self) -> "DaudScheduleBuilder":
        self._strategy = DaudStrategy.SKIP
        return self

    def postpone_on_haram(self) -> "DaudScheduleBuilder":
        self._strategy = DaudStrategy.POSTPONE
        return self

    def with_context(self, context: RuleContext) -> "DaudScheduleBuilder":
        self._context = context
        return self

    def build(self) -> DaudSchedule:
        end = self._end
        if end is None:
            try:
                end = self._start + timedelta(days=DEFAULT_SPAN_DAYS)
            except OverflowError:
                end = date.max
        ctx = self._context
        if self._strategy is not None:
            ctx = ctx.with_strategy(self._strategy)
        return DaudSchedule(self._start, end, ctx)


def generate_daud_schedule(start: date, end: date, context: Optional[RuleContext] = None) -> Iterator[date]:
    return DaudSchedule(start, end, context)


def daud_days(start: date, end: date, context: Optional[RuleContext] = None) -> List[date]:
    """Eager form of generate_daud_schedule."""
    return list(generate_daud_schedule(start, end, context))
