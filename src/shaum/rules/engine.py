"""
shaum.rules.engine
------------------
Fasting status evaluation.

Stages run in a fixed order over one (effective) date:

  1. Maghrib rollover      (datetime + coordinates only)
  2. Hijri conversion      (context.adjustment, context.strict)
  3. Haram                 Eid al-Fitr, Eid al-Adha, Tashriq -> return at once
  4. Wajib                 Ramadhan
  5. Sunnah Muakkadah      Arafah, Ashura
  6. Sunnah                Tasu'a, Ayyamul Bidh, Monday/Thursday, Shawwal 2+
  7. Makruh                Friday/Saturday with no other reason
  8. Custom rules          folded with max(), can only raise the status

Reasons and traces are appended in evaluation order and never removed.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Tuple, Union

from shaum.astro.prayer import AstronomicalSunset, SunsetCalculator
from shaum.calendar.hijri import (
    MAX_DATE,
    MIN_DATE,
    MONTH_DHUL_HIJJAH,
    MONTH_MUHARRAM,
    MONTH_RAMADHAN,
    MONTH_SHAWWAL,
    HijriMemo,
    to_hijri,
)
from shaum.core.context import RuleContext
from shaum.core.errors import DateOutOfRange
from shaum.core.time import ensure_utc, local_mean_date
from shaum.core.types import (
    FastingAnalysis,
    FastingStatus,
    FastingType,
    GeoCoordinate,
    HijriDate,
    Madhab,
    RuleTrace,
    TraceCode,
)

logger = logging.getLogger(__name__)

DAY_ARAFAH = 9
DAY_ASHURA = 10
DAY_TASUA = 9
AYYAMUL_BIDH_DAYS = (13, 14, 15)
TASHRIQ_DAYS = (11, 12, 13)

MONDAY = 0
THURSDAY = 3
FRIDAY = 4
SATURDAY = 5

# Weekdays on which fasting alone is disliked, per school.
_SINGLED_OUT_WEEKDAYS: Dict[Madhab, Tuple[int, ...]] = {
    Madhab.SHAFI: (FRIDAY, SATURDAY),
    Madhab.HANAFI: (FRIDAY, SATURDAY),
    Madhab.MALIKI: (FRIDAY, SATURDAY),
    Madhab.HANBALI: (FRIDAY, SATURDAY),
}


class _Evaluation:
    """Mutable accumulator for a single evaluation; frozen into FastingAnalysis at the end."""

    def __init__(self):
        self.status = FastingStatus.MUBAH
        self.reasons: List[FastingType] = []
        self.traces: List[RuleTrace] = []

    def trace(self, code: TraceCode, detail: Optional[str] = None) -> None:
        self.traces.append(RuleTrace(code, detail))

    def add(self, reason: FastingType, code: TraceCode, detail: Optional[str] = None) -> None:
        self.reasons.append(reason)
        self.trace(code, detail)

    def raise_to(self, status: FastingStatus) -> None:
        if status > self.status:
            self.status = status

    def result(self, source, effective: date, hijri: HijriDate) -> FastingAnalysis:
        return FastingAnalysis(
            source=source,
            effective_date=effective,
            status=self.status,
            hijri=hijri,
            reasons=tuple(self.reasons),
            traces=tuple(self.traces),
        )


def _effective_date(
    when: Union[date, datetime],
    context: RuleContext,
    coords: Optional[GeoCoordinate],
    sunset: Optional[SunsetCalculator],
    ev: _Evaluation,
) -> date:
    if not isinstance(when, datetime):
        return when

    instant = ensure_utc(when)
    if coords is None:
        return when.date()

    civil = local_mean_date(instant, coords.lng)
    calculator = sunset if sunset is not None else AstronomicalSunset()
    maghrib = calculator.sunset(civil, coords)
    if instant <= maghrib:
        return civil

    try:
        effective = civil + timedelta(days=1)
    except OverflowError:
        raise DateOutOfRange(civil, MIN_DATE, MAX_DATE)
    logger.debug(f"{instant} is after Maghrib {maghrib} on {civil}; effective date {effective}")
    ev.trace(TraceCode.MAGHRIB_ROLLOVER, f"Maghrib {maghrib:%Y-%m-%d %H:%M} UTC, effective date {effective}")
    return effective


def _haram(h: HijriDate, ev: _Evaluation) -> bool:
    if h.month == MONTH_SHAWWAL and h.day == 1:
        ev.add(FastingType.EID_AL_FITR, TraceCode.EID_AL_FITR)
    elif h.month == MONTH_DHUL_HIJJAH and h.day == 10:
        ev.add(FastingType.EID_AL_ADHA, TraceCode.EID_AL_ADHA)
    elif h.month == MONTH_DHUL_HIJJAH and h.day in TASHRIQ_DAYS:
        ev.add(FastingType.TASHRIQ, TraceCode.TASHRIQ)
    else:
        return False
    ev.status = FastingStatus.HARAM
    return True


def _wajib(h: HijriDate, ev: _Evaluation) -> None:
    if h.month == MONTH_RAMADHAN:
        ev.add(FastingType.RAMADHAN, TraceCode.RAMADHAN)
        ev.raise_to(FastingStatus.WAJIB)


def _sunnah_muakkadah(h: HijriDate, ev: _Evaluation) -> None:
    if h.month == MONTH_DHUL_HIJJAH and h.day == DAY_ARAFAH:
        ev.add(FastingType.ARAFAH, TraceCode.ARAFAH)
        ev.raise_to(FastingStatus.SUNNAH_MUAKKADAH)
    if h.month == MONTH_MUHARRAM and h.day == DAY_ASHURA:
        ev.add(FastingType.ASHURA, TraceCode.ASHURA)
        ev.raise_to(FastingStatus.SUNNAH_MUAKKADAH)


def _sunnah(h: HijriDate, weekday: int, ev: _Evaluation) -> None:
    # raise_to never lowers, so Ashura/Arafah/Ramadhan keep their rank
    if h.month == MONTH_MUHARRAM and h.day == DAY_TASUA:
        ev.add(FastingType.TASUA, TraceCode.TASUA)
        ev.raise_to(FastingStatus.SUNNAH)
    if h.day in AYYAMUL_BIDH_DAYS:
        ev.add(FastingType.AYYAMUL_BIDH, TraceCode.AYYAMUL_BIDH)
        ev.raise_to(FastingStatus.SUNNAH)
    if weekday == MONDAY:
        ev.add(FastingType.MONDAY, TraceCode.MONDAY)
        ev.raise_to(FastingStatus.SUNNAH)
    elif weekday == THURSDAY:
        ev.add(FastingType.THURSDAY, TraceCode.THURSDAY)
        ev.raise_to(FastingStatus.SUNNAH)
    if h.month == MONTH_SHAWWAL and h.day > 1:
        ev.add(FastingType.SHAWWAL, TraceCode.SHAWWAL)
        ev.raise_to(FastingStatus.SUNNAH)


def _makruh(weekday: int, madhab: Madhab, ev: _Evaluation) -> None:
    if ev.status is not FastingStatus.MUBAH:
        return
    if weekday not in _SINGLED_OUT_WEEKDAYS[madhab]:
        return
    if weekday == FRIDAY:
        ev.add(FastingType.FRIDAY_EXCLUSIVE, TraceCode.FRIDAY_SINGLED_OUT)
    else:
        ev.add(FastingType.SATURDAY_EXCLUSIVE, TraceCode.SATURDAY_SINGLED_OUT)
    ev.status = FastingStatus.MAKRUH


def _custom(effective: date, h: HijriDate, context: RuleContext, ev: _Evaluation) -> None:
    for rule in context.custom_rules:
        out = rule.evaluate(effective, h.year, h.month, h.day)
        if out is None:
            continue
        status, ftype = out
        ev.add(ftype, TraceCode.CUSTOM, ftype.name)
        ev.raise_to(status)


def analyze(
    when: Union[date, datetime],
    context: Optional[RuleContext] = None,
    coords: Optional[GeoCoordinate] = None,
    *,
    sunset: Optional[SunsetCalculator] = None,
    memo: Optional[HijriMemo] = None,
) -> FastingAnalysis:
    """
    Evaluate the fasting status of a date or instant.

    `when` may be a date or a timezone-aware datetime. With a datetime and
    coordinates, an instant after Maghrib counts toward the next day.

    The built-in Haram days end evaluation at once. Custom rules are folded
    with max() and all of them run, so a custom rule that returns Haram does
    not stop later custom rules from adding their reasons; the final status
    stays Haram and does not depend on registration order.

    Raises:
        DateOutOfRange: only when context.strict is set
        SolarEventNotFound: Maghrib could not be found for the rollover check
        ValueError: naive datetime
    """
    context = context or RuleContext()
    ev = _Evaluation()

    effective = _effective_date(when, context, coords, sunset, ev)

    h = to_hijri(effective, context.adjustment, strict=context.strict, memo=memo)
    if h.clamped:
        ev.trace(TraceCode.RANGE_CLAMPED, f"{effective} (adjustment {context.adjustment}) outside {MIN_DATE}..{MAX_DATE}")

    if _haram(h, ev):
        logger.debug(f"{effective} -> {h}: Haram ({ev.reasons[0]})")
        return ev.result(when, effective, h)

    weekday = effective.weekday()
    _wajib(h, ev)
    _sunnah_muakkadah(h, ev)
    _sunnah(h, weekday, ev)
    _makruh(weekday, context.madhab, ev)
    _custom(effective, h, context, ev)

    logger.debug(f"{effective} -> {h}: {ev.status} {[r.name for r in ev.reasons]}")
    return ev.result(when, effective, h)


def check(d: date, context: Optional[RuleContext] = None, *, memo: Optional[HijriMemo] = None) -> FastingAnalysis:
    """Date-only evaluation (no Maghrib rollover); an aware datetime counts by its own calendar date."""
    if isinstance(d, datetime):
        ensure_utc(d)
        d = d.date()
    return analyze(d, context, memo=memo)


def analyze_date(d: date) -> FastingAnalysis:
    """Evaluation under the default lenient context; never raises for a valid date."""
    return check(d, RuleContext())
