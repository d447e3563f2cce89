from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional, Union

from .astro.prayer import PrayerTimes, calculate_prayer_times
from .calendar.hijri import to_hijri
from .core.context import RuleContext
from .core.params import PrayerParams, get_preset
from .core.types import FastingAnalysis, FastingStatus, GeoCoordinate, HijriDate
from .i18n.localizer import get_localizer
from .rules.daud import daud_days
from .rules.engine import analyze, check

DateLike = Union[date, datetime]


def fasting_analysis(
    when: DateLike,
    *,
    context: Optional[RuleContext] = None,
    coords: Optional[GeoCoordinate] = None,
) -> FastingAnalysis:
    return analyze(when, context, coords)


def fasting_status(when: DateLike, *, context: Optional[RuleContext] = None) -> FastingStatus:
    """Status of a date; errors (e.g. strict range violations) propagate."""
    return check(when, context).status


def is_wajib(when: DateLike, *, context: Optional[RuleContext] = None) -> bool:
    return fasting_status(when, context=context).is_wajib()


def is_haram(when: DateLike, *, context: Optional[RuleContext] = None) -> bool:
    return fasting_status(when, context=context).is_haram()


def is_sunnah(when: DateLike, *, context: Optional[RuleContext] = None) -> bool:
    return fasting_status(when, context=context).is_sunnah()


def is_makruh(when: DateLike, *, context: Optional[RuleContext] = None) -> bool:
    return fasting_status(when, context=context).is_makruh()


def is_mubah(when: DateLike, *, context: Optional[RuleContext] = None) -> bool:
    return fasting_status(when, context=context).is_mubah()


def explain(when: DateLike, *, context: Optional[RuleContext] = None, coords: Optional[GeoCoordinate] = None) -> str:
    return analyze(when, context, coords).explain()


def describe(when: DateLike, *, lang: str = "en", context: Optional[RuleContext] = None) -> str:
    return check(when, context).description(get_localizer(lang))


def hijri_date(d: date, *, adjustment: int = 0, strict: bool = True) -> HijriDate:
    return to_hijri(d, adjustment, strict=strict)


def prayer_times(
    d: date,
    lat: float,
    lng: float,
    *,
    altitude: float = 0.0,
    method: Union[str, PrayerParams] = "mabims",
) -> PrayerTimes:
    params = method if isinstance(method, PrayerParams) else get_preset(method)
    return calculate_prayer_times(d, GeoCoordinate(lat, lng, altitude), params)


def daud_schedule(start: date, end: date, *, context: Optional[RuleContext] = None) -> List[date]:
    return daud_days(start, end, context)
