"""shaum public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .api import (
    fasting_analysis,
    fasting_status,
    is_wajib,
    is_haram,
    is_sunnah,
    is_makruh,
    is_mubah,
    explain,
    describe,
    hijri_date,
    prayer_times,
    daud_schedule,
)
from .astro.prayer import PrayerTimes, calculate_prayer_times
from .calendar.hijri import to_hijri, to_gregorian
from .core.context import RuleContext, FixedAdjustment, NoAdjustment
from .core.errors import ShaumError, DateOutOfRange, InvalidConfiguration, SolarEventNotFound, AnalysisError
from .core.params import PrayerParams
from .core.types import (
    DaudStrategy,
    FastingAnalysis,
    FastingStatus,
    FastingType,
    GeoCoordinate,
    HijriDate,
    Madhab,
)
from .rules.daud import DaudSchedule, generate_daud_schedule
from .rules.engine import analyze, check, analyze_date
from .rules.query import FastingQuery, upcoming_fasts

__all__ = [
    "fasting_analysis",
    "fasting_status",
    "is_wajib",
    "is_haram",
    "is_sunnah",
    "is_makruh",
    "is_mubah",
    "explain",
    "describe",
    "hijri_date",
    "prayer_times",
    "daud_schedule",
    "PrayerTimes",
    "calculate_prayer_times",
    "to_hijri",
    "to_gregorian",
    "RuleContext",
    "FixedAdjustment",
    "NoAdjustment",
    "ShaumError",
    "DateOutOfRange",
    "InvalidConfiguration",
    "SolarEventNotFound",
    "AnalysisError",
    "PrayerParams",
    "DaudStrategy",
    "FastingAnalysis",
    "FastingStatus",
    "FastingType",
    "GeoCoordinate",
    "HijriDate",
    "Madhab",
    "DaudSchedule",
    "generate_daud_schedule",
    "analyze",
    "check",
    "analyze_date",
    "FastingQuery",
    "upcoming_fasts",
]
