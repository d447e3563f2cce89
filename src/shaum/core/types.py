from __future__ import annotations

import functools
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from .errors import InvalidConfiguration


@functools.total_ordering
class FastingStatus(Enum):
    """
    Legal status (Hukum) of fasting on a day.

    Ordering comes from STATUS_RANK, never from declaration order:
      Mubah < Makruh < Sunnah < SunnahMuakkadah < Wajib < Haram
    """
    MUBAH = "Mubah"
    MAKRUH = "Makruh"
    SUNNAH = "Sunnah"
    SUNNAH_MUAKKADAH = "SunnahMuakkadah"
    WAJIB = "Wajib"
    HARAM = "Haram"

    @property
    def rank(self) -> int:
        return STATUS_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, FastingStatus):
            return NotImplemented
        return STATUS_RANK[self] < STATUS_RANK[other]

    def __str__(self) -> str:
        return self.value

    def is_haram(self) -> bool:
        return self is FastingStatus.HARAM

    def is_wajib(self) -> bool:
        return self is FastingStatus.WAJIB

    def is_sunnah(self) -> bool:
        return self in (FastingStatus.SUNNAH, FastingStatus.SUNNAH_MUAKKADAH)

    def is_makruh(self) -> bool:
        return self is FastingStatus.MAKRUH

    def is_mubah(self) -> bool:
        return self is FastingStatus.MUBAH

    @classmethod
    def parse(cls, value: Union[str, "FastingStatus"]) -> "FastingStatus":
        if isinstance(value, cls):
            return value
        key = str(value).replace("_", "").replace("-", "").lower()
        for s in cls:
            if s.value.lower() == key:
                return s
        raise InvalidConfiguration(f"Unknown fasting status '{value}'. Available: {[s.value for s in cls]}")


STATUS_RANK: Dict[FastingStatus, int] = {
    FastingStatus.MUBAH: 0,
    FastingStatus.MAKRUH: 1,
    FastingStatus.SUNNAH: 2,
    FastingStatus.SUNNAH_MUAKKADAH: 3,
    FastingStatus.WAJIB: 4,
    FastingStatus.HARAM: 5,
}


@dataclass(frozen=True)
class FastingType:
    """Reason a status was assigned. Open set keyed by name, so custom rules can add their own."""
    name: str

    def __str__(self) -> str:
        return self.name


FastingType.RAMADHAN = FastingType("Ramadhan")
FastingType.ARAFAH = FastingType("Arafah")
FastingType.ASHURA = FastingType("Ashura")
FastingType.TASUA = FastingType("Tasua")
FastingType.AYYAMUL_BIDH = FastingType("AyyamulBidh")
FastingType.MONDAY = FastingType("Monday")
FastingType.THURSDAY = FastingType("Thursday")
FastingType.SHAWWAL = FastingType("Shawwal")
FastingType.DAUD = FastingType("Daud")
FastingType.EID_AL_FITR = FastingType("EidAlFitr")
FastingType.EID_AL_ADHA = FastingType("EidAlAdha")
FastingType.TASHRIQ = FastingType("Tashriq")
FastingType.FRIDAY_EXCLUSIVE = FastingType("FridayExclusive")
FastingType.SATURDAY_EXCLUSIVE = FastingType("SaturdayExclusive")


class Madhab(Enum):
    SHAFI = "Shafi"
    HANAFI = "Hanafi"
    MALIKI = "Maliki"
    HANBALI = "Hanbali"


class DaudStrategy(Enum):
    """What a Daud turn does when it lands on a Haram day."""
    SKIP = "Skip"          # the turn is forfeited
    POSTPONE = "Postpone"  # the turn carries over to the next day


class TraceCode(Enum):
    MAGHRIB_ROLLOVER = "MaghribRollover"
    RANGE_CLAMPED = "RangeClamped"
    EID_AL_FITR = "EidAlFitr"
    EID_AL_ADHA = "EidAlAdha"
    TASHRIQ = "Tashriq"
    RAMADHAN = "Ramadhan"
    ARAFAH = "Arafah"
    ASHURA = "Ashura"
    TASUA = "Tasua"
    AYYAMUL_BIDH = "AyyamulBidh"
    MONDAY = "Monday"
    THURSDAY = "Thursday"
    SHAWWAL = "Shawwal"
    FRIDAY_SINGLED_OUT = "FridaySingledOut"
    SATURDAY_SINGLED_OUT = "SaturdaySingledOut"
    CUSTOM = "Custom"


_TRACE_TEXT: Dict[TraceCode, str] = {
    TraceCode.MAGHRIB_ROLLOVER: "after Maghrib the Islamic day has already advanced",
    TraceCode.RANGE_CLAMPED: "date clamped to the supported Hijri range",
    TraceCode.EID_AL_FITR: "1 Shawwal is Eid al-Fitr, fasting is forbidden",
    TraceCode.EID_AL_ADHA: "10 Dhul-Hijjah is Eid al-Adha, fasting is forbidden",
    TraceCode.TASHRIQ: "11-13 Dhul-Hijjah are the days of Tashriq, fasting is forbidden",
    TraceCode.RAMADHAN: "Ramadhan fasting is obligatory",
    TraceCode.ARAFAH: "the day of Arafah is strongly recommended",
    TraceCode.ASHURA: "Ashura is strongly recommended",
    TraceCode.TASUA: "Tasu'a is recommended",
    TraceCode.AYYAMUL_BIDH: "Ayyamul Bidh (13-15) is recommended",
    TraceCode.MONDAY: "Monday fasting is recommended",
    TraceCode.THURSDAY: "Thursday fasting is recommended",
    TraceCode.SHAWWAL: "six days of Shawwal are recommended",
    TraceCode.FRIDAY_SINGLED_OUT: "singling out Friday is disliked",
    TraceCode.SATURDAY_SINGLED_OUT: "singling out Saturday is disliked",
    TraceCode.CUSTOM: "custom rule",
}


@dataclass(frozen=True)
class RuleTrace:
    code: TraceCode
    detail: Optional[str] = None

    def message(self) -> str:
        text = _TRACE_TEXT[self.code]
        if self.detail:
            return f"{text}: {self.detail}"
        return text


@dataclass(frozen=True)
class HijriDate:
    year: int
    month: int
    day: int
    clamped: bool = field(default=False, compare=False)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.year, self.month, self.day)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d} AH"


@dataclass(frozen=True)
class GeoCoordinate:
    """Observer position. lat/lng in degrees (east positive), altitude in metres."""
    lat: float
    lng: float
    altitude: float = 0.0

    def __post_init__(self):
        if not -90.0 <= self.lat <= 90.0:
            raise InvalidConfiguration(f"Latitude {self.lat} outside [-90, 90]")
        if not -180.0 <= self.lng <= 180.0:
            raise InvalidConfiguration(f"Longitude {self.lng} outside [-180, 180]")

    @classmethod
    def unchecked(cls, lat: float, lng: float, altitude: float = 0.0) -> "GeoCoordinate":
        """Build without range validation, for callers that already validated."""
        obj = object.__new__(cls)
        object.__setattr__(obj, "lat", float(lat))
        object.__setattr__(obj, "lng", float(lng))
        object.__setattr__(obj, "altitude", float(altitude))
        return obj

    def with_altitude(self, altitude: float) -> "GeoCoordinate":
        return GeoCoordinate.unchecked(self.lat, self.lng, altitude)


@dataclass(frozen=True)
class FastingAnalysis:
    """Result of one rule-engine evaluation."""
    source: Union[date, datetime]
    effective_date: date
    status: FastingStatus
    hijri: HijriDate
    reasons: Tuple[FastingType, ...] = ()
    traces: Tuple[RuleTrace, ...] = ()

    @property
    def hijri_year(self) -> int:
        return self.hijri.year

    @property
    def hijri_month(self) -> int:
        return self.hijri.month

    @property
    def hijri_day(self) -> int:
        return self.hijri.day

    def has_reason(self, t: FastingType) -> bool:
        return t in self.reasons

    def reason_names(self) -> Tuple[str, ...]:
        return tuple(r.name for r in self.reasons)

    def explain(self) -> str:
        head = f"{self.status.value} ({self.hijri})"
        if not self.traces:
            return f"{head}: no special ruling, fasting is permissible"
        return f"{head}: " + "; ".join(t.message() for t in self.traces)

    def description(self, localizer) -> str:
        return localizer.format_description(self)
