"""
shaum.i18n.localizer
--------------------
Pure formatting of analysis results. Localizers never influence status.
"""

from __future__ import annotations

from typing import Dict, List, Protocol

from hijridate import Hijri

from shaum.calendar.hijri import MONTH_NAMES
from shaum.core.types import FastingAnalysis, FastingStatus, FastingType


class Localizer(Protocol):
    code: str

    def month_name(self, month: int) -> str: ...
    def status_name(self, status: FastingStatus) -> str: ...
    def type_name(self, t: FastingType) -> str: ...
    def format_description(self, analysis: FastingAnalysis) -> str: ...


class _TableLocalizer:
    """Table-driven localizer; unknown (custom) types fall back to their name."""

    code = ""
    months: tuple = ()
    statuses: Dict[FastingStatus, str] = {}
    types: Dict[str, str] = {}
    none_text = ""
    separator = ", "

    def month_name(self, month: int) -> str:
        if 1 <= month <= 12:
            return self.months[month - 1]
        return str(month)

    def status_name(self, status: FastingStatus) -> str:
        return self.statuses[status]

    def type_name(self, t: FastingType) -> str:
        return self.types.get(t.name, t.name)

    def format_date(self, analysis: FastingAnalysis) -> str:
        h = analysis.hijri
        return f"{h.day} {self.month_name(h.month)} {h.year}"

    def format_description(self, analysis: FastingAnalysis) -> str:
        head = f"{self.format_date(analysis)}: {self.status_name(analysis.status)}"
        if not analysis.reasons:
            return f"{head} ({self.none_text})"
        reasons = self.separator.join(self.type_name(t) for t in analysis.reasons)
        return f"{head} ({reasons})"


class EnglishLocalizer(_TableLocalizer):
    code = "en"
    months = MONTH_NAMES
    statuses = {
        FastingStatus.MUBAH: "Permissible",
        FastingStatus.MAKRUH: "Disliked",
        FastingStatus.SUNNAH: "Recommended",
        FastingStatus.SUNNAH_MUAKKADAH: "Strongly recommended",
        FastingStatus.WAJIB: "Obligatory",
        FastingStatus.HARAM: "Forbidden",
    }
    types = {
        "Ramadhan": "Ramadhan",
        "Arafah": "Day of Arafah",
        "Ashura": "Ashura",
        "Tasua": "Tasu'a",
        "AyyamulBidh": "Ayyamul Bidh",
        "Monday": "Monday",
        "Thursday": "Thursday",
        "Shawwal": "Six days of Shawwal",
        "Daud": "Daud fasting",
        "EidAlFitr": "Eid al-Fitr",
        "EidAlAdha": "Eid al-Adha",
        "Tashriq": "Days of Tashriq",
        "FridayExclusive": "Friday singled out",
        "SaturdayExclusive": "Saturday singled out",
    }
    none_text = "no special ruling"


class IndonesianLocalizer(_TableLocalizer):
    code = "id"
    months = (
        "Muharram",
        "Safar",
        "Rabiul Awal",
        "Rabiul Akhir",
        "Jumadil Awal",
        "Jumadil Akhir",
        "Rajab",
        "Sya'ban",
        "Ramadhan",
        "Syawal",
        "Dzulqa'dah",
        "Dzulhijjah",
    )
    statuses = {
        FastingStatus.MUBAH: "Mubah",
        FastingStatus.MAKRUH: "Makruh",
        FastingStatus.SUNNAH: "Sunnah",
        FastingStatus.SUNNAH_MUAKKADAH: "Sunnah Muakkadah",
        FastingStatus.WAJIB: "Wajib",
        FastingStatus.HARAM: "Haram",
    }
    types = {
        "Ramadhan": "Puasa Ramadhan",
        "Arafah": "Puasa Arafah",
        "Ashura": "Puasa Asyura",
        "Tasua": "Puasa Tasu'a",
        "AyyamulBidh": "Ayyamul Bidh",
        "Monday": "Puasa Senin",
        "Thursday": "Puasa Kamis",
        "Shawwal": "Puasa Syawal",
        "Daud": "Puasa Daud",
        "EidAlFitr": "Idul Fitri",
        "EidAlAdha": "Idul Adha",
        "Tashriq": "Hari Tasyrik",
        "FridayExclusive": "Mengkhususkan hari Jumat",
        "SaturdayExclusive": "Mengkhususkan hari Sabtu",
    }
    none_text = "tidak ada ketentuan khusus"


class ArabicLocalizer(_TableLocalizer):
    code = "ar"
    statuses = {
        FastingStatus.MUBAH: "مباح",
        FastingStatus.MAKRUH: "مكروه",
        FastingStatus.SUNNAH: "سنة",
        FastingStatus.SUNNAH_MUAKKADAH: "سنة مؤكدة",
        FastingStatus.WAJIB: "واجب",
        FastingStatus.HARAM: "حرام",
    }
    types = {
        "Ramadhan": "صيام رمضان",
        "Arafah": "يوم عرفة",
        "Ashura": "عاشوراء",
        "Tasua": "تاسوعاء",
        "AyyamulBidh": "الأيام البيض",
        "Monday": "الاثنين",
        "Thursday": "الخميس",
        "Shawwal": "ست من شوال",
        "Daud": "صيام داود",
        "EidAlFitr": "عيد الفطر",
        "EidAlAdha": "عيد الأضحى",
        "Tashriq": "أيام التشريق",
        "FridayExclusive": "إفراد الجمعة",
        "SaturdayExclusive": "إفراد السبت",
    }
    none_text = "لا حكم خاص"
    separator = "، "

    def month_name(self, month: int) -> str:
        if 1 <= month <= 12:
            return Hijri(1445, month, 1).month_name("ar")
        return str(month)


_REGISTRY: Dict[str, Localizer] = {}


def register_localizer(localizer: Localizer, *, overwrite: bool = False) -> None:
    code = localizer.code.lower()
    if (not overwrite) and (code in _REGISTRY):
        raise KeyError(f"Localizer '{code}' already exists. Use overwrite=True to replace.")
    _REGISTRY[code] = localizer


def get_localizer(code: str = "en") -> Localizer:
    key = code.lower()
    if key not in _REGISTRY:
        raise KeyError(f"Unknown localizer '{code}'. Available: {sorted(_REGISTRY)}")
    return _REGISTRY[key]


def list_localizers() -> List[str]:
    return sorted(_REGISTRY.keys())


register_localizer(EnglishLocalizer())
register_localizer(IndonesianLocalizer())
register_localizer(ArabicLocalizer())
