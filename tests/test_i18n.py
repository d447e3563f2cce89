# tests/test_i18n.py

import pytest
from datetime import date

from shaum.core.types import FastingStatus, FastingType
from shaum.i18n.localizer import EnglishLocalizer, get_localizer, list_localizers, register_localizer
from shaum.rules.engine import check


def test_registry():
    assert {"en", "id", "ar"} <= set(list_localizers())
    assert isinstance(get_localizer("EN"), EnglishLocalizer)
    with pytest.raises(KeyError):
        get_localizer("xx")
    with pytest.raises(KeyError):
        register_localizer(EnglishLocalizer())


def test_english_description():
    a = check(date(2024, 4, 10))
    assert a.description(get_localizer("en")) == "1 Shawwal 1445: Forbidden (Eid al-Fitr)"


def test_indonesian_names():
    loc = get_localizer("id")
    assert loc.status_name(FastingStatus.WAJIB) == "Wajib"
    assert loc.month_name(10) == "Syawal"
    assert loc.type_name(FastingType.MONDAY) == "Puasa Senin"
    assert check(date(2024, 3, 11)).description(loc) == "1 Ramadhan 1445: Wajib (Puasa Ramadhan, Puasa Senin)"


def test_arabic_month_names_come_from_the_calendar_tables():
    loc = get_localizer("ar")
    assert loc.month_name(9) == "رمضان"
    assert loc.status_name(FastingStatus.HARAM) == "حرام"


def test_unknown_type_falls_back_to_name():
    assert get_localizer("en").type_name(FastingType("NisfuShaban")) == "NisfuShaban"


def test_localizer_never_changes_status():
    a = check(date(2024, 3, 1))
    for code in list_localizers():
        a.description(get_localizer(code))
    assert a.status is FastingStatus.MAKRUH
