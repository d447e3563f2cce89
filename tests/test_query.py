# tests/test_query.py

from datetime import date
from itertools import islice

from shaum.core.context import RuleContext
from shaum.core.types import FastingStatus, FastingType
from shaum.rules.query import FastingQuery, upcoming_fasts


def test_ramadhan_1445_has_thirty_wajib_days():
    days = list(FastingQuery(date(2024, 3, 1)).wajib().until(date(2024, 4, 30)))
    assert len(days) == 30
    assert days[0].effective_date == date(2024, 3, 11)
    assert days[-1].effective_date == date(2024, 4, 9)


def test_haram_days_of_dhul_hijjah_1445(gregorian_of):
    start = gregorian_of(1445, 12, 1)
    end = gregorian_of(1445, 12, 29)
    haram = list(FastingQuery(start).haram().until(end))
    assert [a.hijri.day for a in haram] == [10, 11, 12, 13]


def test_filters_compose():
    q = FastingQuery(date(2024, 3, 1)).sunnah().with_reason(FastingType.MONDAY).until(date(2024, 3, 10))
    days = [a.effective_date for a in q]
    assert days == [date(2024, 3, 4)]

    q = FastingQuery(date(2024, 3, 1)).with_status("Makruh").until(date(2024, 3, 10))
    assert all(a.status is FastingStatus.MAKRUH for a in q)
    assert {a.effective_date.weekday() for a in q} <= {4, 5}


def test_upcoming_is_lazy_and_open_ended():
    first = next(iter(upcoming_fasts(date(2024, 4, 10))))
    # Eid is skipped, 2 Shawwal is the next recommended day
    assert first.effective_date == date(2024, 4, 11)
    assert first.has_reason(FastingType.SHAWWAL)

    ten = list(islice(upcoming_fasts(date(2024, 1, 1)), 10))
    assert len(ten) == 10
    assert all(a.status.is_sunnah() or a.status.is_wajib() for a in ten)


def test_take_respects_context():
    ctx = RuleContext(adjustment=1)
    got = FastingQuery(date(2024, 4, 1), ctx).haram().take(1)
    assert got[0].effective_date == date(2024, 4, 9)
    assert FastingQuery(date(2024, 4, 1)).take(0) == []
