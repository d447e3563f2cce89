# tests/test_hijri.py

import pytest
from datetime import date

from shaum.calendar import hijri
from shaum.core.errors import DateOutOfRange
from shaum.core.types import HijriDate


def test_known_anchors():
    # 1 Ramadhan 1445 and 1 Shawwal 1445 (Umm al-Qura)
    assert hijri.to_hijri(date(2024, 3, 11)).as_tuple() == (1445, 9, 1)
    assert hijri.to_hijri(date(2024, 4, 10)).as_tuple() == (1445, 10, 1)
    assert str(hijri.to_hijri(date(2024, 3, 11))) == "1445-09-01 AH"


def test_adjustment_shifts_gregorian_input():
    base = hijri.to_hijri(date(2024, 3, 10), adjustment=1)
    assert base == hijri.to_hijri(date(2024, 3, 11))
    assert hijri.to_hijri(date(2024, 3, 12), adjustment=-1).as_tuple() == (1445, 9, 1)


def test_adjustment_is_clamped_to_30_days():
    d = date(2024, 3, 11)
    assert hijri.to_hijri(d, adjustment=500) == hijri.to_hijri(d, adjustment=30)
    assert hijri.to_hijri(d, adjustment=-500) == hijri.to_hijri(d, adjustment=-30)


def test_strict_out_of_range_raises():
    with pytest.raises(DateOutOfRange) as ei:
        hijri.to_hijri(date(1900, 1, 1))
    assert ei.value.min == hijri.MIN_DATE
    assert ei.value.max == hijri.MAX_DATE

    # the adjusted date decides, not the input
    with pytest.raises(DateOutOfRange):
        hijri.to_hijri(date(2076, 12, 31), adjustment=1)
    assert not hijri.to_hijri(date(2076, 12, 31)).clamped


def test_lenient_out_of_range_clamps():
    lo = hijri.to_hijri(date(1900, 1, 1), strict=False)
    assert lo.clamped
    assert lo == hijri.to_hijri(hijri.MIN_DATE)

    hi = hijri.to_hijri(date(9999, 12, 31), adjustment=30, strict=False)
    assert hi.clamped
    assert hi == hijri.to_hijri(hijri.MAX_DATE)


def test_to_gregorian_inverts_to_hijri():
    for d in (date(1938, 1, 1), date(2000, 1, 1), date(2024, 6, 15), date(2076, 12, 31)):
        assert hijri.to_gregorian(hijri.to_hijri(d)) == d
    h = HijriDate(1445, 10, 1)
    assert hijri.to_gregorian(h, adjustment=1) == date(2024, 4, 9)
    assert hijri.to_hijri(date(2024, 4, 9), adjustment=1) == h


def test_to_gregorian_rejects_invalid_label():
    with pytest.raises(ValueError):
        hijri.to_gregorian(HijriDate(1445, 13, 1))


def test_month_lengths_and_names():
    # Ramadhan 1445 had 30 days (1 Shawwal = 2024-04-10)
    assert hijri.days_in_month(1445, 9) == 30
    assert hijri.month_name(9) == "Ramadhan"
    assert hijri.month_name(12) == "Dhu al-Hijjah"
    assert hijri.month_name(13) == "Unknown"


def test_memo_short_circuits_repeated_key():
    memo = hijri.HijriMemo()
    d = date(2024, 3, 11)
    first = hijri.to_hijri(d, memo=memo)
    assert memo.misses == 1 and memo.hits == 0
    second = hijri.to_hijri(d, memo=memo)
    assert memo.hits == 1
    assert first == second

    # different adjustment is a different key
    assert hijri.to_hijri(d, 1, memo=memo) != first
    assert memo.misses == 2

    memo.clear()
    hijri.to_hijri(d, memo=memo)
    assert memo.misses == 3


def test_memo_never_stores_clamped_results():
    memo = hijri.HijriMemo()
    hijri.to_hijri(date(1900, 1, 1), strict=False, memo=memo)
    hijri.to_hijri(date(1900, 1, 1), strict=False, memo=memo)
    assert memo.hits == 0


def test_memo_shared_between_threads():
    from concurrent.futures import ThreadPoolExecutor

    memo = hijri.HijriMemo()
    dates = [date(2024, 3, 11), date(2024, 4, 10)] * 200
    expected = {d: hijri.to_hijri(d) for d in set(dates)}

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda d: (d, hijri.to_hijri(d, memo=memo)), dates))

    assert all(h == expected[d] for d, h in results)
    assert memo.hits + memo.misses == len(dates)


def test_conversion_backed_by_hijridate():
    assert hijri.Gregorian.__module__.split(".")[0] == "hijridate"
    assert hijri.Hijri.__module__.split(".")[0] == "hijridate"
