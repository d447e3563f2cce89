# tests/conftest.py

import pytest
from datetime import date

from shaum.calendar.hijri import to_gregorian
from shaum.core.types import HijriDate


@pytest.fixture
def gregorian_of():
    """Gregorian date of a Hijri (year, month, day) with no adjustment."""
    def _g(y: int, m: int, d: int) -> date:
        return to_gregorian(HijriDate(y, m, d))
    return _g


@pytest.fixture
def eid_al_fitr_1445(gregorian_of):
    return gregorian_of(1445, 10, 1)
