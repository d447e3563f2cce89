from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable

from .solar import solar_altitude_jd
from shaum.core.errors import SolarEventNotFound
from shaum.core.time import datetime_utc_to_jd, jd_to_datetime_utc, local_mean_midnight_utc
from shaum.core.types import GeoCoordinate

logger = logging.getLogger(__name__)

BISECTION_ITERATIONS = 20  # 12 h / 2^20 ≈ 0.04 s


def bisect_crossing(
    f: Callable[[float], float],
    lo: float,
    hi: float,
    target: float,
    *,
    rising: bool,
    iters: int = BISECTION_ITERATIONS,
) -> float:
    """
    Bisection for f(t) = target on [lo, hi], assuming f is monotone:
    increasing when `rising`, decreasing otherwise. Returns the midpoint of
    the final bracket. The caller checks the bracket first.
    """
    for _ in range(iters):
        mid = lo + (hi - lo) / 2.0
        v = f(mid)
        if rising:
            if v < target:
                lo = mid
            else:
                hi = mid
        else:
            if v > target:
                lo = mid
            else:
                hi = mid
    return lo + (hi - lo) / 2.0


def search_window(d: date, coords: GeoCoordinate, is_morning: bool) -> tuple[datetime, datetime]:
    """Morning = first 12 h after local mean midnight, evening = the next 12 h."""
    start = local_mean_midnight_utc(d, coords.lng)
    if is_morning:
        return start, start + timedelta(hours=12)
    return start + timedelta(hours=12), start + timedelta(hours=24)


def find_altitude_crossing(
    d: date,
    coords: GeoCoordinate,
    target_altitude: float,
    is_morning: bool,
) -> datetime:
    """
    UTC instant at which the Sun crosses `target_altitude` on civil date `d`.

    Raises SolarEventNotFound when the window does not bracket the target
    (polar day/night, or a twilight angle never reached in summer).
    """
    lo_dt, hi_dt = search_window(d, coords, is_morning)
    lo = datetime_utc_to_jd(lo_dt)
    hi = datetime_utc_to_jd(hi_dt)

    def altitude(jd: float) -> float:
        return solar_altitude_jd(jd, coords.lat, coords.lng)

    a_lo = altitude(lo)
    a_hi = altitude(hi)
    phase = "morning" if is_morning else "evening"
    logger.debug(f"{phase} bracket on {d}: alt({lo_dt})={a_lo:.3f}, alt({hi_dt})={a_hi:.3f}, target={target_altitude}")

    if is_morning:
        bracketed = a_lo < target_altitude <= a_hi
    else:
        bracketed = a_lo > target_altitude >= a_hi
    if not bracketed:
        raise SolarEventNotFound(
            d, target_altitude, phase,
            detail=f"altitude {a_lo:.2f} -> {a_hi:.2f} deg across the window",
        )

    jd = bisect_crossing(altitude, lo, hi, target_altitude, rising=is_morning)
    return jd_to_datetime_utc(jd)
