"""
shaum.astro.prayer
------------------
Fast-boundary times (Imsak, Fajr, Maghrib) from the altitude-crossing solver.

Post-processing order per boundary:
  raw crossing -> + ihtiyat -> ceil to rounding granularity
Imsak is taken from the final Fajr, so imsak == fajr - buffer exactly.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Protocol

from .solver import find_altitude_crossing
from shaum.core.params import PrayerParams
from shaum.core.time import ceil_to_granularity
from shaum.core.types import GeoCoordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrayerTimes:
    """All instants are timezone-aware UTC."""
    imsak: datetime
    fajr: datetime
    maghrib: datetime

    def fasting_duration(self) -> timedelta:
        return self.maghrib - self.fajr


def horizon_dip_deg(altitude_m: float) -> float:
    """Apparent lowering of the horizon for an elevated observer (degrees)."""
    if altitude_m <= 0.0:
        return 0.0
    return 0.0347 * math.sqrt(altitude_m)


def sunset_altitude_for(coords: GeoCoordinate, params: PrayerParams) -> float:
    return params.sunset_altitude - horizon_dip_deg(coords.altitude)


def _finish(raw: datetime, params: PrayerParams) -> datetime:
    t = raw + timedelta(minutes=params.ihtiyat_minutes)
    return ceil_to_granularity(t, params.rounding_granularity_seconds)


def calculate_fajr(d: date, coords: GeoCoordinate, params: Optional[PrayerParams] = None) -> datetime:
    params = params or PrayerParams.default()
    return _finish(find_altitude_crossing(d, coords, params.fajr_angle, is_morning=True), params)


def calculate_maghrib(d: date, coords: GeoCoordinate, params: Optional[PrayerParams] = None) -> datetime:
    """Evening boundary only; raises SolarEventNotFound when the Sun does not set."""
    params = params or PrayerParams.default()
    target = sunset_altitude_for(coords, params)
    return _finish(find_altitude_crossing(d, coords, target, is_morning=False), params)


def calculate_prayer_times(
    d: date,
    coords: GeoCoordinate,
    params: Optional[PrayerParams] = None,
) -> PrayerTimes:
    params = params or PrayerParams.default()
    fajr = calculate_fajr(d, coords, params)
    maghrib = calculate_maghrib(d, coords, params)
    imsak = fajr - timedelta(minutes=params.imsak_buffer_minutes)
    logger.debug(f"Prayer times {d} at ({coords.lat}, {coords.lng}): imsak={imsak} fajr={fajr} maghrib={maghrib}")
    return PrayerTimes(imsak=imsak, fajr=fajr, maghrib=maghrib)


class SunsetCalculator(Protocol):
    def sunset(self, d: date, coords: GeoCoordinate) -> datetime: ...


@dataclass(frozen=True)
class AstronomicalSunset:
    """Default SunsetCalculator backed by the solar altitude solver."""
    params: PrayerParams = PrayerParams.default()

    def sunset(self, d: date, coords: GeoCoordinate) -> datetime:
        return calculate_maghrib(d, coords, self.params)
