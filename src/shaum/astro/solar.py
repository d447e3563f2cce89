"""
shaum.astro.solar
-----------------
Solar position pipeline:

  civil instant -> JD -> Earth heliocentric (VSOP87) -> geocentric Sun
  -> mean obliquity -> RA/Dec -> local sidereal time -> altitude

Pure and deterministic; UT is used as the dynamical time argument (the
ΔT shift moves the Sun by a few arcseconds, far below the bisection step).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from . import args as aa
from .vsop87 import earth_heliocentric
from shaum.core.time import datetime_utc_to_jd
from shaum.core.types import GeoCoordinate


@dataclass(frozen=True)
class SolarCoordinates:
    """Geocentric solar coordinates (degrees) and distance (AU)."""
    L_true_deg: float
    L_app_deg: float
    B_deg: float
    R_au: float


@dataclass(frozen=True)
class Equatorial:
    ra_deg: float
    dec_deg: float


def solar_coordinates(jd: float) -> SolarCoordinates:
    """
    Geocentric ecliptic position of the Sun.

    True longitude includes the FK5 correction; apparent longitude adds
    aberration (-20.4898"/R) and the leading nutation term.
    """
    T = aa.T_centuries(jd)
    earth = earth_heliocentric(jd)

    theta = aa.wrap_deg(earth.L_deg + 180.0)
    beta = -earth.B_deg

    # FK5 frame correction (Meeus 25.9)
    lam1 = math.radians(theta - 1.397 * T - 0.00031 * T * T)
    theta = aa.wrap_deg(theta - aa.arcsec_to_deg(0.09033))
    beta = beta + aa.arcsec_to_deg(0.03916 * (math.cos(lam1) - math.sin(lam1)))

    aberration = -aa.arcsec_to_deg(20.4898 / earth.R_au)
    L_app = aa.wrap_deg(theta + aberration + aa.nutation_longitude_deg(T))
    return SolarCoordinates(L_true_deg=theta, L_app_deg=L_app, B_deg=beta, R_au=earth.R_au)


def ecliptic_to_equatorial(lon_deg: float, lat_deg: float, eps_deg: float) -> Equatorial:
    lam = math.radians(lon_deg)
    beta = math.radians(lat_deg)
    eps = math.radians(eps_deg)

    # atan2 keeps the quadrant of RA
    y = math.sin(lam) * math.cos(eps) - math.tan(beta) * math.sin(eps)
    x = math.cos(lam)
    ra = aa.wrap_deg(math.degrees(math.atan2(y, x)))
    sin_dec = math.sin(beta) * math.cos(eps) + math.cos(beta) * math.sin(eps) * math.sin(lam)
    dec = math.degrees(math.asin(max(-1.0, min(1.0, sin_dec))))
    return Equatorial(ra_deg=ra, dec_deg=dec)


def solar_equatorial(jd: float) -> Equatorial:
    coords = solar_coordinates(jd)
    eps = aa.mean_obliquity_deg(aa.T_centuries(jd))
    return ecliptic_to_equatorial(coords.L_app_deg, coords.B_deg, eps)


def horizontal_altitude_deg(ra_deg: float, dec_deg: float, lst_deg: float, lat_deg: float) -> float:
    """sin h = sin φ sin δ + cos φ cos δ cos H"""
    H = math.radians(lst_deg - ra_deg)
    phi = math.radians(lat_deg)
    dec = math.radians(dec_deg)
    sin_h = math.sin(phi) * math.sin(dec) + math.cos(phi) * math.cos(dec) * math.cos(H)
    return math.degrees(math.asin(max(-1.0, min(1.0, sin_h))))


def solar_altitude_jd(jd: float, lat_deg: float, lon_deg_east: float) -> float:
    eq = solar_equatorial(jd)
    lst = aa.local_sidereal_time_deg(jd, lon_deg_east)
    return horizontal_altitude_deg(eq.ra_deg, eq.dec_deg, lst, lat_deg)


def solar_altitude(instant: datetime, coords: GeoCoordinate) -> float:
    """Geometric altitude of the Sun's centre (degrees) seen from `coords` at `instant`."""
    return solar_altitude_jd(datetime_utc_to_jd(instant), coords.lat, coords.lng)
