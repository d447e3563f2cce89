from __future__ import annotations

import math
from math import fmod


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    return y


def arcsec_to_deg(arcsec: float) -> float:
    return arcsec / 3600.0


# ------------------------------------------------------------
# Time variables
# ------------------------------------------------------------

J2000 = 2451545.0  # JD at J2000.0


def T_centuries(jd: float) -> float:
    """Julian centuries from J2000.0."""
    return (jd - J2000) / 36525.0


def tau_millennia(jd: float) -> float:
    """Julian millennia from J2000.0 (the VSOP87 time argument)."""
    return (jd - J2000) / 365250.0


# ------------------------------------------------------------
# Mean obliquity epsilon (degrees)
# ------------------------------------------------------------

def mean_obliquity_deg(T: float) -> float:
    """
    Mean obliquity of the ecliptic (degrees), IAU 2006 form:
        eps = 84381.406"
            - 46.836769"T - 0.0001831"T^2 + 0.00200340"T^3
            - 0.000000576"T^4 - 0.0000000434"T^5
    """
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2
    T5 = T4 * T
    eps_arcsec = (
        84381.406
        - 46.836769 * T
        - 0.0001831 * T2
        + 0.00200340 * T3
        - 0.000000576 * T4
        - 0.0000000434 * T5
    )
    return arcsec_to_deg(eps_arcsec)


def moon_node_deg(T: float) -> float:
    """Longitude of the Moon's mean ascending node Omega (degrees, Meeus 22)."""
    return wrap_deg(125.04452 - 1934.136261 * T + 0.0020708 * T * T + T * T * T / 450000.0)


def nutation_longitude_deg(T: float) -> float:
    """Leading term of the nutation in longitude (degrees)."""
    return -0.00478 * math.sin(math.radians(moon_node_deg(T)))


# ------------------------------------------------------------
# Sidereal time
# ------------------------------------------------------------

def gmst_deg(jd_ut: float) -> float:
    """Greenwich mean sidereal time (degrees), Meeus 12.4."""
    T = T_centuries(jd_ut)
    theta = (
        280.46061837
        + 360.98564736629 * (jd_ut - J2000)
        + 0.000387933 * T * T
        - T * T * T / 38710000.0
    )
    return wrap_deg(theta)


def local_sidereal_time_deg(jd_ut: float, longitude_deg_east: float) -> float:
    return wrap_deg(gmst_deg(jd_ut) + longitude_deg_east)
