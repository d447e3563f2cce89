#ephemeris/sun.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from . import require_ephemeris


@dataclass
class SkyfieldSun:
    """
    Topocentric solar altitude from a JPL kernel via skyfield.

    Requires optional deps:
      pip install "shaum[ephemeris]"
    The kernel (default de421.bsp) is downloaded by skyfield on first use.
    """
    ts: object
    earth: object
    sun: object

    @classmethod
    def load(cls, kernel: str = "de421.bsp") -> "SkyfieldSun":
        require_ephemeris()
        from skyfield.api import load  # type: ignore

        eph = load(kernel)
        return cls(ts=load.timescale(), earth=eph["earth"], sun=eph["sun"])

    def altitude_deg(self, instant: datetime, lat: float, lng: float, elevation_m: float = 0.0) -> float:
        """Apparent geometric altitude (no refraction) of the Sun's centre."""
        from skyfield.api import wgs84  # type: ignore

        t = self.ts.from_datetime(instant)
        observer = self.earth + wgs84.latlon(lat, lng, elevation_m=elevation_m)
        alt, _az, _dist = observer.at(t).observe(self.sun).apparent().altaz()
        return float(alt.degrees)
