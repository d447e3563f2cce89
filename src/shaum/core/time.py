from __future__ import annotations

from datetime import date, datetime, timedelta, timezone


_JD_UNIX_EPOCH = 2440587.5  # JD at 1970-01-01 00:00:00 UTC
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_US = timedelta(microseconds=1)


def ensure_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware (UTC)")
    return dt.astimezone(timezone.utc)


def datetime_utc_to_jd(dt: datetime) -> float:
    """
    datetime -> JD (UTC). Requires timezone-aware datetime.

    Uses integer microseconds since the Unix epoch so the result does not
    depend on platform timestamp rounding.
    """
    us = (ensure_utc(dt) - _UNIX_EPOCH) // _ONE_US
    return _JD_UNIX_EPOCH + us / 86_400_000_000


def jd_to_datetime_utc(jd: float) -> datetime:
    """JD (UTC) -> timezone-aware datetime in UTC, rounded to the microsecond."""
    us = round((jd - _JD_UNIX_EPOCH) * 86_400_000_000)
    return _UNIX_EPOCH + timedelta(microseconds=us)


def midnight_utc(d: date) -> datetime:
    return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)


# ============================================================
# Local Mean Time (LMT) <-> UTC (longitude-based)
# ============================================================

def lmt_offset_hours(longitude_deg_east: float) -> float:
    """
    Offset (hours) between UTC and Local Mean Time at given longitude.
    Positive east longitudes mean LMT ahead of UTC.
      360° -> 24h  =>  1° -> 4 minutes.
    """
    return longitude_deg_east / 15.0


def local_mean_midnight_utc(d: date, longitude_deg_east: float) -> datetime:
    """UTC instant of 00:00 Local Mean Time on civil date d."""
    return midnight_utc(d) - timedelta(hours=lmt_offset_hours(longitude_deg_east))


def local_mean_date(dt: datetime, longitude_deg_east: float) -> date:
    """Civil date of an instant in Local Mean Time at the given longitude."""
    return (ensure_utc(dt) + timedelta(hours=lmt_offset_hours(longitude_deg_east))).date()


def ceil_to_granularity(dt: datetime, seconds: int) -> datetime:
    """Round an aware datetime up to a multiple of `seconds` since the Unix epoch (0 disables)."""
    if seconds <= 0:
        return dt
    us = (ensure_utc(dt) - _UNIX_EPOCH) // _ONE_US
    step = seconds * 1_000_000
    return _UNIX_EPOCH + timedelta(microseconds=-(-us // step) * step)
