from __future__ import annotations

import argparse
from datetime import date, datetime, timedelta, timezone
import importlib
import inspect
import logging
import re
import sys


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _parse_instant(s: str) -> datetime:
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _fmt_local(dt: datetime, tz_offset_hours: float) -> str:
    tz = timezone(timedelta(hours=tz_offset_hours))
    return dt.astimezone(tz).strftime("%Y-%m-%d %H:%M:%S %z")


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _context(args) -> "RuleContext":
    from shaum.core.context import RuleContext

    b = RuleContext.builder().adjustment(args.adjust).strict(args.strict).madhab(args.madhab)
    if getattr(args, "postpone", False):
        b = b.daud_strategy("postpone")
    return b.build()


def _add_context_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--adjust", type=int, default=0, help="Hijri day adjustment (moon sighting)")
    p.add_argument("--strict", action="store_true", help="fail on dates outside 1938..2076")
    p.add_argument("--madhab", default="shafi", choices=["shafi", "hanafi", "maliki", "hanbali"])


def _print_analysis(a, lang: str) -> None:
    from shaum.i18n.localizer import get_localizer

    print(f"Date      : {a.effective_date} ({a.effective_date:%A})")
    print(f"Hijri     : {a.hijri}")
    print(f"Status    : {a.status}")
    print(f"Reasons   : {', '.join(a.reason_names()) or '-'}")
    print(f"Explain   : {a.explain()}")
    if lang != "en":
        print(f"Localized : {a.description(get_localizer(lang))}")


def cmd_day(argv: list[str]) -> int:
    from shaum.rules.engine import check

    p = argparse.ArgumentParser(prog="shaum day", description="Fasting status of a Gregorian date")
    p.add_argument("date", help="YYYY-MM-DD")
    _add_context_args(p)
    p.add_argument("--lang", default="en", help="en, id, ar")
    args = p.parse_args(argv)

    _print_analysis(check(_parse_ymd(args.date), _context(args)), args.lang)
    return 0


def cmd_now(argv: list[str]) -> int:
    from shaum.core.types import GeoCoordinate
    from shaum.rules.engine import analyze

    p = argparse.ArgumentParser(prog="shaum now", description="Maghrib-aware fasting status of an instant")
    p.add_argument("--lat", type=float, required=True)
    p.add_argument("--lng", type=float, required=True)
    p.add_argument("--alt", type=float, default=0.0, help="observer elevation in metres")
    p.add_argument("--at", default=None, help="ISO 8601 instant (default: now; naive = UTC)")
    _add_context_args(p)
    p.add_argument("--lang", default="en")
    args = p.parse_args(argv)

    when = _parse_instant(args.at) if args.at else datetime.now(timezone.utc)
    a = analyze(when, _context(args), GeoCoordinate(args.lat, args.lng, args.alt))
    print(f"Instant   : {when.isoformat()}")
    _print_analysis(a, args.lang)
    return 0


def cmd_prayer(argv: list[str]) -> int:
    from shaum.astro.prayer import calculate_prayer_times
    from shaum.core.params import get_preset, list_presets
    from shaum.core.types import GeoCoordinate

    p = argparse.ArgumentParser(prog="shaum prayer", description="Imsak, Fajr and Maghrib for a date and place")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--lat", type=float, required=True)
    p.add_argument("--lng", type=float, required=True)
    p.add_argument("--alt", type=float, default=0.0, help="observer elevation in metres")
    p.add_argument("--method", default="mabims", choices=list_presets())
    p.add_argument("--tz-offset", type=float, default=0.0, help="display offset from UTC in hours")
    args = p.parse_args(argv)

    params = get_preset(args.method)
    times = calculate_prayer_times(_parse_ymd(args.date), GeoCoordinate(args.lat, args.lng, args.alt), params)
    print(f"Method    : {args.method} (Fajr {params.fajr_angle} deg, ihtiyat {params.ihtiyat_minutes} min)")
    print(f"Imsak     : {_fmt_local(times.imsak, args.tz_offset)}")
    print(f"Fajr      : {_fmt_local(times.fajr, args.tz_offset)}")
    print(f"Maghrib   : {_fmt_local(times.maghrib, args.tz_offset)}")
    print(f"Duration  : {times.fasting_duration()}")
    return 0


def cmd_daud(argv: list[str]) -> int:
    from shaum.rules.daud import DaudSchedule

    p = argparse.ArgumentParser(prog="shaum daud", description="Daud (alternate-day) fasting schedule")
    p.add_argument("start", help="YYYY-MM-DD")
    p.add_argument("end", help="YYYY-MM-DD")
    p.add_argument("--postpone", action="store_true", help="carry a turn over a Haram day instead of skipping it")
    _add_context_args(p)
    args = p.parse_args(argv)

    sched = DaudSchedule(_parse_ymd(args.start), _parse_ymd(args.end), _context(args))
    n = 0
    for d in sched:
        print(f"{d} {d:%a}")
        n += 1
    print(f"# {n} days, skipped={sched.skipped_turns}, postponed={sched.postponed_turns}")
    return 0


def cmd_hijri(argv: list[str]) -> int:
    from shaum.calendar.hijri import days_in_month, month_name, to_hijri

    p = argparse.ArgumentParser(prog="shaum hijri", description="Gregorian -> Hijri (Umm al-Qura)")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--adjust", type=int, default=0)
    p.add_argument("--lenient", action="store_true", help="clamp instead of failing outside 1938..2076")
    args = p.parse_args(argv)

    h = to_hijri(_parse_ymd(args.date), args.adjust, strict=not args.lenient)
    print(f"{h}  {h.day} {month_name(h.month)} {h.year}  ({days_in_month(h.year, h.month)}-day month)")
    if h.clamped:
        print("# clamped to the supported range")
    return 0


def cmd_upcoming(argv: list[str]) -> int:
    from shaum.core.types import FastingStatus
    from shaum.rules.query import FastingQuery, upcoming_fasts

    p = argparse.ArgumentParser(prog="shaum upcoming", description="Next recommended/obligatory fasting days")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--count", type=int, default=10)
    p.add_argument("--status", default=None, choices=[s.value for s in FastingStatus], help="only this status")
    _add_context_args(p)
    args = p.parse_args(argv)

    ctx = _context(args)
    start = _parse_ymd(args.date)
    q = FastingQuery(start, ctx).with_status(args.status) if args.status else upcoming_fasts(start, ctx)
    for a in q.take(args.count):
        print(f"{a.effective_date} {a.effective_date:%a}  {a.hijri}  {str(a.status):<16}  {', '.join(a.reason_names())}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Backward compatibility: `shaum YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="shaum", description="Islamic fasting status and fast-boundary times.")
    p.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ...")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Fasting status of a date")
    sub.add_parser("now", help="Maghrib-aware status of an instant at a location")
    sub.add_parser("prayer", help="Imsak / Fajr / Maghrib times")
    sub.add_parser("daud", help="Daud fasting schedule")
    sub.add_parser("hijri", help="Gregorian -> Hijri conversion")
    sub.add_parser("upcoming", help="Upcoming fasting days")

    # diagnostics (no ephemeris)
    p_diag = sub.add_parser("diag", help="Diagnostics tools (no ephemeris required)")
    p_diag.add_argument("tool", choices=["year-table"], help="Which diagnostic to run")

    # ephem diagnostics
    p_ephem = sub.add_parser("ephem", help="Ephemeris-based diagnostics")
    p_ephem.add_argument("tool", choices=["validate-solar"], help="Which ephemeris diagnostic to run")

    args, rest = p.parse_known_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))

    commands = {
        "day": cmd_day,
        "now": cmd_now,
        "prayer": cmd_prayer,
        "daud": cmd_daud,
        "hijri": cmd_hijri,
        "upcoming": cmd_upcoming,
    }
    if args.cmd in commands:
        return commands[args.cmd](rest)

    if args.cmd == "diag":
        tool_map = {
            "year-table": "shaum.diagnostics.year_table",
        }
        return _run_module_main(tool_map[args.tool], rest)

    if args.cmd == "ephem":
        tool_map = {
            "validate-solar": "shaum.diagnostics.ephem.validate_solar",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
