from __future__ import annotations

import argparse
from datetime import date
from typing import List, Tuple

from shaum.calendar.hijri import to_gregorian
from shaum.core.types import HijriDate


DEFAULT_EVENTS: List[Tuple[str, int, int]] = [
    ("Ashura", 1, 10),
    ("1 Ramadhan", 9, 1),
    ("Eid al-Fitr", 10, 1),
    ("Arafah", 12, 9),
    ("Eid al-Adha", 12, 10),
]


def event_dates(year: int, adjustment: int = 0) -> List[date]:
    return [to_gregorian(HijriDate(year, m, d), adjustment) for _name, m, d in DEFAULT_EVENTS]


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print Gregorian dates of the main fasting days per Hijri year.")
    p.add_argument("--from-year", type=int, default=1440, help="first Hijri year")
    p.add_argument("--to-year", type=int, default=1450, help="last Hijri year")
    p.add_argument("--adjust", type=int, default=0, help="Hijri day adjustment")
    p.add_argument("--dates", choices=("iso", "weekday"), default="iso")
    args = p.parse_args(argv)

    names = [name for name, _m, _d in DEFAULT_EVENTS]
    width = 16 if args.dates == "weekday" else 12
    print("AH    " + "".join(f"{n:<{width}}" for n in names))
    print("-" * (6 + width * len(names)))
    for y in range(args.from_year, args.to_year + 1):
        cells = []
        for d in event_dates(y, args.adjust):
            cells.append(f"{d.isoformat()} {d:%a}" if args.dates == "weekday" else d.isoformat())
        print(f"{y:<6}" + "".join(f"{c:<{width}}" for c in cells))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
