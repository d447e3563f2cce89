#!/usr/bin/env python3
from __future__ import annotations

import argparse
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import numpy as np

from shaum.astro.solar import solar_altitude
from shaum.core.types import GeoCoordinate
from shaum.ephemeris.sun import SkyfieldSun


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "shaum[diagnostics]"') from e


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Validate the analytical solar altitude against a JPL ephemeris.")
    p.add_argument("--lat", type=float, default=-6.2088)
    p.add_argument("--lng", type=float, default=106.8456)
    p.add_argument("--year", type=int, default=2024)
    p.add_argument("--step-hours", type=float, default=7.0)
    p.add_argument("--kernel", default="de421.bsp")
    p.add_argument("--out-png", default=None, help="write an error plot (needs matplotlib)")
    args = p.parse_args(argv)

    print(f"Loading {args.kernel} ...")
    sun = SkyfieldSun.load(args.kernel)
    coords = GeoCoordinate(args.lat, args.lng)

    t0 = datetime(args.year, 1, 1, tzinfo=timezone.utc)
    t1 = datetime(args.year + 1, 1, 1, tzinfo=timezone.utc)
    step = timedelta(hours=args.step_hours)

    hours: List[float] = []
    errs: List[float] = []
    t = t0
    while t < t1:
        ours = solar_altitude(t, coords)
        ref = sun.altitude_deg(t, args.lat, args.lng)
        hours.append((t - t0).total_seconds() / 86400.0)
        errs.append(ours - ref)
        t += step

    e = np.asarray(errs) * 3600.0
    print(f"{len(e)} samples at ({args.lat}, {args.lng}) in {args.year}")
    print(f"  mean  = {e.mean():+.2f} arcsec")
    print(f"  rms   = {np.sqrt(np.mean(e * e)):.2f} arcsec")
    print(f"  max|e|= {np.abs(e).max():.2f} arcsec")

    if args.out_png:
        plt = _need_matplotlib()
        fig, ax = plt.subplots(figsize=(10, 4))
        ax.plot(hours, e, ".", ms=2)
        ax.set_xlabel(f"day of {args.year}")
        ax.set_ylabel("altitude error (arcsec)")
        ax.set_title("Analytical solar altitude minus ephemeris")
        ax.grid(True, alpha=0.3)
        fig.tight_layout()
        fig.savefig(args.out_png, dpi=150)
        print(f"Saved {args.out_png}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
