#!/usr/bin/env python
"""
Volatility Curve Demo Script

This script demonstrates the workflow of the volcurve library:
1. Build a Black variance curve from an expiry strip of ATM vols
2. Query variance, Black vol and forward vol inside the quoted range
3. Extrapolate beyond the last expiry
4. Compare interpolation methods

Usage:
    python run_demo.py [--quotes QUOTES_CSV] [--method METHOD]
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

import numpy as np
import pandas as pd

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from volcurve.conventions import Conventions
from volcurve.errors import ExtrapolationError
from volcurve.quotes import (
    build_variance_curve,
    build_variance_curve_from_tenors,
    load_vol_curve_quotes,
)

REFERENCE_DATE = date(2024, 1, 15)
TENORS = ["1M", "2M", "3M", "6M", "9M", "1Y", "18M", "2Y"]
VOLS = [0.182, 0.186, 0.190, 0.197, 0.201, 0.204, 0.208, 0.211]


def build_curve(args: argparse.Namespace):
    conventions = Conventions.equity()
    method = args.method or conventions.interpolation_method

    if args.quotes:
        quotes = load_vol_curve_quotes(args.quotes, underlying=args.underlying)
        return build_variance_curve(
            REFERENCE_DATE,
            quotes,
            day_counter=conventions.day_counter,
            interpolator=method,
        )

    return build_variance_curve_from_tenors(
        REFERENCE_DATE,
        TENORS,
        VOLS,
        day_counter=conventions.day_counter,
        interpolator=method,
        underlying=args.underlying or "SPX",
    )


def print_curve_table(curve) -> None:
    """Print variance and vol on a regular time grid."""
    grid = np.linspace(0.0, curve.max_time * 1.5, 13)
    rows = []
    for t in grid:
        extrapolated = t > curve.max_time
        rows.append({
            "time": t,
            "variance": curve.variance(t, extrapolate=True),
            "black_vol": curve.black_vol(t, extrapolate=True),
            "extrapolated": extrapolated,
        })
    print(pd.DataFrame(rows).to_string(index=False, float_format=lambda x: f"{x:.6f}"))


def compare_methods(curve_args: argparse.Namespace) -> None:
    """Forward vols between consecutive quoted expiries for each interpolator."""
    print("\nForward vols by interpolation method")
    for method in ("linear", "cubic_spline", "monotone_cubic"):
        curve_args.method = method
        curve = build_curve(curve_args)
        times = curve.times
        mid = 0.5 * (times[:-1] + times[1:])
        fwd = [curve.black_forward_vol(t, t) for t in mid]
        print(f"  {method:<15} " + " ".join(f"{v:.4f}" for v in fwd))


def main() -> int:
    parser = argparse.ArgumentParser(description="Black variance curve demo")
    parser.add_argument("--quotes", help="CSV file with expiry,vol[,underlying] columns")
    parser.add_argument("--underlying", help="Underlying filter / label")
    parser.add_argument("--method", help="Interpolation method")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    print("=" * 60)
    print("BLACK VARIANCE CURVE DEMO")
    print("=" * 60)

    curve = build_curve(args)
    print(f"\n{curve}")
    print(f"Reference date: {curve.reference_date}   Max date: {curve.max_date}")
    print("\nNodes")
    print(curve.to_dataframe().to_string(index=False))

    print("\nCurve grid (extrapolation allowed)")
    print_curve_table(curve)

    try:
        curve.variance(curve.max_time + 1.0)
    except ExtrapolationError as exc:
        print(f"\nWithout extrapolation: {exc}")

    compare_methods(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
