"""
Volatility curve quote handling and loading.

Provides utilities for:
- Loading ATM Black vol quotes by expiry from CSV
- Building variance curves from quote records or tenor strips
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Union
import logging

import pandas as pd

from .conventions import DayCount, DayCounter
from .curves.variance import BlackVarianceCurve, InterpolatorLike
from .dates import DateUtils

logger = logging.getLogger(__name__)


@dataclass
class VolCurveQuote:
    """
    A single Black volatility quote.

    Attributes:
        expiry_date: Expiry of the option the vol was implied from
        vol: Black volatility (decimal, e.g. 0.20)
        underlying: Underlying label
    """
    expiry_date: date
    vol: float
    underlying: str = ""


def load_vol_curve_quotes(
    filepath: str,
    underlying: Optional[str] = None
) -> List[VolCurveQuote]:
    """
    Load volatility curve quotes from CSV file.

    Expected CSV format:
    expiry, vol[, underlying]

    The expiry column may also be named "date". Vols quoted in percent
    (any value above 1) are converted to decimals.

    Args:
        filepath: Path to CSV file
        underlying: Optional filter for a single underlying

    Returns:
        List of VolCurveQuote objects sorted by expiry
    """
    df = pd.read_csv(filepath)

    # Standardize column names
    df.columns = [c.strip().lower() for c in df.columns]

    if 'expiry' not in df.columns and 'date' in df.columns:
        df = df.rename(columns={'date': 'expiry'})
    for col in ('expiry', 'vol'):
        if col not in df.columns:
            raise ValueError(f"Missing required column '{col}' in {filepath}")

    df['expiry'] = pd.to_datetime(df['expiry']).dt.date
    df['vol'] = df['vol'].astype(float)

    if 'underlying' not in df.columns:
        df['underlying'] = ''
    df['underlying'] = df['underlying'].fillna('').astype(str).str.strip()

    if underlying is not None:
        df = df[df['underlying'] == underlying].copy()

    if (df['vol'] > 1.0).any():
        logger.debug("Vols in %s quoted in percent, converting to decimal", filepath)
        df['vol'] = df['vol'] / 100.0

    df = df.sort_values('expiry')

    quotes = [
        VolCurveQuote(
            expiry_date=row['expiry'],
            vol=float(row['vol']),
            underlying=row['underlying'],
        )
        for _, row in df.iterrows()
    ]
    logger.debug("Loaded %d vol quote(s) from %s", len(quotes), filepath)
    return quotes


def build_variance_curve(
    reference_date: date,
    quotes: Sequence[VolCurveQuote],
    day_counter: Union[DayCounter, DayCount, str] = DayCount.ACT_365,
    interpolator: InterpolatorLike = "linear",
    underlying: Optional[str] = None
) -> BlackVarianceCurve:
    """
    Build a variance curve from quote records.

    Quotes are used in the order given; unsorted or duplicate expiries are
    rejected by the curve itself.

    Args:
        reference_date: Valuation date
        quotes: Vol quotes by expiry
        day_counter: Day counter for the time axis
        interpolator: Interpolation method name, class or factory
        underlying: Curve label (defaults to the quotes' common underlying)

    Returns:
        BlackVarianceCurve
    """
    if underlying is None:
        labels = {q.underlying for q in quotes}
        underlying = labels.pop() if len(labels) == 1 else ""

    return BlackVarianceCurve(
        reference_date,
        day_counter,
        [q.expiry_date for q in quotes],
        [q.vol for q in quotes],
        underlying=underlying,
        interpolator=interpolator,
    )


def build_variance_curve_from_tenors(
    reference_date: date,
    tenors: Sequence[str],
    vols: Sequence[float],
    day_counter: Union[DayCounter, DayCount, str] = DayCount.ACT_365,
    interpolator: InterpolatorLike = "linear",
    underlying: str = ""
) -> BlackVarianceCurve:
    """
    Build a variance curve from a tenor strip such as ["1M", "3M", "1Y"].

    Args:
        reference_date: Valuation date
        tenors: Expiry tenors
        vols: Black vols aligned with tenors
        day_counter: Day counter for the time axis
        interpolator: Interpolation method name, class or factory
        underlying: Curve label

    Returns:
        BlackVarianceCurve
    """
    dates = DateUtils.tenor_dates(reference_date, tenors)
    return BlackVarianceCurve(
        reference_date,
        day_counter,
        dates,
        vols,
        underlying=underlying,
        interpolator=interpolator,
    )


__all__ = [
    "VolCurveQuote",
    "load_vol_curve_quotes",
    "build_variance_curve",
    "build_variance_curve_from_tenors",
]
