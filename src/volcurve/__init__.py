"""
VolCurve: Black Volatility Term Structures

A small library for:
- Building Black volatility curves from (expiry, vol) market quotes
- Interpolating total variance between expiries with pluggable interpolators
- Querying variance, Black vol and forward vol by time or date
- Propagating market data change notifications to dependents

Scope: ATM term structures only; no smile, no pricing models.
"""

__version__ = "0.1.0"

# Core modules
from .conventions import DayCount, DayCounter, Conventions, year_fraction
from .dates import DateUtils
from .errors import (
    TermStructureError,
    InvalidInputError,
    DomainError,
    ExtrapolationError,
)
from .observer import Observable

# Curves
from .curves import (
    VarianceTermStructure,
    BlackVarianceCurve,
    VarianceNode,
    create_flat_variance_curve,
    Interpolator,
    LinearInterpolator,
    CubicSplineInterpolator,
    MonotoneCubicInterpolator,
    create_interpolator,
)

# Quotes
from .quotes import (
    VolCurveQuote,
    load_vol_curve_quotes,
    build_variance_curve,
    build_variance_curve_from_tenors,
)

__all__ = [
    # Version
    "__version__",
    # Conventions
    "DayCount",
    "DayCounter",
    "Conventions",
    "year_fraction",
    # Dates
    "DateUtils",
    # Errors
    "TermStructureError",
    "InvalidInputError",
    "DomainError",
    "ExtrapolationError",
    # Notification
    "Observable",
    # Curves
    "VarianceTermStructure",
    "BlackVarianceCurve",
    "VarianceNode",
    "create_flat_variance_curve",
    "Interpolator",
    "LinearInterpolator",
    "CubicSplineInterpolator",
    "MonotoneCubicInterpolator",
    "create_interpolator",
    # Quotes
    "VolCurveQuote",
    "load_vol_curve_quotes",
    "build_variance_curve",
    "build_variance_curve_from_tenors",
]
