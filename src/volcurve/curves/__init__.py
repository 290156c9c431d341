"""
Curves package - volatility term structure construction.

Provides:
- BlackVarianceCurve: Black vol curve interpolated on total variance
- VarianceTermStructure: Interface deriving vols and forwards from variance
- Interpolators: Linear, natural cubic spline, monotone cubic
"""

from .base import VarianceTermStructure
from .variance import BlackVarianceCurve, VarianceNode, create_flat_variance_curve
from .interpolation import (
    Interpolator,
    LinearInterpolator,
    CubicSplineInterpolator,
    MonotoneCubicInterpolator,
    create_interpolator,
)

__all__ = [
    "VarianceTermStructure",
    "BlackVarianceCurve",
    "VarianceNode",
    "create_flat_variance_curve",
    "Interpolator",
    "LinearInterpolator",
    "CubicSplineInterpolator",
    "MonotoneCubicInterpolator",
    "create_interpolator",
]
