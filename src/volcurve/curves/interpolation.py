"""
Interpolation methods for variance curves.

Provides:
- LinearInterpolator: Piecewise linear interpolation (default for variance)
- CubicSplineInterpolator: Natural cubic spline
- MonotoneCubicInterpolator: Shape-preserving cubic (PCHIP)

All interpolators work with year fractions as x-coordinates and total
variance (or any other node quantity) as y-coordinates. Queries outside
the node range are rejected unless the caller asks for extrapolation,
in which case the end values are held flat.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
import numpy as np
from scipy.interpolate import PchipInterpolator

from ..errors import ExtrapolationError


class Interpolator(ABC):
    """Abstract base class for one-dimensional node interpolation."""

    def __init__(self):
        self.times: Optional[np.ndarray] = None
        self.values: Optional[np.ndarray] = None

    def fit(self, times: Sequence[float], values: Sequence[float]) -> None:
        """
        Fit the interpolator to data points.

        Args:
            times: Year fractions, strictly increasing
            values: Node values aligned with times
        """
        times = np.asarray(times, dtype=np.float64)
        values = np.asarray(values, dtype=np.float64)

        if times.ndim != 1 or values.ndim != 1:
            raise ValueError("Times and values must be one-dimensional")
        if len(times) != len(values):
            raise ValueError("Times and values must have same length")
        if len(times) < 1:
            raise ValueError("Need at least 1 point for interpolation")
        if np.any(np.diff(times) <= 0):
            raise ValueError("Times must be strictly increasing")

        self.times = times
        self.values = values
        self._build()

    def _build(self) -> None:
        """Precompute strategy-specific state after fit()."""

    @abstractmethod
    def _evaluate(self, t: float) -> float:
        """Evaluate at a time inside [min_time, max_time]."""

    @abstractmethod
    def derivative(self, t: float) -> float:
        """Return the first derivative at point t (0 outside the node range)."""

    def _ensure_fitted(self) -> None:
        if self.times is None:
            raise RuntimeError("Interpolator not fitted")

    @property
    def min_time(self) -> float:
        self._ensure_fitted()
        return float(self.times[0])

    @property
    def max_time(self) -> float:
        self._ensure_fitted()
        return float(self.times[-1])

    def is_in_range(self, t: float) -> bool:
        """True when t lies inside the fitted node range."""
        return self.min_time <= t <= self.max_time

    def interpolate(self, t: float, extrapolate: bool = False) -> float:
        """
        Interpolate at a single point.

        Args:
            t: Year fraction
            extrapolate: Allow queries outside the node range (held flat)

        Returns:
            Interpolated value

        Raises:
            ExtrapolationError: If t is out of range and extrapolate is False
        """
        self._ensure_fitted()

        if t < self.times[0]:
            if not extrapolate:
                raise ExtrapolationError(
                    f"time ({t}) less than min interpolation time ({self.times[0]})"
                )
            return float(self.values[0])
        if t > self.times[-1]:
            if not extrapolate:
                raise ExtrapolationError(
                    f"time ({t}) greater than max interpolation time ({self.times[-1]})"
                )
            return float(self.values[-1])

        if len(self.times) == 1:
            return float(self.values[0])
        return self._evaluate(t)

    def __call__(self, t: float, extrapolate: bool = False) -> float:
        """Convenience method to call interpolate."""
        return self.interpolate(t, extrapolate)

    def _bracket(self, t: float) -> int:
        """Index i such that times[i] <= t <= times[i + 1]."""
        idx = np.searchsorted(self.times, t, side='right') - 1
        return int(max(0, min(idx, len(self.times) - 2)))


class LinearInterpolator(Interpolator):
    """
    Linear interpolation.

    Piecewise linear between knot points. Preserves monotone node
    sequences, so linear interpolation on variance never introduces
    calendar arbitrage between nodes.
    """

    def _evaluate(self, t: float) -> float:
        idx = self._bracket(t)

        t0, t1 = self.times[idx], self.times[idx + 1]
        v0, v1 = self.values[idx], self.values[idx + 1]

        w = (t - t0) / (t1 - t0)
        return float(v0 + w * (v1 - v0))

    def derivative(self, t: float) -> float:
        """Derivative of linear interpolation (piecewise constant)."""
        self._ensure_fitted()

        if len(self.times) < 2 or t < self.times[0] or t > self.times[-1]:
            return 0.0

        idx = self._bracket(t)
        t0, t1 = self.times[idx], self.times[idx + 1]
        v0, v1 = self.values[idx], self.values[idx + 1]

        return float((v1 - v0) / (t1 - t0))


class CubicSplineInterpolator(Interpolator):
    """
    Cubic spline interpolation.

    Uses natural cubic splines (second derivative = 0 at boundaries).
    Smooth, but may overshoot between nodes and so does not guarantee a
    non-decreasing variance curve.
    """

    def __init__(self):
        super().__init__()
        self.coefficients: Optional[np.ndarray] = None  # Shape: (n-1, 4) for [a, b, c, d]

    def _build(self) -> None:
        """
        Solve tridiagonal system for second derivatives,
        then compute polynomial coefficients for each interval.
        """
        n = len(self.times)
        if n == 1:
            self.coefficients = np.array([[self.values[0], 0.0, 0.0, 0.0]])
            return

        h = np.diff(self.times)

        if n == 2:
            # Degenerate to linear
            slope = (self.values[1] - self.values[0]) / h[0]
            self.coefficients = np.array([[self.values[0], slope, 0.0, 0.0]])
            return

        # Natural spline: M[0] = M[n-1] = 0
        A = np.zeros((n, n))
        b = np.zeros(n)

        A[0, 0] = 1.0
        A[n-1, n-1] = 1.0

        for i in range(1, n-1):
            A[i, i-1] = h[i-1]
            A[i, i] = 2 * (h[i-1] + h[i])
            A[i, i+1] = h[i]
            b[i] = 6 * ((self.values[i+1] - self.values[i]) / h[i] -
                       (self.values[i] - self.values[i-1]) / h[i-1])

        M = np.linalg.solve(A, b)

        # S_i(x) = a_i + b_i*(x-x_i) + c_i*(x-x_i)^2 + d_i*(x-x_i)^3
        self.coefficients = np.zeros((n-1, 4))

        for i in range(n-1):
            self.coefficients[i, 0] = self.values[i]
            self.coefficients[i, 1] = (self.values[i+1] - self.values[i]) / h[i] - h[i] * (M[i+1] + 2*M[i]) / 6
            self.coefficients[i, 2] = M[i] / 2
            self.coefficients[i, 3] = (M[i+1] - M[i]) / (6 * h[i])

    def _evaluate(self, t: float) -> float:
        idx = self._bracket(t)

        dx = t - self.times[idx]
        a, b, c, d = self.coefficients[idx]

        return float(a + b*dx + c*dx**2 + d*dx**3)

    def derivative(self, t: float) -> float:
        """First derivative of cubic spline at point t."""
        self._ensure_fitted()

        if len(self.times) < 2 or t < self.times[0] or t > self.times[-1]:
            return 0.0

        idx = self._bracket(t)

        dx = t - self.times[idx]
        _, b, c, d = self.coefficients[idx]

        return float(b + 2*c*dx + 3*d*dx**2)


class MonotoneCubicInterpolator(Interpolator):
    """
    Piecewise cubic Hermite interpolation (Fritsch-Carlson).

    Preserves monotonicity of the node values, giving a smooth variance
    curve that stays non-decreasing whenever the node variances are.
    """

    def __init__(self):
        super().__init__()
        self._pchip: Optional[PchipInterpolator] = None

    def _build(self) -> None:
        if len(self.times) >= 2:
            self._pchip = PchipInterpolator(self.times, self.values, extrapolate=False)
        else:
            self._pchip = None

    def _evaluate(self, t: float) -> float:
        return float(self._pchip(t))

    def derivative(self, t: float) -> float:
        """First derivative of the Hermite cubic at point t."""
        self._ensure_fitted()

        if self._pchip is None or t < self.times[0] or t > self.times[-1]:
            return 0.0

        return float(self._pchip.derivative()(t))


def create_interpolator(method: str) -> Interpolator:
    """
    Factory function to create an interpolator by name.

    Args:
        method: One of "linear", "cubic_spline", "monotone_cubic"

    Returns:
        Unfitted Interpolator instance
    """
    method = method.lower().replace("-", "_").replace(" ", "_")

    if method in ("linear", "lin"):
        return LinearInterpolator()
    elif method in ("cubic_spline", "cubic", "spline"):
        return CubicSplineInterpolator()
    elif method in ("monotone_cubic", "monotone", "pchip"):
        return MonotoneCubicInterpolator()
    else:
        raise ValueError(f"Unknown interpolation method: {method}")


__all__ = [
    "Interpolator",
    "LinearInterpolator",
    "CubicSplineInterpolator",
    "MonotoneCubicInterpolator",
    "create_interpolator",
]
