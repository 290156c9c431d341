"""
Black volatility curve modelled as a variance curve.

The BlackVarianceCurve converts (expiry date, Black vol) quotes into
total variance nodes w_i = t_i * sigma_i^2 and interpolates w(t):

- 0 <= t <= t_0:   w(t) = w_0 * t / t_0  (variance is zero at the reference date)
- t_0 < t <= t_n:  w(t) = interpolated variance
- t > t_n:         w(t) = w_n * t / t_n  (flat vol), only when extrapolation is allowed

Interpolating variance rather than volatility keeps w(t) non-decreasing
whenever the node variances are and the interpolator preserves monotonicity.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, List, Sequence, Type, Union
import logging
import math

import numpy as np
import pandas as pd

from ..conventions import DayCount, DayCounter
from ..errors import DomainError, ExtrapolationError, InvalidInputError
from ..observer import Listener, Observable
from .base import TimeLike, VarianceTermStructure
from .interpolation import Interpolator, create_interpolator

logger = logging.getLogger(__name__)

InterpolatorLike = Union[str, Type[Interpolator], Callable[[], Interpolator]]


@dataclass(frozen=True)
class VarianceNode:
    """A single point on the variance curve."""
    time: float  # Year fraction from reference date
    variance: float
    volatility: float

    @classmethod
    def from_vol(cls, time: float, vol: float) -> "VarianceNode":
        """Create node from a Black volatility."""
        return cls(time=time, variance=time * vol * vol, volatility=vol)


def _make_interpolator(method: InterpolatorLike) -> Interpolator:
    """Build a fresh, unfitted interpolator owned by a single curve."""
    if isinstance(method, str):
        return create_interpolator(method)
    if isinstance(method, Interpolator):
        raise TypeError(
            "Pass an interpolation method name, Interpolator class or factory, "
            "not a shared Interpolator instance"
        )
    if callable(method):
        interpolator = method()
        if not isinstance(interpolator, Interpolator):
            raise TypeError(f"Interpolator factory returned {type(interpolator).__name__}")
        if interpolator.times is not None:
            raise TypeError(
                "Interpolator factory returned an already fitted instance; "
                "it must build a new Interpolator on each call"
            )
        return interpolator
    raise TypeError(f"Cannot build an interpolator from {method!r}")


class BlackVarianceCurve(VarianceTermStructure):
    """
    Black volatility term structure built on interpolated total variance.

    Attributes:
        reference_date: Valuation date (time 0)
        day_counter: Day counter for time calculations
        underlying: Label of the underlying asset

    The curve is immutable after construction: node data is a snapshot of
    the quotes and the interpolator is owned exclusively by the curve.
    """

    def __init__(
        self,
        reference_date: date,
        day_counter: Union[DayCounter, DayCount, str],
        dates: Sequence[date],
        vols: Sequence[float],
        underlying: str = "",
        interpolator: InterpolatorLike = "linear"
    ):
        dates = list(dates)
        vols = [float(v) for v in vols]
        day_counter = DayCounter.of(day_counter)

        if len(dates) != len(vols):
            raise InvalidInputError(
                f"mismatch between date vector ({len(dates)}) "
                f"and black vol vector ({len(vols)})"
            )
        if not dates:
            raise InvalidInputError("at least one date/vol quote is required")
        # variance at the reference date must be zero, so the first
        # quote would be lost if it fell on it
        if dates[0] <= reference_date:
            raise InvalidInputError(
                f"cannot have dates[0] ({dates[0]}) <= reference date ({reference_date})"
            )

        nodes: List[VarianceNode] = []
        for j, (d, vol) in enumerate(zip(dates, vols)):
            if not math.isfinite(vol) or vol < 0.0:
                raise InvalidInputError(f"invalid black vol ({vol}) at {d}")
            t = day_counter.year_fraction(reference_date, d)
            if j == 0 and t <= 0.0:
                raise InvalidInputError(
                    f"first date {d} maps to non-positive time ({t})"
                )
            if j > 0 and t <= nodes[-1].time:
                raise InvalidInputError(
                    f"dates must be sorted unique: {d} (t={t}) does not follow "
                    f"{dates[j - 1]} (t={nodes[-1].time})"
                )
            nodes.append(VarianceNode.from_vol(t, vol))

        times = np.array([n.time for n in nodes], dtype=np.float64)
        variances = np.array([n.variance for n in nodes], dtype=np.float64)
        times.flags.writeable = False
        variances.flags.writeable = False

        interp = _make_interpolator(interpolator)
        interp.fit(times, variances)

        self._reference_date = reference_date
        self._day_counter = day_counter
        self._max_date = dates[-1]
        self._underlying = underlying
        self._nodes = tuple(nodes)
        self._times = times
        self._variances = variances
        self._interpolator = interp
        self._observable = Observable(self)

        logger.debug(
            "Built %r from %d quote(s) with %s interpolation",
            self, len(nodes), type(interp).__name__
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def reference_date(self) -> date:
        return self._reference_date

    @property
    def day_counter(self) -> DayCounter:
        return self._day_counter

    @property
    def min_date(self) -> date:
        return self._reference_date

    @property
    def max_date(self) -> date:
        return self._max_date

    @property
    def min_time(self) -> float:
        return 0.0

    @property
    def max_time(self) -> float:
        return float(self._times[-1])

    @property
    def underlying(self) -> str:
        return self._underlying

    @property
    def interpolation_method(self) -> str:
        return type(self._interpolator).__name__

    @property
    def times(self) -> np.ndarray:
        """Copy of the node times."""
        return self._times.copy()

    @property
    def variances(self) -> np.ndarray:
        """Copy of the node variances."""
        return self._variances.copy()

    def get_nodes(self) -> List[VarianceNode]:
        """Get all curve nodes."""
        return list(self._nodes)

    def to_dataframe(self) -> pd.DataFrame:
        """Node table with expiry time, Black vol and total variance."""
        return pd.DataFrame(
            {
                "time": [n.time for n in self._nodes],
                "vol": [n.volatility for n in self._nodes],
                "variance": [n.variance for n in self._nodes],
            }
        )

    # ------------------------------------------------------------------
    # Variance
    # ------------------------------------------------------------------

    def variance(self, t: TimeLike, extrapolate: bool = False) -> float:
        """
        Total Black variance at time t.

        Args:
            t: Year fraction from reference date, or a date
            extrapolate: Allow t beyond the last node (flat vol beyond it)

        Returns:
            Total variance sigma^2 * t

        Raises:
            DomainError: If t is negative
            ExtrapolationError: If t > max_time and extrapolate is False
        """
        t = self._to_time(t)

        if t < 0.0:
            raise DomainError(f"negative time ({t}) not allowed")

        t_first = self._times[0]
        t_last = self._times[-1]

        if t <= t_first:
            return float(self._interpolator(t_first, extrapolate) * t / t_first)
        if t <= t_last:
            return self._interpolator(t, extrapolate)
        if not extrapolate:
            raise ExtrapolationError(
                f"time ({t}) greater than max time ({t_last})"
            )
        return float(self._interpolator(t_last, extrapolate) * t / t_last)

    def variance_slope(self, t: TimeLike, extrapolate: bool = False) -> float:
        """
        Instantaneous forward variance d variance / dt.

        Below the first node and beyond the last one the variance is scaled
        linearly in t, so the slope is the node variance rate there.

        Raises:
            DomainError: If t is negative
            ExtrapolationError: If t > max_time and extrapolate is False
        """
        t = self._to_time(t)

        if t < 0.0:
            raise DomainError(f"negative time ({t}) not allowed")

        t_first = self._times[0]
        t_last = self._times[-1]

        if t < t_first:
            return float(self._variances[0] / t_first)
        if t < t_last or (t == t_last and len(self._times) > 1):
            return self._interpolator.derivative(t)
        if t > t_last and not extrapolate:
            raise ExtrapolationError(
                f"time ({t}) greater than max time ({t_last})"
            )
        return float(self._variances[-1] / t_last)

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Listener:
        """Register a callable notified (with this curve) on upstream changes."""
        return self._observable.subscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._observable.unsubscribe(listener)

    def on_upstream_change(self) -> None:
        """
        Forward an upstream market data change to subscribers.

        Volatilities are copied at construction, so nothing is rebuilt here.
        """
        self._notify()

    # Observer-style alias
    update = on_upstream_change

    def _notify(self) -> None:
        self._observable.notify_observers()

    def __repr__(self) -> str:
        return (f"BlackVarianceCurve(reference={self._reference_date}, "
                f"underlying={self._underlying!r}, nodes={len(self._nodes)}, "
                f"day_counter={self._day_counter.name})")


def create_flat_variance_curve(
    reference_date: date,
    vol: float,
    max_tenor_years: float = 30.0,
    day_counter: Union[DayCounter, DayCount, str] = DayCount.ACT_365,
    underlying: str = ""
) -> BlackVarianceCurve:
    """
    Create a curve with constant Black volatility.

    Args:
        reference_date: Valuation date
        vol: Flat Black volatility
        max_tenor_years: Last expiry, in years of 365 days
        day_counter: Day counter for the time axis
        underlying: Underlying label

    Returns:
        Flat volatility curve
    """
    tenors = [t for t in (0.25, 0.5, 1, 2, 5, 10, 20) if t < max_tenor_years]
    tenors.append(max_tenor_years)
    # Tenors closer together than a day collapse onto the same expiry
    days = sorted({int(round(t * 365)) for t in tenors if round(t * 365) >= 1})
    if not days:
        raise InvalidInputError(
            f"max_tenor_years ({max_tenor_years}) must be at least one day"
        )
    dates = [reference_date + timedelta(days=n) for n in days]

    return BlackVarianceCurve(
        reference_date,
        day_counter,
        dates,
        [vol] * len(dates),
        underlying=underlying,
    )


__all__ = [
    "BlackVarianceCurve",
    "VarianceNode",
    "InterpolatorLike",
    "create_flat_variance_curve",
]
