"""
Capability interface for Black variance term structures.

A variance term structure only has to answer min_time, max_time,
variance(t) and its slope d variance / dt. Black volatilities and
forward quantities are derived from those here, so every implementation
gets them for free.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Union
import math

from ..conventions import DayCounter
from ..errors import DomainError

TimeLike = Union[float, date]


class VarianceTermStructure(ABC):
    """Black variance term structure anchored at a reference date."""

    @property
    @abstractmethod
    def reference_date(self) -> date:
        """Zero point of the time axis."""

    @property
    @abstractmethod
    def day_counter(self) -> DayCounter:
        """Day counter converting dates to times."""

    @property
    @abstractmethod
    def min_time(self) -> float:
        """Earliest time for which the curve can return values."""

    @property
    @abstractmethod
    def max_time(self) -> float:
        """Latest time for which the curve can return values without extrapolation."""

    @abstractmethod
    def variance(self, t: TimeLike, extrapolate: bool = False) -> float:
        """Total Black variance sigma^2 * t at time (or date) t."""

    @abstractmethod
    def variance_slope(self, t: TimeLike, extrapolate: bool = False) -> float:
        """
        Instantaneous forward variance d variance / dt at time (or date) t.

        Where the curve has a kink the slope to the right of t is returned,
        except at max_time, where the left slope is used so the value stays
        inside the quoted range.
        """

    def time_from_reference(self, d: date) -> float:
        """
        Year fraction from the reference date to d.

        Raises:
            DomainError: If d precedes the reference date
        """
        if d < self.reference_date:
            raise DomainError(
                f"date ({d}) before reference date ({self.reference_date}) not allowed"
            )
        return self.day_counter.year_fraction(self.reference_date, d)

    def _to_time(self, t: TimeLike) -> float:
        if isinstance(t, date):
            return self.time_from_reference(t)
        return float(t)

    def black_vol(self, t: TimeLike, extrapolate: bool = False) -> float:
        """
        Black volatility sqrt(variance(t) / t).

        At t = 0 the short-end limit sqrt(variance_slope(0)) is returned.
        """
        t = self._to_time(t)
        if t == 0.0:
            var_rate = self.variance_slope(t, extrapolate)
        else:
            var_rate = self.variance(t, extrapolate) / t
        if var_rate < 0.0:
            raise DomainError(f"negative variance rate ({var_rate}) at time {t}")
        return math.sqrt(var_rate)

    def black_forward_variance(
        self,
        t1: TimeLike,
        t2: TimeLike,
        extrapolate: bool = False
    ) -> float:
        """
        Forward variance between t1 and t2.

        Args:
            t1: Start time or date
            t2: End time or date (must not precede t1)
            extrapolate: Allow t2 beyond max_time

        Returns:
            variance(t2) - variance(t1)
        """
        t1 = self._to_time(t1)
        t2 = self._to_time(t2)
        if t2 < t1:
            raise DomainError(f"t1 ({t1}) later than t2 ({t2})")
        return self.variance(t2, extrapolate) - self.variance(t1, extrapolate)

    def black_forward_vol(
        self,
        t1: TimeLike,
        t2: TimeLike,
        extrapolate: bool = False
    ) -> float:
        """
        Forward Black volatility between t1 and t2.

        For t1 == t2 the instantaneous forward vol sqrt(variance_slope(t1))
        is returned.
        """
        t1 = self._to_time(t1)
        t2 = self._to_time(t2)
        if t2 < t1:
            raise DomainError(f"t1 ({t1}) later than t2 ({t2})")
        if t2 == t1:
            fwd_rate = self.variance_slope(t1, extrapolate)
        else:
            fwd_rate = (self.variance(t2, extrapolate) - self.variance(t1, extrapolate)) / (t2 - t1)
        if fwd_rate < 0.0:
            raise DomainError(
                f"negative forward variance rate ({fwd_rate}) between {t1} and {t2}"
            )
        return math.sqrt(fwd_rate)


__all__ = [
    "TimeLike",
    "VarianceTermStructure",
]
