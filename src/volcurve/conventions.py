"""
Day count conventions and curve construction defaults.

Supported Day Counts:
- ACT/360: Actual days / 360
- ACT/365: Actual days / 365 (standard for equity and FX vol curves)
- ACT/ACT: Actual days / actual days in year
- 30/360: 30 days per month / 360

The DayCounter wraps a convention and is the time-axis collaborator
handed to volatility term structures.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Union
import calendar


class DayCount(Enum):
    """Day count convention enumeration."""
    ACT_360 = "ACT/360"
    ACT_365 = "ACT/365"
    ACT_ACT = "ACT/ACT"
    THIRTY_360 = "30/360"

    @classmethod
    def from_string(cls, s: str) -> "DayCount":
        """Parse day count from string representation."""
        mapping = {
            "ACT/360": cls.ACT_360,
            "ACT360": cls.ACT_360,
            "ACT/365": cls.ACT_365,
            "ACT365": cls.ACT_365,
            "ACT/365F": cls.ACT_365,
            "ACT/ACT": cls.ACT_ACT,
            "ACTACT": cls.ACT_ACT,
            "30/360": cls.THIRTY_360,
            "30360": cls.THIRTY_360,
        }
        key = s.upper().replace(" ", "")
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown day count convention: {s}")


def year_fraction(start: date, end: date, day_count: DayCount) -> float:
    """
    Calculate year fraction between two dates using specified day count convention.

    Args:
        start: Start date
        end: End date
        day_count: Day count convention

    Returns:
        Year fraction as float (0.0 when end is not after start)
    """
    if start >= end:
        return 0.0

    actual_days = (end - start).days

    if day_count == DayCount.ACT_360:
        return actual_days / 360.0

    elif day_count == DayCount.ACT_365:
        return actual_days / 365.0

    elif day_count == DayCount.ACT_ACT:
        # ISDA ACT/ACT: split by year boundaries
        if start.year == end.year:
            days_in_year = 366 if calendar.isleap(start.year) else 365
            return actual_days / days_in_year

        total = 0.0
        for year in range(start.year, end.year + 1):
            period_start = start if year == start.year else date(year, 1, 1)
            period_end = end if year == end.year else date(year + 1, 1, 1)
            days_in_year = 366 if calendar.isleap(year) else 365
            total += (period_end - period_start).days / days_in_year
        return total

    elif day_count == DayCount.THIRTY_360:
        # 30/360 US convention
        d1 = min(start.day, 30)
        d2 = end.day
        if end.day == 31 and d1 == 30:
            d2 = 30
        return (360 * (end.year - start.year) + 30 * (end.month - start.month) + (d2 - d1)) / 360.0

    else:
        raise ValueError(f"Unknown day count: {day_count}")


@dataclass(frozen=True)
class DayCounter:
    """
    Converts pairs of calendar dates to a time axis.

    Attributes:
        day_count: Underlying day count convention
    """
    day_count: DayCount = DayCount.ACT_365

    @classmethod
    def of(cls, value: Union["DayCounter", DayCount, str]) -> "DayCounter":
        """Coerce a DayCounter, DayCount or convention string to a DayCounter."""
        if isinstance(value, DayCounter):
            return value
        if isinstance(value, DayCount):
            return cls(value)
        if isinstance(value, str):
            return cls(DayCount.from_string(value))
        raise TypeError(f"Cannot build a DayCounter from {value!r}")

    @property
    def name(self) -> str:
        return self.day_count.value

    def year_fraction(self, d1: date, d2: date) -> float:
        """Year fraction from d1 to d2; non-negative whenever d2 >= d1."""
        return year_fraction(d1, d2, self.day_count)

    def __str__(self) -> str:
        return self.name


@dataclass
class Conventions:
    """
    Defaults used when building volatility curves.

    Attributes:
        day_count: Day count convention for the time axis
        interpolation_method: Interpolator name understood by create_interpolator
    """
    day_count: DayCount = DayCount.ACT_365
    interpolation_method: str = "linear"

    @property
    def day_counter(self) -> DayCounter:
        return DayCounter(self.day_count)

    @classmethod
    def equity(cls) -> "Conventions":
        """Equity index / single stock vol curves."""
        return cls(day_count=DayCount.ACT_365, interpolation_method="linear")

    @classmethod
    def fx(cls) -> "Conventions":
        """FX option vol curves."""
        return cls(day_count=DayCount.ACT_365, interpolation_method="monotone_cubic")

    @classmethod
    def rates(cls) -> "Conventions":
        """Caplet / swaption expiry curves."""
        return cls(day_count=DayCount.ACT_360, interpolation_method="linear")


__all__ = [
    "DayCount",
    "DayCounter",
    "Conventions",
    "year_fraction",
]
