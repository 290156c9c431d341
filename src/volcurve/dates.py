"""
Date utilities for volatility curve construction.

Provides:
- Tenor parsing ("1W", "3M", "2Y")
- Tenor to expiry date arithmetic

Dates are rolled on the plain calendar; no business day adjustment
is applied.
"""

from datetime import date, timedelta
from typing import List, Sequence, Tuple
import calendar
import re


class DateUtils:
    """Utility class for tenor and expiry date manipulation."""

    # Tenor regex pattern: number + unit (D/W/M/Y)
    TENOR_PATTERN = re.compile(r'^(\d+)([DWMY])$', re.IGNORECASE)

    @staticmethod
    def parse_tenor(tenor: str) -> Tuple[int, str]:
        """
        Parse a tenor string into (amount, unit).

        Args:
            tenor: Tenor string like "1D", "3M", "2Y"

        Returns:
            Tuple of (amount, unit) where unit is D/W/M/Y

        Raises:
            ValueError: If tenor format is invalid
        """
        match = DateUtils.TENOR_PATTERN.match(tenor.upper().strip())
        if not match:
            raise ValueError(f"Invalid tenor format: {tenor}. Expected format like '3M', '2Y'")

        return int(match.group(1)), match.group(2).upper()

    @staticmethod
    def add_tenor(start: date, tenor: str) -> date:
        """
        Add a tenor to a date.

        Month and year tenors keep the day of month where possible and
        clip to month end otherwise.

        Args:
            start: Starting date
            tenor: Tenor string (e.g., "1D", "3M", "2Y")

        Returns:
            End date
        """
        amount, unit = DateUtils.parse_tenor(tenor)

        if unit == 'D':
            return start + timedelta(days=amount)

        if unit == 'W':
            return start + timedelta(weeks=amount)

        if unit == 'M':
            year = start.year + (start.month + amount - 1) // 12
            month = (start.month + amount - 1) % 12 + 1
        else:
            year = start.year + amount
            month = start.month

        day = min(start.day, calendar.monthrange(year, month)[1])
        return date(year, month, day)

    @staticmethod
    def tenor_to_years(tenor: str) -> float:
        """
        Convert tenor to approximate year fraction.

        Args:
            tenor: Tenor string

        Returns:
            Approximate years as float
        """
        amount, unit = DateUtils.parse_tenor(tenor)

        if unit == 'D':
            return amount / 365.0
        elif unit == 'W':
            return amount * 7 / 365.0
        elif unit == 'M':
            return amount / 12.0
        return float(amount)

    @staticmethod
    def tenor_dates(start: date, tenors: Sequence[str]) -> List[date]:
        """Expiry dates for a strip of tenors, in the order given."""
        return [DateUtils.add_tenor(start, t) for t in tenors]


__all__ = [
    "DateUtils",
]
