"""Business day adjustment and day count fractions.

Business days are weekdays only; holiday calendars are supplied by the
resolution step that builds resolved trades, not by this package.
Type definitions live in core/types.py. This module provides functions.
"""

from __future__ import annotations

import calendar as _cal
from datetime import date, timedelta
from decimal import Decimal
from typing import assert_never

from otcval.core.types import (
    BusinessDayAdjustments,
    BusinessDayConvention,
    DayCountConvention,
)


def _is_business_day(d: date) -> bool:
    return d.weekday() < 5


def adjust_date(d: date, convention: BusinessDayConvention) -> date:
    """Adjust a date according to a business day convention.

    MOD_FOLLOWING: next business day, unless that crosses a month boundary,
                   in which case the previous business day.
    FOLLOWING: next business day.
    PRECEDING: previous business day.
    NONE: no adjustment.
    """
    match convention:
        case "NONE":
            return d
        case "FOLLOWING":
            result = d
            while not _is_business_day(result):
                result += timedelta(days=1)
            return result
        case "PRECEDING":
            result = d
            while not _is_business_day(result):
                result -= timedelta(days=1)
            return result
        case "MOD_FOLLOWING":
            result = d
            while not _is_business_day(result):
                result += timedelta(days=1)
            if result.month != d.month:
                result = d
                while not _is_business_day(result):
                    result -= timedelta(days=1)
            return result
        case _never:
            assert_never(_never)


def adjust(d: date, adjustments: BusinessDayAdjustments) -> date:
    return adjust_date(d, adjustments.convention)


# ---------------------------------------------------------------------------
# Day count fraction computation
# ---------------------------------------------------------------------------


def _days_in_year(y: int) -> int:
    return 366 if _cal.isleap(y) else 365


def _act_act_isda(start: date, end: date) -> Decimal:
    """Actual days / actual days in year, split across year boundaries."""
    total = Decimal("0")
    current = start
    while current.year < end.year:
        year_end = date(current.year + 1, 1, 1)
        total += Decimal((year_end - current).days) / Decimal(_days_in_year(current.year))
        current = year_end
    days_in_period = (end - current).days
    if days_in_period > 0:
        total += Decimal(days_in_period) / Decimal(_days_in_year(current.year))
    return total


def day_count_fraction(
    start: date, end: date, convention: DayCountConvention,
) -> Decimal:
    """Year fraction for [start, end).

    Precondition: start <= end. Raises TypeError otherwise.
    """
    if start > end:
        raise TypeError(
            f"day_count_fraction: start ({start}) must be <= end ({end})"
        )
    match convention:
        case DayCountConvention.ACT_360:
            return Decimal((end - start).days) / Decimal("360")
        case DayCountConvention.ACT_365:
            return Decimal((end - start).days) / Decimal("365")
        case DayCountConvention.THIRTY_360:
            # 30/360 bond basis
            d1 = min(start.day, 30)
            d2 = 30 if (end.day == 31 and d1 >= 30) else end.day
            days = 360 * (end.year - start.year) + 30 * (end.month - start.month) + (d2 - d1)
            return Decimal(days) / Decimal("360")
        case DayCountConvention.ACT_ACT_ISDA:
            return _act_act_isda(start, end)
        case _never:
            assert_never(_never)
