"""Rent proration and billing anchor arithmetic

Dates are naive calendar dates interpreted as UTC midnight. Leases in other
time zones may be a day off around midnight; this is a known approximation.
"""

from calendar import monthrange
from datetime import date
from decimal import Decimal, ROUND_HALF_UP


def days_in_month(any_day: date) -> int:
    return monthrange(any_day.year, any_day.month)[1]


def next_anchor(reference_date: date) -> date:
    """First day of the month following reference_date's month."""
    if reference_date.month == 12:
        return date(reference_date.year + 1, 1, 1)
    return date(reference_date.year, reference_date.month + 1, 1)


def prorate(start_date: date, monthly_amount: int) -> int:
    """
    First charge for a lease starting on start_date.

    A lease starting on the 1st pays the full month. Otherwise it pays for the
    remaining days of the month, start day included:

        round(monthly_amount * (days_in_month - start_day + 1) / days_in_month)

    Ties round half up (12.5 -> 13), computed exactly in Decimal.

    Args:
        start_date: Lease start date
        monthly_amount: Monthly rent in cents (validated >= 0 by the caller)

    Returns:
        Amount in cents
    """
    if start_date.day == 1:
        return monthly_amount

    total_days = days_in_month(start_date)
    remaining_days = total_days - start_date.day + 1
    exact = Decimal(monthly_amount) * remaining_days / Decimal(total_days)
    return int(exact.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
