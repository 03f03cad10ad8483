"""
DateTime utilities for the pets service.

This module provides the current-time helpers and the date window used to
find vaccines that are due soon or were given recently.
"""

from datetime import date, datetime, timedelta
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

UPCOMING_WINDOW_DAYS = 30


def get_current_utc() -> datetime:
    """Get the current UTC datetime."""
    return datetime.now(ZoneInfo("UTC"))


def get_current_date() -> date:
    """Get today's date on the server clock."""
    return date.today()


def get_date_window(
    days: int = UPCOMING_WINDOW_DAYS, reference_date: Optional[date] = None
) -> Tuple[date, date]:
    """
    Get a symmetric inclusive date window around a reference date.

    Args:
        days: Number of days on each side of the reference date
        reference_date: Center of the window (defaults to today)

    Returns:
        Tuple of (start, end) dates
    """
    if days < 0:
        raise ValueError("Window size cannot be negative")

    if reference_date is None:
        reference_date = get_current_date()

    delta = timedelta(days=days)
    return reference_date - delta, reference_date + delta
