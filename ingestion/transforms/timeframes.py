"""
Timeframe keywords and the calendar windows they denote.
Pure functions - no IO, network, or side effects.
"""

from datetime import date, timedelta
from typing import Optional, Sequence, Tuple


# Report row order
TIMEFRAMES: Tuple[str, ...] = ('ytd', '1y', '3y', '5y', '10y')


def validate_timeframe(timeframe: str) -> str:
    """
    Check that a timeframe keyword is supported.

    Args:
        timeframe: Keyword such as 'ytd' or '5y'

    Returns:
        The keyword unchanged

    Raises:
        ValueError: If the keyword is not one of TIMEFRAMES
    """
    if timeframe not in TIMEFRAMES:
        raise ValueError(f"Unsupported timeframe: {timeframe!r} (expected one of {', '.join(TIMEFRAMES)})")
    return timeframe


def validate_timeframes(timeframes: Sequence[str]) -> Tuple[str, ...]:
    """Validate a timeframe list, rejecting empties and duplicates."""
    if not timeframes:
        raise ValueError("At least one timeframe is required")

    seen = set()
    for timeframe in timeframes:
        validate_timeframe(timeframe)
        if timeframe in seen:
            raise ValueError(f"Duplicate timeframe: {timeframe}")
        seen.add(timeframe)

    return tuple(timeframes)


def window_start(timeframe: str, today: Optional[date] = None) -> date:
    """
    First calendar day covered by a trailing timeframe.

    'ytd' starts on January 1 of the current year; 'Ny' goes back N*365 days.

    Args:
        timeframe: Timeframe keyword
        today: Reference date (defaults to today)

    Returns:
        Start date of the window (inclusive)
    """
    validate_timeframe(timeframe)
    if today is None:
        today = date.today()

    if timeframe == 'ytd':
        return date(today.year, 1, 1)

    years = int(timeframe[:-1])
    return today - timedelta(days=365 * years)
