"""
Display formatters for grid report cells.
Deterministic string formatting for percentages and day counts.
"""

from typing import Optional


class FormatterError(Exception):
    """Raised when formatter input validation fails."""
    pass


ERROR_CELL = "ERR"
MISSING_CELL = "N/A"


def format_percentage(value: Optional[float], decimal_places: int = 2) -> str:
    """
    Format a value already expressed in percent.

    Args:
        value: Percent value (2.667 = 2.667%)
        decimal_places: Number of decimal places (default: 2)

    Returns:
        Formatted percentage string (e.g., "2.67%")
    """
    if value is None:
        return MISSING_CELL

    if not isinstance(value, (int, float)):
        raise FormatterError(f"Percentage value must be numeric, got {type(value)}")

    return f"{value:.{decimal_places}f}%"


def format_day_count(value: Optional[int]) -> str:
    """Format a whole number of days (e.g., "3 days")."""
    if value is None:
        return MISSING_CELL

    if not isinstance(value, (int, float)):
        raise FormatterError(f"Day count must be numeric, got {type(value)}")

    return f"{value:.0f} days"


def format_stats_cell(avg_abs_daily_move_pct: float, avg_monthly_red_days: int) -> str:
    """
    Format the cell for a successful pair.

    Returns:
        "Avg Abs: {pct:.2f}% / Red: {count} days"
    """
    if avg_abs_daily_move_pct is None or avg_monthly_red_days is None:
        raise FormatterError("Both statistics are required for a stats cell")

    return (
        f"Avg Abs: {format_percentage(avg_abs_daily_move_pct)} / "
        f"Red: {format_day_count(avg_monthly_red_days)}"
    )
