"""
Daily move and red day statistics.
Pure functions over one price series - no IO or shared state.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Dict, Tuple

import numpy as np

from ingestion.series import PriceSeries


class AnalysisError(Exception):
    """Raised when a price series cannot be analyzed."""
    pass


class ShapeMismatch(AnalysisError):
    """Raised when the date, open and close arrays differ in length."""
    pass


class NoValidData(AnalysisError):
    """Raised when no point in the series has a nonzero open."""
    pass


@dataclass
class MonthBucket:
    """Per calendar month counts within one series."""
    trading_days: int = 0
    red_days: int = 0


@dataclass(frozen=True)
class DailyMoveStats:
    """Summary of one series."""
    avg_abs_daily_move_pct: float
    avg_monthly_red_days: int
    trading_days: int
    months: int
    red_days: int
    threshold_pct: float


def round_half_away_from_zero(value: float) -> int:
    """
    Round to the nearest integer, ties away from zero.

    Python's round() rounds ties to even (round(2.5) == 2).
    """
    magnitude = abs(value)
    whole = math.floor(magnitude)
    # value + 0.5 would round 0.49999999999999994 up to 1
    if magnitude - whole >= 0.5:
        whole += 1
    return int(whole) if value >= 0 else -int(whole)


def daily_move_pct(opens, closes) -> np.ndarray:
    """
    Percentage move from open to close for each day.

    Formula: move = (close - open) / open * 100

    Days with a zero open yield NaN.
    """
    open_arr = np.asarray(opens, dtype=np.float64)
    close_arr = np.asarray(closes, dtype=np.float64)

    moves = np.full(open_arr.shape, np.nan)
    valid = open_arr != 0
    moves[valid] = (close_arr[valid] - open_arr[valid]) / open_arr[valid] * 100.0
    return moves


def analyze_series(series: PriceSeries, threshold_ratio: float = 1.0) -> DailyMoveStats:
    """
    Average absolute daily move and average monthly count of red days.

    A red day is one whose signed move is strictly below
    -threshold_ratio * average absolute move of the same series.
    Points with a zero open are ignored everywhere.

    Args:
        series: Daily prices for one ticker and timeframe
        threshold_ratio: Fraction of the average move that defines a red day

    Returns:
        DailyMoveStats

    Raises:
        ShapeMismatch: If the parallel arrays differ in length
        NoValidData: If every open is zero or the series is empty
    """
    if threshold_ratio <= 0:
        raise ValueError(f"threshold_ratio must be positive, got {threshold_ratio}")

    if not series.is_aligned:
        raise ShapeMismatch(
            f"Mismatch in data lengths: {len(series.dates)} dates, "
            f"{len(series.opens)} opens, {len(series.closes)} closes"
        )

    moves = daily_move_pct(series.opens, series.closes)

    # Pass 1: average absolute move and trading days per month
    months: Dict[Tuple[int, int], MonthBucket] = {}
    sum_abs = 0.0
    valid_count = 0
    for day, move in zip(series.dates, moves):
        if np.isnan(move):
            continue
        sum_abs += abs(float(move))
        valid_count += 1
        months.setdefault(_month_key(day), MonthBucket()).trading_days += 1

    if valid_count == 0:
        raise NoValidData(f"No valid trading days found for {series.ticker} ({series.timeframe})")

    avg_abs = sum_abs / valid_count
    threshold = -threshold_ratio * avg_abs

    # Pass 2: red days per month
    for day, move in zip(series.dates, moves):
        if np.isnan(move):
            continue
        if move < threshold:
            months[_month_key(day)].red_days += 1

    total_red = sum(bucket.red_days for bucket in months.values())

    return DailyMoveStats(
        avg_abs_daily_move_pct=avg_abs,
        avg_monthly_red_days=round_half_away_from_zero(total_red / len(months)),
        trading_days=valid_count,
        months=len(months),
        red_days=total_red,
        threshold_pct=threshold,
    )


def _month_key(day: date) -> Tuple[int, int]:
    return (day.year, day.month)
