"""
Per-pair analysis job - fetch one series, analyze it, return a result value.
Errors never escape: every call yields exactly one AnalysisResult.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from analysis.calculations.red_days import AnalysisError, analyze_series
from ingestion.errors import FetchError
from ingestion.series import PriceSeries

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, str], PriceSeries]


class ResultStatus(str, Enum):
    """Enumeration of pair outcomes."""
    COMPLETED = 'completed'
    FAILED = 'failed'


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome for one (ticker, timeframe) pair."""
    ticker: str
    timeframe: str
    status: ResultStatus
    avg_abs_daily_move_pct: Optional[float] = None
    avg_monthly_red_days: Optional[int] = None
    error_type: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.COMPLETED

    @classmethod
    def failure(cls, ticker: str, timeframe: str, error: BaseException) -> 'AnalysisResult':
        return cls(
            ticker=ticker,
            timeframe=timeframe,
            status=ResultStatus.FAILED,
            error_type=type(error).__name__,
            error_message=str(error),
        )


def analyze_pair(
    fetcher: Fetcher,
    ticker: str,
    timeframe: str,
    threshold_ratio: float = 1.0
) -> AnalysisResult:
    """
    Fetch and analyze a single (ticker, timeframe) pair.

    Args:
        fetcher: Callable returning the PriceSeries for (ticker, timeframe)
        ticker: Stock ticker symbol
        timeframe: Timeframe keyword
        threshold_ratio: Forwarded to analyze_series

    Returns:
        AnalysisResult with status completed or failed
    """
    try:
        series = fetcher(ticker, timeframe)
        stats = analyze_series(series, threshold_ratio=threshold_ratio)
    except (FetchError, AnalysisError) as e:
        logger.warning(f"Analysis failed for {ticker} ({timeframe}): {type(e).__name__}: {e}")
        return AnalysisResult.failure(ticker, timeframe, e)
    except Exception as e:
        logger.exception(f"Unexpected error analyzing {ticker} ({timeframe})")
        return AnalysisResult.failure(ticker, timeframe, e)

    logger.debug(
        f"{ticker} ({timeframe}): {stats.trading_days} trading days over {stats.months} months, "
        f"{stats.red_days} red days below {stats.threshold_pct:.2f}%"
    )

    return AnalysisResult(
        ticker=ticker,
        timeframe=timeframe,
        status=ResultStatus.COMPLETED,
        avg_abs_daily_move_pct=stats.avg_abs_daily_move_pct,
        avg_monthly_red_days=stats.avg_monthly_red_days,
    )
