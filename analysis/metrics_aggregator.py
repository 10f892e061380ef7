"""
Metrics aggregator - folds per-pair results into the timeframe x ticker matrix.
Pure function; the fold replays the known index space, not arrival order.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from analysis.analysis_job import AnalysisResult
from reports.formatters import ERROR_CELL, MISSING_CELL, format_stats_cell


class MetricsAggregatorError(Exception):
    """Raised when results cannot be folded into a matrix."""
    pass


@dataclass(frozen=True)
class ResultMatrix:
    """Display cells keyed by timeframe then ticker, with row/column order."""
    timeframes: Tuple[str, ...]
    tickers: Tuple[str, ...]
    cells: Dict[str, Dict[str, str]]

    def cell(self, timeframe: str, ticker: str) -> str:
        return self.cells.get(timeframe, {}).get(ticker, MISSING_CELL)

    def rows(self) -> List[Tuple[str, List[str]]]:
        """Rows in timeframe order, each with cells in ticker order."""
        return [
            (timeframe, [self.cell(timeframe, ticker) for ticker in self.tickers])
            for timeframe in self.timeframes
        ]

    def count(self, value: str) -> int:
        return sum(1 for _, row in self.rows() for cell in row if cell == value)


def build_result_matrix(
    results: Iterable[AnalysisResult],
    tickers: Sequence[str],
    timeframes: Sequence[str]
) -> ResultMatrix:
    """
    Compose results into a ResultMatrix.

    Args:
        results: AnalysisResults in any order
        tickers: Column order
        timeframes: Row order

    Returns:
        ResultMatrix with a stats cell, "ERR" or "N/A" per (timeframe, ticker)

    Raises:
        MetricsAggregatorError: If two results claim the same pair
    """
    by_pair: Dict[Tuple[str, str], AnalysisResult] = {}
    for result in results:
        key = (result.timeframe, result.ticker)
        if key in by_pair:
            raise MetricsAggregatorError(f"Duplicate result for {result.ticker} ({result.timeframe})")
        by_pair[key] = result

    cells: Dict[str, Dict[str, str]] = {}
    for timeframe in timeframes:
        row = {}
        for ticker in tickers:
            result = by_pair.get((timeframe, ticker))
            row[ticker] = _format_cell(result)
        cells[timeframe] = row

    return ResultMatrix(timeframes=tuple(timeframes), tickers=tuple(tickers), cells=cells)


def _format_cell(result) -> str:
    if result is None:
        return MISSING_CELL
    if not result.ok:
        return ERROR_CELL
    return format_stats_cell(result.avg_abs_daily_move_pct, result.avg_monthly_red_days)
