"""
Volatility scan DAG - fans out one fetch-and-analyze task per
(ticker, timeframe) pair, waits for all of them, and folds the results.
Composes: Provider → Analyzer → Sink → Matrix.
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from analysis.analysis_job import AnalysisResult, Fetcher, analyze_pair
from analysis.metrics_aggregator import ResultMatrix, build_result_matrix
from ingestion.transforms.timeframes import TIMEFRAMES, validate_timeframes
from ingestion.transforms.validators import validate_ticker

logger = logging.getLogger(__name__)


@dataclass
class ScanConfig:
    """Configuration for a volatility scan."""
    tickers: Sequence[str]
    timeframes: Sequence[str] = field(default_factory=lambda: TIMEFRAMES)
    max_workers: Optional[int] = None
    scan_timeout: Optional[float] = None
    threshold_ratio: float = 1.0

    def __post_init__(self):
        """Validate and normalize."""
        if isinstance(self.tickers, str) or not self.tickers:
            raise ValueError("tickers must be a non-empty list")

        for ticker in self.tickers:
            if not ticker or not isinstance(ticker, str):
                raise ValueError("tickers must be non-empty strings")
            # ValidationError is a ValueError; raised before any fetch starts
            validate_ticker(ticker)

        if len(set(self.tickers)) != len(self.tickers):
            raise ValueError("tickers must not repeat")

        self.tickers = tuple(self.tickers)
        self.timeframes = validate_timeframes(self.timeframes)

        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")

        if self.scan_timeout is not None and self.scan_timeout <= 0:
            raise ValueError("scan_timeout must be > 0")

        if self.threshold_ratio <= 0:
            raise ValueError("threshold_ratio must be > 0")

    @property
    def pairs(self) -> List[Tuple[str, str]]:
        """Every (ticker, timeframe) unit of work."""
        return [(ticker, timeframe) for ticker in self.tickers for timeframe in self.timeframes]

    @property
    def worker_count(self) -> int:
        """Pool size; one thread per pair unless capped."""
        pair_count = len(self.tickers) * len(self.timeframes)
        if self.max_workers is None:
            return pair_count
        return min(self.max_workers, pair_count)


@dataclass(frozen=True)
class ScanResult:
    """Matrix plus the raw per-pair results behind it."""
    matrix: ResultMatrix
    results: Tuple[AnalysisResult, ...]
    completed: int
    failed: int
    missing: int
    duration_seconds: float


def run_scan(config: ScanConfig, fetcher: Fetcher) -> ScanResult:
    """
    Run the complete volatility scan.

    Pipeline stages:
    1. Queue every pair and start the worker threads
    2. Each worker fetches, analyzes and appends one result per pair to the sink
    3. Wait until the sink holds a result for every pair (or scan_timeout)
    4. Fold the collected results into a ResultMatrix

    Workers are daemon threads, so pairs still running at scan_timeout are
    abandoned for good and never hold up interpreter exit.

    Args:
        config: Scan configuration
        fetcher: Callable returning the PriceSeries for (ticker, timeframe)

    Returns:
        ScanResult; pairs with no result render as "N/A"
    """
    start_time = datetime.now()
    pairs = config.pairs

    logger.info(
        f"Starting scan of {len(config.tickers)} tickers x {len(config.timeframes)} timeframes "
        f"({len(pairs)} tasks, {config.worker_count} workers)"
    )

    work: "queue.Queue[Tuple[str, str]]" = queue.Queue()
    for pair in pairs:
        work.put_nowait(pair)

    # Room for every pair, so producers never block
    sink: "queue.Queue[AnalysisResult]" = queue.Queue(maxsize=len(pairs))

    for i in range(config.worker_count):
        worker = threading.Thread(
            target=_worker,
            args=(work, sink, fetcher, config.threshold_ratio),
            name=f'scan_{i}',
            daemon=True
        )
        worker.start()

    results = _collect(sink, len(pairs), config.scan_timeout)

    if len(results) < len(pairs):
        logger.warning(
            f"Scan timed out after {config.scan_timeout}s with {len(pairs) - len(results)} tasks still running"
        )

    matrix = build_result_matrix(results, config.tickers, config.timeframes)

    completed = sum(1 for r in results if r.ok)
    failed = len(results) - completed
    missing = len(pairs) - len(results)
    duration = (datetime.now() - start_time).total_seconds()

    logger.info(f"Scan finished in {duration:.1f}s: {completed} completed, {failed} failed, {missing} missing")

    return ScanResult(
        matrix=matrix,
        results=tuple(results),
        completed=completed,
        failed=failed,
        missing=missing,
        duration_seconds=duration,
    )


def _worker(
    work: "queue.Queue[Tuple[str, str]]",
    sink: "queue.Queue[AnalysisResult]",
    fetcher: Fetcher,
    threshold_ratio: float
) -> None:
    while True:
        try:
            ticker, timeframe = work.get_nowait()
        except queue.Empty:
            return
        result = analyze_pair(fetcher, ticker, timeframe, threshold_ratio=threshold_ratio)
        sink.put_nowait(result)


def _collect(
    sink: "queue.Queue[AnalysisResult]",
    expected: int,
    timeout: Optional[float]
) -> List[AnalysisResult]:
    """Block until `expected` results arrive or the deadline passes."""
    deadline = None if timeout is None else time.monotonic() + timeout
    results: List[AnalysisResult] = []

    while len(results) < expected:
        if deadline is None:
            results.append(sink.get())
            continue

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break
        try:
            results.append(sink.get(timeout=remaining))
        except queue.Empty:
            break

    return results
