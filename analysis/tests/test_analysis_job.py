"""
Tests for the per-pair analysis job.
Fetchers are plain functions; no network.
"""

import logging
import pytest
from datetime import date

from analysis.analysis_job import (
    analyze_pair,
    AnalysisResult,
    ResultStatus
)
from ingestion.errors import DecodeError, TransportError
from ingestion.series import PriceSeries


def worked_example_series(ticker, timeframe):
    return PriceSeries(
        ticker=ticker,
        timeframe=timeframe,
        dates=(date(2024, 3, 4), date(2024, 3, 5), date(2024, 3, 6)),
        opens=(100.0, 100.0, 100.0),
        closes=(102.0, 95.0, 101.0)
    )


class TestAnalyzePair:
    """Tests for analyze_pair function."""

    def test_success(self):
        """Test successful fetch and analysis."""
        result = analyze_pair(worked_example_series, 'NVDA', '1y')

        assert result.ok
        assert result.status == ResultStatus.COMPLETED
        assert result.ticker == 'NVDA'
        assert result.timeframe == '1y'
        assert result.avg_abs_daily_move_pct == pytest.approx(8.0 / 3.0)
        assert result.avg_monthly_red_days == 1
        assert result.error_type is None

    def test_fetcher_receives_pair(self):
        """Test the fetcher is called with ticker and timeframe."""
        calls = []

        def fetcher(ticker, timeframe):
            calls.append((ticker, timeframe))
            return worked_example_series(ticker, timeframe)

        analyze_pair(fetcher, 'GOOG', '10y')

        assert calls == [('GOOG', '10y')]

    def test_transport_error(self, caplog):
        """Test fetch failure becomes a failed result and is logged."""
        def fetcher(ticker, timeframe):
            raise TransportError("Received status code 404")

        with caplog.at_level(logging.WARNING, logger='analysis.analysis_job'):
            result = analyze_pair(fetcher, 'ZZZZ', 'ytd')

        assert not result.ok
        assert result.status == ResultStatus.FAILED
        assert result.error_type == 'TransportError'
        assert 'status code 404' in result.error_message
        assert result.avg_abs_daily_move_pct is None
        assert 'ZZZZ (ytd)' in caplog.text

    def test_decode_error(self):
        """Test malformed response becomes a failed result."""
        def fetcher(ticker, timeframe):
            raise DecodeError("No result in chart response")

        result = analyze_pair(fetcher, 'NVDA', '3y')

        assert result.error_type == 'DecodeError'

    def test_no_valid_data(self):
        """Test empty series becomes a failed result."""
        def fetcher(ticker, timeframe):
            return PriceSeries(ticker=ticker, timeframe=timeframe, dates=(), opens=(), closes=())

        result = analyze_pair(fetcher, 'NVDA', '5y')

        assert result.error_type == 'NoValidData'

    def test_shape_mismatch(self):
        """Test misaligned series becomes a failed result."""
        def fetcher(ticker, timeframe):
            return PriceSeries(
                ticker=ticker, timeframe=timeframe,
                dates=(date(2024, 1, 2),), opens=(1.0, 2.0), closes=(1.0,)
            )

        result = analyze_pair(fetcher, 'NVDA', '5y')

        assert result.error_type == 'ShapeMismatch'

    def test_unexpected_error_does_not_escape(self, caplog):
        """Test that a bug in a fetcher is contained to the pair."""
        def fetcher(ticker, timeframe):
            raise KeyError('boom')

        with caplog.at_level(logging.ERROR, logger='analysis.analysis_job'):
            result = analyze_pair(fetcher, 'NVDA', '1y')

        assert result.status == ResultStatus.FAILED
        assert result.error_type == 'KeyError'
        assert 'Unexpected error analyzing NVDA (1y)' in caplog.text

    def test_threshold_ratio_forwarded(self):
        """Test threshold ratio reaches the analyzer."""
        def fetcher(ticker, timeframe):
            return PriceSeries(
                ticker=ticker, timeframe=timeframe,
                dates=tuple(date(2024, 1, d) for d in (2, 3, 4, 5)),
                opens=(100.0,) * 4,
                closes=(102.0, 98.0, 102.0, 98.0)
            )

        assert analyze_pair(fetcher, 'A', '1y').avg_monthly_red_days == 0
        assert analyze_pair(fetcher, 'A', '1y', threshold_ratio=0.6).avg_monthly_red_days == 2

    def test_result_is_immutable(self):
        """Test results cannot be modified after creation."""
        result = analyze_pair(worked_example_series, 'NVDA', '1y')

        with pytest.raises(AttributeError):
            result.ticker = 'GOOG'

    def test_status_enum_values(self):
        """Test that ResultStatus enum has expected values."""
        assert ResultStatus.COMPLETED == 'completed'
        assert ResultStatus.FAILED == 'failed'

    def test_failure_constructor(self):
        """Test AnalysisResult.failure captures type and message."""
        result = AnalysisResult.failure('NVDA', 'ytd', TransportError('timed out'))

        assert result.error_type == 'TransportError'
        assert result.error_message == 'timed out'
        assert not result.ok
