"""
Tests for the chart API adapter - mocked network calls, no live API hits in CI.
"""

import os
import pytest
import requests
from unittest.mock import Mock, patch
from datetime import date

from ingestion.providers.chart_api_adapter import (
    fetch_chart_series,
    DEFAULT_BASE_URL,
    DEFAULT_USER_AGENT
)
from ingestion.errors import DecodeError, FetchError, TransportError


def chart_payload():
    # 2024-01-02 and 2024-01-03 14:30 UTC, New York exchange
    return {
        'chart': {
            'result': [{
                'meta': {'symbol': 'NVDA', 'gmtoffset': -18000},
                'timestamp': [1704205800, 1704292200],
                'indicators': {'quote': [{
                    'open': [492.44, 474.85],
                    'close': [481.68, 475.69]
                }]}
            }],
            'error': None
        }
    }


def mock_response(status_code=200, payload=None, json_error=None):
    response = Mock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class TestFetchChartSeries:
    """Tests for fetch_chart_series function."""

    @patch('ingestion.providers.chart_api_adapter.requests.get')
    def test_success(self, mock_get):
        """Test successful fetch with mocked HTTP response."""
        mock_get.return_value = mock_response(payload=chart_payload())

        series = fetch_chart_series('NVDA', '1y', timeout=5)

        mock_get.assert_called_once_with(
            f"{DEFAULT_BASE_URL}/NVDA",
            params={'range': '1y', 'interval': '1d'},
            headers={'User-Agent': DEFAULT_USER_AGENT},
            timeout=5
        )

        assert series.ticker == 'NVDA'
        assert series.timeframe == '1y'
        assert series.dates == (date(2024, 1, 2), date(2024, 1, 3))
        assert series.opens == (492.44, 474.85)
        assert series.closes == (481.68, 475.69)

    @patch('ingestion.providers.chart_api_adapter.requests.get')
    def test_uses_session(self, mock_get):
        """Test that a supplied session is used instead of requests.get."""
        session = Mock()
        session.get.return_value = mock_response(payload=chart_payload())

        series = fetch_chart_series('NVDA', 'ytd', session=session, timeout=5)

        session.get.assert_called_once()
        mock_get.assert_not_called()
        assert len(series) == 2

    @patch.dict(os.environ, {'REQUESTS_TIMEOUT_S': '7', 'CHART_API_USER_AGENT': 'test-agent'})
    @patch('ingestion.providers.chart_api_adapter.requests.get')
    def test_environment_overrides(self, mock_get):
        """Test timeout and user agent come from the environment."""
        mock_get.return_value = mock_response(payload=chart_payload())

        fetch_chart_series('NVDA', '5y')

        _, kwargs = mock_get.call_args
        assert kwargs['timeout'] == 7.0
        assert kwargs['headers'] == {'User-Agent': 'test-agent'}

    @patch('ingestion.providers.chart_api_adapter.requests.get')
    def test_non_200_status(self, mock_get):
        """Test non-200 status raises TransportError."""
        mock_get.return_value = mock_response(status_code=404)

        with pytest.raises(TransportError, match="status code 404"):
            fetch_chart_series('ZZZZ', '1y', timeout=5)

    @patch('ingestion.providers.chart_api_adapter.requests.get')
    def test_network_error(self, mock_get):
        """Test connection failure raises TransportError."""
        mock_get.side_effect = requests.ConnectionError("Connection refused")

        with pytest.raises(TransportError, match="Connection refused"):
            fetch_chart_series('NVDA', '1y', timeout=5)

    @patch('ingestion.providers.chart_api_adapter.requests.get')
    def test_timeout(self, mock_get):
        """Test request timeout raises TransportError."""
        mock_get.side_effect = requests.Timeout("Read timed out")

        with pytest.raises(TransportError):
            fetch_chart_series('NVDA', '1y', timeout=5)

    @patch('ingestion.providers.chart_api_adapter.requests.get')
    def test_invalid_json(self, mock_get):
        """Test undecodable body raises DecodeError."""
        mock_get.return_value = mock_response(json_error=ValueError("Expecting value"))

        with pytest.raises(DecodeError, match="Invalid JSON"):
            fetch_chart_series('NVDA', '1y', timeout=5)

    @patch('ingestion.providers.chart_api_adapter.requests.get')
    def test_chart_error(self, mock_get):
        """Test chart.error in body raises DecodeError."""
        payload = {'chart': {'result': None, 'error': {'code': 'Not Found', 'description': 'No data found'}}}
        mock_get.return_value = mock_response(payload=payload)

        with pytest.raises(DecodeError, match="Not Found"):
            fetch_chart_series('ZZZZ', '1y', timeout=5)

    def test_unknown_timeframe(self):
        """Test unsupported timeframe is rejected before any request."""
        with pytest.raises(ValueError, match="Unsupported timeframe"):
            fetch_chart_series('NVDA', '2y', timeout=5)

    def test_invalid_ticker(self):
        """Test invalid ticker is a transport failure for that pair."""
        with pytest.raises(TransportError, match="invalid characters"):
            fetch_chart_series('NV/DA', '1y', timeout=5)

    def test_errors_share_base_class(self):
        """Test both fetch failures are FetchErrors."""
        assert issubclass(TransportError, FetchError)
        assert issubclass(DecodeError, FetchError)
