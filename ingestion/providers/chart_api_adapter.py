"""
Yahoo Finance chart API adapter - fetch daily open/close series per timeframe.
Network IO allowed here, but minimal business logic.
"""

import os
import logging
from typing import Optional

import requests
from dotenv import load_dotenv

from ingestion.errors import DecodeError, TransportError
from ingestion.series import PriceSeries
from ingestion.transforms.normalizers import normalize_chart_response
from ingestion.transforms.timeframes import validate_timeframe
from ingestion.transforms.validators import ValidationError, validate_ticker

# Load environment variables
load_dotenv()

# Set up logger
logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://query1.finance.yahoo.com/v8/finance/chart'

# The endpoint rejects the default python-requests agent
DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) '
    'AppleWebKit/537.36 (KHTML, like Gecko) Chrome/115.0.0.0 Safari/537.36'
)


def fetch_chart_series(
    ticker: str,
    timeframe: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None
) -> PriceSeries:
    """
    Fetch the daily price series for a ticker over a trailing timeframe.

    Args:
        ticker: Stock ticker symbol (e.g., 'NVDA')
        timeframe: One of 'ytd', '1y', '3y', '5y', '10y'
        session: Optional requests session to reuse connections
        timeout: Request timeout in seconds (defaults to REQUESTS_TIMEOUT_S)

    Returns:
        PriceSeries in the order the API delivered it

    Raises:
        TransportError: If the request fails or returns a non-200 status
        DecodeError: If the response body is not a usable chart document
    """
    validate_timeframe(timeframe)
    # Direct callers only; ScanConfig rejects bad symbols before any fetch
    try:
        validate_ticker(ticker)
    except ValidationError as e:
        raise TransportError(str(e)) from e

    if timeout is None:
        timeout = float(os.getenv('REQUESTS_TIMEOUT_S', '30'))

    base_url = os.getenv('CHART_API_BASE_URL', DEFAULT_BASE_URL).rstrip('/')
    url = f"{base_url}/{ticker}"
    params = {'range': timeframe, 'interval': '1d'}
    headers = {'User-Agent': os.getenv('CHART_API_USER_AGENT', DEFAULT_USER_AGENT)}

    http = session if session is not None else requests

    try:
        response = http.get(url, params=params, headers=headers, timeout=timeout)
    except requests.RequestException as e:
        raise TransportError(f"Request for {ticker} ({timeframe}) failed: {e}") from e

    if response.status_code != 200:
        raise TransportError(f"Received status code {response.status_code} for {ticker} ({timeframe})")

    try:
        payload = response.json()
    except ValueError as e:
        raise DecodeError(f"Invalid JSON for {ticker} ({timeframe}): {e}") from e

    series = normalize_chart_response(payload, ticker=ticker, timeframe=timeframe)
    logger.info(f"Fetched {len(series)} daily points for {ticker} ({timeframe})")
    return series
