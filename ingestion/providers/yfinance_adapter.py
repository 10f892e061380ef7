"""
yfinance adapter - fetch price data from Yahoo Finance.
Network IO allowed here, but minimal business logic.
"""

import logging
from datetime import date, timedelta
from typing import Optional

import yfinance as yf

from ingestion.errors import TransportError
from ingestion.series import PriceSeries
from ingestion.transforms.normalizers import normalize_price_frame
from ingestion.transforms.timeframes import window_start
from ingestion.transforms.validators import ValidationError, validate_ticker

logger = logging.getLogger(__name__)


def fetch_timeframe_series(
    ticker: str,
    timeframe: str,
    *,
    today: Optional[date] = None
) -> PriceSeries:
    """
    Fetch daily prices for a ticker over the window a timeframe denotes.

    yfinance has no '3y' period, so the window is passed as explicit dates.

    Args:
        ticker: Stock ticker symbol (e.g., 'AAPL')
        timeframe: One of 'ytd', '1y', '3y', '5y', '10y'
        today: Window end date (defaults to today)

    Returns:
        PriceSeries sorted by date

    Raises:
        TransportError: If the download fails
        DecodeError: If the returned frame lacks open/close columns
    """
    if today is None:
        today = date.today()
    start = window_start(timeframe, today)

    # Direct callers only; ScanConfig rejects bad symbols before any fetch
    try:
        validate_ticker(ticker)
    except ValidationError as e:
        raise TransportError(str(e)) from e

    try:
        # yfinance uses exclusive end dates, so add 1 day
        data = yf.download(
            ticker,
            start=start.isoformat(),
            end=(today + timedelta(days=1)).isoformat(),
            interval='1d',
            auto_adjust=False,
            progress=False
        )
    except Exception as e:
        raise TransportError(f"Failed to fetch prices for {ticker}: {str(e)}") from e

    series = normalize_price_frame(data, ticker=ticker, timeframe=timeframe)
    logger.info(f"Fetched {len(series)} daily points for {ticker} ({timeframe}) via yfinance")
    return series
