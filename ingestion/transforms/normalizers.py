"""
Normalizers for transforming provider data to canonical PriceSeries.
Pure functions - no IO, network, or side effects.
Minimal normalization - only when necessary.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pandas as pd

from ingestion.errors import DecodeError
from ingestion.series import PriceSeries


def normalize_chart_response(
    payload: Dict[str, Any],
    *,
    ticker: str,
    timeframe: str
) -> PriceSeries:
    """
    Transform a chart API JSON document to a PriceSeries.

    Minimal normalization:
    - Epoch seconds to exchange-local calendar dates (meta.gmtoffset)
    - null prices to an open of 0.0, which the analyzer skips
    - Array lengths kept as delivered so shape problems surface downstream

    Args:
        payload: Decoded JSON body
        ticker: Requested ticker
        timeframe: Requested timeframe keyword

    Returns:
        PriceSeries in provider order

    Raises:
        DecodeError: If the document does not have the chart layout
    """
    if not isinstance(payload, dict) or not isinstance(payload.get('chart'), dict):
        raise DecodeError(f"Missing 'chart' object in response for {ticker}")

    chart = payload['chart']
    if chart.get('error'):
        raise DecodeError(f"Chart API error for {ticker}: {_describe_error(chart['error'])}")

    results = chart.get('result') or []
    if not results:
        raise DecodeError(f"No result in chart response for {ticker}")

    result = results[0]
    if not isinstance(result, dict):
        raise DecodeError(f"No result in chart response for {ticker}")

    meta = result.get('meta') or {}
    gmtoffset = meta.get('gmtoffset') or 0

    # A symbol with no trades in range comes back without a timestamp array
    timestamps = result.get('timestamp') or []

    try:
        quote = result['indicators']['quote'][0]
    except (KeyError, IndexError, TypeError) as e:
        raise DecodeError(f"No quote block in chart response for {ticker}") from e
    if not isinstance(quote, dict):
        raise DecodeError(f"No quote block in chart response for {ticker}")

    raw_opens = quote.get('open') or []
    raw_closes = quote.get('close') or []

    try:
        dates = tuple(_epoch_to_date(ts, gmtoffset) for ts in timestamps)
    except (TypeError, ValueError, OverflowError) as e:
        raise DecodeError(f"Invalid timestamp in chart response for {ticker}: {e}") from e

    closes: List[Optional[float]] = [_to_price(v) for v in raw_closes]

    opens: List[float] = []
    for i, raw_open in enumerate(raw_opens):
        open_ = _to_price(raw_open)
        if open_ is None or (i < len(closes) and closes[i] is None):
            # Unpriced bar - exclude from analysis
            open_ = 0.0
        opens.append(open_)

    return PriceSeries(
        ticker=ticker,
        timeframe=timeframe,
        dates=dates,
        opens=tuple(opens),
        closes=tuple(c if c is not None else 0.0 for c in closes),
    )


def normalize_price_frame(
    frame: pd.DataFrame,
    *,
    ticker: str,
    timeframe: str
) -> PriceSeries:
    """
    Transform a yfinance download frame to a PriceSeries.

    Args:
        frame: DataFrame indexed by date with 'Open' and 'Close' columns
        ticker: Requested ticker
        timeframe: Requested timeframe keyword

    Returns:
        PriceSeries sorted by date

    Raises:
        DecodeError: If required columns are missing
    """
    if frame is None or frame.empty:
        return PriceSeries(ticker=ticker, timeframe=timeframe, dates=(), opens=(), closes=())

    # Handle multi-level columns (when yfinance returns ticker-specific columns)
    if isinstance(frame.columns, pd.MultiIndex):
        frame = frame.copy()
        frame.columns = frame.columns.get_level_values(0)

    missing = {'Open', 'Close'} - set(frame.columns)
    if missing:
        raise DecodeError(f"yfinance frame for {ticker} missing columns: {sorted(missing)}")

    frame = frame.sort_index()

    opens = frame['Open'].astype(float).fillna(0.0)
    closes = frame['Close'].astype(float).fillna(0.0)
    # NaN close means an unpriced bar - exclude it the same way as the chart API
    opens = opens.where(frame['Close'].notna(), 0.0)

    return PriceSeries(
        ticker=ticker,
        timeframe=timeframe,
        dates=tuple(pd.Timestamp(idx).date() for idx in frame.index),
        opens=tuple(float(v) for v in opens),
        closes=tuple(float(v) for v in closes),
    )


def _epoch_to_date(ts: Any, gmtoffset: int):
    seconds = int(ts) + int(gmtoffset)
    return (datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=seconds)).date()


def _to_price(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        price = float(value)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Non-numeric price value: {value!r}") from e
    if not math.isfinite(price):
        return None
    return price


def _describe_error(error: Any) -> str:
    if isinstance(error, dict):
        code = error.get('code', 'unknown')
        description = error.get('description', '')
        return f"{code}: {description}" if description else str(code)
    return str(error)
