"""
Input validators for ticker symbols.
Pure functions - no IO, network, or side effects.
"""

from typing import List


class ValidationError(ValueError):
    """Raised when ticker validation fails."""
    pass


ALLOWED_TICKER_CHARS = set('ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789.-^=')


def validate_ticker(ticker: str) -> str:
    """
    Basic ticker validation.

    Args:
        ticker: Stock ticker symbol

    Returns:
        The ticker unchanged

    Raises:
        ValidationError: If ticker is invalid
    """
    if not ticker or not isinstance(ticker, str):
        raise ValidationError("Ticker must be non-empty string")

    if len(ticker) > 12:
        raise ValidationError(f"Ticker too long (max 12 characters): {ticker}")

    if not set(ticker.upper()).issubset(ALLOWED_TICKER_CHARS):
        raise ValidationError(f"Ticker contains invalid characters: {ticker}")

    return ticker


def parse_ticker_list(raw: str) -> List[str]:
    """
    Split a comma-separated ticker list.

    Whitespace around each symbol is trimmed and empty entries are dropped.
    Order is preserved, so is the first occurrence of a repeated symbol.

    Args:
        raw: Text such as "NVDA, GOOG,MSFT"

    Returns:
        Tickers in input order
    """
    if not raw:
        return []

    tickers = []
    for part in raw.split(','):
        ticker = part.strip()
        if ticker and ticker not in tickers:
            tickers.append(ticker)
    return tickers
