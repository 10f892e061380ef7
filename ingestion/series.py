"""
Canonical price series shape handed from providers to the analyzer.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterator, Tuple


@dataclass(frozen=True)
class PricePoint:
    """One trading day: calendar date plus open and close."""
    date: date
    open: float
    close: float


@dataclass(frozen=True)
class PriceSeries:
    """
    Daily prices for one (ticker, timeframe) in chronological order.

    Stored as parallel tuples, exactly as providers deliver them. Lengths are
    not checked here; the analyzer rejects a series whose arrays disagree.
    """
    ticker: str
    timeframe: str
    dates: Tuple[date, ...]
    opens: Tuple[float, ...]
    closes: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.dates)

    @property
    def is_aligned(self) -> bool:
        return len(self.dates) == len(self.opens) == len(self.closes)

    def points(self) -> Iterator[PricePoint]:
        for day, open_, close in zip(self.dates, self.opens, self.closes):
            yield PricePoint(date=day, open=open_, close=close)

    @classmethod
    def from_points(cls, ticker: str, timeframe: str, points) -> 'PriceSeries':
        points = list(points)
        return cls(
            ticker=ticker,
            timeframe=timeframe,
            dates=tuple(p.date for p in points),
            opens=tuple(p.open for p in points),
            closes=tuple(p.close for p in points),
        )
