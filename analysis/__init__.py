"""
Analysis Engine Module

Calculates volatility statistics from daily price series:
- Average absolute daily move (open to close, percent)
- Average monthly count of red days
"""

__version__ = "0.1.0"
