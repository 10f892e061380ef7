"""
Data Ingestion Module

Handles fetching daily price history from external sources:
- Yahoo Finance chart API for open/close series per timeframe
- yfinance as an alternate provider
"""

__version__ = "0.1.0"
