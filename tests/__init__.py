"""
Test Suite for the volatility grid scanner

Includes:
- CLI tests with in-memory providers
"""
