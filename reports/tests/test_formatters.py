"""
Tests for grid cell formatters.
"""

import pytest

from reports.formatters import (
    format_day_count,
    format_percentage,
    format_stats_cell,
    FormatterError,
    ERROR_CELL,
    MISSING_CELL
)


class TestFormatters:
    """Tests for cell formatting helpers."""

    def test_format_percentage(self):
        assert format_percentage(2.6666666) == "2.67%"
        assert format_percentage(0.0) == "0.00%"
        assert format_percentage(1.5, decimal_places=1) == "1.5%"

    def test_format_percentage_none(self):
        assert format_percentage(None) == MISSING_CELL

    def test_format_percentage_invalid(self):
        with pytest.raises(FormatterError, match="must be numeric"):
            format_percentage("2.5")

    def test_format_day_count(self):
        assert format_day_count(3) == "3 days"
        assert format_day_count(0) == "0 days"

    def test_format_stats_cell(self):
        assert format_stats_cell(8.0 / 3.0, 1) == "Avg Abs: 2.67% / Red: 1 days"

    def test_format_stats_cell_requires_both(self):
        with pytest.raises(FormatterError):
            format_stats_cell(2.5, None)

    def test_sentinel_cells(self):
        assert ERROR_CELL == "ERR"
        assert MISSING_CELL == "N/A"
