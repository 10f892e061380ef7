"""
Grid report rendering - timeframes as rows, tickers as columns.
"""

from typing import List

from analysis.metrics_aggregator import ResultMatrix


CORNER_LABEL = "Timeframe"
SEPARATOR = "---------"
COLUMN_PADDING = 2


def render_text_grid(matrix: ResultMatrix) -> str:
    """
    Render the matrix as a left-aligned text table.

    Each column is as wide as its longest cell plus two spaces, so the
    output lines up like a tab writer.

    Args:
        matrix: Folded scan results

    Returns:
        Table text, one line per row, no trailing newline
    """
    lines: List[List[str]] = [
        [CORNER_LABEL] + list(matrix.tickers),
        [SEPARATOR] * (len(matrix.tickers) + 1),
    ]
    for timeframe, cells in matrix.rows():
        lines.append([timeframe] + cells)

    widths = [
        max(len(line[col]) for line in lines) + COLUMN_PADDING
        for col in range(len(lines[0]))
    ]

    return '\n'.join(
        ''.join(cell.ljust(width) for cell, width in zip(line, widths))
        for line in lines
    )


def render_markdown_grid(matrix: ResultMatrix) -> str:
    """Render the matrix as a Markdown pipe table."""
    header = f"| {CORNER_LABEL} | " + " | ".join(matrix.tickers) + " |"
    divider = "|" + "|".join("---" for _ in range(len(matrix.tickers) + 1)) + "|"

    table = header + "\n" + divider
    for timeframe, cells in matrix.rows():
        table += f"\n| {timeframe} | " + " | ".join(cells) + " |"

    return table
