#!/usr/bin/env python3
"""
Main CLI for the volatility grid scanner.
Usage: python cli.py --tickers NVDA,GOOG,MSFT
"""

import os
import sys
import logging
import argparse
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from ingestion.providers.chart_api_adapter import fetch_chart_series
from ingestion.providers.yfinance_adapter import fetch_timeframe_series
from ingestion.transforms.timeframes import TIMEFRAMES
from ingestion.transforms.validators import parse_ticker_list
from pipeline.volatility_scan_dag import ScanConfig, run_scan
from reports.grid_report import render_markdown_grid, render_text_grid

# Load environment variables
load_dotenv()

PROVIDERS = {
    'chart': fetch_chart_series,
    'yfinance': fetch_timeframe_series,
}

RENDERERS = {
    'text': render_text_grid,
    'markdown': render_markdown_grid,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Average absolute daily move and monthly red days per ticker and timeframe',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Timeframes: {', '.join(TIMEFRAMES)}

Examples:
  python cli.py --tickers NVDA,GOOG,MSFT
  python cli.py --tickers "SPY, QQQ" --workers 4 --format markdown
        """
    )

    parser.add_argument('--tickers', '-t',
                       default='',
                       help='Comma-separated list of ticker symbols (e.g., NVDA,GOOG,MSFT)')
    parser.add_argument('--provider',
                       choices=sorted(PROVIDERS),
                       default='chart',
                       help='Price data source (default: chart)')
    parser.add_argument('--workers',
                       type=int,
                       help='Maximum concurrent fetches (default: SCAN_MAX_WORKERS, else one per ticker/timeframe)')
    parser.add_argument('--timeout',
                       type=float,
                       help='Give up on unfinished fetches after this many seconds; they show as N/A')
    parser.add_argument('--format',
                       choices=sorted(RENDERERS),
                       default='text',
                       help='Report format (default: text)')
    parser.add_argument('--verbose', '-v',
                       action='store_true',
                       help='Log per-fetch details to stderr')
    return parser


def main(argv: Optional[Sequence[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    tickers = parse_ticker_list(args.tickers)
    if not tickers:
        print("Please provide at least one ticker using the --tickers flag.")
        print()
        parser.print_usage()
        sys.exit(1)

    try:
        workers = args.workers if args.workers is not None else _env_int('SCAN_MAX_WORKERS')
        config = ScanConfig(
            tickers=tickers,
            max_workers=workers,
            scan_timeout=args.timeout
        )
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    fetcher = PROVIDERS[args.provider]
    scan = run_scan(config, fetcher)

    print(RENDERERS[args.format](scan.matrix))

    if args.verbose:
        print()
        print(f"{scan.completed} completed, {scan.failed} failed, {scan.missing} missing "
              f"in {scan.duration_seconds:.1f}s")


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if not value:
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e


if __name__ == '__main__':
    main()
