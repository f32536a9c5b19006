"""Command line access to MEFF historical quotes, options and tickers."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from meff_history import GapPolicy, MeffHistory
from meff_history.exceptions import MeffHistoryError
from meff_history.ingestion.quotes_csv import QuoteCSVExporter
from meff_history.utils.date_range import parse_date
from meff_history.utils.logger import get_logger
from meff_history.utils.meff import DEFAULT_TIMEOUT

LOGGER = get_logger(__name__)

__all__ = ["parse_args", "main"]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="meff-history", description=__doc__)
    parser.add_argument("--cache-dir", dest="cache_dir", help="Directory for downloaded archives")
    parser.add_argument(
        "--timeout",
        dest="timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="HTTP timeout in seconds",
    )
    parser.add_argument("--output", dest="output", help="File to write: CSV for quotes and options, one code per line for tickers (stdout when omitted)")
    commands = parser.add_subparsers(dest="command", required=True)

    quotes = commands.add_parser("quotes", help="Daily quotes of a ticker over a date range")
    quotes.add_argument("ticker")
    quotes.add_argument("--from", dest="start", required=True, type=parse_date, help="Start date (YYYY-MM-DD)")
    quotes.add_argument("--to", dest="end", required=True, type=parse_date, help="End date (YYYY-MM-DD)")
    quotes.add_argument(
        "--continue-on-gap",
        dest="gap_policy",
        action="store_const",
        const=GapPolicy.CONTINUE,
        default=GapPolicy.STOP,
        help="Keep scanning later years when a year has no data",
    )

    options = commands.add_parser("options", help="Options on a ticker quoted on a given date")
    options.add_argument("ticker")
    options.add_argument("--date", dest="on", required=True, type=parse_date, help="Session date (YYYY-MM-DD)")

    commands.add_parser("tickers", help="Tickers listed during the previous month")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    history = MeffHistory(cache_dir=args.cache_dir, timeout=args.timeout)
    try:
        if args.command == "tickers":
            return _write_tickers(history.get_ticker_list(), args.output)
        if args.command == "quotes":
            records = history.get_historical_quotes(
                args.ticker, args.start, args.end, gap_policy=args.gap_policy
            )
        else:
            records = history.get_options(args.ticker, args.on)
    except (MeffHistoryError, ValueError) as exc:
        LOGGER.error("%s", exc)
        return 1

    exporter = QuoteCSVExporter()
    if args.output:
        path = exporter.write(records, output=Path(args.output))
        LOGGER.info("Saved %s quotes → %s", len(records), path)
    else:
        exporter.write(records, output=sys.stdout)
    return 0


def _write_tickers(tickers: Sequence[str], output: str | None) -> int:
    text = "".join(f"{ticker}\n" for ticker in tickers)
    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        LOGGER.info("Saved %s tickers → %s", len(tickers), path)
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
