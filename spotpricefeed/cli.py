from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from . import pipeline, writer
from .config import FeedConfig
from .exceptions import ConfigError, SpotFeedError

logger = logging.getLogger("spotpricefeed")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spotpricefeed",
        description="Fetch spot prices and write the upcoming intervals as JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Settings not given on the command line come from SPOTFEED_* environment
variables (e.g. SPOTFEED_PRIMARY_URL, SPOTFEED_VAT_MULTIPLIER), then defaults.

Examples:
  python -m spotpricefeed
  python -m spotpricefeed --output public/spotprices.json --max-intervals 24
  python -m spotpricefeed --output-offset +03:00 --emit-alv --dry-run
        """,
    )
    parser.add_argument("--primary-url", type=str, help="Primary price API URL")
    parser.add_argument("--fallback-url", type=str, help="Fallback JSON mirror URL")
    parser.add_argument("--output", type=Path, dest="output_path", help="Output JSON file")
    parser.add_argument("--max-intervals", type=int, help="Intervals to keep")
    parser.add_argument("--timeout", type=float, dest="timeout_s", help="Request timeout (s)")
    parser.add_argument(
        "--output-offset", type=str, help="Render times at a fixed offset, e.g. +03:00"
    )
    parser.add_argument(
        "--emit-alv", action="store_true", default=None, help="Also write v as v_alv"
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Print the document instead of writing it"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def load_config(args: argparse.Namespace) -> FeedConfig:
    """Environment settings with command-line overrides; raises ConfigError."""
    try:
        return FeedConfig().with_overrides(
            primary_url=args.primary_url,
            fallback_url=args.fallback_url,
            output_path=args.output_path,
            max_intervals=args.max_intervals,
            timeout_s=args.timeout_s,
            output_offset=args.output_offset,
            emit_alv=args.emit_alv,
        )
    except ValidationError as exc:
        problems = "; ".join(
            "{}: {}".format(".".join(str(p) for p in err["loc"]), err["msg"])
            for err in exc.errors()
        )
        raise ConfigError(f"Invalid settings: {problems}") from exc


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args)
        doc = pipeline.run(config, dry_run=args.dry_run)
    except SpotFeedError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1

    if args.dry_run:
        sys.stdout.write(writer.dumps(doc))
    return 0
