"""
StormRank Command Line Interface (CLI)
======================================

Run it like:

    python -m stormrank.cli "path/to/StormData.csv.bz2"
    python -m stormrank.cli StormData.csv.bz2 --top 5 --report out/storms.docx

It loads the dataset once, prints the four top-N tables (fatalities,
injuries, property damage, crop damage) and optionally writes a DOCX report
and CSV/JSON exports of the rankings.

The CLI DOES NOT modify the dataset file. If any damage exponent code is
invalid the run stops with one error message and nothing is written.
"""

from __future__ import annotations
from typing import List, Optional
import argparse
import logging
import os
import sys

import pandas as pd

from .damage import InvalidExponentCode
from .loader import MalformedRecordError
from .pipeline import StormSummary, analyze_file, export_rankings_csv, export_rankings_json
from .ranking import METRIC_LABELS, METRICS


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="stormrank",
        description="Rank storm event types by health and economic impact.",
    )
    ap.add_argument("path", help="Path to the storm data CSV (may be .bz2/.gz compressed)")
    ap.add_argument("--top", type=int, default=10, help="How many event types per ranking (default: 10)")
    ap.add_argument("--report", metavar="OUT.docx", help="Write a DOCX report with charts")
    ap.add_argument("--export-csv", metavar="OUT.csv", help="Write the rankings as CSV")
    ap.add_argument("--export-json", metavar="OUT.json", help="Write the rankings as JSON")
    ap.add_argument("--literal-spaces", action="store_true",
                    help="Replace each punctuation/blank character by its own space (no collapsing)")
    ap.add_argument("--skip-malformed", action="store_true",
                    help="Skip rows with invalid numeric fields instead of failing")
    ap.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the StormRank CLI.

    1) Load dataset
    2) Normalize, aggregate, rank
    3) Print tables and write the requested outputs
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.top < 1:
        print("Error: --top must be a positive integer", file=sys.stderr)
        return 2

    print("Loading dataset...")
    try:
        summary = analyze_file(
            args.path,
            top=args.top,
            collapse=not args.literal_spaces,
            skip_malformed=args.skip_malformed,
        )
    except KeyError as e:
        # str(KeyError) would quote the message
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 1
    except (InvalidExponentCode, MalformedRecordError, OSError, pd.errors.ParserError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Loaded {summary.record_count} records, {summary.event_type_count} event types.")
    _print_rankings(summary)

    if args.export_csv:
        export_rankings_csv(summary.rankings, args.export_csv)
        print(f"Exported CSV to {args.export_csv}")
    if args.export_json:
        export_rankings_json(summary.rankings, args.export_json)
        print(f"Exported JSON to {args.export_json}")
    if args.report:
        from .report import DatasetCitation, ReportConfig, generate_docx_report
        cfg = ReportConfig(
            top_n=args.top,
            citation=DatasetCitation(file_name=os.path.basename(args.path)),
        )
        generate_docx_report(summary, args.report, config=cfg)
        print(f"Report written to {args.report}")
    return 0


def _print_rankings(summary: StormSummary) -> None:
    for metric in METRICS:
        pairs = summary.rankings.pairs(metric)
        print("")
        print(f"Top {len(pairs)} by {METRIC_LABELS[metric]}:")
        for rank, (name, value) in enumerate(pairs, start=1):
            print(f"{rank:>3}. {name:<30} {value:>20,.0f}")


if __name__ == "__main__":
    sys.exit(main())
