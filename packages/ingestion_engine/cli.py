"""Command-line statement importer.

Parses a bank statement CSV, categorizes every transaction and prints the
result.

    python -m packages.ingestion_engine.cli statement.csv
    python -m packages.ingestion_engine.cli statement.csv --json --show-skipped
"""

import argparse
import json
import logging
import os
import sys

import pandas as pd

from packages.categorization.rules import RuleCategorizer, VendorRegistry
from packages.ingestion_engine.import_transactions import (
    NoValidTransactionsError,
    parse_file,
)


def build_categorizer(overrides_file: str | None = None) -> RuleCategorizer:
    registry = VendorRegistry()
    if overrides_file:
        registry.load_overrides(overrides_file)
    return RuleCategorizer(registry=registry)


def run(args) -> int:
    if not os.path.exists(args.file):
        print(f"File not found: {args.file}", file=sys.stderr)
        return 1

    with open(args.file, "rb") as f:
        content = f.read()

    try:
        result = parse_file(content, os.path.basename(args.file))
    except NoValidTransactionsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    categorizer = build_categorizer(args.overrides)
    categorizer.label(result.transactions)
    records = [t.to_record() for t in result.transactions]

    if args.json:
        print(json.dumps(records, indent=2))
    else:
        df = pd.DataFrame(records)
        cols = ["date", "amount", "merchant", "category", "confidence", "description"]
        print(df[cols].to_string(index=False))
        print(f"\n{len(records)} transactions, {len(result.skipped)} skipped")

    if args.show_skipped:
        for row in result.skipped:
            print(f"row {row.row_number}: {row.reason}", file=sys.stderr)

    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Parse and categorize a bank statement CSV")
    parser.add_argument("file", help="Path to the statement CSV")
    parser.add_argument("--json", action="store_true", help="Print JSON records")
    parser.add_argument(
        "--show-skipped", action="store_true", help="List rows that were dropped"
    )
    parser.add_argument(
        "--overrides", default=None, help="JSON file of vendor -> category overrides"
    )
    parser.add_argument("--verbose", "-v", action="store_true")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
