#!/usr/bin/env python
"""
Price a catalog from a JSON request file and print the results.

Usage:
    python scripts/price_products.py [request.json] [--csv out.csv] [--trace]

Without a request file the bundled sample request is used.
"""
import argparse
import json
import sys
from pathlib import Path

import pandas as pd

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from cost_pricing.analysis.report import results_frame, aggregate_frame
from cost_pricing.config.logging import setup_logger
from cost_pricing.config.settings import get_settings
from cost_pricing.engine import PricingEngine, ValidationError, request_from_dict


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Price products from a JSON request")
    parser.add_argument("request", nargs="?", type=Path, default=settings.sample_request)
    parser.add_argument("--csv", type=Path, help="Write per-product results to this CSV file")
    parser.add_argument("--trace", action="store_true", help="Print the resolution trace")
    args = parser.parse_args()

    logger = setup_logger()

    if not args.request.exists():
        print(f"ERROR: request file not found at {args.request}")
        sys.exit(1)

    with open(args.request, 'r', encoding='utf-8') as f:
        payload = json.load(f)

    try:
        request = request_from_dict(payload)
    except ValueError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    outcome = PricingEngine(settings).compute(request)
    if isinstance(outcome, ValidationError):
        print(f"ERROR: {outcome.message}")
        sys.exit(1)

    for warning in outcome.warnings:
        logger.warning(warning)

    with pd.option_context('display.width', 160, 'display.max_columns', None):
        print(aggregate_frame(outcome.aggregate).to_string(index=False))
        print()
        print(results_frame(outcome).to_string(index=False))

    if args.trace:
        print()
        print(outcome.get_trace_text())

    if args.csv:
        results_frame(outcome).to_csv(args.csv, index=False)
        print(f"\nResults written to {args.csv}")


if __name__ == "__main__":
    main()
