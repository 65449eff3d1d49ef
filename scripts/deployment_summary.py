#!/usr/bin/env python3
"""
Print a deployment summary for the hosting project.

Usage:
    python scripts/deployment_summary.py --project digilinex-a80a9 \
        --item "Canonical wallets collection" --item "Real-time dashboard sync"
"""
import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dlxops.services.deployment import render_summary

DEFAULT_ITEMS = [
    "Canonical data source (wallets collection)",
    "Real-time synchronization",
    "Normalized USD/INR marketing prices",
    "Rank-based commission calculation",
]


def main() -> int:
    parser = argparse.ArgumentParser(description="Print deployment summary")
    parser.add_argument("--project", default=os.environ.get("GOOGLE_CLOUD_PROJECT"), help="Firebase project id")
    parser.add_argument("--item", action="append", dest="items", help="Shipped item (repeatable)")
    args = parser.parse_args()

    if not args.project:
        parser.error("--project or GOOGLE_CLOUD_PROJECT is required")

    print(render_summary(args.project, args.items or DEFAULT_ITEMS))
    return 0


if __name__ == "__main__":
    sys.exit(main())
