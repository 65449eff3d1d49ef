#!/usr/bin/env python3
"""
Smoke checks for shipped UI fixes: confirms the expected code is present
in the web app sources without starting a browser.

Usage:
    python scripts/smoke_check_ui.py --root ../web
"""
import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dlxops import settings
from dlxops.services.source_checks import SourceCheck, run_checks

ORDERS = "src/pages/Dashboard/OrdersEnhanced.tsx"
DASHBOARD = "src/pages/Dashboard/DashboardHome.tsx"

CHECKS = [
    SourceCheck("Orders page exists", ORDERS),
    SourceCheck(
        "Download link in order cards",
        ORDERS,
        kind="contains",
        patterns=["Download Link", "window.open(order.downloadUrl", "ArrowDownTrayIcon"],
    ),
    SourceCheck(
        "downloadUrl field handled",
        ORDERS,
        kind="contains",
        patterns=["downloadUrl?: string | null", "{order.downloadUrl &&"],
    ),
    SourceCheck(
        "Download links open in new tab",
        ORDERS,
        kind="contains",
        patterns=['target="_blank"', 'rel="noopener noreferrer"'],
    ),
    SourceCheck(
        "referralsLoading comes from useReferral",
        DASHBOARD,
        kind="contains",
        patterns=["loading: referralsLoading"],
    ),
    SourceCheck(
        "No local referralsLoading state",
        DASHBOARD,
        kind="not_contains",
        patterns=["const [referralsLoading, setReferralsLoading]"],
    ),
    SourceCheck(
        "referralsLoading not redeclared",
        DASHBOARD,
        kind="count_at_most",
        patterns=["referralsLoading"],
        max_count=3,
    ),
]


def main() -> int:
    parser = argparse.ArgumentParser(description="Source smoke checks for UI fixes")
    parser.add_argument("--root", default=settings.project_root(), help="Web app root")
    args = parser.parse_args()

    results = run_checks(CHECKS, args.root)
    for r in results:
        mark = "✅" if r.passed else "❌"
        suffix = f" ({r.detail})" if r.detail and not r.passed else ""
        print(f"{mark} {r.name}{suffix}")

    failed = sum(1 for r in results if not r.passed)
    print()
    if failed:
        print(f"❌ {failed} of {len(results)} checks failed")
        return 1
    print(f"✅ All {len(results)} checks passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
