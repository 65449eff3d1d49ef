#!/usr/bin/env python3
"""
Report duplicate wallet/dashboard components left in the web app sources.
Nothing is deleted; the output lists what to remove by hand.

Usage:
    python scripts/check_duplicates.py --root ../web
    python scripts/check_duplicates.py --root ../web --scan-content --ext .ts --ext .tsx
"""
import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dlxops import settings
from dlxops.services.source_checks import check_duplicates, find_duplicate_files

DUPLICATE_FILES = [
    "src/pages/Dashboard/WalletEnhanced.tsx",
    "src/hooks/useWallet.js",
    "src/utils/wallet.js",
]

CANONICAL_FILES = [
    "src/pages/Dashboard/Wallet.tsx",
    "src/hooks/useWallet.ts",
    "src/utils/wallet.ts",
]

FILES_TO_SCAN = [
    "src/pages/Dashboard/Wallet.tsx",
    "src/pages/Dashboard/OrdersEnhanced.tsx",
    "src/pages/Dashboard/DashboardHome.tsx",
]


def main() -> int:
    parser = argparse.ArgumentParser(description="Report duplicate source files")
    parser.add_argument("--root", default=settings.project_root(), help="Web app root")
    parser.add_argument("--scan-content", action="store_true", help="Also group files with identical content")
    parser.add_argument("--ext", action="append", dest="extensions", help="Extension filter for --scan-content")
    args = parser.parse_args()

    report = check_duplicates(args.root, DUPLICATE_FILES, CANONICAL_FILES, FILES_TO_SCAN)

    print("📋 DUPLICATE FILES:")
    for path in DUPLICATE_FILES:
        state = "❌ still present" if path in report.remaining_duplicates else "✅ removed"
        print(f"  {path} ({state})")

    print("\n📋 CANONICAL FILES:")
    for path in CANONICAL_FILES:
        state = "❌ missing!" if path in report.missing_canonical else "✅ present"
        print(f"  {path} ({state})")

    print("\n🔍 REFERENCES TO DUPLICATES:")
    if not report.stale_imports:
        print("  ✅ none")
    for path, names in report.stale_imports.items():
        print(f"  ⚠️  {path} references {', '.join(names)}")

    if args.scan_content:
        print("\n🔍 IDENTICAL CONTENT:")
        groups = find_duplicate_files(args.root, args.extensions)
        if not groups:
            print("  ✅ none")
        for group in groups:
            print(f"  ⚠️  {' == '.join(group)}")
        if groups:
            return 1

    return 0 if report.clean else 1


if __name__ == "__main__":
    sys.exit(main())
