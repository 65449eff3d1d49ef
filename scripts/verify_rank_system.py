#!/usr/bin/env python3
"""
Verification Script: rank tiers and commission arithmetic.

Usage:
    python scripts/verify_rank_system.py            # static table + sample users
    python scripts/verify_rank_system.py --live     # distribution from Firestore users
"""
import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dlxops.services.commission import check_commission_table
from dlxops.services.ranks import RANK_DEFINITIONS, rank_distribution

TEST_AMOUNT = 1000
EXPECTED_COMMISSIONS = {
    "starter": 0,
    "dlx-associate": 250,
    "dlx-executive": 300,
    "dlx-director": 350,
    "dlx-president": 450,
}

SAMPLE_USERS = [
    {"id": "1", "rank": "starter"},
    {"id": "2", "rank": "dlx-associate"},
    {"id": "3", "rank": "dlx-executive"},
    {"id": "4", "rank": "dlx-director"},
    {"id": "5", "rank": "dlx-president"},
    {"id": "6", "rank": "starter"},
    {"id": "7", "rank": "dlx-associate"},
    {"id": "8"},
]


def load_live_users():
    from dlxops.firebase import db
    return [doc.to_dict() or {} for doc in db.collection("users").stream()]


def main() -> int:
    parser = argparse.ArgumentParser(description="Verify rank definitions and commission math")
    parser.add_argument("--live", action="store_true", help="Read users from Firestore for the distribution")
    args = parser.parse_args()

    print("=" * 50)
    print("  RANK SYSTEM VERIFICATION")
    print("=" * 50)

    print("\nRank definitions:")
    for rank_id, rank in RANK_DEFINITIONS.items():
        print(f"  {rank_id}: {rank.name} ({rank.commission}% commission) - {rank.color}")

    print(f"\nCommission on ${TEST_AMOUNT}:")
    failures = 0
    for rank_id, result, expected, passed in check_commission_table(TEST_AMOUNT, EXPECTED_COMMISSIONS):
        mark = "✅" if passed else "❌"
        print(f"  {mark} {rank_id}: ${TEST_AMOUNT} → ${result.commission:g} commission → ${result.net:g} net (expected ${expected})")
        if not passed:
            failures += 1

    users = load_live_users() if args.live else SAMPLE_USERS
    print(f"\nRank distribution ({'live' if args.live else 'sample'}, {len(users)} users):")
    for rank_id, count in sorted(rank_distribution(users).items()):
        print(f"  {rank_id}: {count} users")

    print("=" * 50)
    if failures:
        print(f"  ❌ {failures} COMMISSION CHECKS FAILED")
    else:
        print("  ✅ ALL COMMISSION CHECKS PASSED")
    print("=" * 50)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
