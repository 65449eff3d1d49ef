"""
Normalize priceUSD / priceINR on databaseMarketingCategories.

  "20"   -> "$20"       "1700"   -> "₹1,700"
  "20-50" -> "$20-$50"  "₹1700"  -> "₹1,700"

Only changed fields are written; re-running on clean data is a no-op.

Usage:
    python -m dlxops.jobs.fix_marketing_prices [--dry-run]
"""
import argparse
import logging
import os

from dlxops import settings
from dlxops.firebase import db
from dlxops.services.currency import price_field_updates

logger = logging.getLogger("dlxops.fix_marketing_prices")

COLLECTION = "databaseMarketingCategories"


def fix_marketing_prices(dry_run: bool = False) -> dict:
    scanned = 0
    updated = 0
    unchanged = 0
    errors = 0

    batch = db.batch()
    pending = 0
    limit = settings.batch_size()

    for doc in db.collection(COLLECTION).stream():
        scanned += 1
        data = doc.to_dict() or {}
        try:
            updates = price_field_updates(data)
        except Exception as exc:
            logger.error("Failed to normalize prices for %s: %s", doc.id, exc)
            errors += 1
            continue
        if not updates:
            unchanged += 1
            continue

        updated += 1
        if dry_run:
            logger.info("[DRY RUN] %s: %s", doc.id, updates)
            continue

        batch.update(doc.reference, updates)
        pending += 1
        if pending >= limit:
            batch.commit()
            logger.info("Committed batch of %s updates", pending)
            batch = db.batch()
            pending = 0

    if pending:
        batch.commit()
        logger.info("Committed final batch of %s updates", pending)

    if not updated:
        logger.info("No changes needed")
    return {"scanned": scanned, "updated": updated, "unchanged": unchanged, "errors": errors}


def main() -> None:
    parser = argparse.ArgumentParser(description="Normalize marketing category prices")
    parser.add_argument("--dry-run", action="store_true", help="Log changes without writing")
    args = parser.parse_args()

    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    result = fix_marketing_prices(dry_run=args.dry_run)
    logger.info(
        "Price fix completed. scanned=%s updated=%s unchanged=%s errors=%s",
        result["scanned"], result["updated"], result["unchanged"], result["errors"],
    )


if __name__ == "__main__":
    main()
