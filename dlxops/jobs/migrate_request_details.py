"""
Migration: serviceRequests.requestDetails stored as a JSON string -> structured map.

Usage:
    python -m dlxops.jobs.migrate_request_details [--dry-run]
"""
import argparse
import json
import logging
import os

from dlxops import settings
from dlxops.firebase import db

logger = logging.getLogger("dlxops.migrate_request_details")

COLLECTION = "serviceRequests"


def parse_request_details(raw: str):
    """Decode a stringified requestDetails. Raises ValueError unless it is a JSON object or array."""
    parsed = json.loads(raw)
    if not isinstance(parsed, (dict, list)):
        raise ValueError(f"requestDetails decodes to {type(parsed).__name__}, expected object")
    return parsed


def migrate_request_details(dry_run: bool = False) -> dict:
    scanned = 0
    migrated = 0
    already_structured = 0
    errors = 0

    batch = db.batch()
    pending = 0
    limit = settings.batch_size()

    for doc in db.collection(COLLECTION).stream():
        scanned += 1
        data = doc.to_dict() or {}
        details = data.get("requestDetails")
        if not isinstance(details, str):
            already_structured += 1
            continue

        try:
            parsed = parse_request_details(details)
        except ValueError as e:
            logger.warning("Failed to parse requestDetails for %s: %s", doc.id, e)
            errors += 1
            continue
        except Exception as exc:
            # e.g. RecursionError on pathologically nested JSON
            logger.error("Failed to migrate requestDetails for %s: %s", doc.id, exc)
            errors += 1
            continue

        migrated += 1
        if dry_run:
            logger.info("[DRY RUN] would migrate %s", doc.id)
            continue

        batch.update(doc.reference, {"requestDetails": parsed})
        pending += 1
        if pending >= limit:
            batch.commit()
            logger.info("Committed batch of %s requests", pending)
            batch = db.batch()
            pending = 0

    if pending:
        batch.commit()
        logger.info("Committed final batch of %s requests", pending)

    return {
        "scanned": scanned,
        "migrated": migrated,
        "already_structured": already_structured,
        "errors": errors,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Convert stringified requestDetails to maps")
    parser.add_argument("--dry-run", action="store_true", help="Log changes without writing")
    args = parser.parse_args()

    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    result = migrate_request_details(dry_run=args.dry_run)
    logger.info(
        "Migration completed. scanned=%s migrated=%s already_structured=%s errors=%s",
        result["scanned"], result["migrated"], result["already_structured"], result["errors"],
    )
    if result["errors"]:
        logger.warning("Some requests could not be parsed; see warnings above")


if __name__ == "__main__":
    main()
