"""
Seed generated reviews into services/{id}/reviews.

Usage:
    python -m dlxops.jobs.seed_reviews --auto-write firestore \
        --reviews-range 4-18 --positive-range 70-95 --random-length true --language en
"""
import argparse
import logging
import os
import random
from typing import Optional

from google.cloud import firestore

from dlxops import settings
from dlxops.firebase import db
from dlxops.services.reviews import ReviewSeedOptions, generate_reviews, parse_range

logger = logging.getLogger("dlxops.seed_reviews")

COLLECTION = "services"


def seed_reviews_for_service(service_id: str, options: ReviewSeedOptions, rng: random.Random) -> int:
    reviews_col = db.collection(COLLECTION).document(service_id).collection("reviews")
    limit = settings.batch_size()

    batch = db.batch()
    pending = 0
    written = 0
    for review in generate_reviews(options, rng):
        batch.set(reviews_col.document(), {**review, "createdAt": firestore.SERVER_TIMESTAMP})
        pending += 1
        written += 1
        if pending >= limit:
            batch.commit()
            batch = db.batch()
            pending = 0
    if pending:
        batch.commit()
    return written


def seed_reviews(options: ReviewSeedOptions, rng: Optional[random.Random] = None) -> dict:
    rng = rng or random.Random()
    services = list(db.collection(COLLECTION).stream())
    logger.info("Services found: %s", len(services))

    processed = 0
    reviews = 0
    for doc in services:
        reviews += seed_reviews_for_service(doc.id, options, rng)
        processed += 1
        if processed % 5 == 0:
            logger.info("Processed: %s", processed)

    return {"services": processed, "reviews": reviews}


def _parse_bool(value: str) -> bool:
    return str(value).lower() == "true"


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed generated reviews for every service")
    parser.add_argument("--auto-write", default=None, help="Must be 'firestore' to write")
    parser.add_argument("--reviews-range", default="4-18", help="Reviews per service, e.g. 4-18")
    parser.add_argument("--positive-range", default="70-95", help="Positive share in percent, e.g. 70-95")
    parser.add_argument("--random-length", default="true", help="Append an extra sentence at random")
    parser.add_argument("--language", default="en")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible runs")
    args = parser.parse_args()

    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))

    if args.auto_write != "firestore":
        parser.error("Refusing to run without --auto-write firestore")

    try:
        min_reviews, max_reviews = parse_range(args.reviews_range, (4, 18))
        pos_min, pos_max = parse_range(args.positive_range, (70, 95))
    except ValueError:
        parser.error("Ranges must look like A-B with integer bounds")

    options = ReviewSeedOptions(
        min_reviews=min_reviews,
        max_reviews=max_reviews,
        pos_min=pos_min,
        pos_max=pos_max,
        random_length=_parse_bool(args.random_length),
        language=args.language,
    )
    result = seed_reviews(options, random.Random(args.seed))
    logger.info("Completed. services=%s reviews=%s", result["services"], result["reviews"])


if __name__ == "__main__":
    main()
