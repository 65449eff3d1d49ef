"""
Wire existing users into a test referral chain.

    user1 (referrer)
      └── user2 (level 1)
          └── user3 (level 2)
      └── user4..6 (level 1)

Usage:
    python -m dlxops.jobs.setup_test_referrals
"""
import logging
import os
from datetime import datetime
from typing import Optional

from google.cloud import firestore

from dlxops.firebase import db
from dlxops.services.referrals import MIN_USERS, plan_referral_chain, referral_code_for

logger = logging.getLogger("dlxops.setup_test_referrals")


def setup_test_referrals(now: Optional[datetime] = None) -> dict:
    """Apply the referral plan. A failed user update is logged and counted; the rest still run."""
    user_ids = [doc.id for doc in db.collection("users").stream()]
    if len(user_ids) < MIN_USERS:
        logger.error("Need at least %s users to set up referral relationships (found %s)", MIN_USERS, len(user_ids))
        return {"updated": 0, "errors": 0}

    logger.info("Found %s users", len(user_ids))
    plan = plan_referral_chain(user_ids, now=now)
    updated = 0
    errors = 0
    for update in plan:
        fields = dict(update.fields)
        if update.touch_activity:
            fields["lastActivity"] = firestore.SERVER_TIMESTAMP
        try:
            db.collection("users").document(update.uid).update(fields)
        except Exception as exc:
            logger.error("Failed to update user %s: %s", update.uid, exc)
            errors += 1
            continue
        updated += 1
        logger.info("User %s set as %s: %s", update.uid, update.label, sorted(fields))

    root, level1, level2 = user_ids[:3]
    logger.info(
        "Referral chain: %s (referrer) -> %s (level 1) -> %s (level 2)",
        referral_code_for(root), referral_code_for(level1), referral_code_for(level2),
    )
    return {"updated": updated, "errors": errors}


def main() -> None:
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    result = setup_test_referrals()
    logger.info("Setup completed. updated=%s errors=%s", result["updated"], result["errors"])


if __name__ == "__main__":
    main()
