from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

REFERRAL_CODE_LENGTH = 8
MIN_USERS = 3
# Users at index 3..5 become extra level-1 referrals of the root user
EXTRA_LEVEL1_END = 6
INACTIVE_USER_INDEX = 4
INACTIVE_AFTER = timedelta(hours=25)


def referral_code_for(uid: str) -> str:
    return uid[-REFERRAL_CODE_LENGTH:]


@dataclass
class ReferralUpdate:
    uid: str
    fields: Dict[str, Any] = field(default_factory=dict)
    touch_activity: bool = True
    label: str = ""


def plan_referral_chain(user_ids: Sequence[str], now: Optional[datetime] = None) -> List[ReferralUpdate]:
    """
    Build a three-level test chain: user1 <- user2 <- user3, plus users 4..6
    as extra direct referrals of user1. User5 is backdated to look inactive.

    Returns an empty plan when fewer than three users exist.
    """
    if len(user_ids) < MIN_USERS:
        return []
    now = now or datetime.now(timezone.utc)

    root, level1, level2 = user_ids[0], user_ids[1], user_ids[2]
    root_code = referral_code_for(root)

    plan = [
        ReferralUpdate(root, {"referralCode": root_code}, label="referrer"),
        ReferralUpdate(level1, {"referrerCode": root_code}, label="level 1"),
        ReferralUpdate(level2, {"referrerCode": referral_code_for(level1)}, label="level 2"),
    ]
    for uid in user_ids[MIN_USERS:EXTRA_LEVEL1_END]:
        plan.append(ReferralUpdate(uid, {"referrerCode": root_code}, label="level 1"))

    if len(user_ids) > INACTIVE_USER_INDEX:
        plan.append(ReferralUpdate(
            user_ids[INACTIVE_USER_INDEX],
            {"lastActivity": now - INACTIVE_AFTER},
            touch_activity=False,
            label="inactive",
        ))
    return plan
