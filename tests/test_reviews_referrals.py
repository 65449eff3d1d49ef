import random
from datetime import datetime, timedelta, timezone

import pytest

from dlxops.services.referrals import plan_referral_chain, referral_code_for
from dlxops.services.reviews import (
    MILD_NEGATIVE_TEXTS,
    POSITIVE_TEXTS,
    ReviewSeedOptions,
    generate_review,
    generate_reviews,
    parse_range,
    plan_review_counts,
)


class TestReviewOptions:

    def test_defaults(self):
        opts = ReviewSeedOptions()
        assert (opts.min_reviews, opts.max_reviews) == (4, 18)
        assert (opts.pos_min, opts.pos_max) == (70, 95)

    def test_clamping(self):
        opts = ReviewSeedOptions(min_reviews=0, max_reviews=-3, pos_min=120, pos_max=10)
        assert opts.min_reviews == 1
        assert opts.max_reviews == 1
        assert opts.pos_min == 95
        assert opts.pos_max == 95

    def test_parse_range(self):
        assert parse_range("4-18", (1, 2)) == (4, 18)
        assert parse_range(" 5 ", (1, 2)) == (5, 5)
        assert parse_range(None, (1, 2)) == (1, 2)
        with pytest.raises(ValueError):
            parse_range("x-y", (1, 2))


class TestReviewGeneration:

    def test_fixed_counts(self):
        opts = ReviewSeedOptions(min_reviews=10, max_reviews=10, pos_min=70, pos_max=70)
        assert plan_review_counts(opts, random.Random(0)) == (7, 3)

    def test_ratings_by_sentiment(self):
        rng = random.Random(42)
        for _ in range(50):
            good = generate_review(True, rng)
            bad = generate_review(False, rng)
            assert good["sentiment"] == "positive" and 4 <= good["rating"] <= 5
            assert bad["sentiment"] == "mild_negative" and 3 <= bad["rating"] <= 4

    def test_fixed_length_uses_base_text(self):
        rng = random.Random(1)
        review = generate_review(False, rng, random_length=False, language="hi")
        assert review["text"] in MILD_NEGATIVE_TEXTS
        assert review["language"] == "hi"

    def test_extra_sentence_appended(self):
        rng = random.Random(3)
        texts = [generate_review(True, rng)["text"] for _ in range(40)]
        assert any(t not in POSITIVE_TEXTS for t in texts)

    def test_generate_reviews_within_bounds(self):
        opts = ReviewSeedOptions(min_reviews=2, max_reviews=6)
        rng = random.Random(7)
        for _ in range(20):
            assert 2 <= len(generate_reviews(opts, rng)) <= 6


class TestReferralPlan:

    NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def test_needs_three_users(self):
        assert plan_referral_chain(["a", "b"], now=self.NOW) == []

    def test_three_level_chain(self):
        users = ["user-000000001", "user-000000002", "user-000000003"]
        plan = plan_referral_chain(users, now=self.NOW)
        assert [u.uid for u in plan] == users
        assert plan[0].fields == {"referralCode": "00000001"}
        assert plan[1].fields == {"referrerCode": "00000001"}
        assert plan[2].fields == {"referrerCode": "00000002"}
        assert all(u.touch_activity for u in plan)

    def test_extra_level1_and_inactive(self):
        users = [f"uid-{i:010d}" for i in range(8)]
        plan = plan_referral_chain(users, now=self.NOW)
        root_code = referral_code_for(users[0])

        level1_extra = [u.uid for u in plan if u.label == "level 1" and u.uid != users[1]]
        assert level1_extra == users[3:6]
        assert all(u.fields["referrerCode"] == root_code for u in plan if u.uid in users[3:6] and u.label == "level 1")
        assert users[6] not in [u.uid for u in plan]

        inactive = plan[-1]
        assert inactive.uid == users[4]
        assert inactive.touch_activity is False
        assert inactive.fields["lastActivity"] == self.NOW - timedelta(hours=25)

    def test_short_ids_keep_whole_id(self):
        assert referral_code_for("abc") == "abc"
