from __future__ import annotations

import random
from typing import List, Optional, Tuple

from pydantic import BaseModel, model_validator

POSITIVE_TEXTS = [
    "Outstanding quality and fast delivery!",
    "Great value for money. Will order again.",
    "Exactly what I needed. Smooth experience.",
    "Professional and reliable service, highly recommended.",
    "Clear communication and solid results.",
    "Exceeded my expectations in every way.",
    "Top-notch support and a polished outcome.",
    "Impressive speed and attention to detail.",
    "Very satisfied with the final deliverable.",
]

MILD_NEGATIVE_TEXTS = [
    "Good overall, but delivery took a bit longer.",
    "Quality is decent; some minor improvements needed.",
    "Service worked fine, documentation could be clearer.",
    "Result was acceptable, but communication was slow at times.",
    "Useful, though a few small issues needed tweaks.",
]

EXTRA_SENTENCES = [
    " The process felt straightforward from start to finish.",
    " Support responded quickly and resolved questions promptly.",
    " The final output was clean and easy to use.",
    " I appreciate the attention to detail and consistency.",
    " Overall, a smooth and efficient experience.",
]


class ReviewSeedOptions(BaseModel):
    """Bounds for generated reviews per service. Out-of-range input is clamped."""
    min_reviews: int = 4
    max_reviews: int = 18
    pos_min: int = 70
    pos_max: int = 95
    random_length: bool = True
    language: str = "en"

    @model_validator(mode="after")
    def _clamp(self):
        self.min_reviews = max(1, self.min_reviews)
        self.max_reviews = max(self.min_reviews, self.max_reviews)
        self.pos_min = min(95, max(0, self.pos_min))
        self.pos_max = min(100, max(self.pos_min, self.pos_max))
        return self


def parse_range(value: Optional[str], default: Tuple[int, int]) -> Tuple[int, int]:
    """Parse "A-B" into (A, B). Raises ValueError on non-integer parts."""
    if not value:
        return default
    low, _, high = str(value).partition("-")
    return int(low.strip()), int(high.strip() or low.strip())


def plan_review_counts(options: ReviewSeedOptions, rng: random.Random) -> Tuple[int, int]:
    """Return (positive_count, mild_negative_count) for one service."""
    count = rng.randint(options.min_reviews, options.max_reviews)
    positive_share = rng.randint(options.pos_min, options.pos_max)
    positive = round(positive_share / 100 * count)
    return positive, max(0, count - positive)


def generate_review(positive: bool, rng: random.Random, *, random_length: bool = True, language: str = "en") -> dict:
    text = rng.choice(POSITIVE_TEXTS if positive else MILD_NEGATIVE_TEXTS)
    if random_length and rng.random() < 0.5:
        text += rng.choice(EXTRA_SENTENCES)
    return {
        "text": text,
        "rating": rng.randint(4, 5) if positive else rng.randint(3, 4),
        "sentiment": "positive" if positive else "mild_negative",
        "language": language,
    }


def generate_reviews(options: ReviewSeedOptions, rng: random.Random) -> List[dict]:
    positive, negative = plan_review_counts(options, rng)
    reviews = [
        generate_review(True, rng, random_length=options.random_length, language=options.language)
        for _ in range(positive)
    ]
    reviews += [
        generate_review(False, rng, random_length=options.random_length, language=options.language)
        for _ in range(negative)
    ]
    return reviews
