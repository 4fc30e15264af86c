"""Risk tier classification and display styling."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

from ..core.models import SecurityRating

# (lower bound inclusive, rating), highest first.
RATING_THRESHOLDS: tuple[tuple[float, SecurityRating], ...] = (
    (80.0, "excellent"),
    (60.0, "good"),
    (40.0, "moderate"),
    (20.0, "risky"),
)

SECURITY_RATINGS: tuple[SecurityRating, ...] = (
    "excellent",
    "good",
    "moderate",
    "risky",
    "danger",
)


@dataclass(frozen=True)
class RatingStyle:
    label: str
    color: str
    background: str


RATING_STYLES: Mapping[str, RatingStyle] = {
    "excellent": RatingStyle("Excellent", "#22c55e", "#22c55e1a"),
    "good": RatingStyle("Good", "#84cc16", "#84cc161a"),
    "moderate": RatingStyle("Moderate", "#eab308", "#eab3081a"),
    "risky": RatingStyle("Risky", "#f97316", "#f973161a"),
    "danger": RatingStyle("Danger", "#ef4444", "#ef44441a"),
}

UNKNOWN_STYLE = RatingStyle("Unknown", "#6b7280", "#6b72801a")


def classify(score: float) -> SecurityRating:
    """Map a score to its tier; anything below 20, and ``NaN``, is ``danger``."""

    for bound, rating in RATING_THRESHOLDS:
        if score >= bound:
            return rating
    return "danger"


def rating_style(rating: str) -> RatingStyle:
    return RATING_STYLES.get(rating, UNKNOWN_STYLE)


def format_score(score: float) -> str:
    if score is None or math.isnan(score):
        return "n/a"
    return f"{score:.1f}"


__all__ = [
    "RATING_STYLES",
    "RATING_THRESHOLDS",
    "RatingStyle",
    "SECURITY_RATINGS",
    "UNKNOWN_STYLE",
    "classify",
    "format_score",
    "rating_style",
]
