"""Security scoring: base score, Yiield score enhancement and risk tiers."""

from __future__ import annotations

from .base import score_base, score_metrics
from .enhance import AUDITOR_TIERS, auditor_tier, enhance, team_badge_label
from .tiers import (
    RATING_STYLES,
    SECURITY_RATINGS,
    UNKNOWN_STYLE,
    classify,
    format_score,
    rating_style,
)

__all__ = [
    "AUDITOR_TIERS",
    "RATING_STYLES",
    "SECURITY_RATINGS",
    "UNKNOWN_STYLE",
    "auditor_tier",
    "classify",
    "enhance",
    "format_score",
    "rating_style",
    "score_base",
    "score_metrics",
    "team_badge_label",
]
