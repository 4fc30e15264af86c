"""Yiield score: the base score enhanced with dossier-derived bonuses."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import Mapping

from ..core.models import (
    AuditorRecord,
    GovernanceRecord,
    InsuranceRecord,
    ProtocolDossier,
    YiieldScoreBreakdown,
)

logger = logging.getLogger(__name__)

# Theoretical maximum of base score plus every bonus (100 + 10 + 5 + 3 + 2).
MAX_RAW_SCORE = 120.0

AUDITOR_TIER_BONUS: Mapping[int, int] = {1: 10, 2: 6, 3: 3}
TEAM_BONUS: Mapping[str, int] = {"doxxed": 5, "verified": 3, "anonymous": 0}
INSURANCE_BONUS = 3
GOVERNANCE_BONUS = 2

# Reputation of audit firms: 1 = elite, 2 = established, 3 = recognised.
AUDITOR_TIERS: Mapping[str, int] = {
    "Trail of Bits": 1,
    "OpenZeppelin": 1,
    "Consensys Diligence": 1,
    "Sigma Prime": 1,
    "ChainSecurity": 1,
    "Spearbit": 1,
    "Certik": 2,
    "PeckShield": 2,
    "Halborn": 2,
    "Quantstamp": 2,
    "Cyfrin": 2,
    "OtterSec": 2,
    "Zellic": 2,
    "BlockSec": 2,
    "Nethermind Security": 2,
    "Slowmist": 2,
    "MixBytes": 2,
    "Cantina": 2,
    "Certora": 2,
    "ABDK": 2,
    "Hacken": 3,
    "Sherlock": 3,
    "Code4rena": 3,
    "Beosin": 3,
    "Ackee Blockchain": 3,
    "Hexens": 3,
    "Statemind": 3,
    "OXORIO": 3,
    "Omniscia": 3,
    "Offside Labs": 3,
}

_TIERS_BY_LOWER_NAME = {name.lower(): tier for name, tier in AUDITOR_TIERS.items()}

TEAM_BADGE_LABELS: Mapping[str, str] = {
    "doxxed": "Public",
    "verified": "Verified",
    "anonymous": "Anon",
}


def auditor_tier(name: str) -> int | None:
    """Return the tier of a known audit firm, ignoring case."""

    return _TIERS_BY_LOWER_NAME.get(name.strip().lower())


def auditor_bonus(auditors: Iterable[AuditorRecord]) -> int:
    """Bonus for the best-tier auditor present; tiers never add up."""

    tiers = {a.tier for a in auditors}
    for tier in sorted(AUDITOR_TIER_BONUS):
        if tier in tiers:
            return AUDITOR_TIER_BONUS[tier]
    return 0


def team_bonus(status: str) -> int:
    return TEAM_BONUS.get(status, 0)


def insurance_bonus(insurance: InsuranceRecord | None) -> int:
    return INSURANCE_BONUS if insurance is not None else 0


def governance_bonus(governance: GovernanceRecord | None) -> int:
    return GOVERNANCE_BONUS if governance is not None and governance.has_governance else 0


def team_badge_label(status: str) -> str:
    return TEAM_BADGE_LABELS.get(status, "Unknown")


def _clamp_score(value: float) -> float:
    return max(0.0, min(value, 100.0))


def enhance(base_score: float, dossier: ProtocolDossier | None = None) -> YiieldScoreBreakdown:
    """Combine ``base_score`` with the bonuses earned by ``dossier``.

    Without a dossier the base score passes through unchanged. With one, the
    raw total (at most 120) is normalised by :data:`MAX_RAW_SCORE`, so a
    protocol missing every bonus is compressed below its base score: a
    perfect base of 100 with no bonuses yields ``83.33``.

    ``base_score`` is expected in ``[0, 100]``; anything else is clamped and
    logged, and the final total is always clamped to ``[0, 100]``.
    """

    try:
        base = float(base_score)
    except OverflowError:
        base = math.inf if base_score > 0 else -math.inf
    except (TypeError, ValueError):
        logger.warning("Non-numeric base score %r treated as 0", base_score)
        base = 0.0
    if math.isnan(base) or not 0.0 <= base <= 100.0:
        logger.warning("Base score %r outside [0, 100]; clamping", base_score)
        base = 0.0 if math.isnan(base) else _clamp_score(base)

    if dossier is None:
        return YiieldScoreBreakdown(
            base_score=base,
            auditor_tier_bonus=0,
            team_verification_bonus=0,
            insurance_bonus=0,
            governance_bonus=0,
            raw_total=base,
            total=base,
        )

    auditor = auditor_bonus(dossier.auditors)
    team = team_bonus(dossier.team_status)
    insurance = insurance_bonus(dossier.insurance)
    governance = governance_bonus(dossier.governance)

    raw_total = base + auditor + team + insurance + governance
    total = min(100.0, raw_total / MAX_RAW_SCORE * 100.0)

    return YiieldScoreBreakdown(
        base_score=base,
        auditor_tier_bonus=auditor,
        team_verification_bonus=team,
        insurance_bonus=insurance,
        governance_bonus=governance,
        raw_total=raw_total,
        total=_clamp_score(total),
    )


__all__ = [
    "AUDITOR_TIERS",
    "AUDITOR_TIER_BONUS",
    "GOVERNANCE_BONUS",
    "INSURANCE_BONUS",
    "MAX_RAW_SCORE",
    "TEAM_BADGE_LABELS",
    "TEAM_BONUS",
    "auditor_bonus",
    "auditor_tier",
    "enhance",
    "governance_bonus",
    "insurance_bonus",
    "team_badge_label",
    "team_bonus",
]
