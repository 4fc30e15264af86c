"""Immutable data models used throughout YiieldLab."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import UTC, date, datetime
from typing import Any, Literal

SecurityRating = Literal["excellent", "good", "moderate", "risky", "danger"]
TeamStatus = Literal["doxxed", "verified", "anonymous"]
GovernanceType = Literal["dao", "multisig", "timelock"]

TEAM_STATUSES: tuple[str, ...] = ("doxxed", "verified", "anonymous")
GOVERNANCE_TYPES: tuple[str, ...] = ("dao", "multisig", "timelock")


@dataclass(frozen=True)
class Pool:
    """Snapshot description of a stablecoin yield pool."""

    name: str
    project: str
    chain: str
    stablecoin: str
    tvl_usd: float
    apy: float  # decimal fraction, e.g. 0.08 for 8%
    base_apy: float = 0.0
    reward_apy: float = 0.0
    pool_id: str = ""
    symbol: str = ""
    source: str = "custom"
    audits: int = 0
    protocol_age_days: int = 0
    exploits: int = 0
    security_score: float = 0.0  # 0-100, pool-observable base score
    yiield_score: float = 0.0  # 0-100, base score enhanced with dossier bonuses
    security_rating: SecurityRating = "danger"
    timestamp: float = 0.0  # unix epoch; 0 means unknown

    def to_dict(self) -> dict[str, Any]:
        """Serialise the pool to a dictionary suitable for DataFrame creation."""

        data = asdict(self)
        # for readability in CSV outputs
        data["timestamp_iso"] = (
            datetime.fromtimestamp(self.timestamp or 0, tz=UTC).isoformat()
            if self.timestamp
            else ""
        )
        return data


@dataclass(frozen=True)
class PoolMetrics:
    """Pool-observable inputs of the base security scorer."""

    audits: int
    protocol_age_days: int
    tvl_usd: float
    exploits: int


@dataclass(frozen=True)
class SecurityFactors:
    """Per-factor base score; each factor is worth at most 25 points."""

    audit_score: int
    age_score: int
    tvl_score: int
    exploit_score: int
    total: int


@dataclass(frozen=True)
class AuditorRecord:
    name: str
    tier: int  # 1 = most rigorous
    report_url: str | None = None


@dataclass(frozen=True)
class InsuranceRecord:
    provider: str
    coverage_usd: float
    url: str | None = None


@dataclass(frozen=True)
class GovernanceRecord:
    has_governance: bool
    type: GovernanceType | None = None
    description: str | None = None


@dataclass(frozen=True)
class ProtocolDossier:
    """Curated due-diligence record for a protocol.

    Dossiers are maintained by hand and loaded once; scoring code only reads
    them.
    """

    name: str
    slug: str
    team_status: TeamStatus
    auditors: tuple[AuditorRecord, ...] = ()
    insurance: InsuranceRecord | None = None
    governance: GovernanceRecord | None = None
    team_description: str | None = None
    notes: str | None = None
    launched: date | None = None
    exploits: int = 0


@dataclass(frozen=True)
class YiieldScoreBreakdown:
    """Base score plus each dossier bonus, kept for transparency."""

    base_score: float
    auditor_tier_bonus: int
    team_verification_bonus: int
    insurance_bonus: int
    governance_bonus: int
    raw_total: float  # at most 120
    total: float  # normalised to [0, 100]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


__all__ = [
    "AuditorRecord",
    "GOVERNANCE_TYPES",
    "GovernanceRecord",
    "GovernanceType",
    "InsuranceRecord",
    "Pool",
    "PoolMetrics",
    "ProtocolDossier",
    "SecurityFactors",
    "SecurityRating",
    "TEAM_STATUSES",
    "TeamStatus",
    "YiieldScoreBreakdown",
]
