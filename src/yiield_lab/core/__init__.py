"""Core data structures for :mod:`yiield_lab`.

This subpackage groups the fundamental models and the pool repository so
they can be shared without importing the entire public interface exposed in
:mod:`yiield_lab.__init__`.
"""

from __future__ import annotations

from .constants import MAX_APY, MIN_SECURITY_SCORE, MIN_TVL_USD, STABLE_TOKENS, SUPPORTED_CHAINS
from .models import (
    AuditorRecord,
    GovernanceRecord,
    InsuranceRecord,
    Pool,
    PoolMetrics,
    ProtocolDossier,
    SecurityFactors,
    SecurityRating,
    YiieldScoreBreakdown,
)
from .repositories import PoolRepository

__all__ = [
    "AuditorRecord",
    "GovernanceRecord",
    "InsuranceRecord",
    "MAX_APY",
    "MIN_SECURITY_SCORE",
    "MIN_TVL_USD",
    "Pool",
    "PoolMetrics",
    "PoolRepository",
    "ProtocolDossier",
    "STABLE_TOKENS",
    "SUPPORTED_CHAINS",
    "SecurityFactors",
    "SecurityRating",
    "YiieldScoreBreakdown",
]
