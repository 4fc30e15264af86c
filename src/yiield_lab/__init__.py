"""
YiieldLab: security scoring and analytics for stablecoin yield pools.

Design goals:
- Pure, deterministic scoring core (base score, Yiield score, risk tiers)
- Curated protocol dossiers loaded once and resolved by free-text name
- Extensible data adapters (DefiLlama, custom CSV, ...)
- Immutable data model (Pool) + light repository
- File-first reports and matplotlib charts
"""

from __future__ import annotations

from . import reporting, risk_scoring, scoring
from .analytics import Metrics
from .core import (
    AuditorRecord,
    GovernanceRecord,
    InsuranceRecord,
    Pool,
    PoolMetrics,
    PoolRepository,
    ProtocolDossier,
    SecurityFactors,
    SecurityRating,
    YiieldScoreBreakdown,
)
from .directory import ProtocolDirectory, default_directory, load_directory, resolve
from .pipeline import Pipeline
from .scoring import classify, enhance, score_base
from .sources import CSVSource, DataSource, DefiLlamaSource
from .visualization import Visualizer

__all__ = [
    "AuditorRecord",
    "CSVSource",
    "DataSource",
    "DefiLlamaSource",
    "GovernanceRecord",
    "InsuranceRecord",
    "Metrics",
    "Pipeline",
    "Pool",
    "PoolMetrics",
    "PoolRepository",
    "ProtocolDirectory",
    "ProtocolDossier",
    "SecurityFactors",
    "SecurityRating",
    "Visualizer",
    "YiieldScoreBreakdown",
    "classify",
    "default_directory",
    "enhance",
    "load_directory",
    "reporting",
    "resolve",
    "risk_scoring",
    "score_base",
    "scoring",
]
