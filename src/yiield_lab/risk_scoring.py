from __future__ import annotations

"""Security scoring for stablecoin yield pools."""

from dataclasses import replace
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from .core.models import PoolMetrics, ProtocolDossier, YiieldScoreBreakdown
from .directory import ProtocolDirectory, default_directory
from .scoring.base import score_metrics
from .scoring.enhance import enhance
from .scoring.tiers import classify

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from .core import Pool


def pool_metrics(
    pool: "Pool",
    dossier: ProtocolDossier | None = None,
    *,
    as_of: date | None = None,
) -> PoolMetrics:
    """Collect base scorer inputs for ``pool``.

    Values reported on the pool win. Where the pool carries none, the dossier
    fills in the audit count (number of listed auditors), the protocol age
    (days since ``launched``) and the exploit count.
    """

    audits = pool.audits
    age_days = pool.protocol_age_days
    exploits = pool.exploits
    if dossier is not None:
        if audits <= 0:
            audits = len(dossier.auditors)
        if age_days <= 0 and dossier.launched is not None:
            today = as_of or datetime.now(tz=UTC).date()
            age_days = max((today - dossier.launched).days, 0)
        if exploits <= 0:
            exploits = dossier.exploits
    return PoolMetrics(
        audits=audits,
        protocol_age_days=age_days,
        tvl_usd=pool.tvl_usd,
        exploits=exploits,
    )


def score_breakdown(
    pool: "Pool",
    *,
    directory: ProtocolDirectory | None = None,
    as_of: date | None = None,
) -> YiieldScoreBreakdown:
    """Return the full Yiield score breakdown for ``pool``.

    Pools whose project has no curated dossier keep their base score.
    """

    if directory is None:
        directory = default_directory()
    dossier = directory.resolve(pool.project)
    base = score_metrics(pool_metrics(pool, dossier, as_of=as_of))
    return enhance(base.total, dossier)


def score_pool(
    pool: "Pool",
    *,
    directory: ProtocolDirectory | None = None,
    as_of: date | None = None,
) -> "Pool":
    """Return a new :class:`~yiield_lab.core.Pool` with its scores filled in."""

    breakdown = score_breakdown(pool, directory=directory, as_of=as_of)
    return replace(
        pool,
        security_score=breakdown.base_score,
        yiield_score=breakdown.total,
        security_rating=classify(breakdown.total),
    )


__all__ = ["pool_metrics", "score_breakdown", "score_pool"]
