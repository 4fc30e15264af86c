"""Base security score from pool-observable metrics.

Each of the four factors contributes at most 25 points through a discrete
threshold table, so the total is always an integer in ``[0, 100]``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from ..core.models import PoolMetrics, SecurityFactors

logger = logging.getLogger(__name__)

MAX_FACTOR_SCORE = 25

# (lower bound, points) pairs, highest bound first; a value earns the points
# of the first bound it reaches.
AUDIT_THRESHOLDS: Sequence[tuple[float, int]] = ((3, 25), (2, 18), (1, 10), (0, 0))
AGE_THRESHOLDS: Sequence[tuple[float, int]] = ((365, 25), (90, 18), (30, 10), (0, 0))
TVL_THRESHOLDS: Sequence[tuple[float, int]] = (
    (100_000_000, 25),
    (10_000_000, 20),
    (1_000_000, 12),
    (0, 5),
)
EXPLOIT_THRESHOLDS: Sequence[tuple[float, int]] = ((2, 0), (1, 10), (0, 25))


def _non_negative(field: str, value: object) -> float:
    """Coerce ``value`` to a float, clamping bad inputs to ``0``.

    Upstream pool data is noisy, so negative, ``NaN`` and non-numeric values
    are mapped to the lower boundary instead of being rejected. Every clamp is
    logged so data-quality issues stay visible.
    """

    try:
        number = float(value)  # type: ignore[arg-type]
    except OverflowError:
        # integers beyond float range sit past every table boundary
        number = math.inf if value > 0 else -math.inf  # type: ignore[operator]
    except (TypeError, ValueError):
        logger.warning("Non-numeric %s=%r clamped to 0", field, value)
        return 0.0
    if math.isnan(number) or number < 0:
        logger.warning("Out-of-range %s=%r clamped to 0", field, value)
        return 0.0
    return number


def _lookup(value: float, thresholds: Sequence[tuple[float, int]]) -> int:
    for bound, points in thresholds:
        if value >= bound:
            return points
    return thresholds[-1][1]


def audit_score(audits: object) -> int:
    return _lookup(_non_negative("audits", audits), AUDIT_THRESHOLDS)


def age_score(protocol_age_days: object) -> int:
    return _lookup(_non_negative("protocol_age_days", protocol_age_days), AGE_THRESHOLDS)


def tvl_score(tvl_usd: object) -> int:
    return _lookup(_non_negative("tvl_usd", tvl_usd), TVL_THRESHOLDS)


def exploit_score(exploits: object) -> int:
    return _lookup(_non_negative("exploits", exploits), EXPLOIT_THRESHOLDS)


def score_base(
    audits: object,
    protocol_age_days: object,
    tvl_usd: object,
    exploits: object,
) -> SecurityFactors:
    """Score a pool from its audit count, protocol age, TVL and exploit count.

    Parameters
    ----------
    audits:
        Number of security audits. Three or more earn the full 25 points.
    protocol_age_days:
        Days since the protocol launched. A year or more earns 25 points.
    tvl_usd:
        Total value locked in USD. ``1e8`` or more earns 25 points.
    exploits:
        Number of past exploits. Any exploit costs most of the 25 points.

    Returns
    -------
    SecurityFactors
        The four sub-scores and their sum.
    """

    factors = (
        audit_score(audits),
        age_score(protocol_age_days),
        tvl_score(tvl_usd),
        exploit_score(exploits),
    )
    return SecurityFactors(*factors, total=sum(factors))


def score_metrics(metrics: PoolMetrics) -> SecurityFactors:
    return score_base(
        metrics.audits,
        metrics.protocol_age_days,
        metrics.tvl_usd,
        metrics.exploits,
    )


__all__ = [
    "AGE_THRESHOLDS",
    "AUDIT_THRESHOLDS",
    "EXPLOIT_THRESHOLDS",
    "MAX_FACTOR_SCORE",
    "TVL_THRESHOLDS",
    "age_score",
    "audit_score",
    "exploit_score",
    "score_base",
    "score_metrics",
    "tvl_score",
]
