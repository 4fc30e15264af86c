from __future__ import annotations

from collections.abc import Sequence
import math
from typing import TYPE_CHECKING, Any

import pandas as pd

from ..scoring.tiers import SECURITY_RATINGS

if TYPE_CHECKING:
    from ..core import PoolRepository


def _coerce_float(value: object) -> float:
    """Best-effort conversion to ``float`` returning ``nan`` on failure."""

    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return float("nan")


def weighted_mean(values: Sequence[object], weights: Sequence[object]) -> float:
    """Compute a weighted mean while skipping ``NaN`` pairs and zero weight sums."""

    vals = list(values)
    wts = list(weights)
    if not vals or not wts or len(vals) != len(wts):
        return float("nan")

    contributions: list[float] = []
    cleaned_weights: list[float] = []
    for raw_value, raw_weight in zip(vals, wts):
        value = _coerce_float(raw_value)
        weight = _coerce_float(raw_weight)
        if math.isnan(value) or math.isnan(weight):
            continue
        contributions.append(value * weight)
        cleaned_weights.append(weight)

    if not contributions:
        return float("nan")

    weight_sum = math.fsum(cleaned_weights)
    if not math.isfinite(weight_sum) or weight_sum == 0.0:
        return float("nan")

    return math.fsum(contributions) / weight_sum


def _group(df: pd.DataFrame, key: str) -> pd.DataFrame:
    if df.empty:
        return df
    g = df.groupby(key).agg(
        pools=("name", "count"),
        tvl=("tvl_usd", "sum"),
        apy_avg=("apy", "mean"),
        apy_wavg=("apy", lambda x: weighted_mean(x.tolist(), df.loc[x.index, "tvl_usd"].tolist())),
        score_avg=("yiield_score", "mean"),
    )
    return g.reset_index().sort_values("tvl", ascending=False, ignore_index=True)


class Metrics:
    @staticmethod
    def weighted_mean(values: Sequence[object], weights: Sequence[object]) -> float:
        return weighted_mean(values, weights)

    @staticmethod
    def groupby_chain(repo: "PoolRepository") -> pd.DataFrame:
        return _group(repo.to_dataframe(), "chain")

    @staticmethod
    def groupby_stablecoin(repo: "PoolRepository") -> pd.DataFrame:
        return _group(repo.to_dataframe(), "stablecoin")

    @staticmethod
    def rating_distribution(repo: "PoolRepository") -> pd.DataFrame:
        """Pool count and TVL per security rating, every rating included."""

        df = repo.to_dataframe()
        index = pd.Index(SECURITY_RATINGS, name="security_rating")
        if df.empty:
            return pd.DataFrame({"pools": 0, "tvl": 0.0}, index=index).reset_index()
        g = df.groupby("security_rating").agg(pools=("name", "count"), tvl=("tvl_usd", "sum"))
        g = g.reindex(index).fillna({"pools": 0, "tvl": 0.0})
        g["pools"] = g["pools"].astype(int)
        return g.reset_index()

    @staticmethod
    def top_n(repo: "PoolRepository", n: int = 10, key: str = "apy") -> pd.DataFrame:
        df = repo.to_dataframe()
        if df.empty:
            return df
        return df.sort_values(key, ascending=False).head(n)

    @staticmethod
    def summary_stats(repo: "PoolRepository") -> dict[str, Any]:
        """Headline figures for a set of listings."""

        df = repo.to_dataframe()
        if df.empty:
            return {
                "total_tvl": 0.0,
                "average_apy": float("nan"),
                "average_security_score": float("nan"),
                "average_yiield_score": float("nan"),
                "total_pools": 0,
                "protocol_count": 0,
                "chain_count": 0,
                "stablecoin_count": 0,
            }
        return {
            "total_tvl": float(df["tvl_usd"].sum()),
            "average_apy": float(df["apy"].mean()),
            "average_security_score": float(df["security_score"].mean()),
            "average_yiield_score": float(df["yiield_score"].mean()),
            "total_pools": int(len(df)),
            "protocol_count": int(df["project"].nunique()),
            "chain_count": int(df["chain"].nunique()),
            "stablecoin_count": int(df["stablecoin"].nunique()),
        }


__all__ = ["Metrics", "weighted_mean"]
