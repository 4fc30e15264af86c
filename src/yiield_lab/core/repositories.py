"""In-memory repository for YiieldLab pools."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import pandas as pd

from .models import Pool


class PoolRepository:
    """Lightweight in-memory collection with pandas export."""

    def __init__(self, pools: Iterable[Pool] | None = None) -> None:
        self._pools: list[Pool] = list(pools) if pools else []

    def add(self, pool: Pool) -> None:
        self._pools.append(pool)

    def extend(self, items: Iterable[Pool]) -> None:
        self._pools.extend(items)

    def filter(
        self,
        *,
        min_tvl: float = 0.0,
        min_apy: float = 0.0,
        min_security_score: float = 0.0,
        chains: list[str] | None = None,
        stablecoins: list[str] | None = None,
        protocols: list[str] | None = None,
        ratings: list[str] | None = None,
    ) -> "PoolRepository":
        """Return a new repository with the pools matching every criterion.

        ``min_security_score`` applies to the enhanced Yiield score, which is
        the figure listings are ranked and coloured by.
        """

        res: list[Pool] = []
        for pool in self._pools:
            if pool.tvl_usd < min_tvl:
                continue
            if pool.apy < min_apy:
                continue
            if pool.yiield_score < min_security_score:
                continue
            if chains and pool.chain not in chains:
                continue
            if stablecoins and pool.stablecoin not in stablecoins:
                continue
            if protocols and pool.project not in protocols:
                continue
            if ratings and pool.security_rating not in ratings:
                continue
            res.append(pool)
        return PoolRepository(res)

    def sort_by(self, key: str = "yiield_score", *, descending: bool = True) -> "PoolRepository":
        return PoolRepository(
            sorted(self._pools, key=lambda pool: getattr(pool, key), reverse=descending)
        )

    def get(self, pool_id: str) -> Pool | None:
        for pool in self._pools:
            if pool.pool_id == pool_id:
                return pool
        return None

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([pool.to_dict() for pool in self._pools])

    def __len__(self) -> int:
        return len(self._pools)

    def __iter__(self) -> Iterator[Pool]:
        return iter(self._pools)


__all__ = ["PoolRepository"]
