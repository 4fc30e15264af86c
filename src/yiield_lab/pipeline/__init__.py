from __future__ import annotations

"""Data orchestration pipeline for YiieldLab adapters."""

from collections.abc import Iterable, Iterator, Sequence
from datetime import date
import logging

from ..core import Pool, PoolRepository
from ..directory import ProtocolDirectory, default_directory
from ..risk_scoring import score_pool
from ..sources import DataSource

logger = logging.getLogger(__name__)


def _iter_pools(items: Iterable[object]) -> Iterator[Pool]:
    for item in items:
        if isinstance(item, Pool):
            yield item


def pool_key(pool: Pool) -> str:
    """Identity used to merge listings reported by several sources."""

    if pool.pool_id:
        return pool.pool_id.lower()
    return f"{pool.project}-{pool.chain}-{pool.stablecoin}".lower()


class Pipeline:
    """Fetch pools from every source and attach their security scores.

    Listings sharing a :func:`pool_key` are merged, the later source winning,
    so a custom feed placed after an aggregator overrides its figures. With
    ``whitelist_only`` set, pools whose project has no curated dossier are
    dropped before scoring.
    """

    def __init__(
        self,
        sources: Sequence[DataSource],
        *,
        directory: ProtocolDirectory | None = None,
        whitelist_only: bool = False,
        as_of: date | None = None,
    ) -> None:
        self._sources: list[DataSource] = list(sources)
        self._directory = directory if directory is not None else default_directory()
        self.whitelist_only = whitelist_only
        self.as_of = as_of

    @property
    def directory(self) -> ProtocolDirectory:
        return self._directory

    def run(self) -> PoolRepository:
        merged: dict[str, Pool] = {}
        for source in self._sources:
            try:
                items = source.fetch()
            except Exception as exc:
                logger.warning("Source %s failed: %s", source.__class__.__name__, exc)
                continue
            for pool in _iter_pools(items):
                key = pool_key(pool)
                if key in merged:
                    logger.debug("Pool %s from %s replaces earlier listing", key, pool.source)
                merged[key] = pool

        repo = PoolRepository()
        for pool in merged.values():
            if self.whitelist_only and pool.project not in self._directory:
                logger.debug("Skipping %s: no dossier for %r", pool.name, pool.project)
                continue
            repo.add(score_pool(pool, directory=self._directory, as_of=self.as_of))
        return repo


__all__ = ["Pipeline", "pool_key"]
