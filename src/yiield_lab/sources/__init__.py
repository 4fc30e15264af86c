"""Data source adapters used by :mod:`yiield_lab`."""

from __future__ import annotations

from typing import Protocol

from ..core import Pool, STABLE_TOKENS as _STABLE_TOKENS
from .csv import CSVSource
from .defillama import DefiLlamaSource, detect_stablecoin, make_pool_id


class DataSource(Protocol):
    """Adapter protocol returning pools compatible with :class:`PoolRepository`."""

    def fetch(self) -> list[Pool]: ...


STABLE_TOKENS = _STABLE_TOKENS

__all__ = [
    "DataSource",
    "STABLE_TOKENS",
    "CSVSource",
    "DefiLlamaSource",
    "detect_stablecoin",
    "make_pool_id",
]
