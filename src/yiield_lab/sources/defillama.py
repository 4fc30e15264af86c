"""DefiLlama adapter returning :class:`~yiield_lab.core.Pool` instances."""

from __future__ import annotations

import json
import logging
import urllib.request
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..core import MAX_APY, MIN_TVL_USD, STABLE_TOKENS, SUPPORTED_CHAINS, Pool

logger = logging.getLogger(__name__)


def detect_stablecoin(symbol: str) -> str | None:
    """Return the canonical stablecoin contained in ``symbol``, if any."""

    upper = symbol.upper()
    for fragment, canonical in STABLE_TOKENS.items():
        if fragment in upper:
            return canonical
    return None


def make_pool_id(project: str, stablecoin: str, chain: str) -> str:
    chain_slug = "-".join(chain.lower().split())
    return f"{project}-{stablecoin.lower()}-{chain_slug}"


class DefiLlamaSource:
    """HTTP client for https://yields.llama.fi/pools.

    Only :data:`~yiield_lab.core.SUPPORTED_CHAINS` are kept unless ``chains``
    says otherwise; pass ``chains=None`` to accept every chain.
    """

    URL = "https://yields.llama.fi/pools"

    def __init__(
        self,
        stable_only: bool = True,
        cache_path: str | None = None,
        *,
        min_tvl: float = MIN_TVL_USD,
        max_apy: float = MAX_APY,
        chains: Iterable[str] | None = SUPPORTED_CHAINS,
        protocols: Iterable[str] | None = None,
    ) -> None:
        self.stable_only = stable_only
        self.cache_path = Path(cache_path) if cache_path else None
        self.min_tvl = min_tvl
        self.max_apy = max_apy
        self.chains = set(chains) if chains is not None else None
        self.protocols = set(protocols) if protocols else None

    def _load(self) -> dict[str, Any]:
        if self.cache_path and self.cache_path.exists():
            with self.cache_path.open() as f:
                return json.load(f)
        with urllib.request.urlopen(self.URL) as resp:  # pragma: no cover - network path
            data = json.load(resp)
        if self.cache_path:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            with self.cache_path.open("w") as f:
                json.dump(data, f)
        return data

    def _stablecoin_for(self, symbol: str) -> str | None:
        upper = symbol.upper()
        # LP tokens qualify only when every leg is a stablecoin
        if "-" in upper and not all(detect_stablecoin(part) for part in upper.split("-")):
            return None
        return detect_stablecoin(upper.split("-")[0])

    def fetch(self) -> list[Pool]:
        try:
            raw = self._load()
        except Exception as exc:  # pragma: no cover - network errors
            logger.warning("DefiLlama request failed: %s", exc)
            return []
        pools: list[Pool] = []
        skipped = 0
        now = datetime.now(tz=UTC).timestamp()
        for item in raw.get("data", []):
            project = str(item.get("project", ""))
            chain = str(item.get("chain", ""))
            symbol = str(item.get("symbol") or "")
            if self.stable_only and not item.get("stablecoin"):
                continue
            if self.protocols is not None and project not in self.protocols:
                continue
            if self.chains is not None and chain not in self.chains:
                continue
            stablecoin = self._stablecoin_for(symbol)
            if stablecoin is None:
                skipped += 1
                continue
            tvl = float(item.get("tvlUsd") or 0.0)
            apy = float(item.get("apy") or 0.0) / 100.0
            if tvl < self.min_tvl or not 0.0 < apy <= self.max_apy:
                skipped += 1
                continue
            base_val = item.get("apyBase") or item.get("apy") or 0.0
            reward_val = item.get("apyReward") or 0.0
            pools.append(
                Pool(
                    name=f"{project}:{symbol}",
                    project=project,
                    chain=chain,
                    stablecoin=stablecoin,
                    tvl_usd=tvl,
                    apy=apy,
                    base_apy=float(base_val) / 100.0,
                    reward_apy=float(reward_val) / 100.0,
                    pool_id=make_pool_id(project, stablecoin, chain),
                    symbol=symbol,
                    source="defillama",
                    timestamp=now,
                )
            )
        logger.info("DefiLlama: %d pools kept, %d skipped", len(pools), skipped)
        return pools


__all__ = ["DefiLlamaSource", "detect_stablecoin", "make_pool_id"]
