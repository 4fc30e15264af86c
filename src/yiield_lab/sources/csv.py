"""CSV-backed data source implementations."""

from __future__ import annotations

from datetime import UTC, datetime

import pandas as pd

from ..core import Pool


class CSVSource:
    """Load pools from a CSV mapping columns to :class:`Pool` fields."""

    REQUIRED = {"name", "project", "chain", "stablecoin", "tvl_usd", "apy"}

    def __init__(self, path: str) -> None:
        self.path = path

    def fetch(self) -> list[Pool]:
        df = pd.read_csv(self.path)
        missing = self.REQUIRED.difference(df.columns)
        if missing:
            raise ValueError(f"CSV missing columns: {sorted(missing)}")
        now = datetime.now(tz=UTC).timestamp()
        df = df.fillna(
            {
                "base_apy": 0.0,
                "reward_apy": 0.0,
                "pool_id": "",
                "symbol": "",
                "source": "csv",
                "audits": 0,
                "protocol_age_days": 0,
                "exploits": 0,
                "timestamp": now,
            }
        )
        pools: list[Pool] = []
        for _, r in df.iterrows():
            pools.append(
                Pool(
                    name=str(r["name"]),
                    project=str(r["project"]),
                    chain=str(r["chain"]),
                    stablecoin=str(r["stablecoin"]),
                    tvl_usd=float(r["tvl_usd"]),
                    apy=float(r["apy"]),
                    base_apy=float(r.get("base_apy", 0.0)),
                    reward_apy=float(r.get("reward_apy", 0.0)),
                    pool_id=str(r.get("pool_id", "")),
                    symbol=str(r.get("symbol", "")),
                    source=str(r.get("source", "csv")),
                    audits=int(r.get("audits", 0)),
                    protocol_age_days=int(r.get("protocol_age_days", 0)),
                    exploits=int(r.get("exploits", 0)),
                    timestamp=float(r.get("timestamp", now)),
                )
            )
        return pools


__all__ = ["CSVSource"]
