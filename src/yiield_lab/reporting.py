from __future__ import annotations

import json
import math
from pathlib import Path

from .analytics.metrics import Metrics
from .core import PoolRepository


def _ensure_outdir(outdir: str | Path) -> Path:
    p = Path(outdir)
    p.mkdir(parents=True, exist_ok=True)
    return p


def cross_section_report(
    repo: PoolRepository,
    outdir: str | Path,
    *,
    top_n: int = 10,
    rank_by: str = "yiield_score",
) -> dict[str, Path]:
    """Generate file-first CSV outputs for the given scored repository.

    Parameters
    ----------
    repo:
        Scored pools, as returned by :meth:`yiield_lab.pipeline.Pipeline.run`.
    outdir:
        Directory where reports are written.
    top_n:
        Number of pools to include in ``topN.csv``.
    rank_by:
        Column used to rank ``topN.csv``.

    Returns
    -------
    dict[str, Path]
        Mapping of report label to the written path.

    Writes the following files:
      - pools.csv: every pool with its security score, Yiield score and rating
      - by_chain.csv: aggregated by chain with TVL-weighted APY
      - by_stablecoin.csv: aggregated by stablecoin
      - by_rating.csv: pool count and TVL per security rating
      - topN.csv: top-N pools by ``rank_by``
      - summary.json: headline totals and averages
    """
    out = _ensure_outdir(outdir)
    paths: dict[str, Path] = {}

    df = repo.to_dataframe()
    paths["pools"] = out / "pools.csv"
    df.to_csv(paths["pools"], index=False)

    paths["by_chain"] = out / "by_chain.csv"
    Metrics.groupby_chain(repo).to_csv(paths["by_chain"], index=False)

    paths["by_stablecoin"] = out / "by_stablecoin.csv"
    Metrics.groupby_stablecoin(repo).to_csv(paths["by_stablecoin"], index=False)

    paths["by_rating"] = out / "by_rating.csv"
    Metrics.rating_distribution(repo).to_csv(paths["by_rating"], index=False)

    paths["topN"] = out / "topN.csv"
    Metrics.top_n(repo, n=top_n, key=rank_by).to_csv(paths["topN"], index=False)

    summary = {
        key: (None if isinstance(value, float) and math.isnan(value) else value)
        for key, value in Metrics.summary_stats(repo).items()
    }
    paths["summary"] = out / "summary.json"
    with paths["summary"].open("w") as f:
        json.dump(summary, f, indent=2)

    return paths


__all__ = ["cross_section_report"]
