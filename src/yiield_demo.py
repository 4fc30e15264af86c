from __future__ import annotations

import logging
import os
import sys
import tomllib
from pathlib import Path
from typing import Any, cast

from yiield_lab import (
    CSVSource,
    DefiLlamaSource,
    Metrics,
    Pipeline,
    Visualizer,
    default_directory,
    load_directory,
)
from yiield_lab.core import MIN_SECURITY_SCORE
from yiield_lab.reporting import cross_section_report
from yiield_lab.scoring import format_score


logger = logging.getLogger(__name__)


def load_config(path: str | Path | None) -> dict[str, Any]:
    """Load configuration from a TOML file and merge with defaults.

    Parameters
    ----------
    path:
        Optional path to a configuration file. When ``None`` or missing, the
        built-in defaults are used.

    Returns
    -------
    dict[str, Any]
        Configuration dictionary with any file overrides applied.
    """

    default = {
        "source": {
            "kind": "csv",
            "path": str(Path(__file__).with_name("sample_pools.csv")),
            "cache_path": None,
            "stable_only": True,
        },
        "directory": {"path": None, "whitelist_only": False},
        "filters": {
            "min_tvl": 100_000,
            "min_apy": 0.0,
            "min_security_score": MIN_SECURITY_SCORE,
            # "chains": ["Ethereum"],
            # "stablecoins": ["USDC"],
        },
        "output": {"outdir": None, "show": True, "charts": ["rating", "scatter", "chain"]},
        "reporting": {"top_n": 10, "rank_by": "yiield_score"},
    }

    cfg_path = Path(path) if path else None

    if cfg_path and cfg_path.is_file():
        with open(cfg_path, "rb") as f:
            file_cfg = tomllib.load(f)

        for k, v in file_cfg.items():
            if isinstance(v, dict) and k in default and isinstance(default[k], dict):
                cast(dict, default[k]).update(v)
            else:
                default[k] = v
    elif cfg_path:
        print(f"[WARN] Config file not found at {cfg_path}. Using defaults.")

    return default


def apply_env_overrides(cfg: dict[str, Any]) -> dict[str, Any]:
    """Apply ``YIIELD_*`` environment variables on top of ``cfg``."""

    if csv_env := os.getenv("YIIELD_CSV"):
        cfg.setdefault("source", {}).update({"kind": "csv", "path": csv_env})
    if outdir_env := os.getenv("YIIELD_OUTDIR"):
        cfg.setdefault("output", {})["outdir"] = outdir_env
    if protocols_env := os.getenv("YIIELD_PROTOCOLS"):
        cfg.setdefault("directory", {})["path"] = protocols_env
    if score_env := os.getenv("YIIELD_MIN_SCORE"):
        try:
            cfg.setdefault("filters", {})["min_security_score"] = float(score_env)
        except ValueError:
            logger.warning("Ignoring non-numeric YIIELD_MIN_SCORE=%r", score_env)
    return cfg


def build_source(source_cfg: dict[str, Any]) -> CSVSource | DefiLlamaSource:
    kind = str(source_cfg.get("kind", "csv")).lower()
    if kind == "csv":
        return CSVSource(str(source_cfg["path"]))
    if kind == "defillama":
        options: dict[str, Any] = {}
        if "min_tvl" in source_cfg:
            options["min_tvl"] = float(source_cfg["min_tvl"])
        if "max_apy" in source_cfg:
            options["max_apy"] = float(source_cfg["max_apy"])
        # an empty list lifts the default chain allowlist
        if "chains" in source_cfg:
            options["chains"] = source_cfg["chains"] or None
        if source_cfg.get("protocols"):
            options["protocols"] = source_cfg["protocols"]
        return DefiLlamaSource(
            stable_only=bool(source_cfg.get("stable_only", True)),
            cache_path=source_cfg.get("cache_path") or None,
            **options,
        )
    raise ValueError(f"Unknown source kind: {kind!r}")


def main() -> None:
    """Run the demo using configuration from file or environment variables."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    cfg_file = os.getenv("YIIELD_CONFIG") or (sys.argv[1] if len(sys.argv) > 1 else None)
    cfg = apply_env_overrides(load_config(cfg_file))

    dir_cfg = cfg.get("directory", {})
    directory = load_directory(dir_cfg["path"]) if dir_cfg.get("path") else default_directory()
    logger.info("Loaded %d protocol dossiers", len(directory))

    src = build_source(cfg.get("source", {}))
    repo = Pipeline(
        [src],
        directory=directory,
        whitelist_only=bool(dir_cfg.get("whitelist_only", False)),
    ).run()

    # Apply filters
    f = cfg.get("filters", {})
    filtered = repo.filter(
        min_tvl=float(f.get("min_tvl", 0.0)),
        min_apy=float(f.get("min_apy", 0.0)),
        min_security_score=float(f.get("min_security_score", 0.0)),
        chains=f.get("chains"),
        stablecoins=f.get("stablecoins"),
        protocols=f.get("protocols"),
    )
    print(f"Pools after filter: {len(filtered)} of {len(repo)}")

    rep = cfg.get("reporting", {})
    top_n = int(rep.get("top_n", 10))
    rank_by = str(rep.get("rank_by", "yiield_score"))
    for pool in list(filtered.sort_by(rank_by))[:top_n]:
        print(
            f"{pool.name:<32} {pool.chain:<10} APY {pool.apy * 100:6.2f}%  "
            f"score {format_score(pool.yiield_score):>5} ({pool.security_rating})"
        )

    # Outputs
    out = cfg.get("output", {})
    outdir = Path(out["outdir"]) if out.get("outdir") else None
    show = bool(out.get("show", True)) if not outdir else False
    charts = out.get("charts", [])

    if outdir:
        paths = cross_section_report(filtered, outdir, top_n=top_n, rank_by=rank_by)
        logger.info("Wrote %d report files to %s", len(paths), outdir)

    if "rating" in charts:
        Visualizer.bar_rating_distribution(
            Metrics.rating_distribution(filtered),
            save_path=str(outdir / "bar_rating_distribution.png") if outdir else None,
            show=show,
        )
    if "scatter" in charts:
        Visualizer.scatter_tvl_apy(
            filtered.to_dataframe(),
            title="TVL vs APY (colour = security rating)",
            save_path=str(outdir / "scatter_tvl_apy.png") if outdir else None,
            show=show,
        )
    if "chain" in charts:
        Visualizer.bar_group_chain(
            Metrics.groupby_chain(filtered),
            save_path=str(outdir / "bar_group_chain.png") if outdir else None,
            show=show,
        )


if __name__ == "__main__":
    main()
