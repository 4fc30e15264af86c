from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from yiield_lab.core import Pool, PoolRepository
from yiield_lab.reporting import cross_section_report


@pytest.fixture
def repo() -> PoolRepository:
    return PoolRepository(
        [
            Pool(
                name="PoolA",
                project="aave-v3",
                chain="Ethereum",
                stablecoin="USDC",
                tvl_usd=100.0,
                apy=0.10,
                security_score=80.0,
                yiield_score=90.0,
                security_rating="excellent",
            ),
            Pool(
                name="PoolB",
                project="fluid",
                chain="Polygon",
                stablecoin="USDT",
                tvl_usd=300.0,
                apy=0.08,
                security_score=60.0,
                yiield_score=65.0,
                security_rating="good",
            ),
            Pool(
                name="PoolC",
                project="venus",
                chain="BSC",
                stablecoin="USDT",
                tvl_usd=50.0,
                apy=0.20,
                security_score=30.0,
                yiield_score=35.0,
                security_rating="risky",
            ),
        ]
    )


def test_cross_section_report_writes_every_file(repo: PoolRepository, tmp_path: Path) -> None:
    paths = cross_section_report(repo, tmp_path / "out", top_n=2)

    assert set(paths) == {"pools", "by_chain", "by_stablecoin", "by_rating", "topN", "summary"}
    for path in paths.values():
        assert path.exists()

    pools = pd.read_csv(paths["pools"])
    assert {"security_score", "yiield_score", "security_rating"} <= set(pools.columns)
    assert len(pools) == 3

    top = pd.read_csv(paths["topN"])
    assert top["name"].tolist() == ["PoolA", "PoolB"]

    by_rating = pd.read_csv(paths["by_rating"]).set_index("security_rating")
    assert by_rating.loc["risky", "pools"] == 1
    assert by_rating.loc["moderate", "pools"] == 0

    by_stable = pd.read_csv(paths["by_stablecoin"]).set_index("stablecoin")
    assert by_stable.loc["USDT", "tvl"] == pytest.approx(350.0)


def test_cross_section_report_rank_by_apy(repo: PoolRepository, tmp_path: Path) -> None:
    paths = cross_section_report(repo, tmp_path, top_n=1, rank_by="apy")
    assert pd.read_csv(paths["topN"])["name"].tolist() == ["PoolC"]


def test_summary_json(repo: PoolRepository, tmp_path: Path) -> None:
    paths = cross_section_report(repo, tmp_path)
    summary = json.loads(paths["summary"].read_text())
    assert summary["total_pools"] == 3
    assert summary["total_tvl"] == pytest.approx(450.0)
    assert summary["average_yiield_score"] == pytest.approx(190.0 / 3)


def test_empty_repository_writes_null_averages(tmp_path: Path) -> None:
    paths = cross_section_report(PoolRepository(), tmp_path)
    summary = json.loads(paths["summary"].read_text())
    assert summary["total_pools"] == 0
    assert summary["average_apy"] is None
    by_rating = pd.read_csv(paths["by_rating"])
    assert len(by_rating) == 5
