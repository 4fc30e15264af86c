from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from yiield_lab.core import Pool
from yiield_lab.directory import ProtocolDirectory
from yiield_lab.pipeline import Pipeline, pool_key
from yiield_lab.risk_scoring import score_pool
from yiield_lab.sources import CSVSource


class FailingSource:
    def fetch(self) -> list[object]:
        raise RuntimeError("boom")


class StaticSource:
    def __init__(self, items: list[object]) -> None:
        self.items = items

    def fetch(self) -> list[object]:
        return self.items


@pytest.fixture(scope="module")
def sample_csv() -> Path:
    return Path(__file__).resolve().parents[2] / "src" / "sample_pools.csv"


def test_pipeline_run_scores_every_pool(sample_csv: Path) -> None:
    repo = Pipeline([CSVSource(str(sample_csv))]).run()
    pools = list(repo)
    assert len(pools) == 11
    for pool in pools:
        assert pool.yiield_score == pytest.approx(score_pool(pool).yiield_score)
        assert pool.security_rating in {"excellent", "good", "moderate", "risky", "danger"}


def test_pipeline_ratings_for_sample_pools(sample_csv: Path) -> None:
    repo = Pipeline([CSVSource(str(sample_csv))]).run()
    by_project = {pool.project: pool for pool in repo}
    assert by_project["aave-v3"].security_rating == "excellent"
    # two exploits zero the exploit component: 18 + 25 + 12 + 0, plus 6 + 2
    radiant = by_project["radiant-v2"]
    assert radiant.security_score == 55
    assert radiant.yiield_score == pytest.approx(63 / 120 * 100)
    assert radiant.security_rating == "moderate"
    unknown = by_project["unknown-farm"]
    assert unknown.yiield_score == unknown.security_score == 15
    assert unknown.security_rating == "danger"


def test_pipeline_whitelist_only_drops_uncurated(sample_csv: Path) -> None:
    repo = Pipeline([CSVSource(str(sample_csv))], whitelist_only=True).run()
    projects = {pool.project for pool in repo}
    assert "unknown-farm" not in projects
    assert "kamino-lending" not in projects
    assert len(repo) == 9


def test_pipeline_uses_given_directory_and_date(full_dossier) -> None:
    directory = ProtocolDirectory({"blue-chip": full_dossier})
    pools = [
        Pool("A", "blue-chip", "Ethereum", "USDC", 2e8, 0.04, audits=3, protocol_age_days=400),
        Pool("B", "aave-v3", "Ethereum", "USDC", 2e8, 0.04, audits=3, protocol_age_days=400),
        "not a pool",
    ]
    repo = Pipeline(
        [StaticSource(pools)],
        directory=directory,
        whitelist_only=True,
        as_of=date(2025, 1, 1),
    ).run()
    assert [pool.name for pool in repo] == ["A"]
    assert next(iter(repo)).yiield_score == 100


def test_pipeline_logs_and_recovers_from_source_failure(
    caplog: pytest.LogCaptureFixture, sample_csv: Path
) -> None:
    pipeline = Pipeline([FailingSource(), CSVSource(str(sample_csv))])
    with caplog.at_level("WARNING", logger="yiield_lab.pipeline"):
        repo = pipeline.run()
    assert any("FailingSource" in rec.message for rec in caplog.records)
    assert len(repo) == 11


def test_later_source_overrides_matching_pool() -> None:
    aggregated = Pool(
        "aave-v3:USDC", "aave-v3", "Ethereum", "USDC", 1e9, 0.04,
        pool_id="aave-v3-usdc-ethereum", source="defillama",
    )
    custom = Pool(
        "Aave USDC", "aave-v3", "Ethereum", "USDC", 1e9, 0.05,
        pool_id="aave-v3-usdc-ethereum", source="custom",
    )
    repo = Pipeline([StaticSource([aggregated]), StaticSource([custom])]).run()
    assert [(pool.source, pool.apy) for pool in repo] == [("custom", 0.05)]
    assert len(repo) == 1


def test_pools_without_id_merge_on_project_chain_and_stablecoin() -> None:
    first = Pool("a", "Fluid", "Ethereum", "USDC", 1e7, 0.06, source="csv")
    second = Pool("b", "fluid", "ethereum", "usdc", 2e7, 0.07, source="custom")
    other_chain = Pool("c", "fluid", "Base", "USDC", 1e7, 0.05)
    assert pool_key(first) == pool_key(second) == "fluid-ethereum-usdc"
    repo = Pipeline([StaticSource([first, other_chain]), StaticSource([second])]).run()
    assert sorted(pool.name for pool in repo) == ["b", "c"]
