from __future__ import annotations

import json
from pathlib import Path

import pytest

from yiield_lab.sources import DefiLlamaSource, detect_stablecoin, make_pool_id

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


@pytest.fixture()
def defillama_source(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> DefiLlamaSource:
    cache = tmp_path / "defillama.json"
    cache.write_bytes((FIXTURES / "defillama_pools.json").read_bytes())

    def _unexpected_network(*_args: object, **_kwargs: object) -> None:
        raise AssertionError("network access should use cached response")

    monkeypatch.setattr(
        "yiield_lab.sources.defillama.urllib.request.urlopen",
        _unexpected_network,
    )
    return DefiLlamaSource(cache_path=str(cache))


def test_defillama_converts_percentages(defillama_source: DefiLlamaSource) -> None:
    pools = defillama_source.fetch()
    assert pools
    first = pools[0]
    assert first.project == "aave-v3"
    assert first.chain == "Ethereum"
    assert first.stablecoin == "USDC"
    assert first.apy == pytest.approx(0.052)
    assert first.reward_apy == 0.0
    assert first.pool_id == "aave-v3-usdc-ethereum"
    assert all(p.source == "defillama" for p in pools)


def test_defillama_filters_outliers_and_non_stable_legs(defillama_source: DefiLlamaSource) -> None:
    pools = defillama_source.fetch()
    projects = [p.project for p in pools]
    # tiny TVL, >50% APY, non-stable pools and unknown stablecoins are dropped
    assert "tiny-farm" not in projects
    assert "degen-farm" not in projects
    assert "lido" not in projects
    assert "benqi-lending" not in projects
    symbols = {p.symbol for p in pools}
    assert "USDC-USDT" in symbols
    assert "USDC-WETH" not in symbols
    assert len(pools) == 6


def test_defillama_falls_back_to_total_apy_for_base(defillama_source: DefiLlamaSource) -> None:
    compound = next(p for p in defillama_source.fetch() if p.project == "compound-v3")
    assert compound.stablecoin == "USDC"
    assert compound.base_apy == pytest.approx(0.071)
    assert compound.reward_apy == pytest.approx(0.013)


def test_defillama_protocol_and_chain_allowlists() -> None:
    src = DefiLlamaSource(
        cache_path=str(FIXTURES / "defillama_pools.json"),
        chains=["Ethereum"],
        protocols=["aave-v3", "morpho-blue"],
    )
    pools = src.fetch()
    assert [(p.project, p.chain) for p in pools] == [
        ("aave-v3", "Ethereum"),
        ("morpho-blue", "Ethereum"),
    ]


def _write_cache(tmp_path: Path, items: list[dict[str, object]]) -> str:
    cache = tmp_path / "pools.json"
    cache.write_text(json.dumps({"status": "success", "data": items}))
    return str(cache)


def _item(**overrides: object) -> dict[str, object]:
    item: dict[str, object] = {
        "pool": "x",
        "chain": "Ethereum",
        "project": "aave-v3",
        "symbol": "USDC",
        "tvlUsd": 5_000_000,
        "apy": 4.0,
        "apyBase": 4.0,
        "apyReward": 0,
        "stablecoin": True,
    }
    item.update(overrides)
    return item


def test_defillama_keeps_supported_chains_by_default(tmp_path: Path) -> None:
    cache = _write_cache(tmp_path, [_item(), _item(pool="y", chain="Fantom")])
    assert [p.chain for p in DefiLlamaSource(cache_path=cache).fetch()] == ["Ethereum"]
    every_chain = DefiLlamaSource(cache_path=cache, chains=None).fetch()
    assert [p.chain for p in every_chain] == ["Ethereum", "Fantom"]


def test_defillama_zero_base_apy_falls_back_to_total(tmp_path: Path) -> None:
    cache = _write_cache(tmp_path, [_item(apy=6.0, apyBase=0, apyReward=6.0)])
    (pool,) = DefiLlamaSource(cache_path=cache).fetch()
    assert pool.base_apy == pytest.approx(0.06)


@pytest.mark.parametrize(
    ("symbol", "expected"),
    [
        ("USDC", "USDC"),
        ("usdc.e", "USDC"),
        ("SDAI", "DAI"),
        ("SUSDS", "USDS"),
        ("sUSDe", "USDe"),
        ("EURC", "EURC"),
        ("WETH", None),
    ],
)
def test_detect_stablecoin(symbol: str, expected: str | None) -> None:
    assert detect_stablecoin(symbol) == expected


def test_make_pool_id_slugs_chain() -> None:
    assert make_pool_id("aave-v3", "USDC", "Arbitrum One") == "aave-v3-usdc-arbitrum-one"
