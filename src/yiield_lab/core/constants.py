"""Core constants shared across YiieldLab modules."""

from __future__ import annotations

# Symbol fragments recognised as stablecoins, mapped to the canonical token.
#
# Aggregators report wrapped and bridged variants (``USDC.E``, ``SDAI``) as
# separate symbols; collapsing them here keeps stablecoin filters and
# groupings stable across chains.  Keys are matched as substrings of the
# upper-cased symbol in insertion order.
STABLE_TOKENS: dict[str, str] = {
    "USDC": "USDC",
    "USDC.E": "USDC",
    "USDCE": "USDC",
    "USDT": "USDT",
    "DAI": "DAI",
    "SDAI": "DAI",
    "PYUSD": "PYUSD",
    "USDE": "USDe",
    "USDS": "USDS",
    "SUSDS": "USDS",
    "USD1": "USD1",
    "USDG": "USDG",
    "EURE": "EURe",
    "EUROE": "EURe",
    "EURC": "EURC",
    "XAUT": "XAUT",
    "PAXG": "PAXG",
}

SUPPORTED_CHAINS: tuple[str, ...] = (
    "Ethereum",
    "Arbitrum",
    "Optimism",
    "Base",
    "Polygon",
    "BSC",
    "Avalanche",
    "Solana",
    "Gnosis",
    "Linea",
    "Plasma",
    "Stable",
)

# Pools below this TVL are ignored by the aggregator adapters.
MIN_TVL_USD = 100_000.0
# APYs above 50% are treated as outliers (decimal fraction).
MAX_APY = 0.5
# Listings below this security score are hidden by default.
MIN_SECURITY_SCORE = 60.0

__all__ = [
    "MAX_APY",
    "MIN_SECURITY_SCORE",
    "MIN_TVL_USD",
    "STABLE_TOKENS",
    "SUPPORTED_CHAINS",
]
