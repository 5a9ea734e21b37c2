"""Drift perp markets (mainnet) keyed by the identifier the decoder emits."""

from __future__ import annotations

from typing import List

from ..positions_core.models import MarketDescriptor


def perp_market_id(market_index: int) -> str:
    return f"perp:{market_index}"


DRIFT_MARKETS: List[MarketDescriptor] = [
    MarketDescriptor(symbol="SOL", custody=perp_market_id(0), market_index=0),
    MarketDescriptor(symbol="BTC", custody=perp_market_id(1), market_index=1),
    MarketDescriptor(symbol="ETH", custody=perp_market_id(2), market_index=2),
]
