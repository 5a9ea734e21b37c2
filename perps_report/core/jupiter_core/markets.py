"""Static Jupiter Perps market and token tables (mainnet)."""

from __future__ import annotations

from typing import Dict, List

from ..positions_core.models import MarketDescriptor

CUSTODY_SOL = "7xS2gz2bTp3fwCC7knJvUWTEU9Tycczu6VhJYKgi1wdz"
CUSTODY_ETH = "AQCGyheWPLeo6Qp9WpYS9m3Qj479t7R636N9ey1rEjEn"
CUSTODY_BTC = "5Pv3gM9JrFFH883SWAhvJC9RPYmo8UNxuFtv5bMMALkm"
CUSTODY_USDC = "G18jKKXQwBbrHeiK3C9MRXhkHsLHf7XgCSisykV46EZa"
CUSTODY_USDT = "4vkNeXiYEUizLdrpdPS1eC2mccyM4NUPRtERrk6ZETkk"

JUPITER_MARKETS: List[MarketDescriptor] = [
    MarketDescriptor(symbol="SOL", custody=CUSTODY_SOL, market_index=0),
    MarketDescriptor(symbol="BTC", custody=CUSTODY_BTC, market_index=1),
    MarketDescriptor(symbol="ETH", custody=CUSTODY_ETH, market_index=2),
    MarketDescriptor(symbol="USDC", custody=CUSTODY_USDC, market_index=3),
    MarketDescriptor(symbol="USDT", custody=CUSTODY_USDT, market_index=4),
]

# WSOL & USDC are canonical; WETH/WBTC reflect Wormhole/Portal bridges.
TOKEN_MINTS: Dict[str, str] = {
    "SOL": "So11111111111111111111111111111111111111112",
    "BTC": "3NZ9JMVBmGAqocybic2c7LQCJScmgsAZ6vQqTDzcqmJh",
    "ETH": "7vfCXTUXx5WJV5JADk17DUJ4ksgau7utNKj4b963voxs",
    "USDC": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
    "USDT": "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB",
}

TOKEN_DECIMALS: Dict[str, int] = {
    "SOL": 9,
    "BTC": 8,
    "ETH": 8,
    "USDC": 6,
    "USDT": 6,
}

STABLE_SYMBOL = "USDC"
