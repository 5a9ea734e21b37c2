"""Fixed-point PnL calculation core."""

from .pnl_calculator import (
    LEVERAGE_PRECISION,
    USD_DECIMALS,
    base_amount_from,
    calculate_position_pnl,
    descale,
    div_round_half_up,
    leverage_from,
    signed_pnl,
    total_pnl,
)

__all__ = [
    "LEVERAGE_PRECISION",
    "USD_DECIMALS",
    "base_amount_from",
    "calculate_position_pnl",
    "descale",
    "div_round_half_up",
    "leverage_from",
    "signed_pnl",
    "total_pnl",
]
