"""Fixed-point PnL and sizing math for perp positions.

All inputs are integers scaled by ``10 ** USD_DECIMALS``. Products are taken
before division so no precision is lost; Python ints never overflow.
"""

from __future__ import annotations

from typing import Iterable, Tuple

from ..positions_core.models import NormalizedPosition, Side

USD_DECIMALS = 6
LEVERAGE_PRECISION = 4


def calculate_position_pnl(
    size_usd: int,
    entry_price: int,
    side: Side,
    current_price: int,
) -> Tuple[bool, int]:
    """
    Return ``(has_profit, amount)`` for a position.

    ``amount = size_usd * |current_price - entry_price| / entry_price``: the USD
    notional scaled by the fractional price move. ``entry_price`` must be
    non-zero whenever ``size_usd`` is.
    """
    if size_usd == 0:
        return False, 0

    if side is Side.LONG:
        has_profit = current_price > entry_price
    elif side is Side.SHORT:
        has_profit = entry_price > current_price
    else:
        raise ValueError(f"PnL is undefined for side {Side.from_value(side).label}")

    price_delta = abs(current_price - entry_price)
    return has_profit, size_usd * price_delta // entry_price


def signed_pnl(has_profit: bool, amount: int) -> int:
    return amount if has_profit else -amount


def div_round_half_up(numerator: int, denominator: int) -> int:
    """Integer division of non-negative values, rounding .5 away from zero."""
    if denominator <= 0 or numerator < 0:
        raise ValueError("div_round_half_up expects numerator >= 0 and denominator > 0")
    return (2 * numerator + denominator) // (2 * denominator)


def descale(value: int, decimals: int = USD_DECIMALS) -> float:
    """Fixed-point integer -> human readable float."""
    return value / 10 ** decimals


def base_amount_from(size_usd: float, entry_price: float) -> float:
    return size_usd / entry_price if entry_price > 0 else 0.0


def leverage_from(size_usd: float, collateral_usd: float) -> float:
    return size_usd / collateral_usd if collateral_usd > 0 else 1.0


def total_pnl(positions: Iterable[NormalizedPosition]) -> float:
    return sum((p.pnl for p in positions), 0.0)


__all__ = [
    "USD_DECIMALS",
    "LEVERAGE_PRECISION",
    "calculate_position_pnl",
    "signed_pnl",
    "descale",
    "div_round_half_up",
    "base_amount_from",
    "leverage_from",
    "total_pnl",
]
