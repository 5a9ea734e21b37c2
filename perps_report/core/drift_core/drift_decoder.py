from __future__ import annotations

import hashlib
from typing import Any, Callable, List, Optional

from driftpy.constants.numeric_constants import BASE_PRECISION
from driftpy.decode.user import decode_user

from ..positions_core.errors import AccountDecodeError
from ..positions_core.models import RawPositionAccount, Side
from .drift_markets import perp_market_id

USER_DISCRIMINATOR = hashlib.sha256(b"account:User").digest()[:8]


def is_empty_position(pos: Any) -> bool:
    return (
        pos.base_asset_amount == 0
        and pos.quote_asset_amount == 0
        and pos.open_orders == 0
        and getattr(pos, "lp_shares", 0) == 0
    )


def side_from_base(base_asset_amount: int) -> Side:
    if base_asset_amount > 0:
        return Side.LONG
    if base_asset_amount < 0:
        return Side.SHORT
    return Side.NONE


def perp_position_to_raw(authority: str, pos: Any) -> RawPositionAccount:
    """
    Express a Drift ``PerpPosition`` in the shared position-account shape.

    Quote amounts and prices are both 6-decimal on Drift, base amounts 9-decimal.
    Drift margins positions from the account's pooled collateral, so there is
    no per-position collateral and leverage falls back to 1.
    """
    base = abs(pos.base_asset_amount)
    notional = abs(pos.quote_entry_amount)
    entry_price = notional * BASE_PRECISION // base if base else 0
    return RawPositionAccount(
        owner=authority,
        pool="",
        custody=perp_market_id(pos.market_index),
        collateral_custody="",
        open_time=0,
        update_time=0,
        side=side_from_base(pos.base_asset_amount),
        price=entry_price,
        size_usd=notional,
        collateral_usd=0,
        realised_pnl_usd=pos.settled_pnl,
        cumulative_interest_snapshot=pos.last_cumulative_funding_rate,
    )


class DriftUserDecoder:
    """Decode a Drift ``User`` account into one record per non-empty perp position."""

    def __init__(self, decode_fn: Optional[Callable[[bytes], Any]] = None) -> None:
        self._decode_user = decode_fn or decode_user

    def decode(self, kind: str, data: bytes) -> List[RawPositionAccount]:
        if kind != "user":
            raise AccountDecodeError(kind, "unsupported account kind")
        if data[:8] != USER_DISCRIMINATOR:
            raise AccountDecodeError(kind, "discriminator mismatch")
        try:
            user = self._decode_user(data)
        except Exception as exc:  # noqa: BLE001
            raise AccountDecodeError(kind, f"malformed account data: {exc}") from exc

        authority = str(user.authority)
        return [
            perp_position_to_raw(authority, pos)
            for pos in user.perp_positions
            if not is_empty_position(pos)
        ]
