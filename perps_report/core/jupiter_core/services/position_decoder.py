from __future__ import annotations

from borsh_construct import CStruct, I64, U8, U64, U128
from construct import Bytes, ConstructError
from solders.pubkey import Pubkey

from ...positions_core.errors import AccountDecodeError
from ...positions_core.models import RawPositionAccount, Side
from ..clients.perps_account_source import account_discriminator

# Perps IDL ``Position`` account, fields in declaration order.
# ``side`` is a unit-variant enum, serialized as its u8 tag.
POSITION_LAYOUT = CStruct(
    "owner" / Bytes(32),
    "pool" / Bytes(32),
    "custody" / Bytes(32),
    "collateral_custody" / Bytes(32),
    "open_time" / I64,
    "update_time" / I64,
    "side" / U8,
    "price" / U64,
    "size_usd" / U64,
    "collateral_usd" / U64,
    "realised_pnl_usd" / I64,
    "cumulative_interest_snapshot" / U128,
    "locked_amount" / U64,
    "bump" / U8,
)

DISCRIMINATOR_LEN = 8


class PerpsPositionDecoder:
    """Decode raw Jupiter Perps account bytes into :class:`RawPositionAccount`."""

    def __init__(self) -> None:
        self._discriminators = {"position": account_discriminator("Position")}

    def decode(self, kind: str, data: bytes) -> RawPositionAccount:
        disc = self._discriminators.get(kind)
        if disc is None:
            raise AccountDecodeError(kind, "unsupported account kind")
        if len(data) < DISCRIMINATOR_LEN or data[:DISCRIMINATOR_LEN] != disc:
            raise AccountDecodeError(kind, "discriminator mismatch")

        try:
            c = POSITION_LAYOUT.parse(data[DISCRIMINATOR_LEN:])
        except ConstructError as exc:
            raise AccountDecodeError(kind, f"malformed account data: {exc}") from exc

        try:
            side = Side.from_value(c.side)
        except ValueError as exc:
            raise AccountDecodeError(kind, str(exc)) from exc

        return RawPositionAccount(
            owner=str(Pubkey.from_bytes(c.owner)),
            pool=str(Pubkey.from_bytes(c.pool)),
            custody=str(Pubkey.from_bytes(c.custody)),
            collateral_custody=str(Pubkey.from_bytes(c.collateral_custody)),
            open_time=c.open_time,
            update_time=c.update_time,
            side=side,
            price=c.price,
            size_usd=c.size_usd,
            collateral_usd=c.collateral_usd,
            realised_pnl_usd=c.realised_pnl_usd,
            cumulative_interest_snapshot=c.cumulative_interest_snapshot,
            locked_amount=c.locked_amount,
            bump=c.bump,
        )
