"""Position data models shared by every protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict


class Side(IntEnum):
    """On-chain position side. Values match the Jupiter ``Side`` enum tag."""

    NONE = 0
    LONG = 1
    SHORT = 2

    @classmethod
    def from_value(cls, value: Any) -> "Side":
        """Convert an on-chain enum tag (or a ``Side``) into a ``Side``."""
        if isinstance(value, Side):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Unknown side tag: {value}") from None
        raise ValueError(f"Unsupported side value: {value!r}")

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class RawAccount:
    """Undecoded program account as returned by an account source."""

    pubkey: str
    data: bytes


@dataclass(frozen=True)
class RawPositionAccount:
    """
    Decoded position account.

    USD fields (``price``, ``size_usd``, ``collateral_usd``,
    ``realised_pnl_usd``) are fixed-point integers with 6 decimals.
    """

    owner: str
    pool: str
    custody: str
    collateral_custody: str
    open_time: int
    update_time: int
    side: Side
    price: int
    size_usd: int
    collateral_usd: int
    realised_pnl_usd: int
    cumulative_interest_snapshot: int = 0
    locked_amount: int = 0
    bump: int = 0
    pubkey: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.side is not Side.NONE and self.size_usd > 0


@dataclass(frozen=True)
class MarketDescriptor:
    symbol: str
    custody: str
    market_index: int


@dataclass(frozen=True)
class PriceResult:
    """USD price with 6 decimals; ``price`` is 0 whenever ``success`` is False."""

    success: bool
    price: int
    symbol: str

    @classmethod
    def failed(cls, symbol: str) -> "PriceResult":
        return cls(success=False, price=0, symbol=symbol)


class NormalizedPosition(BaseModel):
    """Protocol-independent open position. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    size_usd: float
    base_amount: float
    direction: Literal["LONG", "SHORT"]
    pnl: float
    entry_price: float
    mark_price: float
    leverage: float
    protocol: str = ""
    protocol_market_id: Optional[Union[str, int]] = None


__all__ = [
    "Side",
    "RawAccount",
    "RawPositionAccount",
    "MarketDescriptor",
    "PriceResult",
    "NormalizedPosition",
]
