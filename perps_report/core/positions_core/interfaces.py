"""Collaborator contracts the positions pipeline is built against."""

from __future__ import annotations

from typing import List, Protocol, Sequence, Union

from .models import PriceResult, RawAccount, RawPositionAccount


class AccountSource(Protocol):
    """Fetches every raw account that may hold positions for a wallet."""

    async def fetch_raw_accounts(self, wallet_address: str) -> List[RawAccount]: ...


class AccountDecoder(Protocol):
    """
    Decodes account bytes of a given kind.

    Single-position accounts decode to one record; accounts that hold several
    positions (a Drift user) decode to a sequence.
    """

    def decode(
        self, kind: str, data: bytes
    ) -> Union[RawPositionAccount, Sequence[RawPositionAccount]]: ...


class PriceResolver(Protocol):
    """Resolves a USD price (6 decimals) for a market symbol. Never raises."""

    async def resolve(self, symbol: str) -> PriceResult: ...
