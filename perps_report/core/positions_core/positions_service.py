from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import List, Sequence

from .interfaces import AccountDecoder, AccountSource
from .models import NormalizedPosition, RawAccount, RawPositionAccount
from .position_normalizer import PositionNormalizer

logger = logging.getLogger(__name__)


class PositionsService:
    """
    Fetch -> decode -> filter -> normalize pipeline for one protocol.

    Collaborators are passed in explicitly; nothing here is process-global.
    """

    def __init__(
        self,
        source: AccountSource,
        decoder: AccountDecoder,
        normalizer: PositionNormalizer,
        *,
        account_kind: str = "position",
        protocol: str = "",
    ) -> None:
        self.source = source
        self.decoder = decoder
        self.normalizer = normalizer
        self.account_kind = account_kind
        self.protocol = protocol or normalizer.protocol

    async def fetch_positions(self, wallet_address: str) -> List[NormalizedPosition]:
        """Return every open position for ``wallet_address``; never raises."""
        try:
            raw_accounts = await self.source.fetch_raw_accounts(wallet_address)
            if not raw_accounts:
                logger.info("⚠️ No %s positions found for: %s", self.protocol, wallet_address)
                return []

            decoded = self.decode_accounts(raw_accounts)
            open_positions = self.filter_open(decoded)
            if not open_positions:
                logger.info("ℹ️ No open %s positions for: %s", self.protocol, wallet_address)
                return []

            results = await asyncio.gather(
                *(self.normalizer.normalize(raw) for raw in open_positions)
            )
            positions = [p for p in results if p is not None]

            logger.info(
                "🎉 Successfully processed %d/%d %s positions for: %s",
                len(positions),
                len(open_positions),
                self.protocol,
                wallet_address,
            )
            return positions
        except Exception as exc:  # noqa: BLE001
            logger.error("❌ %s position fetch failed for %s: %s", self.protocol, wallet_address, exc)
            return []

    def decode_accounts(self, raw_accounts: Sequence[RawAccount]) -> List[RawPositionAccount]:
        decoded: List[RawPositionAccount] = []
        for item in raw_accounts:
            try:
                result = self.decoder.decode(self.account_kind, item.data)
                records = [result] if isinstance(result, RawPositionAccount) else list(result)
                decoded.extend([replace(r, pubkey=r.pubkey or item.pubkey) for r in records])
            except Exception as exc:  # noqa: BLE001
                logger.warning("⚠️ Failed to decode %s %s: %s", self.account_kind, item.pubkey, exc)

        logger.info("✅ Successfully decoded %d %s accounts", len(decoded), self.protocol)
        return decoded

    @staticmethod
    def filter_open(positions: Sequence[RawPositionAccount]) -> List[RawPositionAccount]:
        """Drop closed or empty positions before the (more expensive) normalize step."""
        return [p for p in positions if p.is_open]
