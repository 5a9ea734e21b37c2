from __future__ import annotations

import hashlib
import logging
from typing import List

import base58
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solana.rpc.types import MemcmpOpts
from solders.pubkey import Pubkey

from ...positions_core.models import RawAccount
from ..config import JupiterConfig

logger = logging.getLogger(__name__)


def account_discriminator(name: str) -> bytes:
    """Anchor discriminator = first 8 bytes of sha256(b"account:" + name)."""
    return hashlib.sha256(f"account:{name}".encode("utf-8")).digest()[:8]


class PerpsAccountSource:
    """
    List Jupiter Perps ``Position`` accounts owned by a wallet.

    getProgramAccounts filtered by the Anchor discriminator (offset 0) and the
    owner pubkey (``cfg.owner_offset``).
    """

    account_name = "Position"

    def __init__(self, rpc_client: AsyncClient, cfg: JupiterConfig) -> None:
        self.rpc = rpc_client
        self.cfg = cfg

    def filters(self, wallet_address: str) -> List[MemcmpOpts]:
        owner = Pubkey.from_string(wallet_address)
        discriminator_b58 = base58.b58encode(account_discriminator(self.account_name)).decode("ascii")
        return [
            MemcmpOpts(offset=0, bytes=discriminator_b58),
            MemcmpOpts(offset=self.cfg.owner_offset, bytes=str(owner)),
        ]

    async def fetch_raw_accounts(self, wallet_address: str) -> List[RawAccount]:
        logger.info("🎯 Fetching Jupiter position accounts for: %s", wallet_address)
        resp = await self.rpc.get_program_accounts(
            Pubkey.from_string(self.cfg.program_id),
            commitment=Commitment(self.cfg.commitment),
            encoding="base64",
            filters=self.filters(wallet_address),
        )
        items = [RawAccount(pubkey=str(it.pubkey), data=bytes(it.account.data)) for it in resp.value]
        logger.info("✅ Retrieved %d Jupiter position accounts", len(items))
        return items
