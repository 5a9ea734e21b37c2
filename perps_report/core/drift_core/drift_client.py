from __future__ import annotations

import logging
from typing import List

from driftpy.addresses import get_user_account_public_key
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solders.pubkey import Pubkey

from ..positions_core.models import RawAccount
from .drift_config import DriftConfig

logger = logging.getLogger(__name__)


class DriftUserSource:
    """
    Read-only access to a wallet's Drift ``User`` account.

    The user account is a PDA of (authority, sub-account id); a wallet that never
    initialized Drift simply has no account, which yields an empty list.
    """

    def __init__(self, rpc_client: AsyncClient, cfg: DriftConfig) -> None:
        self.rpc = rpc_client
        self.cfg = cfg

    def user_account_pubkey(self, wallet_address: str) -> Pubkey:
        return get_user_account_public_key(
            Pubkey.from_string(self.cfg.program_id),
            Pubkey.from_string(wallet_address),
            self.cfg.sub_account_id,
        )

    async def fetch_raw_accounts(self, wallet_address: str) -> List[RawAccount]:
        user_pubkey = self.user_account_pubkey(wallet_address)
        logger.info("🎯 Fetching Drift user account %s for: %s", user_pubkey, wallet_address)

        resp = await self.rpc.get_account_info(
            user_pubkey,
            commitment=Commitment(self.cfg.commitment),
            encoding="base64",
        )
        if resp.value is None:
            logger.info("⚠️ No Drift account found for address: %s", wallet_address)
            return []
        return [RawAccount(pubkey=str(user_pubkey), data=bytes(resp.value.data))]
