from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..config import JupiterConfig
from ..errors import JupiterHTTPError


class JupQuoteClient:
    """Async client for the Jupiter swap quote endpoint."""

    def __init__(self, cfg: JupiterConfig, client: Optional[httpx.AsyncClient] = None) -> None:
        self.cfg = cfg
        self.client = client
        self.timeout = cfg.timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.cfg.api_key:
            headers["x-api-key"] = self.cfg.api_key
        return headers

    async def _get(self, url: str, params: Dict[str, str]) -> httpx.Response:
        if self.client is not None:
            return await self.client.get(url, params=params, headers=self._headers(), timeout=self.timeout)
        # short-lived client so nothing outlives the caller's event loop
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url, params=params, headers=self._headers())

    async def get_quote(
        self,
        input_mint: str,
        output_mint: str,
        amount: int,
        slippage_bps: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Quote ``amount`` atoms of ``input_mint`` into ``output_mint``."""

        params = {
            "inputMint": input_mint,
            "outputMint": output_mint,
            "amount": str(amount),
            "slippageBps": str(self.cfg.slippage_bps if slippage_bps is None else slippage_bps),
        }
        resp = await self._get(self.cfg.quote_url, params)
        if resp.status_code >= 400:
            raise JupiterHTTPError(resp.status_code, "Quote failed", resp.text)
        return resp.json()
