from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from ...calc_core.pnl_calculator import USD_DECIMALS, descale, div_round_half_up
from ...positions_core.models import PriceResult
from ..clients.jup_quote_client import JupQuoteClient
from ..errors import QuoteError
from ..markets import STABLE_SYMBOL, TOKEN_DECIMALS, TOKEN_MINTS

logger = logging.getLogger(__name__)


def _amount(data: Dict[str, Any], key: str) -> int:
    raw = data.get(key)
    if raw is None or raw == "":
        raise QuoteError(f"missing {key}")
    try:
        value = int(str(raw))
    except ValueError:
        raise QuoteError(f"{key} is not an integer: {raw!r}") from None
    if value <= 0:
        raise QuoteError(f"{key} must be positive, got {value}")
    return value


def price_from_quote(data: Any, input_decimals: int) -> int:
    """
    USD price (6 decimals) of one input token from a quote payload.

    ``outAmount`` is in stable-coin atoms, ``inAmount`` in input-token atoms:
    ``price = outAmount * 10**input_decimals / inAmount`` rounded half up.
    """
    if not isinstance(data, dict):
        raise QuoteError(f"unexpected quote payload: {type(data).__name__}")
    in_amount = _amount(data, "inAmount")
    out_amount = _amount(data, "outAmount")
    price = div_round_half_up(out_amount * 10 ** input_decimals, in_amount)
    if price <= 0:
        raise QuoteError(f"quote rounds to a zero price ({out_amount}/{in_amount})")
    return price


class JupiterPriceResolver:
    """
    Price resolver backed by the Jupiter quote API.

    Quotes one whole token against USDC. USDC itself is pinned to 1.000000
    without a request. Failures come back as ``PriceResult(success=False)``.
    """

    def __init__(
        self,
        client: JupQuoteClient,
        *,
        mints: Optional[Mapping[str, str]] = None,
        decimals: Optional[Mapping[str, int]] = None,
        stable_symbol: str = STABLE_SYMBOL,
    ) -> None:
        self.client = client
        self.mints = dict(mints or TOKEN_MINTS)
        self.decimals = dict(decimals or TOKEN_DECIMALS)
        self.stable_symbol = stable_symbol

    async def resolve(self, symbol: str) -> PriceResult:
        input_mint = self.mints.get(symbol)
        if not input_mint:
            logger.debug("❌ Unsupported token for price fetch: %s", symbol)
            return PriceResult.failed(symbol)

        if symbol == self.stable_symbol:
            price = 10 ** USD_DECIMALS
            logger.debug("💰 %s price (fixed): $1.00 (raw: %s)", symbol, price)
            return PriceResult(success=True, price=price, symbol=symbol)

        token_decimals = self.decimals.get(symbol)
        if token_decimals is None:
            logger.debug("❌ No decimals known for %s", symbol)
            return PriceResult.failed(symbol)
        try:
            data = await self.client.get_quote(
                input_mint,
                self.mints[self.stable_symbol],
                10 ** token_decimals,
            )
            price = price_from_quote(data, token_decimals)
        except Exception as exc:  # noqa: BLE001
            logger.debug("❌ Jupiter price fetch failed for %s: %s", symbol, exc)
            return PriceResult.failed(symbol)

        logger.debug(
            "💰 Jupiter price for %s: $%.6f (%s %s → %s %s)",
            symbol,
            descale(price),
            data.get("inAmount"),
            symbol,
            data.get("outAmount"),
            self.stable_symbol,
        )
        return PriceResult(success=True, price=price, symbol=symbol)
