from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from ..calc_core.pnl_calculator import (
    LEVERAGE_PRECISION,
    base_amount_from,
    calculate_position_pnl,
    descale,
    leverage_from,
    signed_pnl,
)
from .interfaces import PriceResolver
from .models import MarketDescriptor, NormalizedPosition, RawPositionAccount, Side

logger = logging.getLogger(__name__)


class PositionNormalizer:
    """
    Map one decoded position account onto :class:`NormalizedPosition`.

    The market table is read-only and shared by every concurrent ``normalize``
    call; the price resolver is injected so any price source can back it.
    """

    def __init__(
        self,
        markets: Iterable[MarketDescriptor],
        price_resolver: PriceResolver,
        *,
        protocol: str = "",
    ) -> None:
        self._markets: Dict[str, MarketDescriptor] = {m.custody: m for m in markets}
        self._prices = price_resolver
        self.protocol = protocol

    def market_for(self, custody: str) -> Optional[MarketDescriptor]:
        return self._markets.get(custody)

    async def normalize(self, raw: RawPositionAccount) -> Optional[NormalizedPosition]:
        """Return the normalized position, or ``None`` if it must be skipped."""
        try:
            market = self.market_for(raw.custody)
            if market is None:
                logger.warning("⚠️ Unknown market custody: %s", raw.custody)
                return None

            side = Side.from_value(raw.side)
            if side is Side.NONE or raw.size_usd <= 0:
                return None  # closed or empty

            size_usd = descale(raw.size_usd)
            collateral_usd = descale(raw.collateral_usd)
            entry_price = descale(raw.price)
            base_amount = base_amount_from(size_usd, entry_price)

            price = await self._prices.resolve(market.symbol)
            if price.success and price.price > 0 and raw.price > 0:
                mark_price = descale(price.price)
                has_profit, amount = calculate_position_pnl(raw.size_usd, raw.price, side, price.price)
                pnl = descale(signed_pnl(has_profit, amount))
                logger.debug(
                    "📊 PnL calculated for %s: %s$%.4f (current: %s, entry: %s)",
                    market.symbol,
                    "+" if has_profit else "-",
                    abs(pnl),
                    price.price,
                    raw.price,
                )
            else:
                mark_price = entry_price
                pnl = descale(raw.realised_pnl_usd)
                logger.debug(
                    "📊 Using realized PnL for %s: $%.4f (price unavailable)", market.symbol, pnl
                )

            leverage = leverage_from(size_usd, collateral_usd)

            logger.debug(
                "✅ %s: $%.2f → $%.2f, Size: $%.2f, Base: %.4f, PnL: $%.4f, Leverage: %.4fx, %s",
                market.symbol,
                entry_price,
                mark_price,
                size_usd,
                base_amount,
                pnl,
                leverage,
                side.label,
            )

            return NormalizedPosition(
                symbol=market.symbol,
                size_usd=size_usd,
                base_amount=base_amount,
                direction=side.label,
                pnl=pnl,
                entry_price=entry_price,
                mark_price=mark_price,
                leverage=round(leverage, LEVERAGE_PRECISION),
                protocol=self.protocol,
                protocol_market_id=raw.custody,
            )
        except Exception as exc:  # noqa: BLE001
            logger.error("❌ Position processing error (%s): %s", raw.pubkey or raw.custody, exc)
            return None
