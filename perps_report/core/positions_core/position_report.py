from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import httpx
from rich import box
from rich.console import Console
from rich.table import Table
from solana.rpc.async_api import AsyncClient

from ...config.settings import ReportConfig
from ..calc_core.pnl_calculator import total_pnl
from ..drift_core.drift_client import DriftUserSource
from ..drift_core.drift_decoder import DriftUserDecoder
from ..drift_core.drift_markets import DRIFT_MARKETS
from ..jupiter_core.clients.jup_quote_client import JupQuoteClient
from ..jupiter_core.clients.perps_account_source import PerpsAccountSource
from ..jupiter_core.markets import JUPITER_MARKETS
from ..jupiter_core.services.position_decoder import PerpsPositionDecoder
from ..jupiter_core.services.price_service import JupiterPriceResolver
from .interfaces import PriceResolver
from .models import NormalizedPosition
from .position_normalizer import PositionNormalizer
from .positions_service import PositionsService

logger = logging.getLogger(__name__)

COLUMNS = ("Protocol", "Symbol", "Side", "Size USD", "Base", "Entry", "Mark", "PnL", "Leverage")


@dataclass
class ReportResult:
    wallet: str
    positions: List[NormalizedPosition] = field(default_factory=list)
    by_protocol: Dict[str, int] = field(default_factory=dict)

    @property
    def total_pnl(self) -> float:
        return total_pnl(self.positions)


def build_services(
    rpc_client: AsyncClient,
    price_resolver: PriceResolver,
    cfg: ReportConfig,
) -> List[PositionsService]:
    """One pipeline per protocol, all sharing the same price resolver."""
    drift = PositionsService(
        DriftUserSource(rpc_client, cfg.drift),
        DriftUserDecoder(),
        PositionNormalizer(DRIFT_MARKETS, price_resolver, protocol="drift"),
        account_kind="user",
    )
    jupiter = PositionsService(
        PerpsAccountSource(rpc_client, cfg.jupiter),
        PerpsPositionDecoder(),
        PositionNormalizer(JUPITER_MARKETS, price_resolver, protocol="jupiter"),
        account_kind="position",
    )
    return [drift, jupiter]


class PositionReport:
    """Collect open positions across protocols for a wallet and print a summary."""

    def __init__(self, services: Sequence[PositionsService], console: Optional[Console] = None) -> None:
        self.services = list(services)
        self.console = console or Console()

    async def collect(self, wallet_address: str) -> ReportResult:
        per_protocol = await asyncio.gather(*(s.fetch_positions(wallet_address) for s in self.services))
        result = ReportResult(wallet=wallet_address)
        for service, positions in zip(self.services, per_protocol):
            result.by_protocol[service.protocol] = len(positions)
            result.positions.extend(positions)
        logger.info("🎯 Found %d open positions: %s", len(result.positions), result.by_protocol)
        return result

    def render(self, result: ReportResult) -> None:
        t = Table(title=f"Open positions · {result.wallet}", box=box.MINIMAL_DOUBLE_HEAD, expand=False)
        for col in COLUMNS:
            t.add_column(col, justify="left" if col in ("Protocol", "Symbol", "Side") else "right")
        for p in result.positions:
            pnl_style = "green" if p.pnl >= 0 else "red"
            t.add_row(
                p.protocol,
                p.symbol,
                p.direction,
                f"${p.size_usd:,.2f}",
                f"{p.base_amount:,.4f}",
                f"${p.entry_price:,.4f}",
                f"${p.mark_price:,.4f}",
                f"[{pnl_style}]${p.pnl:,.2f}[/{pnl_style}]",
                f"{p.leverage:.2f}x",
            )
        self.console.print(t)
        self.console.print(f"💰 Total Unrealized PnL: ${result.total_pnl:,.2f}")

    async def run(self, wallet_address: str) -> ReportResult:
        result = await self.collect(wallet_address)
        self.render(result)
        return result


async def run_report(cfg: ReportConfig, wallet_address: str, console: Optional[Console] = None) -> ReportResult:
    """Build every collaborator from ``cfg``, run the report once, close clients."""
    rpc_client = AsyncClient(cfg.rpc_url, timeout=cfg.rpc_timeout)
    try:
        async with httpx.AsyncClient(timeout=cfg.jupiter.timeout) as http:
            prices = JupiterPriceResolver(JupQuoteClient(cfg.jupiter, client=http))
            report = PositionReport(build_services(rpc_client, prices, cfg), console=console)
            return await report.run(wallet_address)
    finally:
        await rpc_client.close()
