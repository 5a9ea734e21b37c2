import hashlib
import logging
from typing import Dict, List, Optional

import pytest
from solders.pubkey import Pubkey

from perps_report.core.jupiter_core.markets import CUSTODY_SOL, CUSTODY_USDC
from perps_report.core.positions_core.models import PriceResult, RawPositionAccount, Side

POSITION_DISCRIMINATOR = hashlib.sha256(b"account:Position").digest()[:8]


def fixed_pubkey(n: int) -> str:
    return str(Pubkey.from_bytes(bytes([n]) * 32))


WALLET = fixed_pubkey(7)
POOL = fixed_pubkey(9)


class FakePriceResolver:
    """Serves prices from a dict; symbols it does not know fail."""

    def __init__(self, prices: Optional[Dict[str, int]] = None, exc: Optional[Exception] = None):
        self.prices = dict(prices or {})
        self.exc = exc
        self.calls: List[str] = []

    async def resolve(self, symbol: str) -> PriceResult:
        self.calls.append(symbol)
        if self.exc is not None:
            raise self.exc
        if symbol not in self.prices:
            return PriceResult.failed(symbol)
        return PriceResult(success=True, price=self.prices[symbol], symbol=symbol)


def encode_position(
    *,
    owner: str = WALLET,
    pool: str = POOL,
    custody: str = CUSTODY_SOL,
    collateral_custody: str = CUSTODY_USDC,
    open_time: int = 1_700_000_000,
    update_time: int = 1_700_000_500,
    side: int = 1,
    price: int = 100_000_000,
    size_usd: int = 1_000_000_000,
    collateral_usd: int = 200_000_000,
    realised_pnl_usd: int = 0,
    cumulative_interest_snapshot: int = 0,
    locked_amount: int = 0,
    bump: int = 255,
    discriminator: bytes = POSITION_DISCRIMINATOR,
) -> bytes:
    """Serialize a Perps ``Position`` account the way the program stores it."""
    return b"".join(
        [
            discriminator,
            bytes(Pubkey.from_string(owner)),
            bytes(Pubkey.from_string(pool)),
            bytes(Pubkey.from_string(custody)),
            bytes(Pubkey.from_string(collateral_custody)),
            open_time.to_bytes(8, "little", signed=True),
            update_time.to_bytes(8, "little", signed=True),
            side.to_bytes(1, "little"),
            price.to_bytes(8, "little"),
            size_usd.to_bytes(8, "little"),
            collateral_usd.to_bytes(8, "little"),
            realised_pnl_usd.to_bytes(8, "little", signed=True),
            cumulative_interest_snapshot.to_bytes(16, "little"),
            locked_amount.to_bytes(8, "little"),
            bump.to_bytes(1, "little"),
        ]
    )


def make_raw(**overrides) -> RawPositionAccount:
    fields = dict(
        owner=WALLET,
        pool=POOL,
        custody=CUSTODY_SOL,
        collateral_custody=CUSTODY_USDC,
        open_time=0,
        update_time=0,
        side=Side.LONG,
        price=100_000_000,
        size_usd=1_000_000_000,
        collateral_usd=200_000_000,
        realised_pnl_usd=0,
    )
    fields.update(overrides)
    return RawPositionAccount(**fields)


@pytest.fixture
def wallet() -> str:
    return WALLET


@pytest.fixture
def position_bytes():
    return encode_position


@pytest.fixture
def raw_position():
    return make_raw


@pytest.fixture
def prices():
    """Factory: ``prices({"SOL": 110_000_000})`` -> fake resolver."""
    return FakePriceResolver


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "RPC_URL",
        "HELIUS_API_KEY",
        "WALLET_ADDRESS",
        "LOG_LEVEL",
        "PERPS_PROGRAM_ID",
        "DRIFT_PROGRAM_ID",
        "JUP_SWAP_BASE",
        "JUP_API_KEY",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _log_level():
    package = logging.getLogger("perps_report")
    package.setLevel(logging.INFO)
    yield
    for handler in [h for h in package.handlers if h.get_name() == "perps_report.console"]:
        package.removeHandler(handler)
