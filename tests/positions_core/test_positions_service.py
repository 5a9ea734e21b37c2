import asyncio
import logging

from perps_report.core.jupiter_core.markets import CUSTODY_BTC, CUSTODY_ETH, JUPITER_MARKETS
from perps_report.core.jupiter_core.services.position_decoder import PerpsPositionDecoder
from perps_report.core.positions_core.errors import AccountDecodeError
from perps_report.core.positions_core.models import RawAccount, Side
from perps_report.core.positions_core.position_normalizer import PositionNormalizer
from perps_report.core.positions_core.positions_service import PositionsService


class FakeSource:
    def __init__(self, accounts=None, exc=None):
        self.accounts = accounts or []
        self.exc = exc
        self.wallets = []

    async def fetch_raw_accounts(self, wallet_address):
        self.wallets.append(wallet_address)
        if self.exc is not None:
            raise self.exc
        return list(self.accounts)


class TableDecoder:
    """Looks decoded records up by account data; unknown data fails to decode."""

    def __init__(self, table):
        self.table = table

    def decode(self, kind, data):
        if data not in self.table:
            raise AccountDecodeError(kind, "discriminator mismatch")
        return self.table[data]


def make_service(source, decoder, resolver):
    normalizer = PositionNormalizer(JUPITER_MARKETS, resolver, protocol="jupiter")
    return PositionsService(source, decoder, normalizer)


def test_no_accounts_returns_empty(prices, wallet):
    source = FakeSource([])
    svc = make_service(source, TableDecoder({}), prices())
    assert asyncio.run(svc.fetch_positions(wallet)) == []
    assert source.wallets == [wallet]


def test_end_to_end_with_real_decoder(prices, position_bytes, wallet):
    accounts = [
        RawAccount("PosSol", position_bytes(side=1)),
        RawAccount("PosEth", position_bytes(custody=CUSTODY_ETH, side=2, price=3_000_000_000)),
    ]
    svc = make_service(
        FakeSource(accounts),
        PerpsPositionDecoder(),
        prices({"SOL": 110_000_000, "ETH": 2_700_000_000}),
    )

    positions = asyncio.run(svc.fetch_positions(wallet))

    assert [(p.symbol, p.direction, p.pnl) for p in positions] == [
        ("SOL", "LONG", 100.0),
        ("ETH", "SHORT", 100.0),
    ]
    assert svc.protocol == "jupiter"


def test_one_bad_account_is_skipped(prices, position_bytes, wallet, caplog):
    accounts = [
        RawAccount("Good1", position_bytes()),
        RawAccount("Broken", b"\x00" * 40),
        RawAccount("Good2", position_bytes(custody=CUSTODY_BTC, price=60_000_000_000)),
    ]
    svc = make_service(FakeSource(accounts), PerpsPositionDecoder(), prices({"SOL": 100_000_000}))

    with caplog.at_level(logging.WARNING):
        positions = asyncio.run(svc.fetch_positions(wallet))

    assert len(positions) == 2
    assert "Broken" in caplog.text
    btc = [p for p in positions if p.symbol == "BTC"][0]
    assert btc.mark_price == btc.entry_price == 60_000.0


def test_closed_and_empty_positions_are_filtered(prices, raw_position, wallet):
    resolver = prices({"SOL": 110_000_000})
    table = {
        b"open": raw_position(),
        b"closed": raw_position(side=Side.NONE),
        b"empty": raw_position(size_usd=0),
    }
    accounts = [RawAccount(k.decode(), k) for k in table]
    svc = make_service(FakeSource(accounts), TableDecoder(table), resolver)

    positions = asyncio.run(svc.fetch_positions(wallet))

    assert len(positions) == 1
    assert resolver.calls == ["SOL"]


def test_all_closed_returns_empty(prices, raw_position, wallet):
    table = {b"closed": raw_position(side=Side.NONE)}
    svc = make_service(FakeSource([RawAccount("c", b"closed")]), TableDecoder(table), prices())
    assert asyncio.run(svc.fetch_positions(wallet)) == []


def test_multi_position_accounts_are_flattened(prices, raw_position, wallet):
    table = {b"user": [raw_position(side=Side.LONG), raw_position(side=Side.SHORT)]}
    svc = make_service(FakeSource([RawAccount("UserAcct", b"user")]), TableDecoder(table), prices())

    decoded = svc.decode_accounts([RawAccount("UserAcct", b"user")])
    assert [r.pubkey for r in decoded] == ["UserAcct", "UserAcct"]

    positions = asyncio.run(svc.fetch_positions(wallet))
    assert sorted(p.direction for p in positions) == ["LONG", "SHORT"]


def test_source_failure_returns_empty(prices, wallet, caplog):
    svc = make_service(FakeSource(exc=ConnectionError("rpc unreachable")), TableDecoder({}), prices())
    with caplog.at_level(logging.ERROR):
        assert asyncio.run(svc.fetch_positions(wallet)) == []
    assert "rpc unreachable" in caplog.text


def test_failed_normalization_is_dropped(prices, raw_position, wallet):
    table = {b"a": raw_position(), b"b": raw_position(custody="Unknown")}
    accounts = [RawAccount("a", b"a"), RawAccount("b", b"b")]
    svc = make_service(FakeSource(accounts), TableDecoder(table), prices({"SOL": 110_000_000}))
    positions = asyncio.run(svc.fetch_positions(wallet))
    assert [p.protocol_market_id for p in positions] == [raw_position().custody]


def test_unexpected_decoder_result_drops_only_that_account(prices, raw_position, wallet, caplog):
    table = {b"a": raw_position(), b"odd": None, b"b": [raw_position(side=Side.SHORT), 42]}
    accounts = [RawAccount("a", b"a"), RawAccount("Odd", b"odd"), RawAccount("Mixed", b"b")]
    svc = make_service(FakeSource(accounts), TableDecoder(table), prices({"SOL": 110_000_000}))

    with caplog.at_level(logging.WARNING):
        positions = asyncio.run(svc.fetch_positions(wallet))

    assert [p.direction for p in positions] == ["LONG"]
    assert "Odd" in caplog.text
    assert "Mixed" in caplog.text
