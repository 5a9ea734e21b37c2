import pytest

from perps_report.core.calc_core import (
    base_amount_from,
    calculate_position_pnl,
    descale,
    div_round_half_up,
    leverage_from,
    signed_pnl,
    total_pnl,
)
from perps_report.core.positions_core.models import NormalizedPosition, Side

SIZE = 1_000_000_000  # $1,000
ENTRY = 100_000_000  # $100


def test_long_in_profit():
    assert calculate_position_pnl(SIZE, ENTRY, Side.LONG, 110_000_000) == (True, 100_000_000)


def test_short_in_loss():
    assert calculate_position_pnl(SIZE, ENTRY, Side.SHORT, 110_000_000) == (False, 100_000_000)


def test_short_in_profit_long_in_loss():
    assert calculate_position_pnl(SIZE, ENTRY, Side.SHORT, 90_000_000) == (True, 100_000_000)
    assert calculate_position_pnl(SIZE, ENTRY, Side.LONG, 90_000_000) == (False, 100_000_000)


@pytest.mark.parametrize("side", [Side.LONG, Side.SHORT])
def test_unchanged_price_is_zero_without_profit(side):
    assert calculate_position_pnl(SIZE, ENTRY, side, ENTRY) == (False, 0)


@pytest.mark.parametrize("side", [Side.LONG, Side.SHORT])
@pytest.mark.parametrize("current", [0, 1, ENTRY, 10 * ENTRY])
def test_zero_size_short_circuits(side, current):
    assert calculate_position_pnl(0, ENTRY, side, current) == (False, 0)


def test_zero_size_ignores_zero_entry():
    assert calculate_position_pnl(0, 0, Side.LONG, ENTRY) == (False, 0)


def test_amount_is_floored():
    # 1000 * 0.000001 / 3 = 0.000000333.. -> 333 atoms (floored)
    has_profit, amount = calculate_position_pnl(SIZE, 3_000_000, Side.LONG, 3_000_001)
    assert has_profit is True
    assert amount == 333


def test_large_values_stay_exact():
    size = 987_654_321_987_654_321
    entry = 65_432_123_456
    current = 71_234_567_890
    has_profit, amount = calculate_position_pnl(size, entry, Side.LONG, current)
    assert has_profit is True
    assert amount == size * (current - entry) // entry
    assert size * (current - entry) > 2 ** 64


def test_none_side_is_rejected():
    with pytest.raises(ValueError):
        calculate_position_pnl(SIZE, ENTRY, Side.NONE, ENTRY)


def test_signed_pnl():
    assert signed_pnl(True, 5) == 5
    assert signed_pnl(False, 5) == -5
    assert signed_pnl(False, 0) == 0


@pytest.mark.parametrize(
    "num, den, expected",
    [(4, 2, 2), (5, 2, 3), (7, 2, 4), (4, 3, 1), (5, 3, 2), (0, 9, 0), (1, 3, 0)],
)
def test_div_round_half_up(num, den, expected):
    assert div_round_half_up(num, den) == expected


def test_div_round_half_up_rejects_bad_input():
    with pytest.raises(ValueError):
        div_round_half_up(1, 0)
    with pytest.raises(ValueError):
        div_round_half_up(-1, 2)


def test_descale_and_ratios():
    assert descale(42_500_000) == 42.5
    assert descale(-1_000_000) == -1.0
    assert base_amount_from(1000.0, 100.0) == 10.0
    assert base_amount_from(1000.0, 0.0) == 0.0
    assert leverage_from(1000.0, 200.0) == 5.0
    assert leverage_from(1000.0, 0.0) == 1.0


def test_total_pnl():
    def pos(pnl):
        return NormalizedPosition(
            symbol="SOL",
            size_usd=1.0,
            base_amount=1.0,
            direction="LONG",
            pnl=pnl,
            entry_price=1.0,
            mark_price=1.0,
            leverage=1.0,
        )

    assert total_pnl([]) == 0.0
    assert total_pnl([pos(100.0), pos(-42.0)]) == 58.0
