import pytest

from msrb_pension.utils.money import format_currency, round_currency, round_half_up


@pytest.mark.parametrize(
    "amount, expected",
    [
        (2.675, 2.68),  # float repr is 2.675, banker's round() gives 2.67
        (0.125, 0.13),
        (36498.366666, 36498.37),
        (4876.666666, 4876.67),
        (-1.005, -1.01),
    ],
)
def test_round_currency_half_up(amount, expected):
    assert round_currency(amount) == expected


def test_round_currency_places():
    assert round_currency(4876.5, places=0) == 4877.0


@pytest.mark.parametrize("value, expected", [(54.5, 55), (54.49, 54), (55, 55), (0.5, 1)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_format_currency():
    assert format_currency(58900) == "$58,900.00"
    assert format_currency(36498.366) == "$36,498.37"
