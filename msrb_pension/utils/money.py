# msrb_pension/utils/money.py
"""
Presentation-time rounding. The engine keeps unrounded floats throughout;
these helpers are applied only when figures are displayed or compared.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def round_currency(amount: float, places: int = 2) -> float:
    """Round half-up to `places` decimals (0.005 -> 0.01), unlike Python's banker's round()."""
    quantum = CENT if places == 2 else Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(amount))).quantize(quantum, rounding=ROUND_HALF_UP))


def round_half_up(value: float) -> int:
    """Nearest integer with halves rounded up, as the board's calculator does for ages."""
    return int(Decimal(repr(float(value))).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_currency(amount: float, places: int = 2) -> str:
    return f"${round_currency(amount, places):,.{places}f}"
