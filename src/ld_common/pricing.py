"""Price arithmetic shared by the storefront and the admin console.

Prices are float dollars as they appear in the catalog document.
"""

import math


def round_half_up(value: float) -> int:
    """Round .5 toward positive infinity (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def compute_discount(original: float, final: float) -> int:
    """Discount percentage from the two prices.

    discount = round((original - final) / original * 100), 0 when original <= 0.
    A final price above the original yields a negative discount; it is not clamped.
    """
    if original <= 0:
        return 0
    return round_half_up((original - final) / original * 100)


def savings(original: float, final: float) -> float:
    return original - final


def format_price(amount: float) -> str:
    """Display string: 1299.99 -> '$1,299.99', -12 -> '-$12.00'."""
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"
