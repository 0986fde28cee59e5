"""
Helpers for the free-text money fields (maintenance cost, fuel cost, misc expense).

Users type amounts the way they say them: "19k", "1.2L" (lakh), "₹4,500".
"""

import re
from typing import Optional, Union

THOUSAND = 1_000
LAKH = 100_000

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"^\d*\.?\d+|^\d+\.?")


def parse_money(value: Optional[Union[str, int, float]]) -> float:
    """
    Converts a free-text amount to a number.

    Everything except digits and '.' is stripped before parsing. The result is
    multiplied by 1,000 if the text contains a 'k' and by 100,000 if it contains
    an 'l' (case-insensitive); both apply when both letters appear.

    Examples:
        >>> parse_money("19k")
        19000.0
        >>> parse_money("1.5L")
        150000.0
        >>> parse_money("₹4,500")
        4500.0
        >>> parse_money("")
        0.0
    """
    if value is None or value == "":
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)

    text = str(value)
    cleaned = _NON_NUMERIC.sub("", text)
    match = _LEADING_NUMBER.match(cleaned)
    amount = float(match.group(0)) if match else 0.0

    lowered = text.lower()
    if "k" in lowered:
        amount *= THOUSAND
    if "l" in lowered:
        amount *= LAKH
    return amount


def format_currency(amount: float) -> str:
    """Renders an amount in rupees, compacting to K (thousand) or L (lakh)."""
    if abs(amount) >= LAKH:
        return f"₹{amount / LAKH:.2f}L"
    if abs(amount) >= THOUSAND:
        return f"₹{amount / THOUSAND:.1f}K"

    sign = "-" if amount < 0 else ""
    rendered = f"{abs(amount):.3f}".rstrip("0").rstrip(".")
    return f"₹{sign}{rendered}"
