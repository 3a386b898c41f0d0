"""Display helpers for presentation code."""

import math
from typing import Optional

PLACEHOLDER = "—"


def short_address(address: Optional[str]) -> str:
    """First and last four characters of an address, e.g. ``GXnN…pump``."""
    if not address:
        return ""
    return f"{address[:4]}…{address[-4:]}"


def format_amount(value: Optional[float], max_decimals: int = 6) -> str:
    """Group thousands and keep at most ``max_decimals`` fraction digits.

    Unknown or non-finite values render as the placeholder dash.
    """
    if value is None:
        return PLACEHOLDER
    try:
        number = float(value)
    except (TypeError, ValueError):
        return PLACEHOLDER
    if not math.isfinite(number):
        return PLACEHOLDER

    text = f"{number:,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_usd(value: Optional[float], max_decimals: int = 2) -> str:
    formatted = format_amount(value, max_decimals)
    return formatted if formatted == PLACEHOLDER else f"${formatted}"
