"""
Price text normalization and currency inference.

Retailers format prices for their own locale, so "1.234,56" and "1,234.56"
both mean the same amount. The decimal mark is inferred from the position
of the separators alone, no locale configuration involved.
"""
import math
import re
from typing import Optional

# Everything that is not part of a number
_NON_NUMERIC_RE = re.compile(r"[^0-9.,\-]")

# A separator is a decimal mark only when it is followed by 1-2 trailing digits
_TRAILING_COMMA_DECIMAL_RE = re.compile(r",[0-9]{1,2}$")
_TRAILING_DOT_DECIMAL_RE = re.compile(r"\.[0-9]{1,2}$")

_NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?")

CURRENCY_SYMBOLS = ("$", "€", "£", "¥")
_CURRENCY_SYMBOL_RE = re.compile("[" + re.escape("".join(CURRENCY_SYMBOLS)) + "]")
_CURRENCY_CODE_RE = re.compile(r"\b[A-Z]{3}\b")


def _decimal_separator(raw: str) -> Optional[str]:
    """Pick the decimal mark of a stripped price string, or None if it has none."""
    has_dot = "." in raw
    has_comma = "," in raw

    if has_dot and has_comma:
        # Whichever comes last is the decimal mark
        return "," if raw.rfind(",") > raw.rfind(".") else "."
    if has_comma:
        return "," if _TRAILING_COMMA_DECIMAL_RE.search(raw) else None
    if has_dot:
        return "." if _TRAILING_DOT_DECIMAL_RE.search(raw) else None
    return None


def normalize_price(value: Optional[str]) -> Optional[float]:
    """
    Convert a free-form price string into a float.

    Examples:
        "$1,234.56"  -> 1234.56
        "1.234,56 €" -> 1234.56
        "1,234"      -> 1234.0  (comma groups thousands)
        "12,5"       -> 12.5    (comma is the decimal mark)

    Returns None when nothing numeric can be recovered.
    """
    if not value:
        return None

    raw = _NON_NUMERIC_RE.sub("", value)
    separator = _decimal_separator(raw)

    if separator:
        thousands = "," if separator == "." else "."
        normalized = raw.replace(thousands, "").replace(separator, ".", 1)
    else:
        normalized = raw.replace(".", "").replace(",", "")

    match = _NUMBER_RE.search(normalized)
    if not match:
        return None
    try:
        value = float(match.group())
    except ValueError:
        return None
    # Absurdly long digit runs overflow to inf, which is not a price
    return value if math.isfinite(value) else None


def infer_currency(value: Optional[str]) -> Optional[str]:
    """
    Guess the currency of a raw price string.

    A currency symbol anywhere in the text wins; otherwise the first
    three-letter uppercase code (e.g. "USD") is returned.
    """
    if not value:
        return None

    symbol = _CURRENCY_SYMBOL_RE.search(value)
    if symbol:
        return symbol.group()

    code = _CURRENCY_CODE_RE.search(value)
    return code.group() if code else None
