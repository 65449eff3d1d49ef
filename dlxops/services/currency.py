"""
Price string normalization for marketplace listings.

Stored prices are free-form legacy strings ("20", "$20", "1700", "₹1,700",
"20-50"). They are rewritten into one canonical display form per currency:

  USD: "$20", "$20-$50"           (no digit grouping)
  INR: "₹1,700", "₹1,50,000"      (Indian grouping: 3 digits, then pairs)

Normalizing an already-normalized value returns it unchanged, so batch
jobs can be re-run safely.
"""
from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from enum import Enum
from typing import Any, Dict, Optional


class Currency(str, Enum):
    USD = "USD"
    INR = "INR"


SYMBOLS = {
    Currency.USD: "$",
    Currency.INR: "₹",
}

# Document fields holding prices, by currency
PRICE_FIELDS = {
    "priceUSD": Currency.USD,
    "priceINR": Currency.INR,
}

_STRIP_RE = re.compile(r"[$₹,]")
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INR_FRACTION = Decimal("0.001")


def _to_text(raw: Any) -> str:
    if isinstance(raw, float):
        if raw.is_integer():
            # 20.0 is stored by some clients for 20
            return str(int(raw))
        if math.isfinite(raw):
            # str() uses exponent form below 1e-4 and its "-" would read as a range
            return format(Decimal(repr(raw)), "f")
        return str(raw)
    if isinstance(raw, Decimal) and raw.is_finite() and abs(raw.adjusted()) <= 100:
        return format(raw, "f")
    if isinstance(raw, int) and not isinstance(raw, bool):
        try:
            return str(raw)
        except ValueError:
            # Past the int-to-str digit limit; Decimal converts from the binary digits
            return str(Decimal(raw))
    return str(raw)


def _parse_amount(text: str) -> Optional[Decimal]:
    if not _NUMBER_RE.fullmatch(text):
        return None
    try:
        value = Decimal(text)
        if not math.isfinite(float(value)):
            return None
    except (InvalidOperation, OverflowError, ValueError):
        return None
    return value


def group_indian(digits: str) -> str:
    """Group an unsigned digit string: last three, then pairs ("150000" -> "1,50,000")."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    groups.append(tail)
    return ",".join(groups)


def format_indian(value: Decimal) -> str:
    """Format a finite amount with Indian grouping and at most three decimals."""
    with localcontext() as ctx:
        ctx.prec = max(28, value.adjusted() + 10)
        ctx.rounding = ROUND_HALF_UP
        quantized = value.quantize(_INR_FRACTION)
    sign = "-" if quantized < 0 else ""
    whole, _, frac = format(abs(quantized), "f").partition(".")
    frac = frac.rstrip("0")
    grouped = group_indian(whole)
    if frac:
        return f"{sign}{grouped}.{frac}"
    return f"{sign}{grouped}"


def _format_scalar(text: str, currency: Currency) -> str:
    symbol = SYMBOLS[currency]
    if currency is Currency.INR:
        amount = _parse_amount(text)
        if amount is not None:
            try:
                return f"{symbol}{format_indian(amount)}"
            except InvalidOperation:
                pass
    return f"{symbol}{text}"


def normalize_currency(raw: Any, currency) -> Optional[str]:
    """
    Canonicalize a price value for the given currency.

    Returns None for a missing value (the caller skips the field).
    A value containing "-" is treated as a range and split on the first
    hyphen; each side is formatted on its own. Values that do not parse
    as numbers keep their text behind the currency symbol.
    """
    if raw is None:
        return None
    currency = Currency(currency)
    cleaned = _STRIP_RE.sub("", _to_text(raw)).strip()
    if "-" in cleaned:
        low, _, high = cleaned.partition("-")
        return f"{_format_scalar(low.strip(), currency)}-{_format_scalar(high.strip(), currency)}"
    return _format_scalar(cleaned, currency)


def price_field_updates(data: Dict[str, Any]) -> Dict[str, str]:
    """Return only the price fields whose normalized value differs from the stored one."""
    updates: Dict[str, str] = {}
    for field, currency in PRICE_FIELDS.items():
        stored = data.get(field)
        if stored is None:
            continue
        normalized = normalize_currency(stored, currency)
        if normalized and normalized != stored:
            updates[field] = normalized
    return updates
