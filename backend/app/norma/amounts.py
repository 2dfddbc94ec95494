from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Optional

ZERO = Decimal("0.00")
CENT = Decimal("0.01")

# longest numeric prefix, same as a lenient float parse ("1.2.3" -> 1.2)
_NUMERIC_PREFIX = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_STRIP = re.compile(r"[^0-9.]")


def _quantize(value: Decimal) -> Optional[Decimal]:
    if not value.is_finite():
        return None
    with localcontext() as ctx:
        # integer digits + 2 places must fit, however large the amount
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _from_string(raw: str) -> Optional[Decimal]:
    s = raw.strip()
    first_digit = re.search(r"[0-9.]", s)
    negative = first_digit is not None and "-" in s[: first_digit.start()]

    match = _NUMERIC_PREFIX.match(_STRIP.sub("", s))
    if not match:
        return None
    try:
        value = Decimal(match.group(0))
    except InvalidOperation:
        return None
    return _quantize(-value if negative else value)


def parse_amount(raw: Any) -> Optional[Decimal]:
    """
    Read a raw amount as a two-place Decimal, or None when it is not a number.

    Strings lose every character that is not a digit or a decimal point,
    except that a minus sign ahead of the first digit is kept.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        return _quantize(raw)
    if isinstance(raw, int):
        return _quantize(Decimal(raw))
    if isinstance(raw, float):
        if math.isnan(raw) or math.isinf(raw):
            return None
        return _quantize(Decimal(repr(raw)))
    if isinstance(raw, str):
        return _from_string(raw)
    return None


def normalize_amount(raw: Any) -> Decimal:
    """Display-side coercion: anything unparsable becomes 0.00."""
    value = parse_amount(raw)
    return ZERO if value is None else value


def format_amount(raw: Any) -> str:
    value = normalize_amount(raw)
    if value == 0:
        value = ZERO
    return f"{value:.2f}"
