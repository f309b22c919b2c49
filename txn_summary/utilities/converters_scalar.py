# txn_summary/utilities/converters_scalar.py
from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Final, Optional, Tuple

_ZERO: Final[Decimal] = Decimal(0)


def to_decimal(value: Any) -> Decimal:
    """
    Convert a quantity/rate/amount cell to Decimal with lenient parsing.

    Supported inputs:
      - Decimal, int → as-is (bool rejected; it is not a quantity)
      - float        → via str() so 1.1 stays Decimal('1.1'); NaN/inf rejected
      - str          → "1234", "1.5E3", "-1,234.56", "(1,234.56)", "1234-",
                       "₹ 1,234.00", "1.234,56" (EU: last separator is the
                       decimal mark)

    Raises:
        ValueError: on None, non-finite values, text without digits, or text
            with anything besides digits, separators, signs and currency.

    Examples:
        to_decimal("-3,188.32")   -> Decimal('-3188.32')
        to_decimal("(1,234.56)")  -> Decimal('-1234.56')
        to_decimal(12.5)          -> Decimal('12.5')
    """
    if isinstance(value, bool):
        raise ValueError("Boolean is not a numeric quantity")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Non-finite Decimal: {value!r}")
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Non-finite float: {value!r}")
        # Avoid binary float artifacts
        return Decimal(str(value))

    if not isinstance(value, str):
        raise ValueError(
            f"Unsupported type for Decimal conversion: {type(value).__name__}"
        )

    # Plain numeric text ("12", "-3.5", "1.5E3") parses as-is
    try:
        direct = Decimal(value.strip())
    except InvalidOperation:
        direct = None
    if direct is not None:
        if not direct.is_finite():
            raise ValueError(f"Non-finite number: {value!r}")
        return direct

    cleaned = clean_number_like_string(value)
    try:
        result = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(
            f"Could not parse Decimal from {value!r} (normalized to {cleaned!r})"
        ) from e
    if not result.is_finite():
        raise ValueError(f"Non-finite number: {value!r}")
    return result


def coerce_decimal(value: Any) -> Tuple[Decimal, bool]:
    """
    Return (Decimal, coerced). Unparseable input becomes Decimal(0) with
    coerced=True so one bad cell cannot poison a whole roll-up.
    """
    try:
        return to_decimal(value), False
    except ValueError:
        return _ZERO, True


def clean_number_like_string(value: str) -> str:
    s = value.strip()
    if not s:
        raise ValueError("Empty string cannot be converted to Decimal")

    s = s.replace("\xa0", " ").replace(_UNICODE_MINUS, "-").strip()

    # Negative via parentheses or trailing minus
    neg = False
    if s.startswith("(") and s.endswith(")"):
        neg = True
        s = s[1:-1].strip()
    if s.endswith("-"):
        neg = not neg
        s = s[:-1].strip()

    # Drop currency symbols and spaces; anything else left must be numeric
    s = _CURRENCY_OR_SPACE.sub("", s)
    if s.startswith("+"):
        s = s[1:]
    if s.startswith("-"):
        neg = not neg
        s = s[1:]

    if not re.search(r"\d", s):
        raise ValueError(f"No digits found in input: {value!r}")
    if not _NUMBER_BODY.fullmatch(s):
        raise ValueError(f"Not a number: {value!r}")

    has_comma = "," in s
    has_dot = "." in s
    if has_comma and has_dot:
        # Last separator is the decimal mark
        dec_sep: Optional[str] = "," if s.rfind(",") > s.rfind(".") else "."
    elif has_comma:
        # "1,234" is thousands; "1,5" / "1,25" is a decimal comma
        after = len(s) - s.rfind(",") - 1
        dec_sep = "," if after in (1, 2) else None
    else:
        dec_sep = "."

    if dec_sep is None:
        cleaned = s.replace(",", "")
    elif dec_sep == ".":
        cleaned = s.replace(",", "")
    else:
        cleaned = s.replace(".", "").replace(",", ".")

    if neg and cleaned and cleaned[0] != "-":
        cleaned = "-" + cleaned
    return cleaned


def format_decimal(value: Any, places: Optional[int] = None) -> str:
    """
    Fixed-point text for CSV output: no exponent, no thousands separators.

    places=None keeps the value's own precision; otherwise rounds half-up.
    Non-numeric input is stringified ("" for None).
    """
    if value is None:
        return ""
    try:
        d = to_decimal(value)
    except ValueError:
        return str(value)
    if places is not None:
        d = d.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    text = format(d, "f")
    # Decimal keeps the sign of zero ("-0.00"); CSV consumers should not see it
    return text.lstrip("-") if d.is_zero() else text


def to_str(v: Any) -> str:
    return "" if v is None else str(v)


_CURRENCY_OR_SPACE: Final[re.Pattern[str]] = re.compile(r"[\s$\u20ac\u00a3\u00a5\u20b9]+")
_NUMBER_BODY: Final[re.Pattern[str]] = re.compile(r"[\d,.]+")
_UNICODE_MINUS = "\u2212"  # '−'
