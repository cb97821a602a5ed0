"""
Built-in value converters referenced by mapping rules.

Every converter is pure and total: bad input yields an empty string or a
converter-specific default, never an exception.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Optional, Union

from dateutil import parser as date_parser

from ..errors import MigrationObjectError
from ..models.mapping import ConverterTag

Converter = Callable[[Any], Any]

_NON_DIGITS = re.compile(r"[^0-9]")
_TRUE_FLAGS = ("X", "Y")
MAX_EXPONENT = 100


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce to a finite Decimal of sane magnitude, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite() or abs(number.adjusted()) > MAX_EXPONENT:
        return None
    return number


def _is_flag_set(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value in _TRUE_FLAGS
    return False


def to_date(value: Any) -> str:
    """YYYYMMDD (separators ignored) -> YYYY-MM-DD; anything else -> ''."""
    if value is None or value == "" or isinstance(value, bool):
        return ""
    digits = _NON_DIGITS.sub("", str(value))
    if len(digits) != 8:
        return ""
    try:
        parsed = date_parser.isoparse(digits)
    except (ValueError, OverflowError):
        return ""
    return parsed.strftime("%Y-%m-%d")


def to_decimal(value: Any) -> str:
    """Numeric input -> plain decimal string with its precision preserved."""
    number = _to_decimal(value)
    if number is None:
        return "0.00"
    return format(number, "f")


def to_integer(value: Any) -> int:
    """Truncate toward zero; non-numeric -> 0."""
    number = _to_decimal(value)
    if number is None:
        return 0
    return int(number)


def to_upper_case(value: Any) -> str:
    return "" if value is None else str(value).upper()


def to_lower_case(value: Any) -> str:
    return "" if value is None else str(value).lower()


def bool_yn(value: Any) -> str:
    """ABAP-style flag: 'X' when set, '' otherwise."""
    return "X" if _is_flag_set(value) else ""


def bool_tf(value: Any) -> str:
    if value == "T":
        return "T"
    return "T" if _is_flag_set(value) else "F"


def pad_left(width: int) -> Converter:
    """Build a converter that left-pads with '0' to `width`. Longer input is kept whole."""
    def _pad(value: Any) -> str:
        if value is None:
            return ""
        return str(value).rjust(width, "0")
    _pad.__name__ = f"pad_left_{width}"
    return _pad


def strip_leading_zeros(value: Any) -> str:
    if value is None or value == "":
        return ""
    return str(value).lstrip("0") or "0"


def trim(value: Any) -> str:
    return "" if value is None else str(value).strip()


CONVERTERS: Dict[str, Converter] = {
    ConverterTag.TO_DATE.value: to_date,
    ConverterTag.TO_DECIMAL.value: to_decimal,
    ConverterTag.TO_INTEGER.value: to_integer,
    ConverterTag.TO_UPPER_CASE.value: to_upper_case,
    ConverterTag.TO_LOWER_CASE.value: to_lower_case,
    ConverterTag.BOOL_YN.value: bool_yn,
    ConverterTag.BOOL_TF.value: bool_tf,
    ConverterTag.PAD_LEFT_10.value: pad_left(10),
    ConverterTag.PAD_LEFT_40.value: pad_left(40),
    ConverterTag.STRIP_LEADING_ZEROS.value: strip_leading_zeros,
    ConverterTag.TRIM.value: trim,
}


def is_known_converter(tag: Union[ConverterTag, str]) -> bool:
    key = tag.value if isinstance(tag, ConverterTag) else str(tag)
    return key in CONVERTERS


def get_converter(tag: Union[ConverterTag, str]) -> Converter:
    """
    Resolve a converter tag.

    Raises:
        MigrationObjectError: MIGOBJ_UNKNOWN_CONVERTER for tags outside the closed set
    """
    key = tag.value if isinstance(tag, ConverterTag) else str(tag)
    converter = CONVERTERS.get(key)
    if converter is None:
        raise MigrationObjectError(
            f"Unknown converter '{key}'",
            code="MIGOBJ_UNKNOWN_CONVERTER",
            details={"converter": key, "known": sorted(CONVERTERS)},
        )
    return converter
