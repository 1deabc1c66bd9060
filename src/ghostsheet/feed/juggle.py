"""Type juggling: converting raw cell text to a column's declared type."""

import json
import math
import re
from typing import Any, Union

from ..errors import CoercionFailure
from .models import TypeTag

NAN = float("nan")

LEADING_INT_PATTERN = re.compile(r"\s*([+-]?[0-9]+)")
DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
RADIX_PATTERN = re.compile(r"0([xXoObB])([0-9a-fA-F]+)")
INFINITY_PATTERN = re.compile(r"([+-]?)Infinity")

_RADIX = {"x": 16, "o": 8, "b": 2}


def is_nan(value: Any) -> bool:
    """Check whether a value is the numeric failure sentinel."""
    return isinstance(value, float) and math.isnan(value)


def to_int(value: str) -> Union[int, float]:
    """Read the leading decimal integer of a string, or NaN if there is none."""
    match = LEADING_INT_PATTERN.match(value)
    if not match:
        return NAN
    return int(match.group(1), 10)


def to_number(value: str) -> Union[int, float]:
    """Read a whole string as a numeric literal, or NaN if it is not one."""
    text = value.strip()
    if not text:
        return 0

    if DECIMAL_PATTERN.fullmatch(text):
        if "." in text or "e" in text or "E" in text:
            return float(text)
        return int(text, 10)

    radix_match = RADIX_PATTERN.fullmatch(text)
    if radix_match:
        try:
            return int(radix_match.group(2), _RADIX[radix_match.group(1).lower()])
        except ValueError:
            return NAN

    infinity_match = INFINITY_PATTERN.fullmatch(text)
    if infinity_match:
        return -math.inf if infinity_match.group(1) == "-" else math.inf

    return NAN


def to_bool(value: str) -> bool:
    return value.upper() == "TRUE"


def _reject_constant(token: str):
    raise ValueError(f"{token} is not valid JSON")


def juggle(value: str, type_tag: TypeTag, nullfill: bool) -> Any:
    """
    Convert a raw cell value to its column's declared type.

    With nullfill enabled an empty string is None whatever the type. Numeric
    types never fail: unreadable text becomes NaN. Malformed JSON raises
    CoercionFailure.

    Args:
        value: Raw text of the cell
        type_tag: Declared type of the column
        nullfill: Map empty strings to None

    Returns:
        The converted value
    """
    if nullfill and value == "":
        return None

    if type_tag in (TypeTag.INT, TypeTag.INTEGER):
        return to_int(value)
    if type_tag == TypeTag.NUMBER:
        return to_number(value)
    if type_tag == TypeTag.ARRAY:
        return value.split(",")
    if type_tag in (TypeTag.BOOL, TypeTag.BOOLEAN):
        return to_bool(value)
    if type_tag == TypeTag.JSON:
        try:
            return json.loads(value, parse_constant=_reject_constant)
        except ValueError as e:
            raise CoercionFailure(value, type_tag.value, str(e)) from e
    return value
