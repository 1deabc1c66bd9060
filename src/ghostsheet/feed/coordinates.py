"""A1-notation parsing for feed cell titles."""

import re
from typing import Optional

from .models import Position

POSITION_PATTERN = re.compile(r"([A-Z]+)([0-9]+)")


def parse_position(label: str) -> Optional[Position]:
    """
    Parse a cell title such as "B12" into its column letters and row number.

    Only upper-case column letters are accepted and the whole label must match.
    Row 0 is not a spreadsheet row and is rejected as well.

    Args:
        label: The position label of the cell

    Returns:
        The Position, or None when the label is not A1 notation
    """
    match = POSITION_PATTERN.fullmatch(label)
    if not match:
        return None
    row = int(match.group(2), 10)
    if row < 1:
        return None
    return Position(column=match.group(1), row=row)
