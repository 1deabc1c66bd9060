"""Header label parsing ("name:type")."""

import re
from typing import Collection

from .models import ALL_TYPES, HeaderLabel, TypeTag

HEADER_PATTERN = re.compile(r"(\w+):(\w+)", re.ASCII)


def parse_header(content: str, recognized_types: Collection[str]) -> HeaderLabel:
    """
    Resolve a header cell's content into a field name and declared type.

    "Age:int" declares an int field named "Age". Content without a "name:type"
    pair, or whose type is not recognized, becomes a string field named after
    the content exactly as written ("Age:bogus" stays "Age:bogus").

    Args:
        content: Text of the row-1 cell
        recognized_types: Type names accepted in header labels

    Returns:
        The resolved HeaderLabel
    """
    match = HEADER_PATTERN.search(content)
    if match:
        name, type_name = match.group(1), match.group(2)
        if type_name in recognized_types and type_name in ALL_TYPES:
            return HeaderLabel(name=name, type=TypeTag(type_name))
    return HeaderLabel(name=content, type=TypeTag.STRING)
