"""Data models for spreadsheet cell feeds."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class TypeTag(str, Enum):
    """Declared type of a column, taken from its header label."""

    STRING = "string"
    INT = "int"
    INTEGER = "integer"  # alias of int
    NUMBER = "number"
    ARRAY = "array"
    BOOL = "bool"
    BOOLEAN = "boolean"  # alias of bool
    JSON = "json"


ALL_TYPES: tuple[str, ...] = tuple(tag.value for tag in TypeTag)


def _text(wrapper: Any) -> str:
    """Unwrap a feed text node such as {"$t": "A1"}."""
    if isinstance(wrapper, dict):
        value = wrapper.get("$t", "")
        return "" if value is None else str(value)
    return ""


class RawCell(BaseModel):
    """A single entry of the feed, before it is placed in the grid."""

    position_label: str  # A1 notation, e.g. "C12"
    content: str = ""

    @classmethod
    def from_entry(cls, entry: Any) -> "RawCell":
        """Build a cell from a decoded feed entry."""
        if not isinstance(entry, dict):
            return cls(position_label="", content="")
        return cls(
            position_label=_text(entry.get("title")),
            content=_text(entry.get("content")),
        )


class Position(BaseModel):
    """Column letters and 1-based row number of a cell."""

    column: str
    row: int = Field(ge=1)

    @property
    def label(self) -> str:
        return f"{self.column}{self.row}"


class HeaderLabel(BaseModel):
    """Field name and declared type of a column."""

    name: str
    type: TypeTag = TypeTag.STRING


Record = dict[str, Any]
HeaderMap = dict[str, HeaderLabel]


class FeedResult(BaseModel):
    """Typed, row-oriented reconstruction of one worksheet feed."""

    id: str
    updated: datetime
    title: str
    headers: HeaderMap = Field(default_factory=dict)
    items: list[Optional[Record]] = Field(default_factory=list)

    @property
    def records(self) -> list[Record]:
        """Return the populated rows, skipping holes."""
        return [item for item in self.items if item is not None]
