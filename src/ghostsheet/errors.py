"""Exceptions raised while fetching and reconstructing spreadsheet feeds."""

from typing import Optional


class GhostsheetError(Exception):
    """Base class for all Ghostsheet errors."""

    def __init__(self, message: str, feed_id: Optional[str] = None):
        self.feed_id = feed_id
        if feed_id:
            message = f"Feed {feed_id}: {message}"
        super().__init__(message)


class StructureError(GhostsheetError):
    """Raised when a feed document does not have the expected shape."""
    pass


class CoordinateParseFailure(GhostsheetError):
    """Raised in strict mode when a cell's position label is not A1 notation."""

    def __init__(self, label: str, feed_id: Optional[str] = None):
        self.label = label
        super().__init__(f"Invalid cell position label: {label!r}", feed_id)


class UnresolvedColumn(GhostsheetError):
    """Raised in strict mode when a data cell's column has no header."""

    def __init__(self, column: str, label: str, feed_id: Optional[str] = None):
        self.column = column
        self.label = label
        super().__init__(f"No header registered for column {column} (cell {label})", feed_id)


class CoercionFailure(GhostsheetError):
    """Raised when a cell value cannot be converted to its declared type."""

    def __init__(
        self,
        value: str,
        type_name: str,
        reason: str = "",
        feed_id: Optional[str] = None,
    ):
        self.value = value
        self.type_name = type_name
        self.reason = reason
        message = f"Cannot convert {value!r} to {type_name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, feed_id)


class FetchError(GhostsheetError):
    """Raised when a remote feed cannot be downloaded."""
    pass
