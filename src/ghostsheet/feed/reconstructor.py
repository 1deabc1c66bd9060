"""Rebuild typed row records from a flat list of feed cells."""

import logging
from datetime import datetime
from typing import Any, Collection, Optional, Sequence, Union

from pydantic import ValidationError

from ..errors import (
    CoercionFailure,
    CoordinateParseFailure,
    StructureError,
    UnresolvedColumn,
)
from .coordinates import parse_position
from .headers import parse_header
from .juggle import juggle
from .models import FeedResult, HeaderMap, Position, RawCell, Record

logger = logging.getLogger(__name__)

HEADER_ROW = 1


class FeedReconstructor:
    """
    Turn a worksheet cell feed into a FeedResult.

    Row 1 holds the header labels ("name:type"); every other cell is placed
    into the record of its row under the field named by its column header.
    Headers are collected in a first pass so the order of the cells in the
    feed does not matter.

    Cells with an unreadable position label, or in a column without a
    header, are skipped. With strict=True they raise instead.
    """

    def __init__(
        self,
        recognized_types: Collection[str],
        nullfill: bool,
        header_row_offset: int,
        strict: bool = False,
    ):
        if header_row_offset not in (1, 2):
            raise ValueError(f"header_row_offset must be 1 or 2, got {header_row_offset}")
        self.recognized_types = frozenset(recognized_types)
        self.nullfill = nullfill
        self.header_row_offset = header_row_offset
        self.strict = strict

    def reconstruct_document(self, document: Any) -> FeedResult:
        """
        Reconstruct a decoded feed document.

        Args:
            document: JSON-decoded feed, {"feed": {"id", "updated", "title", "entry"}}

        Returns:
            The reconstructed FeedResult

        Raises:
            StructureError: If the document is not a cell feed
        """
        feed = document.get("feed") if isinstance(document, dict) else None
        if not isinstance(feed, dict):
            raise StructureError("Document has no feed object")

        feed_id = self._feed_text(feed, "id")
        entries = feed.get("entry")
        if not isinstance(entries, list):
            raise StructureError(
                f"Feed entry must be a list, got {type(entries).__name__}", feed_id
            )

        cells = [RawCell.from_entry(entry) for entry in entries]
        return self.reconstruct(
            feed_id=feed_id,
            updated=self._feed_text(feed, "updated", feed_id),
            title=self._feed_text(feed, "title", feed_id),
            cells=cells,
        )

    def reconstruct(
        self,
        feed_id: str,
        updated: Union[str, datetime],
        title: str,
        cells: Sequence[RawCell],
    ) -> FeedResult:
        """
        Reconstruct the records of one worksheet.

        Args:
            feed_id: Identifier of the feed
            updated: Last update time (datetime or ISO-8601 string)
            title: Worksheet title
            cells: The feed's cells in document order

        Returns:
            The reconstructed FeedResult

        Raises:
            StructureError: If cells is not a list
            CoercionFailure: If a json column holds malformed JSON
        """
        if not isinstance(cells, (list, tuple)):
            raise StructureError(
                f"Cells must be a list, got {type(cells).__name__}", feed_id
            )

        placed = self._place(cells, feed_id)
        headers = self._collect_headers(placed)
        rows = self._collect_rows(placed, headers, feed_id)

        logger.debug(
            f"Reconstructed feed {feed_id}: {len(headers)} columns, "
            f"{len(rows)} rows from {len(cells)} cells"
        )

        try:
            return FeedResult(
                id=feed_id,
                updated=updated,
                title=title,
                headers=headers,
                items=self._materialize(rows),
            )
        except ValidationError as e:
            raise StructureError(f"Invalid feed metadata: {e}", feed_id) from e

    def _place(
        self, cells: Sequence[RawCell], feed_id: str
    ) -> list[tuple[Position, RawCell]]:
        """Attach a parsed position to every cell, dropping unreadable labels."""
        placed = []
        for cell in cells:
            position = parse_position(cell.position_label)
            if position is None:
                if self.strict:
                    raise CoordinateParseFailure(cell.position_label, feed_id)
                logger.debug(f"Skipping cell with invalid position {cell.position_label!r}")
                continue
            placed.append((position, cell))
        return placed

    def _collect_headers(self, placed: list[tuple[Position, RawCell]]) -> HeaderMap:
        headers: HeaderMap = {}
        for position, cell in placed:
            if position.row == HEADER_ROW:
                headers[position.column] = parse_header(cell.content, self.recognized_types)
        return headers

    def _collect_rows(
        self,
        placed: list[tuple[Position, RawCell]],
        headers: HeaderMap,
        feed_id: str,
    ) -> dict[int, Record]:
        """Coerce data cells into records keyed by their 0-based row index."""
        rows: dict[int, Record] = {}
        for position, cell in placed:
            if position.row == HEADER_ROW:
                continue

            label = headers.get(position.column)
            if label is None:
                if self.strict:
                    raise UnresolvedColumn(position.column, position.label, feed_id)
                logger.debug(f"Skipping cell {position.label}: column has no header")
                continue

            # First data row is index 0
            index = position.row - self.header_row_offset - 1
            if index < 0:
                logger.debug(f"Skipping cell {position.label}: above the first data row")
                continue

            try:
                value = juggle(cell.content, label.type, self.nullfill)
            except CoercionFailure as e:
                raise CoercionFailure(
                    e.value, e.type_name, f"{e.reason} (cell {position.label})", feed_id
                ) from e

            rows.setdefault(index, {})[label.name] = value
        return rows

    @staticmethod
    def _materialize(rows: dict[int, Record]) -> list[Optional[Record]]:
        """Lay rows out by index; rows never written stay None."""
        if not rows:
            return []
        items: list[Optional[Record]] = [None] * (max(rows) + 1)
        for index, record in rows.items():
            items[index] = record
        return items

    @staticmethod
    def _feed_text(feed: dict, key: str, feed_id: Optional[str] = None) -> str:
        wrapper = feed.get(key)
        if not isinstance(wrapper, dict) or wrapper.get("$t") is None:
            raise StructureError(f"Feed has no {key} text", feed_id)
        return str(wrapper["$t"])
