"""Pytest configuration and shared fixtures."""

import pytest

from ghostsheet.feed import ALL_TYPES, FeedReconstructor


def make_entry(label: str, content: str) -> dict:
    """Build a feed entry as the spreadsheet feed encodes it."""
    return {"title": {"$t": label}, "content": {"$t": content}}


def make_document(entries: list, feed_id: str = "test-feed-123") -> dict:
    """Wrap entries into a decoded feed document."""
    return {
        "feed": {
            "id": {"$t": feed_id},
            "updated": {"$t": "2013-05-01T10:20:30.000Z"},
            "title": {"$t": "Sheet1"},
            "entry": entries,
        }
    }


@pytest.fixture
def reconstructor() -> FeedReconstructor:
    """Create a reconstructor with the default configuration."""
    return FeedReconstructor(
        recognized_types=ALL_TYPES,
        nullfill=True,
        header_row_offset=1,
    )


@pytest.fixture
def sample_entries() -> list:
    """Create the entries of a small typed worksheet."""
    return [
        make_entry("A1", "Name"),
        make_entry("B1", "Age:int"),
        make_entry("C1", "Score:number"),
        make_entry("D1", "Tags:array"),
        make_entry("E1", "Active:bool"),
        make_entry("F1", "Meta:json"),
        make_entry("A2", "Alice"),
        make_entry("B2", "30"),
        make_entry("C2", "9.5"),
        make_entry("D2", "a,b"),
        make_entry("E2", "TRUE"),
        make_entry("F2", '{"level": 3}'),
        make_entry("A3", "Bob"),
        make_entry("B3", "41"),
        make_entry("C3", ""),
        make_entry("D3", "x"),
        make_entry("E3", "false"),
        make_entry("F3", "[1, 2]"),
    ]


@pytest.fixture
def sample_document(sample_entries) -> dict:
    """Create a decoded feed document for the sample worksheet."""
    return make_document(sample_entries)
