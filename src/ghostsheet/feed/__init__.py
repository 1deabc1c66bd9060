"""Cell feed reconstruction.

Parses the flat cell list of a worksheet feed into typed row records, using
the first row as "name:type" header labels.
"""

from .models import (
    ALL_TYPES,
    FeedResult,
    HeaderLabel,
    HeaderMap,
    Position,
    RawCell,
    Record,
    TypeTag,
)
from .coordinates import parse_position
from .headers import parse_header
from .juggle import juggle, is_nan
from .reconstructor import FeedReconstructor

__all__ = [
    "ALL_TYPES",
    "FeedResult",
    "HeaderLabel",
    "HeaderMap",
    "Position",
    "RawCell",
    "Record",
    "TypeTag",
    "parse_position",
    "parse_header",
    "juggle",
    "is_nan",
    "FeedReconstructor",
]
