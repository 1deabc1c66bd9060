"""JSON / JSONP export of reconstructed feeds."""

import json
import logging
import math
from datetime import timezone
from pathlib import Path
from typing import Any, Optional, Union

from .feed import FeedResult

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    """Replace values JSON cannot represent (NaN, infinities) with None."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_json_safe(item) for item in value]
    return value


def _format_timestamp(result: FeedResult) -> str:
    updated = result.updated
    if updated.tzinfo is None:
        updated = updated.replace(tzinfo=timezone.utc)
    updated = updated.astimezone(timezone.utc).replace(tzinfo=None)
    return updated.isoformat(timespec="milliseconds") + "Z"


def to_payload(result: FeedResult) -> dict:
    """Convert a FeedResult into a JSON-ready dict."""
    return {
        "id": result.id,
        "updated": _format_timestamp(result),
        "title": result.title,
        "headers": {
            column: label.model_dump(mode="json")
            for column, label in result.headers.items()
        },
        "items": _json_safe(result.items),
    }


def dumps(
    result: FeedResult,
    beautify: bool = False,
    callback: Optional[str] = None,
) -> str:
    """
    Serialize a FeedResult as JSON.

    Args:
        result: The reconstructed feed
        beautify: Indent the output
        callback: Wrap the JSON as a JSONP call to this function name

    Returns:
        The serialized text
    """
    if beautify:
        text = json.dumps(to_payload(result), ensure_ascii=False, indent=4)
    else:
        text = json.dumps(to_payload(result), ensure_ascii=False, separators=(",", ":"))
    if callback:
        text = f"{callback}({text});"
    return text


def write(
    result: FeedResult,
    dest: Union[str, Path],
    beautify: bool = False,
    callback: Optional[str] = None,
) -> Path:
    """Write a serialized FeedResult to a file, creating parent directories."""
    path = Path(dest)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps(result, beautify=beautify, callback=callback), encoding="utf-8")
    logger.info(f"Wrote feed {result.id} to {path}")
    return path
