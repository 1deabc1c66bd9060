"""Configuration management for Ghostsheet."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from .feed import ALL_TYPES, FeedReconstructor

load_dotenv()

DEFAULT_FEED_URL = "https://spreadsheets.google.com/feeds/cells/{id}/public/basic?alt=json"


def _parse_recognized_types() -> list[str]:
    """Parse recognized header types from environment variable."""
    types_env = os.getenv("RECOGNIZED_TYPES")
    if types_env:
        types = [t.strip() for t in types_env.split(",") if t.strip()]
        if types:
            return types
    return list(ALL_TYPES)


class Settings(BaseModel):
    """Application settings."""

    # Feed location; "{id}" is replaced by the spreadsheet ID
    feed_url_template: str = os.getenv("FEED_URL_TEMPLATE", DEFAULT_FEED_URL)
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "30.0"))

    # Reconstruction
    recognized_types: list[str] = _parse_recognized_types()
    nullfill: bool = os.getenv("NULLFILL", "true").lower() == "true"  # Empty cells become null
    header_row_offset: int = int(os.getenv("HEADER_ROW_OFFSET", "1"))  # 2 when a metadata row follows the header
    strict: bool = os.getenv("STRICT", "false").lower() == "true"  # Fail on unplaceable cells instead of skipping

    # Output
    beautify: bool = os.getenv("BEAUTIFY", "false").lower() == "true"
    jsonp_callback: Optional[str] = os.getenv("JSONP_CALLBACK") or None

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @field_validator("recognized_types")
    @classmethod
    def _check_types(cls, value: list[str]) -> list[str]:
        unknown = [t for t in value if t not in ALL_TYPES]
        if unknown:
            raise ValueError(f"Unknown header types: {', '.join(unknown)}")
        return value

    @field_validator("header_row_offset")
    @classmethod
    def _check_offset(cls, value: int) -> int:
        if value not in (1, 2):
            raise ValueError("header_row_offset must be 1 or 2")
        return value

    def reconstructor(self) -> FeedReconstructor:
        """Build a FeedReconstructor from these settings."""
        return FeedReconstructor(
            recognized_types=self.recognized_types,
            nullfill=self.nullfill,
            header_row_offset=self.header_row_offset,
            strict=self.strict,
        )


settings = Settings()
