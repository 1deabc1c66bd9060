"""HTTP client for published spreadsheet cell feeds."""

import json
import logging
from typing import Any, Optional

import httpx

from ..config import settings
from ..errors import FetchError, StructureError
from ..feed import FeedReconstructor, FeedResult

logger = logging.getLogger(__name__)


class FeedClient:
    """Client for downloading and reconstructing worksheet feeds."""

    def __init__(
        self,
        url_template: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
        reconstructor: Optional[FeedReconstructor] = None,
    ):
        self.url_template = url_template or settings.feed_url_template
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._http_client = http_client
        self.reconstructor = reconstructor or settings.reconstructor()

    def feed_url(self, spreadsheet_id: str) -> str:
        """Build the feed URL for a spreadsheet."""
        return self.url_template.format(id=spreadsheet_id)

    def fetch_document(self, spreadsheet_id: str) -> Any:
        """
        Download a feed and decode its JSON body.

        Args:
            spreadsheet_id: The ID of the published spreadsheet

        Returns:
            The decoded feed document

        Raises:
            FetchError: If the request fails or returns an error status
            StructureError: If the body is not JSON
        """
        url = self.feed_url(spreadsheet_id)
        logger.info(f"Fetching feed {spreadsheet_id}")

        try:
            if self._http_client is not None:
                response = self._http_client.get(url, timeout=self.timeout)
                response.raise_for_status()
                body = response.text
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.get(url)
                    response.raise_for_status()
                    body = response.text
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to load remote data: {spreadsheet_id} ({e})") from e

        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise StructureError(f"Response is not JSON: {e}", spreadsheet_id) from e

    def get(self, spreadsheet_id: str) -> FeedResult:
        """Fetch a spreadsheet feed and reconstruct its records."""
        document = self.fetch_document(spreadsheet_id)
        result = self.reconstructor.reconstruct_document(document)
        logger.info(
            f"Loaded feed {spreadsheet_id}: {len(result.headers)} columns, "
            f"{len(result.records)} records"
        )
        return result
