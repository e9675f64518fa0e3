import json
import logging
from typing import Optional

import httpx

from catalog_hub.core.config import Settings
from catalog_hub.schemas.snapshot import ReadResult
from catalog_hub.services.published_data_reader import fallback_result

logger = logging.getLogger("published_data_client")


class PublishedDataClient:
    """
    Storefront consumer of GET /api/get-published-data over HTTP.

    Same fallback ladder as PublishedDataReader: anything other than a
    200 with a JSON object resolves to the flagged sample snapshot.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = settings.published_data_url
        self._transport = transport
        self._timeout = httpx.Timeout(15.0, connect=5.0)

    async def fetch(self) -> ReadResult:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(self._url, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            logger.info("published data request error url=%s detail=%s", self._url, repr(exc))
            return fallback_result("storage_error", repr(exc))

        if response.status_code == 404:
            logger.info("published data not found url=%s", self._url)
            return fallback_result("not_found")

        if response.status_code != 200:
            detail = _error_detail(response)
            logger.info(
                "published data unavailable status=%s detail=%s", response.status_code, detail
            )
            return fallback_result("storage_error", f"{response.status_code}: {detail}")

        try:
            data = json.loads(response.text)
        except ValueError as exc:
            logger.error(f"Published data from {self._url} is not valid JSON: {exc}")
            return fallback_result("corrupted", str(exc))
        if not isinstance(data, dict):
            return fallback_result("corrupted", "Published data is not a JSON object")

        logger.info("published data loaded url=%s size=%s", self._url, len(response.content))
        return ReadResult(data=data, source="published")


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text[:200]
