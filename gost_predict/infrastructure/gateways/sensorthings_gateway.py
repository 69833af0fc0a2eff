"""
Infrastructure Gateway - SensorThings Implementation

This module implements the observation gateway against a SensorThings API
server (e.g. GOST), following @iot.nextLink continuation links until the
collection is exhausted.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

import httpx
import structlog

from gost_predict.domain.entities.errors import ObservationFetchError
from gost_predict.domain.entities.observation import Observation, ObservationPage
from gost_predict.domain.gateways.observation_gateway import IObservationGateway
from gost_predict.domain.services.sensorthings_query import encode_url

logger = structlog.get_logger(__name__)

NEXT_LINK_KEY = "@iot.nextLink"
COUNT_KEY = "@iot.count"


class SensorThingsGateway(IObservationGateway):
    """Implementation of the observation gateway using an HTTP client."""

    def __init__(self, timeout: float = 30.0, max_pages: Optional[int] = None):
        """
        Initialize SensorThings gateway.

        Args:
            timeout: Request timeout in seconds
            max_pages: Upper bound on pages followed per query, unbounded if None
        """
        self.timeout = timeout
        self.max_pages = max_pages

    async def fetch_observations(self, query_url: str) -> List[Observation]:
        """Fetch every page of a query, in continuation order."""

        observations: List[Observation] = []
        url: Optional[str] = query_url
        pages = 0

        while url:
            if self.max_pages is not None and pages >= self.max_pages:
                logger.error(
                    "sensorthings.page_limit_exceeded",
                    max_pages=self.max_pages,
                    query_url=query_url,
                )
                raise ObservationFetchError(
                    f"SensorThings pagination exceeded {self.max_pages} pages",
                    url=query_url,
                )

            page = await self.fetch_page(url)
            pages += 1
            observations.extend(page.observations)
            url = page.next_link

        logger.info(
            "sensorthings.observations_fetched",
            count=len(observations),
            pages=pages,
            query_url=query_url,
        )
        return observations

    async def fetch_page(self, url: str) -> ObservationPage:
        """Fetch and decode a single observation page."""

        encoded_url = encode_url(url)
        headers = {"Content-Type": "application/json"}

        logger.debug("sensorthings.page_requested", url=encoded_url)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(encoded_url, headers=headers)
                response.raise_for_status()

                data = response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                "sensorthings.http_error",
                status_code=e.response.status_code,
                response_text=e.response.text,
                url=encoded_url,
            )
            raise ObservationFetchError(
                f"SensorThings HTTP error {e.response.status_code}: {e.response.text}",
                url=encoded_url,
            ) from e

        except httpx.RequestError as e:
            logger.error("sensorthings.request_error", error=str(e), url=encoded_url)
            raise ObservationFetchError(
                f"SensorThings request failed: {str(e)}", url=encoded_url
            ) from e

        except httpx.InvalidURL as e:
            logger.error("sensorthings.invalid_url", error=str(e), url=encoded_url)
            raise ObservationFetchError(
                f"Invalid SensorThings URL: {str(e)}", url=encoded_url
            ) from e

        except ValueError as e:
            logger.error("sensorthings.decode_error", error=str(e), url=encoded_url)
            raise ObservationFetchError(
                f"Unable to decode SensorThings response: {str(e)}", url=encoded_url
            ) from e

        page = self._parse_page(data, encoded_url)
        logger.debug(
            "sensorthings.page_fetched",
            url=encoded_url,
            count=len(page.observations),
            has_next=page.has_next,
        )
        return page

    def _parse_page(self, data: Any, url: str) -> ObservationPage:
        """Parse an observation collection body."""

        if not isinstance(data, dict):
            raise ObservationFetchError(
                "Unexpected SensorThings response: expected a JSON object", url=url
            )

        values = data.get("value", [])
        if values is None:
            values = []
        if not isinstance(values, list):
            raise ObservationFetchError(
                "Unexpected SensorThings response: 'value' is not an array", url=url
            )

        observations = [self._parse_observation(entry, url) for entry in values]

        next_link = data.get(NEXT_LINK_KEY)
        if next_link is not None and not isinstance(next_link, str):
            raise ObservationFetchError(
                f"Unexpected SensorThings response: invalid {NEXT_LINK_KEY}", url=url
            )

        count = data.get(COUNT_KEY)
        return ObservationPage(
            observations=observations,
            next_link=next_link or None,
            count=count if isinstance(count, int) else None,
        )

    def _parse_observation(self, entry: Any, url: str) -> Observation:
        if not isinstance(entry, dict):
            raise ObservationFetchError(
                "Unexpected SensorThings response: observation is not an object",
                url=url,
            )

        phenomenon_time = entry.get("phenomenonTime")
        if not isinstance(phenomenon_time, str) or not phenomenon_time:
            raise ObservationFetchError(
                "Observation without phenomenonTime in SensorThings response",
                url=url,
                details={"observation": entry},
            )

        try:
            timestamp = parse_phenomenon_time(phenomenon_time)
        except ValueError as e:
            raise ObservationFetchError(
                f"Unable to parse phenomenonTime: {phenomenon_time}",
                url=url,
                details={"observation": entry},
            ) from e

        return Observation(timestamp=timestamp, result=entry.get("result"))


def parse_phenomenon_time(value: str) -> datetime:
    """
    Parse a SensorThings phenomenonTime into an aware datetime.

    Intervals ("start/end") resolve to their end instant. Naive values are
    taken as UTC.
    """
    instant = value.split("/")[-1].strip()
    timestamp = datetime.fromisoformat(instant.replace("Z", "+00:00"))
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp
