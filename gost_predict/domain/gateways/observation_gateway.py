"""
Domain Gateway - Observations

This module defines the gateway interface for reading observations from
a SensorThings-compatible observation store.
"""

from abc import ABC, abstractmethod
from typing import List

from gost_predict.domain.entities.observation import Observation, ObservationPage


class IObservationGateway(ABC):
    """Interface for observation store gateways."""

    @abstractmethod
    async def fetch_page(self, url: str) -> ObservationPage:
        """
        Fetch a single page of an observation collection.

        Args:
            url: Collection URL, either a built query or a continuation link

        Returns:
            The page's observations and its continuation link, if any

        Raises:
            ObservationFetchError: When the request or response decoding fails
        """
        pass

    @abstractmethod
    async def fetch_observations(self, query_url: str) -> List[Observation]:
        """
        Fetch every observation a query yields, following continuation links.

        Args:
            query_url: Collection URL with its query options

        Returns:
            Observations of all pages, in page order

        Raises:
            ObservationFetchError: When any page cannot be fetched
        """
        pass
