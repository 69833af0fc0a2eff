from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gost_predict.domain.entities.observation import (  # noqa: E402
    Observation,
    ObservationPage,
)
from gost_predict.domain.gateways.observation_gateway import (  # noqa: E402
    IObservationGateway,
)

FIXED_NOW = datetime(2024, 9, 9, 12, 0, 0, tzinfo=timezone.utc)


def make_observations(
    samples: Sequence[Tuple[float, Any]], now: datetime = FIXED_NOW
) -> List[Observation]:
    """Build observations from (minutes before now, result) pairs."""
    return [
        Observation(timestamp=now - timedelta(minutes=minutes_ago), result=result)
        for minutes_ago, result in samples
    ]


def observation_payload(timestamp: datetime, result: Any) -> Dict[str, Any]:
    """SensorThings JSON representation of an observation."""
    return {
        "phenomenonTime": timestamp.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
        "result": result,
    }


class FakeObservationGateway(IObservationGateway):
    """Serves canned observations per query and records requested URLs."""

    def __init__(self, responses: Sequence[List[Observation]]):
        self._responses = list(responses)
        self.requested_urls: List[str] = []

    async def fetch_page(self, url: str) -> ObservationPage:  # pragma: no cover
        raise NotImplementedError

    async def fetch_observations(self, query_url: str) -> List[Observation]:
        self.requested_urls.append(query_url)
        if not self._responses:
            raise AssertionError(f"Unexpected observation query: {query_url}")
        return self._responses.pop(0)


@pytest.fixture()
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture()
def recent_observations() -> List[Observation]:
    return make_observations([(10, 100), (20, "90"), (30, 80.0)])
