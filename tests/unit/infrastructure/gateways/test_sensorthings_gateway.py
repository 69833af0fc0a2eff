from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, List

import httpx
import pytest

from gost_predict.domain.entities.errors import ObservationFetchError
from gost_predict.infrastructure.gateways.sensorthings_gateway import (
    SensorThingsGateway,
    parse_phenomenon_time,
)
from tests.conftest import FIXED_NOW, observation_payload


class _StubResponse:
    def __init__(self, status_code: int, json_data=None, text: str = "error"):
        self.status_code = status_code
        self._json = json_data
        self.text = text

    def json(self):
        if isinstance(self._json, Exception):
            raise self._json
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("GET", "http://st")
            response = httpx.Response(self.status_code, request=request, text=self.text)
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubAsyncClient:
    """Serves responses keyed by URL and records every request."""

    def __init__(self, responses: Dict[str, object], requested: List[str]):
        self._responses = responses
        self._requested = requested

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url, *args, **kwargs):
        self._requested.append(url)
        response = self._responses[url]
        if isinstance(response, Exception):
            raise response
        return response


def _install(monkeypatch, responses: Dict[str, object]) -> List[str]:
    requested: List[str] = []
    monkeypatch.setattr(
        "httpx.AsyncClient",
        lambda timeout: _StubAsyncClient(responses, requested),
    )
    return requested


def _page(results, next_link=None) -> dict:
    body = {
        "value": [
            observation_payload(FIXED_NOW - timedelta(minutes=minutes), value)
            for minutes, value in results
        ]
    }
    if next_link:
        body["@iot.nextLink"] = next_link
    return body


@pytest.mark.asyncio
async def test_fetch_observations_follows_next_links(monkeypatch) -> None:
    requested = _install(
        monkeypatch,
        {
            "http://st/p1": _StubResponse(200, _page([(1, 1), (2, 2)], "http://st/p2")),
            "http://st/p2": _StubResponse(200, _page([(3, 3)], "http://st/p3")),
            "http://st/p3": _StubResponse(200, _page([(4, 4), (5, 5), (6, 6)])),
        },
    )

    gateway = SensorThingsGateway()
    observations = await gateway.fetch_observations("http://st/p1")

    assert [o.result for o in observations] == [1, 2, 3, 4, 5, 6]
    assert requested == ["http://st/p1", "http://st/p2", "http://st/p3"]
    assert observations[0].timestamp == FIXED_NOW - timedelta(minutes=1)


@pytest.mark.asyncio
async def test_every_page_url_is_encoded(monkeypatch) -> None:
    first = "http://st/Obs?$filter=phenomenonTime gt '2024-09-09T11:00:00.000000Z'"
    second = "http://st/Obs?$skip=2&$filter=phenomenonTime gt '2024-09-09T11:00:00.000000Z'"
    encoded_first = (
        "http://st/Obs?$filter=phenomenonTime%20gt%20%272024-09-09T11:00:00.000000Z%27"
    )
    encoded_second = (
        "http://st/Obs?$skip=2&$filter=phenomenonTime%20gt%20"
        "%272024-09-09T11:00:00.000000Z%27"
    )
    requested = _install(
        monkeypatch,
        {
            encoded_first: _StubResponse(200, _page([(1, 1)], second)),
            encoded_second: _StubResponse(200, _page([(2, 2)])),
        },
    )

    await SensorThingsGateway().fetch_observations(first)

    assert requested == [encoded_first, encoded_second]


@pytest.mark.asyncio
async def test_empty_collection_returns_no_observations(monkeypatch) -> None:
    _install(monkeypatch, {"http://st/p1": _StubResponse(200, {"value": []})})

    assert await SensorThingsGateway().fetch_observations("http://st/p1") == []


@pytest.mark.asyncio
async def test_failure_on_a_later_page_discards_the_query(monkeypatch) -> None:
    _install(
        monkeypatch,
        {
            "http://st/p1": _StubResponse(200, _page([(1, 1)], "http://st/p2")),
            "http://st/p2": _StubResponse(503, text="unavailable"),
        },
    )

    with pytest.raises(ObservationFetchError, match="503") as exc_info:
        await SensorThingsGateway().fetch_observations("http://st/p1")

    assert exc_info.value.url == "http://st/p2"


@pytest.mark.asyncio
async def test_transport_error_is_reported(monkeypatch) -> None:
    _install(
        monkeypatch,
        {"http://st/p1": httpx.ConnectError("connection refused")},
    )

    with pytest.raises(ObservationFetchError, match="connection refused"):
        await SensorThingsGateway().fetch_observations("http://st/p1")


@pytest.mark.asyncio
async def test_invalid_url_is_reported(monkeypatch) -> None:
    _install(
        monkeypatch,
        {"http://[::1/v1.0": httpx.InvalidURL("Invalid IPv6 address")},
    )

    with pytest.raises(ObservationFetchError, match="Invalid SensorThings URL") as exc_info:
        await SensorThingsGateway().fetch_observations("http://[::1/v1.0")

    assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)


@pytest.mark.asyncio
async def test_malformed_json_is_reported(monkeypatch) -> None:
    _install(
        monkeypatch,
        {"http://st/p1": _StubResponse(200, ValueError("Expecting value"))},
    )

    with pytest.raises(ObservationFetchError, match="decode"):
        await SensorThingsGateway().fetch_observations("http://st/p1")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        [1, 2],
        {"value": "nope"},
        {"value": [{"result": 1}]},
        {"value": [], "@iot.nextLink": 5},
    ],
)
async def test_unexpected_bodies_are_rejected(monkeypatch, body) -> None:
    _install(monkeypatch, {"http://st/p1": _StubResponse(200, body)})

    with pytest.raises(ObservationFetchError):
        await SensorThingsGateway().fetch_observations("http://st/p1")


@pytest.mark.asyncio
async def test_page_limit_stops_endless_chains(monkeypatch) -> None:
    requested = _install(
        monkeypatch,
        {"http://st/loop": _StubResponse(200, _page([(1, 1)], "http://st/loop"))},
    )

    gateway = SensorThingsGateway(max_pages=3)
    with pytest.raises(ObservationFetchError, match="3 pages"):
        await gateway.fetch_observations("http://st/loop")

    assert len(requested) == 3


@pytest.mark.asyncio
async def test_fetch_page_exposes_count(monkeypatch) -> None:
    _install(
        monkeypatch,
        {"http://st/p1": _StubResponse(200, {"value": [], "@iot.count": 42})},
    )

    page = await SensorThingsGateway().fetch_page("http://st/p1")

    assert page.count == 42
    assert page.has_next is False


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-09-09T12:00:00.000Z", datetime(2024, 9, 9, 12, tzinfo=timezone.utc)),
        ("2024-09-09T14:00:00+02:00", datetime(2024, 9, 9, 12, tzinfo=timezone.utc)),
        ("2024-09-09T12:00:00", datetime(2024, 9, 9, 12, tzinfo=timezone.utc)),
        (
            "2024-09-09T11:00:00Z/2024-09-09T12:00:00Z",
            datetime(2024, 9, 9, 12, tzinfo=timezone.utc),
        ),
    ],
)
def test_parse_phenomenon_time(raw, expected) -> None:
    assert parse_phenomenon_time(raw) == expected
