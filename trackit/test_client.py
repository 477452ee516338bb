"""Tests for the tracking client transport."""

import json

import aiohttp
import pytest

from trackit.app.errors import CarrierRequestError
from trackit.app.models import ClientOptions, RequestOptions
from trackit.carriers.lasership import LasershipAdapter
from trackit.client import TrackitClient
from trackit.const import Status

BODY = json.dumps(
    {
        "Events": [
            {
                "DateTime": "2015-09-20T14:42:14",
                "City": "GROVEPORT",
                "State": "OH",
                "PostalCode": "43125",
                "Country": "US",
                "EventType": "Arrived",
                "EventShortText": "Origin Scan",
            }
        ]
    }
)


class FakeResponse:
    def __init__(self, status, body):
        self.status = status
        self._body = body

    async def text(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession, replaying queued outcomes."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class TestTrackitClient:
    """Tests for TrackitClient"""

    @pytest.mark.asyncio
    async def test_request_data_presents_body(self):
        session = FakeSession(FakeResponse(200, BODY))
        client = TrackitClient(LasershipAdapter(), session=session)

        response = await client.request_data(RequestOptions("LA40305346"))

        assert response.ok
        assert response.data.status == Status.EN_ROUTE
        assert response.data.activities[0].location == "Groveport, OH 43125"
        method, url, kwargs = session.requests[0]
        assert method == "GET"
        assert url == "http://www.lasership.com/track/LA40305346/json"
        assert kwargs["timeout"].total == 2

    @pytest.mark.asyncio
    async def test_request_timeout_overrides_client(self):
        session = FakeSession(FakeResponse(200, BODY))
        client = TrackitClient(LasershipAdapter(), ClientOptions(timeout=5), session=session)

        await client.request_data(RequestOptions("LA40305346", timeout=9))

        assert session.requests[0][2]["timeout"].total == 9

    @pytest.mark.asyncio
    async def test_client_raw_passthrough(self):
        session = FakeSession(FakeResponse(200, BODY))
        client = TrackitClient(LasershipAdapter(), ClientOptions(raw=True), session=session)

        response = await client.request_data(RequestOptions("LA40305346"))

        assert response.data.raw == BODY

    @pytest.mark.asyncio
    async def test_non_200_status(self):
        client = TrackitClient(LasershipAdapter(), session=FakeSession(FakeResponse(503, "busy")))

        response = await client.request_data(RequestOptions("LA40305346"))

        assert response.data is None
        assert isinstance(response.error, CarrierRequestError)
        assert str(response.error) == "response status 503"

    @pytest.mark.asyncio
    async def test_empty_body(self):
        client = TrackitClient(LasershipAdapter(), session=FakeSession(FakeResponse(200, "")))

        response = await client.request_data(RequestOptions("LA40305346"))

        assert str(response.error) == "Empty response"

    @pytest.mark.asyncio
    async def test_transient_error_retried(self, monkeypatch):
        monkeypatch.setattr("trackit.client.RETRY_DELAY_BASE", 0)
        session = FakeSession(aiohttp.ServerTimeoutError("timeout"), FakeResponse(200, BODY))
        client = TrackitClient(LasershipAdapter(), session=session)

        response = await client.request_data(RequestOptions("LA40305346"))

        assert response.ok
        assert len(session.requests) == 2

    @pytest.mark.asyncio
    async def test_network_error_returned_not_raised(self, monkeypatch):
        monkeypatch.setattr("trackit.client.RETRY_DELAY_BASE", 0)
        errors = [aiohttp.ServerTimeoutError("timeout") for _ in range(3)]
        session = FakeSession(*errors)
        client = TrackitClient(LasershipAdapter(), session=session)

        response = await client.request_data(RequestOptions("LA40305346"))

        assert response.data is None
        assert isinstance(response.error, CarrierRequestError)
        assert len(session.requests) == 3

    @pytest.mark.asyncio
    async def test_parse_error_passed_through(self):
        client = TrackitClient(LasershipAdapter(), session=FakeSession(FakeResponse(200, "{}")))

        response = await client.request_data(RequestOptions("LA40305346"))

        assert str(response.error) == "missing events"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"Events": [None]},
            {"Events": {"a": 1}},
            {"Events": [], "Pieces": [None]},
        ],
    )
    async def test_malformed_payload_does_not_raise(self, body):
        session = FakeSession(FakeResponse(200, json.dumps(body)))
        client = TrackitClient(LasershipAdapter(), session=session)

        response = await client.request_data(RequestOptions("LA40305346"))

        if isinstance(body["Events"], list):
            assert response.ok
            assert response.data.activities == []
            assert response.data.weight is None
        else:
            assert response.data is None
            assert str(response.error) == "missing events"

    @pytest.mark.asyncio
    async def test_non_200_with_empty_body_reports_status(self):
        client = TrackitClient(LasershipAdapter(), session=FakeSession(FakeResponse(404, "")))

        response = await client.request_data(RequestOptions("LA40305346"))

        assert str(response.error) == "response status 404"
