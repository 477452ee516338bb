"""Tracking client - binds a carrier adapter to HTTP transport and presentation."""

import asyncio
import logging
from typing import Generic, Optional

import aiohttp

from .app.api import CarrierAdapter, present_response
from .app.errors import CarrierRequestError
from .app.models import ClientOptions, RequestConfig, RequestOptions, ShipmentT, TrackingResponse
from .const import MAX_RETRIES, RETRY_DELAY_BASE

_LOGGER = logging.getLogger(__name__)


class TrackitClient(Generic[ShipmentT]):
    """Client for looking up one carrier's shipments."""

    def __init__(
        self,
        adapter: CarrierAdapter[ShipmentT],
        options: Optional[ClientOptions] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """Initialize the client.

        Args:
            adapter: Carrier adapter used to build requests and parse responses
            options: Client-wide raw passthrough and timeout settings
            session: Optional aiohttp session (a temporary one is created per
                request if not provided)
        """
        self._adapter = adapter
        self._options = options or ClientOptions()
        self._session = session

    @property
    def adapter(self) -> CarrierAdapter[ShipmentT]:
        return self._adapter

    @property
    def options(self) -> ClientOptions:
        return self._options

    async def present_response(
        self, response: str, request: Optional[RequestOptions] = None
    ) -> TrackingResponse:
        """Present an already fetched carrier response."""
        return await present_response(
            self._adapter, response, request, include_raw=self._options.raw
        )

    def _is_retryable_error(self, err: Exception) -> bool:
        """Check if an error is retryable (transient network error)."""
        if isinstance(err, (aiohttp.ClientConnectorError, aiohttp.ServerTimeoutError, asyncio.TimeoutError)):
            return True
        if isinstance(err, aiohttp.ClientError):
            error_str = str(err).lower()
            if any(keyword in error_str for keyword in ["timeout", "dns", "connection", "network", "resolve"]):
                return True
        return False

    async def _fetch(self, session: aiohttp.ClientSession, req: RequestConfig, timeout: float) -> str:
        """Perform the request, retrying transient failures.

        Raises:
            CarrierRequestError: On an empty body or a non-200 status
            aiohttp.ClientError: On network errors after retries are exhausted
        """
        client_timeout = aiohttp.ClientTimeout(total=timeout)
        for attempt in range(MAX_RETRIES):
            try:
                async with session.request(
                    req.method,
                    req.url,
                    headers=req.headers or None,
                    params=req.params or None,
                    data=req.body,
                    timeout=client_timeout,
                ) as response:
                    body = await response.text()
                    if response.status != 200:
                        raise CarrierRequestError(f"response status {response.status}")
                    if not body:
                        raise CarrierRequestError("Empty response")
                    return body
            except (aiohttp.ClientError, asyncio.TimeoutError) as err:
                if self._is_retryable_error(err) and attempt < MAX_RETRIES - 1:
                    delay = RETRY_DELAY_BASE * (2 ** attempt)
                    _LOGGER.warning(
                        "Carrier request failed (attempt %d/%d): %s. Retrying in %d seconds...",
                        attempt + 1,
                        MAX_RETRIES,
                        err,
                        delay,
                    )
                    await asyncio.sleep(delay)
                    continue
                raise

    async def request_data(self, request: RequestOptions) -> TrackingResponse:
        """Fetch a shipment from the carrier and present it.

        Never raises; transport and parse failures come back as the
        response's ``error``.
        """
        req = self._adapter.build_request(request)
        timeout = request.timeout or self._options.timeout
        use_temporary_session = self._session is None
        session = self._session or aiohttp.ClientSession()
        try:
            body = await self._fetch(session, req, timeout)
        except CarrierRequestError as err:
            _LOGGER.error("Carrier request to %s failed: %s", req.url, err)
            return TrackingResponse(error=err)
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            _LOGGER.error("Carrier request to %s failed: %s", req.url, err)
            return TrackingResponse(error=CarrierRequestError(str(err) or type(err).__name__))
        finally:
            if use_temporary_session:
                await session.close()

        return await self.present_response(body, request)
