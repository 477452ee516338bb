"""Carrier-agnostic normalization pipeline and the adapter contract it consumes."""

import logging
from datetime import datetime, time
from typing import List, Optional, Protocol, Tuple

from ..const import Status
from .models import (
    Activity,
    CarrierResponse,
    PresentedResult,
    RequestConfig,
    RequestOptions,
    ShipmentT,
    TrackingResponse,
)

_LOGGER = logging.getLogger(__name__)


class CarrierAdapter(Protocol[ShipmentT]):
    """What the pipeline needs from a carrier-specific adapter.

    ``parse`` must return an error rather than a partial shipment when the
    carrier reports an unknown tracking number or the payload is unusable.
    Activities without a timestamp or details are dropped by the adapter.
    """

    async def parse(self, response: str) -> CarrierResponse[ShipmentT]:
        ...

    def extract_activities_and_status(
        self, shipment: ShipmentT
    ) -> Tuple[List[Activity], Status]:
        ...

    def extract_eta(self, shipment: ShipmentT) -> Optional[datetime]:
        ...

    def extract_service(self, shipment: ShipmentT) -> Optional[str]:
        ...

    def extract_weight(self, shipment: ShipmentT) -> Optional[str]:
        ...

    def extract_destination(self, shipment: ShipmentT) -> Optional[str]:
        ...

    def build_request(self, options: RequestOptions) -> RequestConfig:
        ...


def adjust_eta(eta: Optional[datetime]) -> Optional[datetime]:
    """Push a date-only ETA (exactly midnight) to the last instant of that day."""
    if eta is None:
        return None
    if eta.time() == time.min:
        return eta.replace(hour=23, minute=59, second=59, microsecond=999000)
    return eta


async def present_response(
    adapter: CarrierAdapter[ShipmentT],
    response: str,
    request: Optional[RequestOptions] = None,
    include_raw: bool = False,
) -> TrackingResponse:
    """Turn a raw carrier response into a presented result.

    Args:
        adapter: Carrier adapter that understands ``response``
        response: Raw response text from the carrier
        request: Request options, echoed back on the result
        include_raw: Client-level raw passthrough; the request's own ``raw``
            flag also enables it

    Returns:
        TrackingResponse holding either the result or the parse error
    """
    parsed = await adapter.parse(response)
    if parsed.error is not None or parsed.shipment is None:
        _LOGGER.debug("Carrier response rejected: %s", parsed.error)
        return TrackingResponse(error=parsed.error)

    shipment = parsed.shipment
    activities, status = adapter.extract_activities_and_status(shipment)
    eta = adapter.extract_eta(shipment)
    adjusted_eta = adjust_eta(eta)

    raw = None
    if include_raw or (request is not None and request.raw):
        raw = response

    result = PresentedResult(
        status=status,
        activities=activities,
        eta=adjusted_eta or eta,
        service=adapter.extract_service(shipment),
        weight=adapter.extract_weight(shipment),
        destination=adapter.extract_destination(shipment),
        raw=raw,
        request=request,
    )
    return TrackingResponse(data=result)
