"""LaserShip adapter - JSON tracking responses."""

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from ..app.errors import ShipmentParseError
from ..app.formatting import present_location
from ..app.models import Activity, CarrierResponse, Location, RequestConfig, RequestOptions
from ..const import LASERSHIP_TRACK_URL, Status
from .dates import parse_datetime

_LOGGER = logging.getLogger(__name__)

STATUS_MAP = {
    "Released": Status.DELIVERED,
    "Delivered": Status.DELIVERED,
    "OutForDelivery": Status.OUT_FOR_DELIVERY,
    "Arrived": Status.EN_ROUTE,
    "Received": Status.EN_ROUTE,
    "OrderReceived": Status.SHIPPING,
    "OrderCreated": Status.SHIPPING,
}


class LasershipAdapter:
    """Adapter for LaserShip's JSON tracking endpoint."""

    async def parse(self, response: str) -> CarrierResponse[Dict[str, Any]]:
        """Parse the tracking endpoint's JSON body.

        Args:
            response: Raw response body

        Returns:
            The shipment object, or a ShipmentParseError when the body is not
            JSON or carries no event list
        """
        try:
            shipment = json.loads(response)
        except ValueError as err:
            _LOGGER.debug("Invalid LaserShip response: %s", err)
            return CarrierResponse(error=ShipmentParseError(str(err)))
        if not isinstance(shipment, dict) or not isinstance(shipment.get("Events"), list):
            return CarrierResponse(error=ShipmentParseError("missing events"))
        return CarrierResponse(shipment=shipment)

    @staticmethod
    def _present_address(address: Dict[str, Any]) -> Optional[str]:
        return present_location(
            Location(
                city=address.get("City"),
                state_code=address.get("State"),
                country_code=address.get("Country"),
                postal_code=address.get("PostalCode"),
            )
        )

    def extract_activities_and_status(
        self, shipment: Dict[str, Any]
    ) -> Tuple[List[Activity], Status]:
        """Build activities from the event list, newest first.

        The status comes from the first event whose type maps to one.
        Entries that are not objects are skipped.
        """
        activities = []
        status = None
        for raw_activity in shipment.get("Events") or []:
            if not isinstance(raw_activity, dict):
                _LOGGER.debug("Skipping malformed LaserShip event: %r", raw_activity)
                continue
            date_time = raw_activity.get("DateTime")
            timestamp = parse_datetime(f"{date_time}Z") if date_time else None
            details = raw_activity.get("EventShortText")
            if details is not None and timestamp is not None:
                activities.append(
                    Activity(
                        timestamp=timestamp,
                        details=details,
                        location=self._present_address(raw_activity),
                    )
                )
            if status is None:
                event_type = raw_activity.get("EventType")
                status = STATUS_MAP.get(event_type) if isinstance(event_type, str) else None
        return activities, status or Status.UNKNOWN

    def extract_eta(self, shipment: Dict[str, Any]) -> Optional[datetime]:
        """Estimated delivery date, if the carrier sent one."""
        return parse_datetime(shipment.get("EstimatedDeliveryDate"))

    def extract_service(self, shipment: Dict[str, Any]) -> Optional[str]:
        return None

    def extract_weight(self, shipment: Dict[str, Any]) -> Optional[str]:
        """Weight of the first piece, with its unit when given."""
        pieces = shipment.get("Pieces")
        if not isinstance(pieces, list) or not pieces or not isinstance(pieces[0], dict):
            return None
        piece = pieces[0]
        weight = f"{piece.get('Weight')}"
        if piece.get("WeightUnit") is not None:
            weight = f"{weight} {piece['WeightUnit']}"
        return weight

    def extract_destination(self, shipment: Dict[str, Any]) -> Optional[str]:
        """Formatted destination address."""
        destination = shipment.get("Destination")
        if not isinstance(destination, dict):
            return None
        return self._present_address(destination)

    def build_request(self, options: RequestOptions) -> RequestConfig:
        """Build the GET request for a tracking number.

        Args:
            options: Request options carrying the tracking number

        Returns:
            Request description for the JSON endpoint
        """
        return RequestConfig(
            method="GET",
            url=LASERSHIP_TRACK_URL.format(tracking_number=options.tracking_number),
        )
