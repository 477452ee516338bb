"""Prestige Delivery adapter - JSON tracking responses."""

import json
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from ..app.errors import ShipmentParseError
from ..app.formatting import present_location
from ..app.models import Activity, CarrierResponse, Location, RequestConfig, RequestOptions
from ..const import PRESTIGE_TRACK_URL, Status
from .dates import parse_datetime

STATUS_MAP = {
    301: Status.DELIVERED,
    302: Status.OUT_FOR_DELIVERY,
    101: Status.SHIPPING,
}

_EVENT_CODE = re.compile(r"EVENT_(.*)$")
_TIMESTAMP_FORMATS = ("%m/%d/%Y %I:%M %p", "%m/%d/%Y %H:%M", "%m/%d/%Y %H:%M:%S")


def _events(shipment: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Tracking events of a shipment, newest first, skipping malformed entries."""
    return [event for event in shipment.get("TrackingEventHistory") or [] if isinstance(event, dict)]


class PrestigeAdapter:
    """Adapter for Prestige's JSON tracking handler."""

    async def parse(self, response: str) -> CarrierResponse[Dict[str, Any]]:
        """Parse the tracking handler's JSON body.

        Args:
            response: Raw response body, a list with one entry per tracking number

        Returns:
            The first shipment, or a ShipmentParseError when the body is not
            a usable shipment list
        """
        try:
            payload = json.loads(response)
        except ValueError as err:
            return CarrierResponse(error=ShipmentParseError(str(err)))
        if not isinstance(payload, list) or not payload:
            return CarrierResponse(error=ShipmentParseError("no tracking info found"))
        shipment = payload[0]
        if not isinstance(shipment, dict):
            return CarrierResponse(error=ShipmentParseError("no tracking info found"))
        if not isinstance(shipment.get("TrackingEventHistory"), list):
            return CarrierResponse(error=ShipmentParseError("missing events"))
        return CarrierResponse(shipment=shipment)

    @staticmethod
    def _present_address(prefix: str, event: Optional[Dict[str, Any]]) -> Optional[str]:
        if event is None:
            return None
        return present_location(
            Location(
                city=event.get(f"{prefix}City"),
                state_code=event.get(f"{prefix}State"),
                postal_code=event.get(f"{prefix}Zip"),
            )
        )

    @staticmethod
    def _present_status(event_code: Optional[str]) -> Optional[Status]:
        match = _EVENT_CODE.search(event_code or "")
        if not match or not match.group(1).isdigit():
            return None
        code = int(match.group(1))
        if code in STATUS_MAP:
            return STATUS_MAP[code]
        if 101 < code < 300:
            return Status.EN_ROUTE
        return None

    def extract_activities_and_status(
        self, shipment: Dict[str, Any]
    ) -> Tuple[List[Activity], Status]:
        """Build activities from the event history.

        The status comes from the first event whose code maps to one.
        """
        activities = []
        status = None
        for raw_activity in _events(shipment):
            timestamp = parse_datetime(
                f"{raw_activity.get('serverDate')} {raw_activity.get('serverTime')}",
                _TIMESTAMP_FORMATS,
            )
            details = raw_activity.get("EventCodeDesc")
            if details is not None and timestamp is not None:
                activities.append(
                    Activity(
                        timestamp=timestamp,
                        details=details,
                        location=self._present_address("EL", raw_activity),
                    )
                )
            if status is None:
                status = self._present_status(raw_activity.get("EventCode"))
        return activities, status or Status.UNKNOWN

    def extract_eta(self, shipment: Dict[str, Any]) -> Optional[datetime]:
        """Estimated delivery date carried on the newest event."""
        events = _events(shipment)
        if not events or not events[0].get("EstimatedDeliveryDate"):
            return None
        return parse_datetime(events[0]["EstimatedDeliveryDate"], ("%m/%d/%Y",))

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
        """Delivery address (``PD`` fields) of the newest event."""
        events = _events(shipment)
        return self._present_address("PD", events[0] if events else None)

    def build_request(self, options: RequestOptions) -> RequestConfig:
        """Build the GET request for a tracking number.

        Args:
            options: Request options carrying the tracking number

        Returns:
            Request description for the tracking handler
        """
        return RequestConfig(
            method="GET",
            url=PRESTIGE_TRACK_URL.format(tracking_number=options.tracking_number),
        )
