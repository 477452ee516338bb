"""A1 International adapter - XML tracking responses."""

import re
from datetime import datetime
from typing import List, Optional, Tuple
from xml.etree import ElementTree as ET

from ..app.errors import ShipmentParseError
from ..app.formatting import present_location
from ..app.models import Activity, CarrierResponse, Location, RequestConfig, RequestOptions
from ..const import A1_TRACK_URL, Status
from .dates import parse_datetime

STATUS_MAP = {
    101: Status.EN_ROUTE,
    102: Status.EN_ROUTE,
    302: Status.OUT_FOR_DELIVERY,
    304: Status.DELAYED,
    301: Status.DELIVERED,
}

_EVENT_CODE = re.compile(r"EVENT_(.*)$")


def _text(element: Optional[ET.Element], path: str) -> Optional[str]:
    if element is None:
        return None
    return element.findtext(path)


class A1Adapter:
    """Adapter for A1 International (Amazon tracking) XML responses.

    Each call to ``parse`` builds its own element tree.
    """

    async def parse(self, response: str) -> CarrierResponse[ET.Element]:
        """Parse an AmazonTrackingResponse document.

        Args:
            response: Raw XML body

        Returns:
            The PackageTrackingInfo element, or a ShipmentParseError carrying
            the carrier's error description when tracking info is missing
        """
        try:
            root = ET.fromstring(response)
        except ET.ParseError as err:
            return CarrierResponse(error=ShipmentParseError(str(err)))
        if root.tag != "AmazonTrackingResponse":
            return CarrierResponse(error=ShipmentParseError("TrackResult is empty"))

        tracking_info = root.find("PackageTrackingInfo")
        if tracking_info is None or tracking_info.find("TrackingNumber") is None:
            error = root.findtext("TrackingErrorInfo/TrackingErrorDetail/ErrorDetailCodeDesc")
            return CarrierResponse(error=ShipmentParseError(error or "unknown error"))
        return CarrierResponse(shipment=tracking_info)

    @staticmethod
    def _present_address(address: Optional[ET.Element]) -> Optional[str]:
        if address is None:
            return None
        return present_location(
            Location(
                city=_text(address, "City"),
                state_code=_text(address, "StateProvince"),
                country_code=_text(address, "CountryCode"),
                postal_code=_text(address, "PostalCode"),
            )
        )

    @staticmethod
    def _events(shipment: ET.Element) -> List[ET.Element]:
        return shipment.findall("TrackingEventHistory/TrackingEventDetail")

    def _status(self, shipment: ET.Element) -> Status:
        events = self._events(shipment)
        match = _EVENT_CODE.search(_text(events[0], "EventCode") or "") if events else None
        if not match or not match.group(1).isdigit():
            return Status.UNKNOWN
        code = int(match.group(1))
        if code in STATUS_MAP:
            return STATUS_MAP[code]
        return Status.EN_ROUTE if code < 300 else Status.UNKNOWN

    def extract_activities_and_status(self, shipment: ET.Element) -> Tuple[List[Activity], Status]:
        """Build activities from the event history; status follows the newest event code."""
        activities = []
        for raw_activity in self._events(shipment):
            raw_timestamp = _text(raw_activity, "EventDateTime")
            timestamp = parse_datetime(raw_timestamp)
            details = _text(raw_activity, "EventCodeDesc")
            if details is not None and timestamp is not None:
                activities.append(
                    Activity(
                        timestamp=timestamp,
                        details=details,
                        location=self._present_address(raw_activity.find("EventLocation")),
                        raw_datetime_text=raw_timestamp[:19],
                    )
                )
        return activities, self._status(shipment)

    def extract_eta(self, shipment: ET.Element) -> Optional[datetime]:
        """Estimated delivery date recorded on the oldest event."""
        events = self._events(shipment)
        if not events:
            return None
        return parse_datetime(_text(events[-1], "EstimatedDeliveryDate"))

    def extract_service(self, shipment: ET.Element) -> Optional[str]:
        return None

    def extract_weight(self, shipment: ET.Element) -> Optional[str]:
        return None

    def extract_destination(self, shipment: ET.Element) -> Optional[str]:
        """Formatted PackageDestinationLocation."""
        return self._present_address(shipment.find("PackageDestinationLocation"))

    def build_request(self, options: RequestOptions) -> RequestConfig:
        """Build the GET request for a tracking number."""
        return RequestConfig(
            method="GET",
            url=A1_TRACK_URL.format(tracking_number=options.tracking_number),
        )
