"""DHL Express adapter - XML-PI tracking requests and responses."""

import re
from datetime import datetime
from typing import List, Optional, Tuple
from xml.etree import ElementTree as ET
from xml.sax.saxutils import escape

from ..app.errors import ShipmentParseError
from ..app.formatting import present_location
from ..app.models import Activity, CarrierResponse, Location, RequestConfig, RequestOptions
from ..const import DHL_TRACK_URL, Status
from .dates import parse_datetime

DHL_NAMESPACE = "http://www.dhl.com"

STATUS_MAP = {
    "AD": Status.EN_ROUTE,
    "AF": Status.EN_ROUTE,
    "AR": Status.EN_ROUTE,
    "BA": Status.DELAYED,
    "BN": Status.EN_ROUTE,
    "BR": Status.EN_ROUTE,
    "CA": Status.DELAYED,
    "CC": Status.OUT_FOR_DELIVERY,
    "CD": Status.DELAYED,
    "CM": Status.DELAYED,
    "CR": Status.EN_ROUTE,
    "CS": Status.DELAYED,
    "DD": Status.DELIVERED,
    "DF": Status.EN_ROUTE,
    "DS": Status.DELAYED,
    "FD": Status.EN_ROUTE,
    "HP": Status.DELAYED,
    "IC": Status.EN_ROUTE,
    "MC": Status.DELAYED,
    "MD": Status.EN_ROUTE,
    "MS": Status.DELAYED,
    "ND": Status.DELAYED,
    "NH": Status.DELAYED,
    "OH": Status.DELAYED,
    "OK": Status.DELIVERED,
    "PD": Status.EN_ROUTE,
    "PL": Status.EN_ROUTE,
    "PO": Status.EN_ROUTE,
    "PU": Status.EN_ROUTE,
    "RD": Status.DELAYED,
    "RR": Status.DELAYED,
    "RT": Status.DELAYED,
    "SA": Status.SHIPPING,
    "SC": Status.DELAYED,
    "SS": Status.DELAYED,
    "TD": Status.DELAYED,
    "TP": Status.OUT_FOR_DELIVERY,
    "TR": Status.EN_ROUTE,
    "UD": Status.DELAYED,
    "WC": Status.OUT_FOR_DELIVERY,
    "WX": Status.DELAYED,
}

_TIMESTAMP_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M", "%Y%m%d %H%M%S", "%Y%m%d %H:%M")
_DOUBLE_SPACE = re.compile(r"\s\s+")


class DhlAdapter:
    """Adapter for the DHL XML-PI known tracking service.

    Credentials are fixed at construction.
    """

    def __init__(self, user_id: str, password: str):
        self._user_id = user_id
        self._password = password

    def generate_request(self, trk: str) -> str:
        """Build the KnownTrackingRequest document for one waybill."""
        return (
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
            '<req:KnownTrackingRequest xmlns:req="http://www.dhl.com">\n'
            "  <Request>\n"
            "    <ServiceHeader>\n"
            f"      <SiteID>{escape(self._user_id)}</SiteID>\n"
            f"      <Password>{escape(self._password)}</Password>\n"
            "    </ServiceHeader>\n"
            "  </Request>\n"
            "  <LanguageCode>en</LanguageCode>\n"
            f"  <AWBNumber>{escape(trk)}</AWBNumber>\n"
            "  <LevelOfDetails>ALL_CHECK_POINTS</LevelOfDetails>\n"
            "</req:KnownTrackingRequest>"
        )

    async def parse(self, response: str) -> CarrierResponse[ET.Element]:
        """Parse a TrackingResponse document.

        Args:
            response: Raw XML body

        Returns:
            The ShipmentInfo element, or a ShipmentParseError when the
            document is not a successful tracking response
        """
        try:
            root = ET.fromstring(response)
        except ET.ParseError as err:
            return CarrierResponse(error=ShipmentParseError(str(err)))
        if root.tag != f"{{{DHL_NAMESPACE}}}TrackingResponse":
            return CarrierResponse(error=ShipmentParseError("no tracking response"))

        awb_info = root.find("AWBInfo")
        if awb_info is None:
            return CarrierResponse(error=ShipmentParseError("no AWBInfo in response"))
        shipment = awb_info.find("ShipmentInfo")
        if shipment is None:
            return CarrierResponse(error=ShipmentParseError("could not find shipment"))
        status_code = awb_info.findtext("Status/ActionStatus")
        if (status_code or "").strip().lower() != "success":
            return CarrierResponse(
                error=ShipmentParseError(f"unexpected track status code={status_code}")
            )
        return CarrierResponse(shipment=shipment)

    @staticmethod
    def _present_address(raw_address: Optional[str]) -> Optional[str]:
        """Format service areas like ``"NEW YORK CITY GATEWAY,NY-USA"``."""
        if raw_address is None:
            return None
        first_comma = raw_address.find(",")
        first_dash = raw_address.find("-", max(first_comma, 0))
        if first_comma > -1 and first_dash > -1:
            city = raw_address[:first_comma].strip()
            state = raw_address[first_comma + 1:first_dash].strip()
            country = raw_address[first_dash + 1:].strip()
        elif first_comma < 0 and first_dash > -1:
            city = raw_address[:first_dash].strip()
            state = None
            country = raw_address[first_dash + 1:].strip()
        else:
            return raw_address
        city = city.replace(" HUB", "").replace(" GATEWAY", "")
        return present_location(Location(city=city, state_code=state, country_code=country))

    @staticmethod
    def _present_details(raw_address: Optional[str], raw_details: Optional[str]) -> Optional[str]:
        if raw_details is None:
            return None
        if raw_address is None:
            return raw_details
        details = _DOUBLE_SPACE.sub(" ", raw_details, count=1).strip()
        return re.sub(rf"(?: at| in)? {re.escape(raw_address.strip())}$", "", details)

    @staticmethod
    def _present_timestamp(date_string: Optional[str], time_string: Optional[str]) -> Optional[datetime]:
        if date_string is None:
            return None
        return parse_datetime(f"{date_string} {time_string or '00:00'}", _TIMESTAMP_FORMATS)

    def extract_activities_and_status(self, shipment: ET.Element) -> Tuple[List[Activity], Status]:
        """Build activities newest first.

        The status comes from the newest event whose code maps to one.
        """
        activities = []
        status = None
        # Oldest first on the wire
        for raw_activity in reversed(shipment.findall("ShipmentEvent")):
            raw_location = raw_activity.findtext("ServiceArea/Description")
            timestamp = self._present_timestamp(
                raw_activity.findtext("Date"), raw_activity.findtext("Time")
            )
            details = self._present_details(
                raw_location, raw_activity.findtext("ServiceEvent/Description")
            )
            if details is not None and timestamp is not None:
                if details.endswith("."):
                    details = details[:-1]
                activities.append(
                    Activity(
                        timestamp=timestamp,
                        details=details,
                        location=self._present_address(raw_location),
                    )
                )
            if status is None:
                status = STATUS_MAP.get(raw_activity.findtext("ServiceEvent/EventCode"))
        return activities, status or Status.UNKNOWN

    def extract_eta(self, shipment: ET.Element) -> Optional[datetime]:
        eta = shipment.findtext("EstDlvyDate")
        if not eta:
            return None
        # Drop any trailing zone label such as "GMT+00:00"
        return parse_datetime(eta.strip()[:19], _TIMESTAMP_FORMATS)

    def extract_service(self, shipment: ET.Element) -> Optional[str]:
        return None

    def extract_weight(self, shipment: ET.Element) -> Optional[str]:
        """Shipment weight in pounds."""
        weight = shipment.findtext("Weight")
        if weight is None:
            return None
        return f"{weight} LB"

    def extract_destination(self, shipment: ET.Element) -> Optional[str]:
        destination = shipment.findtext("DestinationServiceArea/Description")
        if destination is None:
            return None
        return self._present_address(destination)

    def build_request(self, options: RequestOptions) -> RequestConfig:
        """Build the XML POST request for a waybill number.

        Args:
            options: Request options carrying the waybill number

        Returns:
            Request description with the KnownTrackingRequest body
        """
        return RequestConfig(
            method="POST",
            url=DHL_TRACK_URL,
            headers={"Content-Type": "text/xml; charset=utf-8"},
            body=self.generate_request(options.tracking_number),
        )
