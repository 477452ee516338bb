"""UPS Mail Innovations adapter - scraped HTML tracking pages."""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from ..app.errors import ShipmentParseError
from ..app.formatting import infer_status, present_location_string
from ..app.models import Activity, CarrierResponse, RequestConfig, RequestOptions
from ..const import UPSMI_TRACK_URL, Status
from .dates import parse_datetime

# "shipment information received" must precede "received"
STATUS_VOCABULARY = {
    "post office entry": Status.EN_ROUTE,
    "out for post office delivery": Status.OUT_FOR_DELIVERY,
    "shipment information received": Status.SHIPPING,
    "delivered": Status.DELIVERED,
    "transferred": Status.EN_ROUTE,
    "received": Status.EN_ROUTE,
    "processed": Status.EN_ROUTE,
    "sorted": Status.EN_ROUTE,
}

_TIMESTAMP_FORMATS = ("%m/%d/%Y %I:%M %p", "%m/%d/%Y %H:%M", "%m/%d/%Y")


@dataclass(frozen=True)
class UpsMiShipment:
    """The tables of interest on a tracking page."""

    summary: Optional[Tag]
    usps_details: Optional[Tag]
    mi_details: Optional[Tag]


def _cell_text(cell: Tag) -> str:
    return " ".join(cell.get_text().split())


class UpsMiAdapter:
    """Adapter for the UPS Mail Innovations package ID page."""

    async def parse(self, response: str) -> CarrierResponse[UpsMiShipment]:
        """Locate the summary and tracking detail tables on the page.

        Args:
            response: Raw HTML of the package ID page

        Returns:
            The located tables, or a ShipmentParseError when the page has
            none of them
        """
        soup = BeautifulSoup(response or "", "html.parser")
        shipment = UpsMiShipment(
            summary=soup.select_one("#Table6 table"),
            usps_details=soup.select_one("#ctl00_mainContent_ctl00_pnlUSPS > table"),
            mi_details=soup.select_one("#ctl00_mainContent_ctl00_pnlMI > table"),
        )
        if shipment.summary is None and shipment.usps_details is None and shipment.mi_details is None:
            return CarrierResponse(error=ShipmentParseError("no tracking info found"))
        return CarrierResponse(shipment=shipment)

    @staticmethod
    def _summary_field(shipment: UpsMiShipment, name: str) -> Optional[str]:
        """Return the cell following the first summary cell matching ``name``."""
        if shipment.summary is None:
            return None
        pattern = re.compile(name)
        for row in shipment.summary.find_all("tr", recursive=False):
            for col in row.find_all("td", recursive=False):
                if pattern.search(col.get_text()):
                    value = col.find_next_sibling("td")
                    if value is None:
                        continue
                    return _cell_text(value)
        return None

    @staticmethod
    def _timestamp(value: str) -> Optional[datetime]:
        return parse_datetime(value, _TIMESTAMP_FORMATS)

    def _activities(self, table: Optional[Tag]) -> List[Activity]:
        activities: List[Activity] = []
        if table is None:
            return activities
        # First row is the header
        for row in table.find_all("tr", recursive=False)[1:]:
            cols = [_cell_text(col) for col in row.find_all("td", recursive=False)]
            if len(cols) < 2:
                continue
            timestamp = self._timestamp(cols[0])
            details = cols[1]
            location = present_location_string(cols[2]) if len(cols) > 2 else None
            if details and timestamp is not None:
                activities.append(Activity(timestamp=timestamp, details=details, location=location))
        return activities

    def extract_activities_and_status(self, shipment: UpsMiShipment) -> Tuple[List[Activity], Status]:
        """Collect USPS rows before Mail Innovations rows.

        The status is inferred from the text of the newest activity.
        """
        activities = self._activities(shipment.usps_details) + self._activities(shipment.mi_details)
        status = infer_status(activities[0].details, STATUS_VOCABULARY) if activities else Status.UNKNOWN
        return activities, status

    def extract_eta(self, shipment: UpsMiShipment) -> Optional[datetime]:
        """Projected delivery date from the summary table."""
        eta = self._summary_field(shipment, "Projected Delivery Date")
        return parse_datetime(eta, _TIMESTAMP_FORMATS) if eta else None

    def extract_service(self, shipment: UpsMiShipment) -> Optional[str]:
        return None

    def extract_weight(self, shipment: UpsMiShipment) -> Optional[str]:
        """Summary weight, in pounds."""
        weight = self._summary_field(shipment, "Weight")
        return f"{weight} lbs." if weight else None

    def extract_destination(self, shipment: UpsMiShipment) -> Optional[str]:
        return self._summary_field(shipment, "Zip Code") or None

    def build_request(self, options: RequestOptions) -> RequestConfig:
        """Build the GET request for the package ID page."""
        return RequestConfig(
            method="GET",
            url=UPSMI_TRACK_URL.format(tracking_number=options.tracking_number),
        )
