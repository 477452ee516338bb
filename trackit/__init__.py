"""Carrier identification and carrier-agnostic shipment tracking."""

from .app.api import CarrierAdapter, adjust_eta, present_response
from .app.errors import CarrierRequestError, ShipmentParseError, TrackitError
from .app.formatting import infer_status, present_location, present_location_string
from .app.models import (
    Activity,
    CarrierResponse,
    ClientOptions,
    Location,
    PresentedResult,
    RequestConfig,
    RequestOptions,
    TrackingResponse,
)
from .checkdigit import check_digit
from .client import TrackitClient
from .const import Carrier, Status
from .guess_carrier import CARRIER_MATCHERS, CarrierMatcher, guess_carrier

__all__ = [
    "Activity",
    "CARRIER_MATCHERS",
    "Carrier",
    "CarrierAdapter",
    "CarrierMatcher",
    "CarrierRequestError",
    "CarrierResponse",
    "ClientOptions",
    "Location",
    "PresentedResult",
    "RequestConfig",
    "RequestOptions",
    "ShipmentParseError",
    "Status",
    "TrackingResponse",
    "TrackitClient",
    "TrackitError",
    "adjust_eta",
    "check_digit",
    "guess_carrier",
    "infer_status",
    "present_location",
    "present_location_string",
    "present_response",
]
