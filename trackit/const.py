"""Constants for the trackit package."""

from enum import Enum, IntEnum


class Carrier(str, Enum):
    """Carriers recognised by tracking number shape."""

    UNKNOWN = "unknown"
    UPS = "ups"
    AMAZON = "amazon"
    FEDEX = "fedex"
    USPS = "usps"
    UPSMI = "upsmi"
    DHLGM = "dhlgm"
    CANADA_POST = "canadapost"
    LASERSHIP = "lasership"
    ONTRAC = "ontrac"
    PRESTIGE = "prestige"
    A1INTL = "a1intl"


class Status(IntEnum):
    """Carrier-agnostic shipment status. A closed tag set, not a progress scale."""

    UNKNOWN = 0
    SHIPPING = 1
    EN_ROUTE = 2
    OUT_FOR_DELIVERY = 3
    DELIVERED = 4
    DELAYED = 5


# Client defaults
DEFAULT_RAW = False
DEFAULT_TIMEOUT = 2  # seconds

# Transport retry configuration
MAX_RETRIES = 3
RETRY_DELAY_BASE = 2  # Base delay in seconds for exponential backoff

# Carrier endpoints
LASERSHIP_TRACK_URL = "http://www.lasership.com/track/{tracking_number}/json"
PRESTIGE_TRACK_URL = (
    "http://www.prestigedelivery.com/TrackingHandler.ashx?trackingNumbers={tracking_number}"
)
A1_TRACK_URL = (
    "http://www.aoneonline.com/pages/customers/trackingrequest.php"
    "?tracking_number={tracking_number}"
)
DHL_TRACK_URL = "http://xmlpi-ea.dhl.com/XMLShippingServlet"
UPSMI_TRACK_URL = "http://www.ups-mi.net/packageID/PackageID.aspx?PID={tracking_number}"
