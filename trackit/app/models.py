"""Data models for package tracking - carrier-agnostic."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from ..const import DEFAULT_RAW, DEFAULT_TIMEOUT, Status

ShipmentT = TypeVar("ShipmentT")


@dataclass(frozen=True)
class Activity:
    """A single tracking event."""

    timestamp: datetime
    details: str
    location: Optional[str] = None
    raw_datetime_text: Optional[str] = None


@dataclass(frozen=True)
class Location:
    """Structured address fields handed to the location formatter."""

    city: Optional[str] = None
    state_code: Optional[str] = None
    country_code: Optional[str] = None
    postal_code: Optional[str] = None


@dataclass(frozen=True)
class ClientOptions:
    """Client-wide settings, fixed at construction."""

    raw: bool = DEFAULT_RAW
    timeout: float = DEFAULT_TIMEOUT


@dataclass(frozen=True)
class RequestOptions:
    """Per-lookup options; unset fields fall back to the client options."""

    tracking_number: str
    raw: Optional[bool] = None
    timeout: Optional[float] = None


@dataclass(frozen=True)
class RequestConfig:
    """Outbound HTTP request description built by an adapter."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None


@dataclass(frozen=True)
class CarrierResponse(Generic[ShipmentT]):
    """Outcome of an adapter parse: a shipment or an error, never both."""

    shipment: Optional[ShipmentT] = None
    error: Optional[Exception] = None


@dataclass(frozen=True)
class PresentedResult:
    """Unified tracking record returned to callers."""

    status: Status
    activities: List[Activity] = field(default_factory=list)
    eta: Optional[datetime] = None
    service: Optional[str] = None
    weight: Optional[str] = None
    destination: Optional[str] = None
    raw: Optional[str] = None
    request: Optional[RequestOptions] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = {
            "status": self.status.name,
            "eta": self.eta.isoformat() if self.eta else None,
            "service": self.service,
            "weight": self.weight,
            "destination": self.destination,
            "activities": [
                {
                    "timestamp": activity.timestamp.isoformat(),
                    "datetime": activity.raw_datetime_text,
                    "location": activity.location,
                    "details": activity.details,
                }
                for activity in self.activities
            ],
            "activity_count": len(self.activities),
            "tracking_number": self.request.tracking_number if self.request else None,
            "request": asdict(self.request) if self.request else None,
        }
        if self.raw is not None:
            data["raw"] = self.raw
        return data


@dataclass(frozen=True)
class TrackingResponse:
    """Outcome of a lookup: a presented result or an error."""

    data: Optional[PresentedResult] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.data is not None
