"""Presentation helpers shared by every carrier adapter."""

import re
from typing import Mapping, Optional

from ..const import Status
from .models import Location

_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_UPPER_UPPER = re.compile(r"([A-Z])([A-Z][a-z])")
_SEPARATORS = re.compile(r"[\W_]+")
_ZIP_PLUS_4 = re.compile(r"^\d{9}$")


def title_case(value: str) -> str:
    """Split into words on case changes and punctuation, capitalize each word."""
    value = _LOWER_UPPER.sub(r"\1 \2", value)
    value = _UPPER_UPPER.sub(r"\1 \2", value)
    words = _SEPARATORS.sub(" ", value).split()
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def present_postal_code(raw_code: Optional[str]) -> Optional[str]:
    """Format nine digit zip codes as ZIP+4, leave anything else alone."""
    code = (raw_code or "").strip() or None
    if code and _ZIP_PLUS_4.match(code):
        return f"{code[:5]}-{code[5:]}"
    return code


def present_location(location: Location) -> Optional[str]:
    """Build a display address such as ``"New York, NY 10001"``.

    State and country values longer than three characters are treated as
    spelled-out names and title-cased; shorter ones are kept verbatim as
    codes. The country is dropped for US addresses unless nothing else is
    known. Returns None when no field is present.
    """
    city = location.city
    if city:
        city = title_case(city)

    state = (location.state_code or "").strip()
    if state:
        if len(state) > 3:
            state = title_case(state)
        address = f"{city}, {state}" if city else state
    else:
        address = city or None

    postal_code = present_postal_code(location.postal_code)

    country = (location.country_code or "").strip()
    if country:
        if len(country) > 3:
            country = title_case(country)
        if address:
            if country != "US":
                address = f"{address}, {country}"
        else:
            address = country

    if postal_code:
        address = f"{address} {postal_code}" if address else postal_code

    return address


def present_location_string(location: Optional[str]) -> str:
    """Tidy a free-text, comma separated address scraped from a carrier page."""
    fields = []
    for part in (location or "").split(","):
        part = part.strip()
        if len(part) > 2:
            part = title_case(part)
        fields.append(part)
    return ", ".join(fields)


def infer_status(text: Optional[str], vocabulary: Mapping[str, Status]) -> Status:
    """Map free text onto a status by case-insensitive substring search.

    The vocabulary is searched in its declared order and the first key found
    in the text wins, so specific phrases must precede shorter ones they
    contain.
    """
    if not text:
        return Status.UNKNOWN
    lowered = text.lower()
    for key, status in vocabulary.items():
        if key.lower() in lowered:
            return status
    return Status.UNKNOWN
