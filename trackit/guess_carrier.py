"""Carrier identification from tracking number shape and check digits."""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Tuple

from .checkdigit import check_digit
from .const import Carrier

_LOGGER = logging.getLogger(__name__)

# (is_match, stop_scanning)
Confirmation = Tuple[bool, bool]

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class CarrierMatcher:
    """One entry of the ordered classification table."""

    carrier: Carrier
    pattern: Pattern[str]
    confirm: Optional[Callable[[str], Confirmation]] = None


def normalize_tracking_number(trk: str) -> str:
    """Strip all whitespace and uppercase."""
    return _WHITESPACE.sub("", trk or "").upper()


def _letter_digit(char: str) -> int:
    """Map an alphanumeric character onto a single digit the way UPS does."""
    if char.isdigit():
        return int(char)
    return (ord(char) - 63) % 10


def _confirm_ups(trk: str) -> Confirmation:
    if not trk[17].isdigit():
        return False, False
    total = 0
    for index in range(2, 17):
        num = _letter_digit(trk[index])
        if index % 2 != 0:
            num *= 2
        total += num
    expected = 10 - total % 10 if total % 10 > 0 else 0
    if expected == int(trk[17]):
        return True, True
    return False, False


def _confirm_ups_freight(trk: str) -> Confirmation:
    converted = f"{_letter_digit(trk[0])}{trk[1:]}"
    if check_digit(converted, [3, 1, 7], 10):
        return True, True
    return False, False


def _confirm_fedex_12(trk: str) -> Confirmation:
    return check_digit(trk, [3, 1, 7], 11), False


def _confirm_fedex_door_tag(trk: str) -> Confirmation:
    match = re.match(r"^DT(\d{12})$", trk)
    if match and check_digit(match.group(1), [3, 1, 7], 11):
        return True, True
    return False, False


def _confirm_fedex_smart_post(trk: str) -> Confirmation:
    return check_digit(f"91{trk}", [3, 1], 10), False


def _confirm_fedex_15(trk: str) -> Confirmation:
    return check_digit(trk, [1, 3], 10), False


def _confirm_fedex_20(trk: str) -> Confirmation:
    if check_digit(trk, [3, 1, 7], 11):
        return True, False
    return check_digit(f"92{trk}", [3, 1], 10), False


def _confirm_fedex_9622(trk: str) -> Confirmation:
    if check_digit(trk, [3, 1, 7], 11):
        return True, False
    return check_digit(trk[7:], [1, 3], 10), False


def _confirm_usps(trk: str) -> Confirmation:
    """Shared by the 20, 22 and 26 digit USPS formats and Canada Post 16."""
    return check_digit(trk, [3, 1], 10), False


def _confirm_usps_420_zip(trk: str) -> Confirmation:
    match = re.match(r"^420\d{5}(\d{22})$", trk)
    return bool(match) and check_digit(match.group(1), [3, 1], 10), False


def _confirm_usps_420_zip_plus_4(trk: str) -> Confirmation:
    match = re.match(r"^420\d{9}(\d{22})$", trk)
    if match and check_digit(match.group(1), [3, 1], 10):
        return True, False
    match = re.match(r"^420\d{5}(\d{26})$", trk)
    return bool(match) and check_digit(match.group(1), [3, 1], 10), False


def _confirm_a1_international(trk: str) -> Confirmation:
    return len(trk) in (9, 13), False


def _m(carrier: Carrier, pattern: str, confirm=None) -> CarrierMatcher:
    return CarrierMatcher(carrier, re.compile(pattern), confirm)


# Order is significant: earlier entries are evaluated first and a confirmed
# stop-scanning entry hides everything after it. Append new carriers at the end.
CARRIER_MATCHERS: Tuple[CarrierMatcher, ...] = (
    _m(Carrier.UPS, r"^1Z[0-9A-Z]{16}$", _confirm_ups),
    _m(Carrier.UPS, r"^(H|T|J|K|F|W|M|Q|A)\d{10}$", _confirm_ups_freight),
    _m(Carrier.AMAZON, r"^1\d{2}-\d{7}-\d{7}:\d{13}$"),
    _m(Carrier.FEDEX, r"^\d{12}$", _confirm_fedex_12),
    _m(Carrier.FEDEX, r"^\d{15}$", _confirm_fedex_15),
    _m(Carrier.FEDEX, r"^\d{20}$", _confirm_fedex_20),
    _m(Carrier.USPS, r"^\d{20}$", _confirm_usps),
    _m(Carrier.USPS, r"^02\d{18}$", _confirm_fedex_smart_post),
    _m(Carrier.FEDEX, r"^02\d{18}$", _confirm_fedex_smart_post),
    _m(Carrier.FEDEX, r"^DT\d{12}$", _confirm_fedex_door_tag),
    _m(Carrier.FEDEX, r"^927489\d{16}$"),
    _m(Carrier.FEDEX, r"^926129\d{16}$"),
    _m(Carrier.UPSMI, r"^927489\d{16}$"),
    _m(Carrier.UPSMI, r"^926129\d{16}$"),
    _m(Carrier.UPSMI, r"^927489\d{20}$"),
    _m(Carrier.FEDEX, r"^96\d{20}$", _confirm_fedex_9622),
    _m(Carrier.USPS, r"^927489\d{16}$"),
    _m(Carrier.USPS, r"^926129\d{16}$"),
    _m(Carrier.FEDEX, r"^7489\d{16}$"),
    _m(Carrier.FEDEX, r"^6129\d{16}$"),
    _m(Carrier.USPS, r"^(91|92|93|94|95|96)\d{20}$", _confirm_usps),
    _m(Carrier.USPS, r"^\d{26}$", _confirm_usps),
    _m(Carrier.USPS, r"^420\d{27}$", _confirm_usps_420_zip),
    _m(Carrier.USPS, r"^420\d{31}$", _confirm_usps_420_zip_plus_4),
    _m(Carrier.DHLGM, r"^420\d{27}$", _confirm_usps_420_zip),
    _m(Carrier.DHLGM, r"^420\d{31}$", _confirm_usps_420_zip_plus_4),
    _m(Carrier.DHLGM, r"^94748\d{17}$", _confirm_usps),
    _m(Carrier.DHLGM, r"^93612\d{17}$", _confirm_usps),
    _m(Carrier.DHLGM, r"^GM\d{16}"),
    _m(Carrier.USPS, r"^[A-Z]{2}\d{9}[A-Z]{2}$"),
    _m(Carrier.CANADA_POST, r"^\d{16}$", _confirm_usps),
    _m(Carrier.LASERSHIP, r"^L[A-Z]\d{8}$"),
    _m(Carrier.LASERSHIP, r"^1LS\d{12}"),
    _m(Carrier.LASERSHIP, r"^Q\d{8}[A-Z]"),
    _m(Carrier.ONTRAC, r"^(C|D)\d{14}$"),
    _m(Carrier.PRESTIGE, r"^P[A-Z]{1}\d{8}"),
    _m(Carrier.A1INTL, r"^AZ.\d+", _confirm_a1_international),
)


def guess_carrier(
    tracking_number: str, matchers: Tuple[CarrierMatcher, ...] = CARRIER_MATCHERS
) -> List[Carrier]:
    """Return every carrier whose format matches the tracking number.

    Carriers come back deduplicated in the order they were first matched.
    An empty list means the number could not be classified.
    """
    trk = normalize_tracking_number(tracking_number)
    carriers: List[Carrier] = []
    if not trk:
        return carriers

    for matcher in matchers:
        if not matcher.pattern.search(trk):
            continue
        if matcher.confirm is None:
            carriers.append(matcher.carrier)
            continue
        is_match, stop = matcher.confirm(trk)
        if is_match:
            carriers.append(matcher.carrier)
        if stop:
            _LOGGER.debug("Stopped scanning %s at %s", trk, matcher.carrier.value)
            break

    return list(dict.fromkeys(carriers))
