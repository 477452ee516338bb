"""Tests for location and status presentation."""

import pytest

from trackit.app.formatting import (
    infer_status,
    present_location,
    present_location_string,
    present_postal_code,
    title_case,
)
from trackit.app.models import Location
from trackit.const import Status


class TestTitleCase:
    """Tests for title_case"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("new york", "New York"),
            ("NEW YORK", "New York"),
            ("bloomfield-hills", "Bloomfield Hills"),
            ("  kansas   city ", "Kansas City"),
            ("", ""),
        ],
    )
    def test_title_case(self, value, expected):
        assert title_case(value) == expected


class TestPresentPostalCode:
    """Tests for present_postal_code"""

    def test_nine_digits_split(self):
        assert present_postal_code("606071234") == "60607-1234"

    def test_trims(self):
        assert present_postal_code(" 10001 ") == "10001"

    def test_non_numeric_untouched(self):
        assert present_postal_code("K1A 0B1") == "K1A 0B1"

    def test_blank_is_none(self):
        assert present_postal_code("  ") is None
        assert present_postal_code(None) is None


class TestPresentLocation:
    """Tests for present_location"""

    def test_us_address_drops_country(self):
        location = Location(city="chicago", state_code="IL", country_code="US", postal_code="606071234")
        assert present_location(location) == "Chicago, IL 60607-1234"

    def test_short_state_kept_verbatim(self):
        location = Location(city="chicago", state_code="il", country_code="US", postal_code="606071234")
        assert present_location(location) == "Chicago, il 60607-1234"

    def test_spelled_out_country(self):
        location = Location(city="Auckland", country_code="New Zealand")
        assert present_location(location) == "Auckland, New Zealand"

    def test_long_state_title_cased(self):
        location = Location(city="SAN JOSE", state_code="CALIFORNIA")
        assert present_location(location) == "San Jose, California"

    def test_three_letter_country_kept(self):
        location = Location(city="ottawa", state_code="ON", country_code="CAN")
        assert present_location(location) == "Ottawa, ON, CAN"

    def test_country_only(self):
        assert present_location(Location(country_code="US")) == "US"

    def test_state_only(self):
        assert present_location(Location(state_code=" NY ")) == "NY"

    def test_postal_code_only(self):
        assert present_location(Location(postal_code="10001")) == "10001"

    def test_city_and_postal_code(self):
        assert present_location(Location(city="taylor", postal_code="48180")) == "Taylor 48180"

    def test_nothing_present(self):
        assert present_location(Location()) is None
        assert present_location(Location(city="", state_code="", country_code="", postal_code="")) is None


class TestPresentLocationString:
    """Tests for present_location_string"""

    def test_title_cases_long_segments(self):
        assert present_location_string("BROOKLYN,NY , 11218") == "Brooklyn, NY, 11218"

    def test_multi_word_city(self):
        assert present_location_string("KANSAS CITY, MO") == "Kansas City, MO"

    def test_empty(self):
        assert present_location_string("") == ""
        assert present_location_string(None) == ""


class TestInferStatus:
    """Tests for infer_status"""

    VOCABULARY = {
        "shipment information received": Status.SHIPPING,
        "delivered": Status.DELIVERED,
        "received": Status.EN_ROUTE,
    }

    def test_specific_phrase_wins(self):
        assert infer_status("Shipment information received", self.VOCABULARY) == Status.SHIPPING

    def test_general_phrase(self):
        assert infer_status("Package received for processing", self.VOCABULARY) == Status.EN_ROUTE

    def test_case_insensitive(self):
        assert infer_status("PACKAGE DELIVERED BY LOCAL POST OFFICE", self.VOCABULARY) == Status.DELIVERED

    def test_declaration_order_matters(self):
        reversed_vocabulary = {
            "received": Status.EN_ROUTE,
            "shipment information received": Status.SHIPPING,
        }
        assert infer_status("Shipment information received", reversed_vocabulary) == Status.EN_ROUTE

    def test_no_match_or_empty(self):
        assert infer_status("Label printed", self.VOCABULARY) == Status.UNKNOWN
        assert infer_status("", self.VOCABULARY) == Status.UNKNOWN
        assert infer_status(None, self.VOCABULARY) == Status.UNKNOWN
