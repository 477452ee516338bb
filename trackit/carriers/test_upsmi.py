"""Tests for the UPS Mail Innovations adapter."""

from datetime import datetime, timezone

import pytest

from trackit.app.api import present_response
from trackit.app.models import RequestOptions
from trackit.carriers.upsmi import UpsMiAdapter
from trackit.const import Status

UTC = timezone.utc

DELIVERED = """<html><body>
<table id="Table6"><tr><td>
  <table>
    <tr><td>Package ID</td><td>9274899992136003821767</td></tr>
    <tr><td>Projected Delivery Date</td><td>03/25/2014</td><td>Weight</td><td> 0.3050 </td></tr>
    <tr><td>Zip Code</td><td>11218</td></tr>
  </table>
</td></tr></table>
<div id="ctl00_mainContent_ctl00_pnlUSPS">
  <table>
    <tr><td>Date</td><td>Event</td><td>Location</td></tr>
    <tr><td>03/25/2014 6:07 PM</td><td>Package delivered by local post office</td><td>BROOKLYN,NY</td></tr>
    <tr><td>03/25/2014 7:30 AM</td><td>Out for post office delivery</td><td>BROOKLYN,NY</td></tr>
  </table>
</div>
<div id="ctl00_mainContent_ctl00_pnlMI">
  <table>
    <tr><td>Date</td><td>Event</td><td>Location</td></tr>
    <tr><td>03/21/2014 11:00 PM</td><td>Package transferred to post office</td><td>KANSAS CITY,MO</td></tr>
    <tr><td>03/20/2014</td><td>Package received for processing</td><td>KANSAS CITY,MO</td></tr>
  </table>
</div>
</body></html>
"""

SHIPPING = """<html><body>
<table id="Table6"><tr><td>
  <table>
    <tr><td>Package ID</td><td>9274899992136003821767</td></tr>
    <tr><td>Projected Delivery Date</td><td></td></tr>
  </table>
</td></tr></table>
<div id="ctl00_mainContent_ctl00_pnlMI">
  <table>
    <tr><td>Date</td><td>Event</td><td>Location</td></tr>
    <tr><td>03/24/2014</td><td>Shipment information received</td><td></td></tr>
  </table>
</div>
</body></html>
"""


class TestUpsMiAdapter:
    """Tests for UpsMiAdapter"""

    def test_build_request(self):
        req = UpsMiAdapter().build_request(RequestOptions("9274899992136003821767"))
        assert req.url == "http://www.ups-mi.net/packageID/PackageID.aspx?PID=9274899992136003821767"

    @pytest.mark.asyncio
    async def test_delivered_package(self):
        response = await present_response(UpsMiAdapter(), DELIVERED, RequestOptions("trk"))
        package = response.data

        assert package.status == Status.DELIVERED
        assert package.eta == datetime(2014, 3, 25, 23, 59, 59, 999000, tzinfo=UTC)
        assert package.weight == "0.3050 lbs."
        assert package.destination == "11218"

        assert len(package.activities) == 4
        first = package.activities[0]
        assert first.timestamp == datetime(2014, 3, 25, 18, 7, tzinfo=UTC)
        assert first.location == "Brooklyn, NY"
        assert first.details == "Package delivered by local post office"
        last = package.activities[3]
        assert last.timestamp == datetime(2014, 3, 20, tzinfo=UTC)
        assert last.location == "Kansas City, MO"
        assert last.details == "Package received for processing"

    @pytest.mark.asyncio
    async def test_about_to_ship_package(self):
        response = await present_response(UpsMiAdapter(), SHIPPING, RequestOptions("trk"))
        package = response.data

        assert package.status == Status.SHIPPING
        assert package.eta is None
        assert package.weight is None
        assert package.destination is None
        assert len(package.activities) == 1
        assert package.activities[0].timestamp == datetime(2014, 3, 24, tzinfo=UTC)
        assert package.activities[0].location == ""

    @pytest.mark.asyncio
    async def test_page_without_tracking_tables(self):
        response = await present_response(UpsMiAdapter(), "<html><body>Not found</body></html>")
        assert response.data is None
        assert str(response.error) == "no tracking info found"

    @pytest.mark.asyncio
    async def test_summary_label_without_value_keeps_scanning(self):
        page = """<html><body>
<table id="Table6"><tr><td>
  <table>
    <tr><td>Weight</td></tr>
    <tr><td>Weight</td><td>1.25</td></tr>
  </table>
</td></tr></table>
</body></html>
"""
        response = await present_response(UpsMiAdapter(), page)
        assert response.data.weight == "1.25 lbs."
