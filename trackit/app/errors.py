"""Errors returned (not raised) by adapters and the transport."""


class TrackitError(Exception):
    """Base class for tracking failures."""


class ShipmentParseError(TrackitError):
    """A carrier response could not be turned into a shipment."""


class CarrierRequestError(TrackitError):
    """The carrier endpoint could not be reached or answered badly."""
