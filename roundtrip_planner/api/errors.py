"""Error types raised while planning a round trip."""


class TripPlannerError(Exception):
    """Base class for all trip planning failures."""

    default_message = "Trip planning failed."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class InsufficientWaypoints(TripPlannerError):
    """A trip was submitted without a start and at least one stop."""

    default_message = "Please enter a valid starting and at least one destination."


class DirectionsUnavailable(TripPlannerError):
    """No usable route could be obtained for some leg of the trip.

    ``leg_index`` is kept for diagnostics only; the message shown to the
    user stays generic.
    """

    default_message = "Directions not available."

    def __init__(self, message=None, leg_index=None):
        super().__init__(message)
        self.leg_index = leg_index


class GeocodingUnavailable(TripPlannerError):
    """Address text could not be resolved to any candidate."""

    default_message = "Address not found..."


__all__ = [
    "TripPlannerError",
    "InsufficientWaypoints",
    "DirectionsUnavailable",
    "GeocodingUnavailable",
]
