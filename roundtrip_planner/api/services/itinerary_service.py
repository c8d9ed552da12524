# roundtrip_planner/api/services/itinerary_service.py
"""Service layer for itinerary formatting and session management."""

import logging
from typing import Any, Dict, Optional

from flask import session

from roundtrip_planner.api.models import Itinerary, Step

logger = logging.getLogger(__name__)

METERS_PER_MILE = 1609.344


def _unit(value: int, name: str) -> str:
    return f"{value} {name}" if value == 1 else f"{value} {name}s"


def format_duration(seconds: float) -> str:
    """Spell out a duration in hours, minutes and seconds.

    Zero-valued units are left out, e.g. ``3900`` -> ``"1 hour, 5 minutes"``.
    """
    total = int(round(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)

    parts = []
    if hours:
        parts.append(_unit(hours, "hour"))
    if minutes:
        parts.append(_unit(minutes, "minute"))
    if secs or not parts:
        parts.append(_unit(secs, "second"))
    return ", ".join(parts)


def format_miles(meters: float) -> str:
    """Convert meters to miles with two decimals."""
    return f"{meters / METERS_PER_MILE:.2f}"


def format_step(index: int, step: Step) -> str:
    """Format a single turn instruction; ``index`` is 1-based."""
    return f"{index}. {step.instructions} - {format_miles(step.distance)} miles"


class ItineraryService:
    """Handles itinerary presentation and session storage."""

    @staticmethod
    def format_itinerary_text(itinerary: Itinerary) -> str:
        """Render the itinerary as segment-by-segment driving directions.

        Args:
            itinerary: Resolved itinerary

        Returns:
            Multi-line text with one block per segment and a total line
        """
        blocks = []
        for number, leg in enumerate(itinerary.legs, 1):
            lines = [
                f"Segment #{number}",
                f"Starting point: {leg.start_address}",
            ]
            lines.extend(format_step(i, step) for i, step in enumerate(leg.route.steps, 1))
            lines.append(f"Ending point: {leg.end_address}")
            lines.append(f"Distance: {format_miles(leg.route.distance)} miles")
            lines.append(f"Expected travel time: {format_duration(leg.route.expected_duration)}")
            blocks.append("\n".join(lines))

        blocks.append(f"Total: {format_duration(itinerary.total_duration)}")
        return "\n\n".join(blocks)

    @staticmethod
    def to_response(itinerary: Itinerary, map_payload: Dict[str, Any]) -> Dict[str, Any]:
        """Build the JSON body handed to the presentation layer."""
        return {
            "itinerary": itinerary.to_dict(),
            "total_time": format_duration(itinerary.total_duration),
            "text": ItineraryService.format_itinerary_text(itinerary),
            "map": map_payload,
        }

    @staticmethod
    def store_in_session(response: Dict[str, Any]) -> None:
        """Store the last itinerary response in the Flask session.

        A new submission always replaces the previous one.
        """
        session['current_itinerary'] = response
        session.modified = True
        logger.debug("Stored itinerary in session")

    @staticmethod
    def get_from_session() -> Optional[Dict[str, Any]]:
        """Get the last itinerary response, or None if there is none."""
        return session.get('current_itinerary')

    @staticmethod
    def clear_session() -> None:
        """Clear itinerary data from session."""
        session.pop('current_itinerary', None)
        session.modified = True
        logger.debug("Cleared itinerary from session")


__all__ = ['ItineraryService', 'format_duration', 'format_miles', 'format_step']
