"""Deterministic two-day itinerary used when Gemini is unavailable."""
from datetime import datetime, time

from ecowise.services.trip_validator import TripRequest
from ecowise.utils.dates import to_iso_timestamp
from ecowise.utils.numbers import round_half_up

FALLBACK_PLAN_NAME = "Eco smart fallback plan"
FALLBACK_RATIONALE = (
    "Fallback plan generated to keep the demo running. "
    "Focuses on walkability, local food, and low-impact activities."
)
FALLBACK_STAY_NAME = "Eco stay (demo)"
DAYTIME_WARNING = "Fallback plan uses daytime travel only."

# Share of the money left after transport that goes on stay and activities
ACCOMMODATION_SHARE = 0.6

OUTBOUND_HOURS = (time(9, 0), time(11, 0))
RETURN_HOURS = (time(17, 0), time(19, 0))


def _at(day: datetime, at: time) -> str:
    return to_iso_timestamp(datetime.combine(day.date(), at))


def fallback_accommodation_cost(request: TripRequest) -> int:
    spare = request.budget - request.outbound_cost - request.return_cost
    return max(0, round_half_up(spare * ACCOMMODATION_SHARE))


def build_fallback_plan(request: TripRequest) -> dict:
    """Build a plan in the same shape Gemini is asked to return."""
    accommodation_cost = fallback_accommodation_cost(request)
    nightly = max(0, round_half_up(accommodation_cost * 0.5))

    itinerary = [
        {
            "day": 1,
            "date": to_iso_timestamp(request.start),
            "theme": "Arrival + local low-impact loop",
            "activities": [
                "Use public transport or walkable routes",
                "Local vegetarian or seasonal meal",
                "Community market visit",
            ],
            "accommodation": {"name": FALLBACK_STAY_NAME, "estimated_cost_inr": nightly},
        },
        {
            "day": 2,
            "date": to_iso_timestamp(request.end),
            "theme": "Nature + return",
            "activities": [
                "Low-emission activity (walk, cycle, or park)",
                "Return using selected transport",
            ],
            "accommodation": {"name": FALLBACK_STAY_NAME, "estimated_cost_inr": nightly},
        },
    ]

    plan = [
        {
            "mode": "Outbound",
            "source": request.origin,
            "destination": request.destination,
            "cost": request.outbound_cost,
            "departureTime": _at(request.start, OUTBOUND_HOURS[0]),
            "arrivalTime": _at(request.start, OUTBOUND_HOURS[1]),
        },
        {
            "mode": "Return",
            "source": request.destination,
            "destination": request.origin,
            "cost": request.return_cost,
            "departureTime": _at(request.end, RETURN_HOURS[0]),
            "arrivalTime": _at(request.end, RETURN_HOURS[1]),
        },
    ]

    return {
        "plan_name": FALLBACK_PLAN_NAME,
        "plan_rationale": FALLBACK_RATIONALE,
        "itinerary": itinerary,
        "plan": plan,
        "total_cost_accommodation_activities": accommodation_cost,
        "warnings": [DAYTIME_WARNING] if request.avoid_night_travel else [],
        "sideLocations": request.side_locations,
    }
