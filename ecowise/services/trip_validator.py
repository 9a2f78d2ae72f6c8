"""Validation of ``POST /api/trips/generate`` payloads.

Checks run in a fixed order and the first failure wins, so a payload missing
``userID`` and carrying a bad date reports the missing field.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ecowise.errors import TripValidationError, ValidationErrorKind
from ecowise.utils.dates import parse_iso_datetime
from ecowise.utils.numbers import compact_number, is_finite_number, to_finite_number

REQUIRED_FIELDS = ("from", "to", "startDate", "deadline", "budget", "userID")


@dataclass
class TripRequest:
    origin: str
    destination: str
    start_date: str
    deadline: str
    start: datetime
    end: datetime
    budget: float
    user_id: str
    travel_selection: dict
    outbound_cost: float = 0.0
    return_cost: float = 0.0
    budget_remaining: Optional[float] = None
    side_locations: list = field(default_factory=list)
    avoid_night_travel: bool = False

    @property
    def side_location_names(self) -> list[str]:
        return [
            str(loc.get("name"))
            for loc in self.side_locations
            if isinstance(loc, dict) and loc.get("name")
        ]


def _is_absent(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_trip_request(payload) -> TripRequest:
    """Validate and normalise a generate request.

    Raises:
        TripValidationError: with the kind of the first check that failed.
    """
    payload = payload if isinstance(payload, dict) else {}

    if any(_is_absent(payload.get(name)) for name in REQUIRED_FIELDS):
        raise TripValidationError(ValidationErrorKind.MISSING_FIELDS)

    start = parse_iso_datetime(payload["startDate"])
    end = parse_iso_datetime(payload["deadline"])
    if start is None or end is None:
        raise TripValidationError(ValidationErrorKind.INVALID_DATE_FORMAT)

    budget = to_finite_number(payload["budget"])
    if budget is None or budget <= 0:
        raise TripValidationError(ValidationErrorKind.INVALID_BUDGET)

    selection = payload.get("travelSelection")
    selection = selection if isinstance(selection, dict) else {}
    if not selection.get("outboundId") or not selection.get("returnId"):
        raise TripValidationError(ValidationErrorKind.MISSING_TRAVEL_SELECTION)

    costs = []
    for key in ("outboundCost", "returnCost"):
        raw = selection.get(key)
        cost = 0.0 if raw in (None, "", 0) else to_finite_number(raw)
        if cost is None:
            raise TripValidationError(ValidationErrorKind.INVALID_TRAVEL_COSTS)
        costs.append(cost)
    outbound_cost, return_cost = costs

    side_locations = payload.get("sideLocations")
    remaining = payload.get("budgetRemaining")

    return TripRequest(
        origin=str(payload["from"]),
        destination=str(payload["to"]),
        start_date=str(payload["startDate"]),
        deadline=str(payload["deadline"]),
        start=start,
        end=end,
        budget=compact_number(budget),
        user_id=str(payload["userID"]),
        travel_selection=selection,
        outbound_cost=compact_number(outbound_cost),
        return_cost=compact_number(return_cost),
        budget_remaining=remaining if is_finite_number(remaining) else None,
        side_locations=side_locations if isinstance(side_locations, list) else [],
        avoid_night_travel=bool(payload.get("avoidNightTravel")),
    )
