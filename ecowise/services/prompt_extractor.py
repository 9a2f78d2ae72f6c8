"""Heuristic extraction of trip fields from a free-text prompt.

Used by the ``/api/plan`` route and the generate-request preview.

First match wins and city lookup is by substring containment against a
small gazetteer. Nothing here raises on odd input; whatever couldn't be
found is listed in ``missing``.
"""
import re
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from ecowise.utils.dates import to_iso_timestamp
from ecowise.utils.numbers import compact_number, round_half_up

logger = logging.getLogger(__name__)


# Order matters: the first city in this list that matches wins.
CITY_GAZETTEER = [
    "bengaluru",
    "mysuru",
    "delhi",
    "jaipur",
    "mumbai",
    "goa",
    "ooty",
    "chennai",
    "vijayawada",
    "agra",
]

# (pattern, label) - tried in order; group 1 is the amount, group 2 the k suffix
BUDGET_PATTERNS = [
    (re.compile(r"[₹$€£]\s*(\d+(?:\.\d+)?)(k)?", re.IGNORECASE), "currency"),
    (re.compile(r"under\s*(\d+(?:\.\d+)?)(k)?", re.IGNORECASE), "under"),
]

DURATION_PATTERN = re.compile(r"(\d+)\s*[-\s]?\s*(day|days|night|nights)", re.IGNORECASE)

# Each fragment ends before the other keyword, so "from chennai to ooty"
# yields "chennai" and "ooty" rather than one fragment holding both cities.
FROM_PATTERN = re.compile(r"from\s+([a-z\s]+?)(?=\s+to\b|[^a-z\s]|$)", re.IGNORECASE)
TO_PATTERN = re.compile(r"to\s+([a-z\s]+?)(?=\s+from\b|[^a-z\s]|$)", re.IGNORECASE)

# Alternation stops at the first alternative that matches, and the
# three-letter abbreviations are listed first, so "sept" and "february" are
# captured as "sep" and "feb", tokens strptime understands.
TRAVEL_DATE_PATTERN = re.compile(
    r"(\d{1,2})(st|nd|rd|th)?\s*"
    r"(jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec|january|february|march"
    r"|april|june|july|august|september|october|november|december)",
    re.IGNORECASE,
)

RAIL_PATTERN = re.compile(r"rail|train", re.IGNORECASE)
AVOID_FLIGHTS_PATTERN = re.compile(r"avoid\s*flights|no\s*flight", re.IGNORECASE)
LOCAL_FOOD_PATTERN = re.compile(r"local\s*food|street\s*food|veg|vegetarian", re.IGNORECASE)

# Share of the budget the preview assigns to each travel leg
OUTBOUND_BUDGET_SHARE = 0.25
RETURN_BUDGET_SHARE = 0.33


@dataclass
class Preferences:
    rail: bool = False
    avoid_flights: bool = False
    local_food: bool = False

    def any(self) -> bool:
        return self.rail or self.avoid_flights or self.local_food

    def to_dict(self) -> dict:
        return {
            "rail": self.rail,
            "avoidFlights": self.avoid_flights,
            "localFood": self.local_food,
        }


@dataclass
class TripIntent:
    origin: Optional[str] = None
    destination: Optional[str] = None
    duration_days: Optional[int] = None
    budget: Optional[float] = None
    travel_date: Optional[str] = None
    preferences: Preferences = field(default_factory=Preferences)
    missing: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "origin": self.origin,
            "destination": self.destination,
            "durationDays": self.duration_days,
            "budget": self.budget,
            "travelDate": self.travel_date,
            "preferences": self.preferences.to_dict(),
        }


@dataclass
class TripDates:
    start_date: str
    deadline: str

    def to_dict(self) -> dict:
        return {"startDate": self.start_date, "deadline": self.deadline}


def _contains_city(text: str, city: str, whole_word: bool) -> bool:
    if whole_word:
        return re.search(r"\b" + re.escape(city) + r"\b", text) is not None
    return city in text


def find_city(text: str, exclude: Optional[str] = None, whole_word: bool = False) -> Optional[str]:
    """Return the first gazetteer city contained in ``text``."""
    for city in CITY_GAZETTEER:
        if city == exclude:
            continue
        if _contains_city(text, city, whole_word):
            return city
    return None


def extract_budget(prompt: str):
    for pattern, _label in BUDGET_PATTERNS:
        match = pattern.search(prompt)
        if match:
            value = float(match.group(1))
            if match.group(2):
                value *= 1000
            return compact_number(value)
    return None


def extract_duration(prompt: str) -> Optional[int]:
    match = DURATION_PATTERN.search(prompt)
    if not match:
        return None
    days = int(match.group(1))
    return days if days > 0 else None


def extract_travel_date(prompt: str) -> Optional[str]:
    match = TRAVEL_DATE_PATTERN.search(prompt)
    if not match:
        return None
    return f"{match.group(1)} {match.group(3).lower()}"


def extract_origin_destination(prompt: str, whole_word: bool = False) -> tuple[Optional[str], Optional[str]]:
    """Cities named in the ``from ...`` and ``to ...`` fragments, if any."""
    from_match = FROM_PATTERN.search(prompt)
    to_match = TO_PATTERN.search(prompt)

    origin = find_city(from_match.group(1), whole_word=whole_word) if from_match else None
    destination = find_city(to_match.group(1), whole_word=whole_word) if to_match else None
    return origin, destination


def extract_intent(prompt: str, whole_word: bool = False) -> TripIntent:
    """Extract a TripIntent from free text. Always returns a result."""
    text = (prompt or "").lower()

    origin, destination = extract_origin_destination(text, whole_word)
    if not origin:
        origin = find_city(text, whole_word=whole_word)
    if not destination:
        destination = find_city(text, exclude=origin, whole_word=whole_word)

    intent = TripIntent(
        origin=origin,
        destination=destination,
        duration_days=extract_duration(text),
        budget=extract_budget(text),
        travel_date=extract_travel_date(text),
        preferences=Preferences(
            rail=bool(RAIL_PATTERN.search(text)),
            avoid_flights=bool(AVOID_FLIGHTS_PATTERN.search(text)),
            local_food=bool(LOCAL_FOOD_PATTERN.search(text)),
        ),
    )

    if not intent.origin:
        intent.missing.append("origin")
    if not intent.destination:
        intent.missing.append("destination")
    if not intent.duration_days:
        intent.missing.append("duration")
    if not intent.budget:
        intent.missing.append("budget")
    if not intent.travel_date:
        intent.missing.append("date")
    if not intent.preferences.any():
        intent.missing.append("preferences")

    if intent.missing:
        logger.debug(f"Prompt extraction incomplete, missing: {', '.join(intent.missing)}")

    return intent


def _parse_day_month(token: str, year: int) -> Optional[date]:
    for fmt in ("%d %b %Y", "%d %B %Y"):
        try:
            return datetime.strptime(f"{token} {year}", fmt).date()
        except ValueError:
            continue
    return None


def build_trip_dates(
    travel_date: Optional[str],
    duration_days: Optional[int],
    today: Optional[date] = None,
) -> Optional[TripDates]:
    """Turn a "<day> <month>" token and a duration into ISO start/end timestamps.

    The year is always the current one. The end date never falls before the
    start date, whatever the duration.
    """
    if not travel_date or duration_days is None:
        return None

    year = (today or datetime.now(timezone.utc).date()).year
    start = _parse_day_month(travel_date, year)
    if start is None:
        return None

    end = start + timedelta(days=max(0, duration_days - 1))
    return TripDates(
        start_date=to_iso_timestamp(datetime(start.year, start.month, start.day)),
        deadline=to_iso_timestamp(datetime(end.year, end.month, end.day)),
    )


def build_generate_payload(
    intent: TripIntent,
    dates: Optional[TripDates],
    user_id: str = "demo-user",
) -> Optional[dict]:
    """Build the ``/api/trips/generate`` body a prompt implies.

    Returns None unless origin, destination, budget and dates are all known.
    """
    if not intent.origin or not intent.destination or not intent.budget or dates is None:
        return None

    budget = intent.budget
    outbound_cost = round_half_up(budget * OUTBOUND_BUDGET_SHARE)
    return_cost = round_half_up(budget * RETURN_BUDGET_SHARE)

    return {
        "from": intent.origin,
        "to": intent.destination,
        "startDate": dates.start_date,
        "deadline": dates.deadline,
        "budget": budget,
        "userID": user_id,
        "travelSelection": {
            "outboundId": "prompt_outbound",
            "returnId": "prompt_return",
            "outboundCost": outbound_cost,
            "returnCost": return_cost,
        },
        "budgetRemaining": max(0, budget - outbound_cost - return_cost),
        "avoidNightTravel": False,
        "sideLocations": [],
    }
