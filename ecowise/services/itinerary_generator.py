"""Itinerary generation: Gemini first, the canned fallback plan when Gemini
is unavailable for a recognised reason.

Flow for one validated request:

1. Build the prompt and ask Gemini for JSON.
2. Strip code fences, parse, normalise every plan into a trip document
   (costs, overnight warning, remaining budget, emissions).
3. Store all documents in one batch.

Only ``TransientFailure`` kinds (model not found, quota, timeout) switch to
the fallback plan. Every other upstream failure is surfaced.
"""
import re
import json
import logging
from datetime import date
from typing import Optional

from ecowise.errors import (
    ConfigurationError,
    GenerationFailedError,
    PersistenceError,
    UpstreamCallError,
    UpstreamEmptyError,
    UpstreamInvalidJsonError,
)
from ecowise.services.ai_service import AIService, classify_failure
from ecowise.services.costs import remaining_budget, transport_cost
from ecowise.services.emissions import compute_emissions
from ecowise.services.fallback_plan import build_fallback_plan
from ecowise.services.trip_store import TripSource
from ecowise.services.trip_validator import TripRequest
from ecowise.utils.dates import parse_iso_datetime, to_iso_timestamp, utc_now
from ecowise.utils.numbers import compact_number, to_finite_number

logger = logging.getLogger(__name__)

OVERNIGHT_WARNING = "Overnight travel detected despite avoidNightTravel preference"

CODE_FENCE_PATTERN = re.compile(r"```json|```", re.IGNORECASE)


GENERATION_PROMPT = """Current Date for context: {today}
Target Trip: {origin} to {destination}
Dates: From {start_date} to {deadline}
Total Budget: ₹{budget}
Calculated Remaining Budget for Stay/Food: ₹{budget_remaining}

USER PREFERENCES:
- Side Locations to include: {side_locations}
- Avoid Night Travel: {avoid_night_travel}
- Outbound Transport: {outbound_id} (Cost: ₹{outbound_cost})
- Return Transport: {return_id} (Cost: ₹{return_cost})

STRICT INSTRUCTIONS:
1. Itinerary must include the requested Side Locations ({side_location_names}) for the specified number of days.
2. The "plan" array MUST use the exact transport costs and modes provided in the preferences above.
3. Return ONLY valid JSON as an ARRAY of one plan.
4. Use ISO-8601 strings for all date fields.
5. Optimize for eco-friendly travel: prefer low-emission activities, local food, walkability, public transport, and minimal waste.
6. If the provided transport modes are high-emission, mention mitigation tips in plan_rationale (e.g., carbon offsets, longer stays, or local conservation support).

Schema:
[{{
  "plan_name": string,
  "plan_rationale": string,
  "itinerary": [
    {{ "day": number, "date": string, "theme": string, "activities": string[], "accommodation": {{ "name": string, "estimated_cost_inr": number }} }}
  ],
  "plan": [
    {{ "mode": string, "source": string, "destination": string, "cost": number, "departureTime": string, "arrivalTime": string, "distanceKm": number }}
  ],
  "total_cost_accommodation_activities": number
}}]"""


def build_generation_prompt(request: TripRequest, today: Optional[date] = None) -> str:
    today = today or utc_now().date()
    selection = request.travel_selection
    remaining = request.budget_remaining
    return GENERATION_PROMPT.format(
        today=today.isoformat(),
        origin=request.origin,
        destination=request.destination,
        start_date=request.start_date,
        deadline=request.deadline,
        budget=request.budget,
        budget_remaining=remaining if remaining is not None else "not provided",
        side_locations=json.dumps(request.side_locations, ensure_ascii=False),
        side_location_names=", ".join(request.side_location_names),
        avoid_night_travel=str(request.avoid_night_travel).lower(),
        outbound_id=selection.get("outboundId"),
        outbound_cost=request.outbound_cost,
        return_id=selection.get("returnId"),
        return_cost=request.return_cost,
    )


def strip_code_fences(raw: str) -> str:
    return CODE_FENCE_PATTERN.sub("", raw).strip()


def parse_plans(raw: str) -> list[dict]:
    """Parse the model output into a list of plan objects.

    Raises:
        UpstreamInvalidJsonError: if the text isn't JSON, or isn't one or
            more JSON objects.
    """
    try:
        parsed = json.loads(strip_code_fences(raw))
    except json.JSONDecodeError as e:
        raise UpstreamInvalidJsonError(message=str(e)) from e

    plans = parsed if isinstance(parsed, list) else [parsed]
    if not plans:
        raise UpstreamInvalidJsonError(message="Response contained no plans")
    if not all(isinstance(p, dict) for p in plans):
        raise UpstreamInvalidJsonError(message="Every plan must be a JSON object")
    return plans


def _normalize_day(day) -> dict:
    if not isinstance(day, dict):
        raise UpstreamInvalidJsonError(message="Itinerary days must be JSON objects")
    when = parse_iso_datetime(day.get("date"))
    if when is None:
        raise UpstreamInvalidJsonError(message=f"Invalid itinerary date: {day.get('date')!r}")
    activities = day.get("activities")
    return {
        **day,
        "date": to_iso_timestamp(when),
        "activities": activities if isinstance(activities, list) else [],
    }


def has_overnight_segment(segments: list) -> bool:
    """True if any segment departs and arrives on different calendar dates."""
    for segment in segments:
        if not isinstance(segment, dict):
            continue
        departure = parse_iso_datetime(segment.get("departureTime"))
        arrival = parse_iso_datetime(segment.get("arrivalTime"))
        if departure and arrival and departure.date() != arrival.date():
            return True
    return False


def _base_document(request: TripRequest) -> dict:
    return {
        "from": request.origin,
        "to": request.destination,
        "startDate": request.start_date,
        "deadline": request.deadline,
        "budget": request.budget,
        "userID": request.user_id,
        "travelSelection": request.travel_selection,
        "sideLocations": request.side_locations,
    }


def finalize_plan(plan: dict, request: TripRequest) -> dict:
    """Turn one parsed Gemini plan into a trip document ready to store."""
    itinerary = [_normalize_day(day) for day in (plan.get("itinerary") or [])]
    segments = plan.get("plan") or []
    if not isinstance(segments, list):
        raise UpstreamInvalidJsonError(message="Plan segments must be a JSON array")
    if not all(isinstance(s, dict) for s in segments):
        raise UpstreamInvalidJsonError(message="Plan segments must be JSON objects")

    total_cost = transport_cost(request.outbound_cost, request.return_cost, segments)
    accommodation_cost = compact_number(to_finite_number(plan.get("total_cost_accommodation_activities")) or 0)
    if request.budget_remaining is not None:
        remaining = request.budget_remaining
    else:
        remaining = remaining_budget(request.budget, total_cost, accommodation_cost)

    warnings = []
    if request.avoid_night_travel and has_overnight_segment(segments):
        warnings.append(OVERNIGHT_WARNING)

    return {
        **_base_document(request),
        "plan_name": plan.get("plan_name"),
        "plan_rationale": plan.get("plan_rationale"),
        "itinerary": itinerary,
        "total_cost_accommodation_activities": accommodation_cost,
        "plan": segments,
        "totalCost": total_cost,
        "budgetRemaining": remaining,
        "warnings": warnings,
        "emissions": compute_emissions(segments, itinerary).to_dict(),
        "source": "llm",
    }


def build_fallback_document(request: TripRequest) -> dict:
    fallback = build_fallback_plan(request)
    accommodation_cost = fallback["total_cost_accommodation_activities"]
    # The fallback segments repeat the selected fares, so they aren't added again
    total_cost = transport_cost(request.outbound_cost, request.return_cost)

    return {
        **_base_document(request),
        "plan_name": fallback["plan_name"],
        "plan_rationale": fallback["plan_rationale"],
        "itinerary": fallback["itinerary"],
        "total_cost_accommodation_activities": accommodation_cost,
        "plan": fallback["plan"],
        "totalCost": total_cost,
        "budgetRemaining": remaining_budget(request.budget, total_cost, accommodation_cost),
        "warnings": fallback["warnings"],
        "emissions": compute_emissions(fallback["plan"], fallback["itinerary"]).to_dict(),
        "source": "fallback",
    }


async def generate_trips(request: TripRequest, source: TripSource, today: Optional[date] = None) -> list[dict]:
    """Generate, normalise and store trips for a validated request.

    Returns the stored trip records.

    Raises:
        ConfigurationError: no Gemini API key configured.
        UpstreamEmptyError / UpstreamInvalidJsonError: unusable model output.
        GenerationFailedError: a non-transient upstream failure.
        PersistenceError: the batch insert failed.
    """
    if not AIService.is_configured():
        raise ConfigurationError("GEMINI_API_KEY is not configured")

    prompt = build_generation_prompt(request, today)

    try:
        raw = await AIService.complete(prompt, json_output=True)
    except UpstreamCallError as e:
        failure = classify_failure(e)
        if failure is None:
            logger.error(f"Error generating trip: {e.message}")
            raise GenerationFailedError(message=e.message) from e

        logger.warning(f"Gemini unavailable ({failure.value}): {e.message}. Using fallback plan")
        try:
            return source.insert_many([build_fallback_document(request)])
        except PersistenceError:
            logger.error("Fallback trip generation failed: could not store fallback plan")
            raise

    if not raw or not raw.strip():
        raise UpstreamEmptyError()

    docs = [finalize_plan(plan, request) for plan in parse_plans(raw)]
    logger.info(f"Generated {len(docs)} plan(s) for {request.origin} -> {request.destination}")
    return source.insert_many(docs)
