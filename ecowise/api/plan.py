from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ecowise.config import get_settings
from ecowise.schemas.plan import PlanResponse, PromptDebug
from ecowise.services.prompt_extractor import (
    build_generate_payload,
    build_trip_dates,
    extract_intent,
)
from ecowise.services.trip_store import TripSource, get_trip_source
from ecowise.utils.body import json_body
from ecowise.utils.dates import to_iso_timestamp, utc_now

router = APIRouter()


@router.post("/api/plan", response_model=PlanResponse)
async def plan_from_prompt(
    payload=Depends(json_body),
    source: TripSource = Depends(get_trip_source),
):
    """Extract trip fields from a free-text prompt and return matching trips."""
    prompt = payload.get("prompt") if isinstance(payload, dict) else None
    if not isinstance(prompt, str) or not prompt.strip():
        return JSONResponse(status_code=400, content={"error": "Prompt is required."})

    intent = extract_intent(prompt, whole_word=get_settings().gazetteer_whole_word)
    dates = build_trip_dates(intent.travel_date, intent.duration_days)

    return PlanResponse(
        prompt=prompt,
        generatedAt=to_iso_timestamp(utc_now()),
        trips=source.trips_for_prompt(prompt, intent),
        debug=PromptDebug(
            extracted=intent.to_dict(),
            missing=intent.missing,
            dates=dates.to_dict() if dates else None,
            generateRequest=build_generate_payload(intent, dates),
        ),
    )
