from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging

from ecowise.services.itinerary_generator import generate_trips
from ecowise.services.rate_limiter import enforce_generation_rate_limit
from ecowise.services.trip_store import TripSource, get_trip_source
from ecowise.services.trip_validator import validate_trip_request
from ecowise.utils.body import json_body

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/trips")
async def list_trips(source: TripSource = Depends(get_trip_source)):
    return source.list_trips()


@router.post(
    "/api/trips/generate",
    status_code=201,
    dependencies=[Depends(enforce_generation_rate_limit)],
)
async def generate_trip(
    payload=Depends(json_body),
    source: TripSource = Depends(get_trip_source),
):
    """Generate an eco itinerary with Gemini (or the fallback plan) and store it."""
    request = validate_trip_request(payload)
    return await generate_trips(request, source)


@router.get("/api/trips/{trip_id}")
async def get_trip(trip_id: str, source: TripSource = Depends(get_trip_source)):
    trip = source.get_trip(trip_id)
    if not trip:
        return JSONResponse(status_code=404, content={"error": "Trip not found"})
    return trip


@router.delete("/api/trips/{trip_id}")
async def delete_trip(trip_id: str, source: TripSource = Depends(get_trip_source)):
    deleted = source.delete_trip(trip_id)
    if deleted:
        logger.info(f"Deleted trip {trip_id}")
    return {"success": deleted}
