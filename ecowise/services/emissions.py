"""Synthetic carbon estimate for a generated trip.

transport = Σ distance × factor(mode) over all segments
stay      = max(0, days - 1) × 1.2 kg
activity  = days × 0.4 kg
"""
from dataclasses import dataclass, asdict
from typing import Optional

from ecowise.utils.numbers import is_finite_number

DEFAULT_DISTANCE_KM = 120.0
MIN_DERIVED_DISTANCE_KM = 5.0
KM_PER_HOUR = 60.0

STAY_KG_PER_NIGHT = 1.2
ACTIVITIES_KG_PER_DAY = 0.4

# kg CO2e per km. Checked top to bottom, first keyword found in the mode wins.
EMISSION_FACTORS: list[tuple[tuple[str, ...], float]] = [
    (("rail", "train"), 0.04),
    (("bus",), 0.08),
    (("ev", "electric"), 0.05),
    (("metro", "subway"), 0.06),
    (("car", "taxi"), 0.18),
    (("flight", "air"), 0.25),
    (("walk", "cycle", "bike"), 0.0),
]
DEFAULT_EMISSION_FACTOR = 0.12


@dataclass
class Emissions:
    transportKg: float
    stayKg: float
    activitiesKg: float
    totalKg: float

    def to_dict(self) -> dict:
        return asdict(self)


def normalize_mode(mode) -> str:
    return str(mode or "").strip().lower()


def emission_factor(mode) -> float:
    key = normalize_mode(mode)
    for keywords, factor in EMISSION_FACTORS:
        if any(keyword in key for keyword in keywords):
            return factor
    return DEFAULT_EMISSION_FACTOR


def segment_distance_km(segment) -> float:
    if not isinstance(segment, dict):
        segment = {}
    distance = segment.get("distanceKm")
    if is_finite_number(distance):
        return float(distance)
    duration = segment.get("durationHrs")
    if is_finite_number(duration):
        return max(MIN_DERIVED_DISTANCE_KM, float(duration) * KM_PER_HOUR)
    return DEFAULT_DISTANCE_KM


def _segment_mode(segment):
    return segment.get("mode") if isinstance(segment, dict) else None


def compute_emissions(segments: Optional[list], itinerary_days: Optional[list]) -> Emissions:
    # Segments that aren't objects count at the default distance and factor
    transport_kg = sum(
        segment_distance_km(segment) * emission_factor(_segment_mode(segment))
        for segment in (segments if isinstance(segments, list) else [])
    )

    days = len(itinerary_days) if isinstance(itinerary_days, list) else 0
    stay_kg = max(0, days - 1) * STAY_KG_PER_NIGHT
    activities_kg = days * ACTIVITIES_KG_PER_DAY
    total_kg = transport_kg + stay_kg + activities_kg

    return Emissions(
        transportKg=round(transport_kg, 2),
        stayKg=round(stay_kg, 2),
        activitiesKg=round(activities_kg, 2),
        totalKg=round(total_kg, 2),
    )
