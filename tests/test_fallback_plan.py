"""Tests for the deterministic fallback plan."""
from ecowise.services.fallback_plan import (
    DAYTIME_WARNING,
    FALLBACK_PLAN_NAME,
    FALLBACK_STAY_NAME,
    build_fallback_plan,
    fallback_accommodation_cost,
)
from ecowise.services.itinerary_generator import build_fallback_document
from ecowise.services.trip_validator import validate_trip_request


class TestFallbackPlan:
    def test_accommodation_cost(self, generate_payload):
        request = validate_trip_request(generate_payload())
        # (16000 - 320 - 320) * 0.6
        assert fallback_accommodation_cost(request) == 9216

    def test_accommodation_cost_never_negative(self, generate_payload):
        request = validate_trip_request(generate_payload(budget=500))
        assert fallback_accommodation_cost(request) == 0

    def test_two_day_itinerary(self, generate_payload):
        plan = build_fallback_plan(validate_trip_request(generate_payload()))

        assert plan["plan_name"] == FALLBACK_PLAN_NAME
        assert [d["day"] for d in plan["itinerary"]] == [1, 2]
        assert plan["itinerary"][0]["date"] == "2026-02-14T00:00:00.000Z"
        assert plan["itinerary"][1]["date"] == "2026-02-16T00:00:00.000Z"
        assert plan["itinerary"][0]["accommodation"] == {
            "name": FALLBACK_STAY_NAME,
            "estimated_cost_inr": 4608,
        }

    def test_daytime_segments(self, generate_payload):
        plan = build_fallback_plan(validate_trip_request(generate_payload()))
        outbound, back = plan["plan"]

        assert outbound["mode"] == "Outbound"
        assert outbound["source"] == "Bengaluru"
        assert outbound["destination"] == "Mysuru"
        assert outbound["cost"] == 320
        assert outbound["departureTime"] == "2026-02-14T09:00:00.000Z"
        assert outbound["arrivalTime"] == "2026-02-14T11:00:00.000Z"

        assert back["mode"] == "Return"
        assert back["source"] == "Mysuru"
        assert back["departureTime"] == "2026-02-16T17:00:00.000Z"
        assert back["arrivalTime"] == "2026-02-16T19:00:00.000Z"

    def test_warning_only_when_avoiding_night_travel(self, generate_payload):
        assert build_fallback_plan(validate_trip_request(generate_payload()))["warnings"] == []
        plan = build_fallback_plan(validate_trip_request(generate_payload(avoidNightTravel=True)))
        assert plan["warnings"] == [DAYTIME_WARNING]


class TestFallbackDocument:
    def test_document_totals(self, generate_payload):
        doc = build_fallback_document(validate_trip_request(generate_payload()))

        assert doc["source"] == "fallback"
        assert doc["from"] == "Bengaluru"
        assert doc["userID"] == "user-1"
        assert doc["totalCost"] == 640
        assert doc["total_cost_accommodation_activities"] == 9216
        assert doc["budgetRemaining"] == 16000 - 640 - 9216
        assert doc["emissions"]["totalKg"] == 30.8
        assert doc["sideLocations"] == [{"name": "Srirangapatna", "days": 1, "budget": 2500}]
