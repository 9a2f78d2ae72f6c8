"""Tests for generate-request validation."""
from datetime import datetime, timezone

import pytest

from ecowise.errors import TripValidationError, ValidationErrorKind
from ecowise.services.trip_validator import validate_trip_request


def _kind(payload) -> ValidationErrorKind:
    with pytest.raises(TripValidationError) as exc_info:
        validate_trip_request(payload)
    return exc_info.value.kind


class TestValidPayload:
    def test_normalises_fields(self, generate_payload):
        request = validate_trip_request(generate_payload())

        assert request.origin == "Bengaluru"
        assert request.destination == "Mysuru"
        assert request.budget == 16000
        assert request.user_id == "user-1"
        assert request.outbound_cost == 320
        assert request.return_cost == 320
        assert request.start == datetime(2026, 2, 14)
        assert request.side_location_names == ["Srirangapatna"]
        assert request.avoid_night_travel is False
        assert request.budget_remaining is None

    def test_numeric_strings_accepted(self, generate_payload):
        payload = generate_payload(budget="16000")
        payload["travelSelection"]["outboundCost"] = "450.5"
        request = validate_trip_request(payload)

        assert request.budget == 16000
        assert request.outbound_cost == 450.5

    def test_zulu_timestamps(self, generate_payload):
        request = validate_trip_request(generate_payload(startDate="2026-02-14T00:00:00.000Z"))
        assert request.start == datetime(2026, 2, 14, tzinfo=timezone.utc)

    @pytest.mark.parametrize("raw", [None, "", 0])
    def test_empty_costs_become_zero(self, raw, generate_payload):
        payload = generate_payload()
        payload["travelSelection"]["returnCost"] = raw
        assert validate_trip_request(payload).return_cost == 0

    def test_missing_cost_keys_become_zero(self, generate_payload):
        payload = generate_payload(travelSelection={"outboundId": "a", "returnId": "b"})
        request = validate_trip_request(payload)
        assert request.outbound_cost == 0
        assert request.return_cost == 0

    def test_budget_remaining_kept_only_when_numeric(self, generate_payload):
        assert validate_trip_request(generate_payload(budgetRemaining=900)).budget_remaining == 900
        assert validate_trip_request(generate_payload(budgetRemaining="900")).budget_remaining is None

    def test_side_locations_default_to_list(self, generate_payload):
        assert validate_trip_request(generate_payload(sideLocations="nope")).side_locations == []
        assert validate_trip_request(generate_payload(sideLocations=None)).side_locations == []

    def test_avoid_night_travel_truthy(self, generate_payload):
        assert validate_trip_request(generate_payload(avoidNightTravel=1)).avoid_night_travel is True


class TestRejectedPayload:
    @pytest.mark.parametrize("field", ["from", "to", "startDate", "deadline", "budget", "userID"])
    def test_missing_required_field(self, field, generate_payload):
        payload = generate_payload()
        del payload[field]
        assert _kind(payload) == ValidationErrorKind.MISSING_FIELDS

    def test_blank_string_counts_as_missing(self, generate_payload):
        assert _kind(generate_payload(userID="   ")) == ValidationErrorKind.MISSING_FIELDS

    @pytest.mark.parametrize("payload", [None, [], "text"])
    def test_non_object_body(self, payload):
        assert _kind(payload) == ValidationErrorKind.MISSING_FIELDS

    def test_missing_field_reported_before_bad_date(self, generate_payload):
        payload = generate_payload(startDate="not-a-date")
        del payload["userID"]
        assert _kind(payload) == ValidationErrorKind.MISSING_FIELDS

    @pytest.mark.parametrize("field", ["startDate", "deadline"])
    def test_bad_date(self, field, generate_payload):
        assert _kind(generate_payload(**{field: "14/02/2026"})) == ValidationErrorKind.INVALID_DATE_FORMAT

    @pytest.mark.parametrize("budget", [0, -5, "abc", "NaN", True])
    def test_bad_budget(self, budget, generate_payload):
        assert _kind(generate_payload(budget=budget)) == ValidationErrorKind.INVALID_BUDGET

    def test_bad_date_reported_before_bad_budget(self, generate_payload):
        payload = generate_payload(deadline="soon", budget=-1)
        assert _kind(payload) == ValidationErrorKind.INVALID_DATE_FORMAT

    @pytest.mark.parametrize("selection", [
        None,
        "R12",
        {"outboundId": "R12"},
        {"returnId": "R13"},
        {"outboundId": "", "returnId": "R13"},
    ])
    def test_incomplete_travel_selection(self, selection, generate_payload):
        payload = generate_payload(travelSelection=selection)
        assert _kind(payload) == ValidationErrorKind.MISSING_TRAVEL_SELECTION

    @pytest.mark.parametrize("cost", ["abc", "Infinity", [320]])
    def test_bad_travel_cost(self, cost, generate_payload):
        payload = generate_payload()
        payload["travelSelection"]["outboundCost"] = cost
        assert _kind(payload) == ValidationErrorKind.INVALID_TRAVEL_COSTS

    def test_error_body(self, generate_payload):
        with pytest.raises(TripValidationError) as exc_info:
            validate_trip_request(generate_payload(budget=0))
        assert exc_info.value.status_code == 400
        assert exc_info.value.to_dict() == {"error": "Invalid budget value"}
