"""Tests for the live (database) and demo trip sources."""
import pytest

from ecowise.errors import PersistenceError
from ecowise.models import Trip
from ecowise.services.itinerary_generator import build_fallback_document
from ecowise.services.prompt_extractor import extract_intent
from ecowise.services.trip_store import DemoTripSource, LiveTripSource
from ecowise.services.trip_validator import validate_trip_request


@pytest.fixture
def make_doc(generate_payload):
    def _make(**overrides) -> dict:
        return build_fallback_document(validate_trip_request(generate_payload(**overrides)))

    return _make


class TestLiveTripSource:
    def test_insert_and_read_back(self, db_session, make_doc):
        source = LiveTripSource(db_session)
        doc = make_doc()
        stored = source.insert_many([doc])

        assert len(stored) == 1
        for key in ("itinerary", "plan", "emissions"):
            assert stored[0][key] == doc[key]
        trip = stored[0]
        assert len(trip["id"]) == 32
        assert trip["from"] == "Bengaluru"
        assert trip["to"] == "Mysuru"
        assert trip["userID"] == "user-1"
        assert trip["source"] == "fallback"
        assert trip["createdAt"].endswith("Z")
        assert trip["itinerary"][0]["day"] == 1
        assert source.get_trip(trip["id"]) == trip

    def test_list_trips(self, db_session, make_doc):
        source = LiveTripSource(db_session)
        source.insert_many([make_doc(), make_doc(**{"from": "Delhi", "to": "Jaipur"})])
        assert sorted(t["to"] for t in source.list_trips()) == ["Jaipur", "Mysuru"]

    def test_batch_is_all_or_nothing(self, db_session, make_doc):
        source = LiveTripSource(db_session)
        broken = make_doc()
        broken["budget"] = None

        with pytest.raises(PersistenceError) as exc_info:
            source.insert_many([make_doc(), broken])

        assert exc_info.value.to_dict()["error"] == "Failed to save trip"
        assert db_session.query(Trip).count() == 0

    def test_delete(self, db_session, make_doc):
        source = LiveTripSource(db_session)
        trip_id = source.insert_many([make_doc()])[0]["id"]

        assert source.delete_trip(trip_id) is True
        assert source.get_trip(trip_id) is None
        assert source.delete_trip(trip_id) is False

    def test_get_unknown(self, db_session):
        assert LiveTripSource(db_session).get_trip("missing") is None

    def test_trips_for_prompt_matches_cities(self, db_session, make_doc):
        source = LiveTripSource(db_session)
        source.insert_many([make_doc(), make_doc(**{"from": "Delhi", "to": "Jaipur"})])

        prompt = "from delhi to jaipur"
        trips = source.trips_for_prompt(prompt, extract_intent(prompt))
        assert [t["to"] for t in trips] == ["Jaipur"]

        prompt = "anything leaving bengaluru?"
        trips = source.trips_for_prompt(prompt, extract_intent(prompt))
        assert [t["from"] for t in trips] == ["Bengaluru"]

    def test_trips_for_prompt_without_cities(self, db_session, make_doc):
        source = LiveTripSource(db_session)
        source.insert_many([make_doc()])
        assert source.trips_for_prompt("somewhere green", extract_intent("somewhere green")) == []


class TestDemoTripSource:
    def test_seed_trips(self):
        trips = DemoTripSource().list_trips()
        assert [t["id"] for t in trips] == ["demo-1", "demo-2", "demo-3"]
        assert all(t["source"] == "demo" for t in trips)
        assert all(t["emissions"]["totalKg"] > 0 for t in trips)

    @pytest.mark.parametrize("trip_id,total,remaining", [
        ("demo-1", 1780, 8820),
        ("demo-2", 3920, 8480),
        ("demo-3", 6000, 9800),
    ])
    def test_seed_costs_follow_the_plan(self, trip_id, total, remaining):
        trip = DemoTripSource().get_trip(trip_id)
        selection = trip["travelSelection"]
        segment_costs = sum(s["cost"] for s in trip["plan"])

        assert trip["totalCost"] == selection["outboundCost"] + selection["returnCost"] + segment_costs == total
        assert trip["budgetRemaining"] == trip["budget"] - total - trip["total_cost_accommodation_activities"]
        assert trip["budgetRemaining"] == remaining

    @pytest.mark.parametrize("prompt,expected", [
        ("weekend in Jaipur", ["demo-2"]),
        ("beach time in GOA", ["demo-3"]),
        ("from mumbai, anywhere", ["demo-3"]),
        ("hills near ooty", ["demo-1", "demo-2"]),
    ])
    def test_trips_for_prompt(self, prompt, expected):
        trips = DemoTripSource().trips_for_prompt(prompt, extract_intent(prompt))
        assert [t["id"] for t in trips] == expected

    def test_insert_assigns_id(self, make_doc):
        source = DemoTripSource()
        stored = source.insert_many([make_doc()])

        assert stored[0]["id"]
        assert stored[0]["createdAt"].endswith("Z")
        assert source.get_trip(stored[0]["id"]) == stored[0]
        assert len(source.list_trips()) == 4

    def test_delete(self):
        source = DemoTripSource()
        assert source.delete_trip("demo-1") is True
        assert source.get_trip("demo-1") is None
        assert source.delete_trip("demo-1") is False

    def test_reset_restores_seed(self):
        DemoTripSource().delete_trip("demo-2")
        DemoTripSource.reset()
        assert DemoTripSource().get_trip("demo-2") is not None
