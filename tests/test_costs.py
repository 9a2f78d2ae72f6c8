"""Tests for trip cost totals and the remaining budget."""
import pytest

from ecowise.services.costs import remaining_budget, transport_cost


class TestTransportCost:
    def test_fares_only(self):
        assert transport_cost(320, 320) == 640

    def test_segments_added(self):
        segments = [{"cost": 100}, {"cost": 45.5}, {"mode": "Walk"}]
        assert transport_cost(320, 320, segments) == 785.5

    def test_numeric_strings_and_junk(self):
        segments = [{"cost": "80"}, {"cost": "free"}, {"cost": True}, "bus", None]
        assert transport_cost("100", None, segments) == 180

    def test_whole_totals_are_ints(self):
        total = transport_cost(10.5, 9.5)
        assert total == 20
        assert isinstance(total, int)


class TestRemainingBudget:
    def test_subtracts_transport_and_stay(self):
        assert remaining_budget(16000, 740, 5000) == 10260

    def test_may_go_negative(self):
        assert remaining_budget(1000, 800, 700) == -500

    @pytest.mark.parametrize("accommodation", [None, "n/a", float("nan")])
    def test_unusable_accommodation_counts_as_zero(self, accommodation):
        assert remaining_budget(1000, 400, accommodation) == 600
