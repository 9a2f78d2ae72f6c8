"""Trip cost arithmetic shared by generated, fallback and demo trips.

totalCost       = outbound fare + return fare + Σ segment cost
budgetRemaining = budget - totalCost - accommodation/activities
"""
from ecowise.utils.numbers import compact_number, to_finite_number


def _amount(value) -> float:
    return to_finite_number(value) or 0.0


def transport_cost(outbound_cost, return_cost, segments=None):
    total = _amount(outbound_cost) + _amount(return_cost)
    total += sum(_amount(s.get("cost")) for s in (segments or []) if isinstance(s, dict))
    return compact_number(total)


def remaining_budget(budget, total_cost, accommodation_cost):
    """May go negative; overspending is reported, not clamped."""
    return compact_number(_amount(budget) - _amount(total_cost) - _amount(accommodation_cost))
