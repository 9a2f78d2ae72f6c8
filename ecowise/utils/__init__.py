from ecowise.utils.dates import parse_iso_datetime, to_iso_timestamp, utc_now
from ecowise.utils.numbers import compact_number, is_finite_number, round_half_up, to_finite_number
from ecowise.utils.body import json_body

__all__ = [
    "parse_iso_datetime",
    "to_iso_timestamp",
    "utc_now",
    "compact_number",
    "is_finite_number",
    "round_half_up",
    "to_finite_number",
    "json_body",
]
