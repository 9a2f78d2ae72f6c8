import math
from typing import Optional


def to_finite_number(value) -> Optional[float]:
    """Coerce an int, float or numeric string to a finite float.

    Booleans, non-numeric strings, NaN and infinities all give None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def is_finite_number(value) -> bool:
    """True only for real int/float values, never for strings."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compact_number(value: float):
    """Return an int when the value has no fractional part."""
    return int(value) if float(value).is_integer() else value
