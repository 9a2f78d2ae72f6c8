"""Error taxonomy for the EcoWise API.

Every error the API returns on purpose is an ``EcoWiseError`` carrying its
HTTP status, a short client-facing ``error`` string and an optional
``message`` with upstream detail. ``UpstreamCallError`` is different: it is
raised by the Gemini backend and is classified by the generator before it
ever reaches a client.
"""
from enum import Enum
from typing import Optional


class EcoWiseError(Exception):
    status_code: int = 500
    error: str = "Internal error"

    def __init__(self, error: Optional[str] = None, message: Optional[str] = None):
        self.error = error or self.error
        self.message = message
        super().__init__(self.error if not message else f"{self.error}: {message}")

    def to_dict(self) -> dict:
        body = {"error": self.error}
        if self.message:
            body["message"] = self.message
        return body


class ValidationErrorKind(str, Enum):
    MISSING_FIELDS = "missing_fields"
    INVALID_DATE_FORMAT = "invalid_date_format"
    INVALID_BUDGET = "invalid_budget"
    MISSING_TRAVEL_SELECTION = "missing_travel_selection"
    INVALID_TRAVEL_COSTS = "invalid_travel_costs"


VALIDATION_MESSAGES = {
    ValidationErrorKind.MISSING_FIELDS: "Missing required fields",
    ValidationErrorKind.INVALID_DATE_FORMAT: "Invalid date format",
    ValidationErrorKind.INVALID_BUDGET: "Invalid budget value",
    ValidationErrorKind.MISSING_TRAVEL_SELECTION: "Missing travelSelection details",
    ValidationErrorKind.INVALID_TRAVEL_COSTS: "Invalid travelSelection costs",
}


class TripValidationError(EcoWiseError):
    status_code = 400

    def __init__(self, kind: ValidationErrorKind):
        self.kind = kind
        super().__init__(VALIDATION_MESSAGES[kind])


class ConfigurationError(EcoWiseError):
    status_code = 500


class UpstreamEmptyError(EcoWiseError):
    status_code = 502
    error = "AI response was empty"


class UpstreamInvalidJsonError(EcoWiseError):
    status_code = 502
    error = "AI returned invalid JSON"


class GenerationFailedError(EcoWiseError):
    status_code = 500
    error = "Trip generation failed"


class PersistenceError(EcoWiseError):
    status_code = 500
    error = "Failed to save trip"


class UpstreamCallError(Exception):
    """A failed call to the generative-language API."""

    def __init__(
        self,
        message: str,
        api_status: str = "",
        status_code: Optional[int] = None,
        timed_out: bool = False,
    ):
        self.message = message
        self.api_status = api_status
        self.status_code = status_code
        self.timed_out = timed_out
        super().__init__(message)


class RateLimitError(EcoWiseError):
    status_code = 429
    error = "Too many requests, please try again shortly."

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__()

    @property
    def headers(self) -> dict:
        return {"Retry-After": str(self.retry_after)}
