from ecowise.schemas.plan import (
    ExtractedFields,
    ModelInfo,
    ModelsResponse,
    PlanResponse,
    PreferenceFlags,
    PromptDebug,
    TripDateRange,
)

__all__ = [
    "ExtractedFields",
    "ModelInfo",
    "ModelsResponse",
    "PlanResponse",
    "PreferenceFlags",
    "PromptDebug",
    "TripDateRange",
]
