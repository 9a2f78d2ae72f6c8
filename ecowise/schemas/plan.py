from pydantic import BaseModel
from typing import Optional, Union


class PreferenceFlags(BaseModel):
    rail: bool
    avoidFlights: bool
    localFood: bool


class ExtractedFields(BaseModel):
    origin: Optional[str]
    destination: Optional[str]
    durationDays: Optional[int]
    budget: Optional[Union[int, float]]
    travelDate: Optional[str]
    preferences: PreferenceFlags


class TripDateRange(BaseModel):
    startDate: str
    deadline: str


class PromptDebug(BaseModel):
    extracted: ExtractedFields
    missing: list[str]
    dates: Optional[TripDateRange] = None
    generateRequest: Optional[dict] = None


class PlanResponse(BaseModel):
    prompt: str
    generatedAt: str
    trips: list[dict]
    debug: PromptDebug


class ModelInfo(BaseModel):
    name: Optional[str]
    displayName: Optional[str]
    supportedGenerationMethods: Optional[list[str]]


class ModelsResponse(BaseModel):
    models: list[ModelInfo]
