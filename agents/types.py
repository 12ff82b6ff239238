"""Structured payloads returned by the LLM-backed agents."""
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

ControlKind = Literal["think_request", "skip_request", "unclear", "off_topic", "count_claim"]


class EntityPayload(BaseModel):
    kind: str = Field(min_length=1)
    value: str = ""
    count: Optional[int] = Field(default=None, ge=0)


class ExtractionPayload(BaseModel):
    entities: List[EntityPayload] = Field(default_factory=list)


class AssessmentPayload(BaseModel):
    dimension_scores: Dict[str, float]
    feedback: str = ""
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)


class HintPayload(BaseModel):
    hint: str


class PolishPayload(BaseModel):
    text: str


__all__ = [
    "AssessmentPayload",
    "ControlKind",
    "EntityPayload",
    "ExtractionPayload",
    "HintPayload",
    "PolishPayload",
]
