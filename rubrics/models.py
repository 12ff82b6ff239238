"""Pydantic models for assessment rubrics."""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

EXCELLENCE_LEVEL = 5


class Dimension(BaseModel):
    """One weighted scoring dimension with per-level indicators."""

    id: str
    name: str
    weight: int = Field(ge=0, le=100)
    description: str = ""
    scoring_criteria: Dict[int, List[str]]
    common_issues: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("scoring_criteria")
    @classmethod
    def _levels_in_range(cls, value: Dict[int, List[str]]) -> Dict[int, List[str]]:
        for level in value:
            if not 1 <= int(level) <= 5:
                raise ValueError(f"score level {level} outside 1..5")
        if not value.get(EXCELLENCE_LEVEL):
            raise ValueError("level 5 indicators are required")
        return value

    @property
    def excellence_indicators(self) -> List[str]:
        return list(self.scoring_criteria[EXCELLENCE_LEVEL])


class CalibratedExample(BaseModel):
    id: str
    question_title: str = ""
    transcript_summary: str
    scores: Dict[str, float] = Field(default_factory=dict)
    overall_score: float = Field(ge=0, le=5)
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)


class RubricConfig(BaseModel):
    """Weighted dimensions for one question type. Weights total 100."""

    question_type: str
    dimensions: List[Dimension] = Field(min_length=1)
    calibrated_examples: List[CalibratedExample] = Field(default_factory=list)
    passing_score: int = 3
    max_score: int = 5

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _weights_total_100(self) -> "RubricConfig":
        total = sum(d.weight for d in self.dimensions)
        if total != 100:
            raise ValueError(f"dimension weights for {self.question_type} sum to {total}, expected 100")
        names = [d.name for d in self.dimensions]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate dimension names in {self.question_type}")
        return self

    def dimension(self, name: str) -> Optional[Dimension]:
        for dim in self.dimensions:
            if dim.name == name or dim.id == name:
                return dim
        return None

    def excellence_guidance(self) -> List[Tuple[str, int, List[str]]]:
        """Return ``(name, weight, level-5 indicators)`` per dimension, in order."""

        return [(d.name, d.weight, d.excellence_indicators) for d in self.dimensions]
