"""Reference data models for interview questions and companies."""
from __future__ import annotations

from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator

Track = Literal["consulting", "product-management"]
Difficulty = Literal["easy", "medium", "hard"]
InterviewFormat = Literal["interviewer-led", "candidate-led"]

CONSULTING_TYPE_LABELS: Dict[str, str] = {
    "profitability": "Profitability",
    "market-entry": "Market Entry",
    "market-sizing": "Market Sizing",
    "m&a": "M&A",
    "operations": "Operations",
    "growth-strategy": "Growth Strategy",
    "pricing": "Pricing",
    "competitive-response": "Competitive Response",
    "brainteasers": "Brainteasers",
    "turnarounds": "Turnarounds",
    "strategic-decision": "Strategic Decision",
    "industry-analysis": "Industry Analysis",
}

PM_TYPE_LABELS: Dict[str, str] = {
    "product-sense": "Product Sense",
    "analytical-thinking": "Analytical Thinking",
    "execution": "Execution",
    "behavioral": "Behavioral",
    "technical": "Technical",
    "strategy": "Strategy",
    "estimation": "Estimation",
}

FORMAT_LABELS: Dict[str, str] = {
    "interviewer-led": "Interviewer-Led",
    "candidate-led": "Candidate-Led",
}


def type_label(track: str, question_type: str) -> str:
    labels = CONSULTING_TYPE_LABELS if track == "consulting" else PM_TYPE_LABELS
    return labels.get(question_type, question_type)


class Company(BaseModel):
    slug: str
    name: str
    track: Track = "consulting"
    description: str = ""

    model_config = {"frozen": True}


class Question(BaseModel):
    """Immutable interview question reference record."""

    id: str
    track: Track
    type: str
    title: str
    description: str
    difficulty: Difficulty = "medium"
    company_slug: str = ""
    industry: Optional[str] = None
    interview_format: Optional[InterviewFormat] = None
    additional_info: Optional[str] = None
    solution: Optional[str] = None

    model_config = {"frozen": True}

    @field_validator("type")
    @classmethod
    def _normalise_type(cls, value: str) -> str:
        value = (value or "").strip().lower()
        if not value:
            raise ValueError("question type must be non-empty")
        return value

    @field_validator("title", "description")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must be non-empty")
        return value


class QuestionSummary(BaseModel):
    id: str
    track: Track
    type: str
    type_label: str
    title: str
    difficulty: Difficulty
    company_slug: str
    tags: Dict[str, str] = Field(default_factory=dict)
