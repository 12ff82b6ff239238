"""Pydantic schemas for the interview session API."""
from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from catalog.models import Question
from graph.state import Directive
from services.assessment import AssessmentResult

QuickActionId = Literal["hint", "think", "skip"]


class StartReq(BaseModel):
    question_id: Optional[str] = None
    question: Optional[Question] = None
    company: Optional[str] = None
    persona: Optional[str] = None
    mode: Literal["practice", "learn"] = "practice"
    seed: Optional[int] = None
    client_ts: Optional[float] = None

    @model_validator(mode="after")
    def _one_question(self) -> "StartReq":
        if (self.question_id is None) == (self.question is None):
            raise ValueError("provide exactly one of question_id or question")
        return self


SESSION_ID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"


class SessionReq(BaseModel):
    # Session ids name checkpoint files, so only issued uuids are accepted.
    session_id: str = Field(pattern=SESSION_ID_PATTERN)
    client_ts: Optional[float] = None


class TurnReq(SessionReq):
    utterance: str


class HintReq(SessionReq):
    level: Optional[int] = Field(default=None, ge=1)


class StartResp(BaseModel):
    session_id: str
    system_prompt: str
    candidate_prompt: Optional[str] = None
    format: str
    protocol: str
    phase: str
    avatar: Optional[str] = None
    avatars: Optional[Dict[str, str]] = None
    directive: Directive
    quick_actions: List[QuickActionId] = Field(default_factory=list)


class TurnResp(BaseModel):
    session_id: str
    directive: Optional[Directive] = None
    phase: str
    turn: int
    done: bool = False
    quick_actions: List[QuickActionId] = Field(default_factory=list)
    event_log: List[Dict] = Field(default_factory=list)


class HintResp(BaseModel):
    session_id: str
    hint: str
    level: int
    quick_actions: List[QuickActionId] = Field(default_factory=list)


class FinishResp(BaseModel):
    session_id: str
    incomplete: bool
    duration_seconds: float
    message: str
    assessment: AssessmentResult


class AbortResp(BaseModel):
    session_id: str
    directive: Directive
