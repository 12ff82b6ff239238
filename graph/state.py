"""Per-session interview state, transcript and directive models."""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from catalog.models import InterviewFormat, Question

from .phases import PhaseSpec, ProtocolSpec, get_protocol

Role = Literal["interviewer", "candidate"]
Mode = Literal["practice", "learn"]
InterruptKind = Literal["CLARIFY_AUDIO", "THINKING_PAUSE", "CHALLENGE", "NUDGE", "REDIRECT"]
DirectiveKind = Literal[
    "OPEN",
    "ACKNOWLEDGE",
    "TRANSITION",
    "CHALLENGE",
    "NUDGE",
    "REDIRECT",
    "CLARIFY_AUDIO",
    "THINKING_PAUSE",
    "CHECK_IN",
    "RECOVERY",
    "SKIP",
    "WRAP_UP",
    "CLOSE",
]


class TranscriptEntry(BaseModel):
    role: Role
    text: str
    timestamp: float

    model_config = {"frozen": True}


class Transcript(BaseModel):
    """Append-only conversation log."""

    entries: List[TranscriptEntry] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=lambda: {"incomplete": False})

    def append(self, role: Role, text: str, timestamp: float) -> TranscriptEntry:
        entry = TranscriptEntry(role=role, text=text, timestamp=timestamp)
        self.entries.append(entry)
        return entry

    def candidate_text(self) -> str:
        return " ".join(e.text for e in self.entries if e.role == "candidate")

    def render(self) -> str:
        labels = {"interviewer": "Interviewer", "candidate": "Candidate"}
        return "\n".join(f"{labels[e.role]}: {e.text}" for e in self.entries)


class Directive(BaseModel):
    """What the interviewer should say next."""

    kind: DirectiveKind
    text: str
    phase: str
    done: bool = False
    incomplete: bool = False
    interrupt: Optional[InterruptKind] = None


class SessionState(BaseModel):
    """Serializable state of one interview; mutated only by the state machine."""

    session_id: str
    question: Question
    protocol: str
    format: InterviewFormat
    persona: str = "Friendly Expert"
    mode: Mode = "practice"
    avatars: Dict[str, Optional[str]] = Field(default_factory=dict)

    phase_index: int = 0
    started_at: float
    phase_started_at: float
    completed: Dict[str, bool] = Field(default_factory=dict)
    interrupt_stack: List[InterruptKind] = Field(default_factory=list)
    turn_count: int = 0

    facts: Dict[str, Dict[str, List[str]]] = Field(default_factory=dict)
    challenge_status: Dict[str, Literal["pending", "satisfied"]] = Field(default_factory=dict)
    clarify_level: int = 0
    last_clear_utterance: Optional[str] = None

    pause_started_at: Optional[float] = None
    pause_checked_in: bool = False
    last_progress_at: float
    last_nudge_at: Optional[float] = None

    recent_phrases: List[str] = Field(default_factory=list)
    last_transition_phrase: Optional[str] = None
    recoveries: List[str] = Field(default_factory=list)
    over_budget: List[str] = Field(default_factory=list)

    done: bool = False
    incomplete: bool = False

    mem: Dict[str, Any] = Field(default_factory=dict)
    transcript: Transcript = Field(default_factory=Transcript)
    events: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def spec(self) -> ProtocolSpec:
        return get_protocol(self.protocol)

    @property
    def phase(self) -> PhaseSpec:
        return self.spec.phase(self.phase_index)

    @property
    def phase_id(self) -> str:
        return self.phase.id

    def phase_elapsed(self, now: float) -> float:
        return max(0.0, now - self.phase_started_at)

    def session_elapsed(self, now: float) -> float:
        return max(0.0, now - self.started_at)

    def phase_facts(self, phase_id: Optional[str] = None) -> Dict[str, List[str]]:
        return self.facts.setdefault(phase_id or self.phase_id, {})

    def push_interrupt(self, kind: InterruptKind) -> None:
        if kind not in self.interrupt_stack:
            self.interrupt_stack.append(kind)

    def pop_interrupt(self, kind: InterruptKind) -> None:
        if kind in self.interrupt_stack:
            self.interrupt_stack.remove(kind)


__all__ = [
    "Directive",
    "DirectiveKind",
    "InterruptKind",
    "SessionState",
    "Transcript",
    "TranscriptEntry",
]
