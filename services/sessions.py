"""Session lifecycle: start, checkpoint, finish and abort."""
from __future__ import annotations

import time
import uuid
from typing import Any, Dict, Optional, Tuple

from catalog.models import Question
from config.settings import settings
from graph.checkpointer import discard_checkpoint, load_checkpoint, save_checkpoint
from graph.machine import InterviewStateMachine
from graph.phases import protocol_for
from graph.state import Directive, SessionState
from observability.logger import log_event
from prompts.composer import compose
from prompts.formats import format_for_question
from rubrics.store import assessment_rubric_for
from storage.assessments import insert_assessment

from .assessment import AssessmentEngine, AssessmentResult
from .recorder import SessionRecorder


def start_session(
    question: Question,
    *,
    company: Optional[str] = None,
    persona: Optional[str] = None,
    mode: str = "practice",
    now: Optional[float] = None,
    session_id: Optional[str] = None,
) -> Tuple[SessionState, str]:
    """Create the session state in its first phase and compose the interviewer prompt."""

    if company:
        question = question.model_copy(update={"company_slug": company.strip().lower()})
    fmt = format_for_question(question)
    protocol = protocol_for(question)
    started = time.time() if now is None else now
    state = SessionState(
        session_id=session_id or str(uuid.uuid4()),
        question=question,
        protocol=protocol.name,
        format=fmt,
        persona=persona or settings.PERSONA_DEFAULT,
        mode=mode,
        started_at=started,
        phase_started_at=started,
        last_progress_at=started,
    )
    prompt = compose(question, fmt)
    log_event(
        "session.start",
        state.session_id,
        phase=state.phase_id,
        question=question.id,
        format=fmt,
        protocol=protocol.name,
    )
    return state, prompt


def load_session(session_id: str) -> Optional[SessionState]:
    """Load the last checkpointed state for ``session_id`` if present."""

    return load_checkpoint(session_id)


def save_session(state: SessionState) -> str:
    return save_checkpoint(state)


def recorder_metadata(state: SessionState) -> Dict[str, Any]:
    question = state.question
    return {
        "session_id": state.session_id,
        "question_id": question.id,
        "company": question.company_slug or None,
        "track": question.track,
        "question_type": question.type,
        "title": question.title,
        "incomplete": state.incomplete,
        "turns": state.turn_count,
        "deviations": list(state.mem.get("deviations", [])),
    }


def _flush(state: SessionState, recorder: SessionRecorder, now: float) -> None:
    recorder.persist(state.transcript, state.session_elapsed(now), recorder_metadata(state))
    discard_checkpoint(state.session_id)


def finish_session(
    state: SessionState,
    *,
    recorder: SessionRecorder,
    engine: AssessmentEngine,
    now: Optional[float] = None,
) -> AssessmentResult:
    """Persist the transcript and grade it.

    Finishing before the terminal phase closes the session as incomplete.
    """

    now = time.time() if now is None else now
    if not state.done:
        state.done = True
        state.incomplete = True
    state.transcript.metadata["incomplete"] = state.incomplete
    _flush(state, recorder, now)
    result = engine.assess(state.transcript, assessment_rubric_for(state.question))
    insert_assessment(
        session_id=state.session_id,
        overall_score=result.overall_score,
        scores=result.dimension_scores,
        feedback=result.feedback,
        strengths=result.strengths,
        improvements=result.improvements,
        fallback=result.fallback,
    )
    return result


def abort_session(
    state: SessionState,
    *,
    machine: InterviewStateMachine,
    recorder: SessionRecorder,
    now: Optional[float] = None,
) -> Directive:
    """Mark the session incomplete and flush the partial transcript."""

    now = time.time() if now is None else now
    directive = machine.abort(state, now)
    _flush(state, recorder, now)
    return directive


__all__ = [
    "abort_session",
    "finish_session",
    "load_session",
    "recorder_metadata",
    "save_session",
    "start_session",
]
