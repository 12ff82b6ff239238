"""FastAPI routes for interview session control and the question catalog."""
from __future__ import annotations

import random
import time
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Path

from agents import hint_agent
from agents.persona_manager import apply_persona
from api.schemas import (
    AbortResp,
    FinishResp,
    HintReq,
    HintResp,
    SESSION_ID_PATTERN,
    SessionReq,
    StartReq,
    StartResp,
    TurnReq,
    TurnResp,
)
from catalog.models import QuestionSummary
from catalog.questions import get_question, list_questions
from graph.machine import InterviewStateMachine
from graph.state import Directive, SessionState
from observability.tracing import span
from prompts.composer import compose_candidate
from services.assessment import LlmAssessmentEngine
from services.avatars import AvatarSelector
from services.qa_policy import remaining_hints, row as qa_row
from services.recorder import SqliteSessionRecorder
from services.sessions import abort_session, finish_session, load_session, save_session, start_session
from storage.assessments import latest_assessment
from storage.deviations import deviations_for
from storage.sessions import fetch_session

router = APIRouter(prefix="/api/interview-sessions")
catalog_router = APIRouter(prefix="/api/questions")

recorder = SqliteSessionRecorder()


def _now(client_ts: Optional[float]) -> float:
    return time.time() if client_ts is None else client_ts


def _rng(state: SessionState) -> random.Random:
    seed = state.mem.get("seed")
    if seed is None:
        return random.Random()
    return random.Random(int(seed) * 100003 + len(state.transcript.entries))


def _machine(state: SessionState) -> InterviewStateMachine:
    return InterviewStateMachine(rng=_rng(state))


def _load(session_id: str) -> SessionState:
    state = load_session(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="session not found")
    return state


def _turn_resp(state: SessionState, directive: Optional[Directive]) -> TurnResp:
    return TurnResp(
        session_id=state.session_id,
        directive=directive,
        phase=state.phase_id,
        turn=state.turn_count,
        done=state.done,
        quick_actions=qa_row(state),
        event_log=list(state.events),
    )


@router.post("/start", response_model=StartResp)
def start(req: StartReq) -> StartResp:
    question = req.question
    if req.question_id is not None:
        question = get_question(req.question_id)
        if question is None:
            raise HTTPException(status_code=404, detail="question not found")
    now = _now(req.client_ts)
    state, system_prompt = start_session(question, company=req.company, persona=req.persona, mode=req.mode, now=now)
    if req.seed is not None:
        state.mem["seed"] = req.seed

    selector = AvatarSelector(_rng(state))
    candidate_prompt = None
    avatar = None
    avatars = None
    if req.mode == "learn":
        candidate_prompt = compose_candidate(state.question, state.format)
        pair = selector.pick_pair()
        if pair:
            avatars = {"interviewer": pair[0], "candidate": pair[1]}
    else:
        avatar = selector.pick()
    state.avatars = dict(avatars or {"interviewer": avatar})

    with span(state, "open"):
        directive = _machine(state).open(state, now)
    save_session(state)
    return StartResp(
        session_id=state.session_id,
        system_prompt=system_prompt,
        candidate_prompt=candidate_prompt,
        format=state.format,
        protocol=state.protocol,
        phase=state.phase_id,
        avatar=avatar,
        avatars=avatars,
        directive=directive,
        quick_actions=qa_row(state),
    )


@router.post("/turn", response_model=TurnResp)
def turn(req: TurnReq) -> TurnResp:
    state = _load(req.session_id)
    with span(state, "advance"):
        directive = _machine(state).advance(state, req.utterance, _now(req.client_ts))
    save_session(state)
    return _turn_resp(state, directive)


@router.post("/tick", response_model=TurnResp)
def tick(req: SessionReq) -> TurnResp:
    state = _load(req.session_id)
    directive = _machine(state).tick(state, _now(req.client_ts))
    save_session(state)
    return _turn_resp(state, directive)


@router.post("/skip", response_model=TurnResp)
def skip(req: SessionReq) -> TurnResp:
    state = _load(req.session_id)
    with span(state, "skip"):
        directive = _machine(state).skip(state, _now(req.client_ts))
    save_session(state)
    return _turn_resp(state, directive)


@router.post("/hint", response_model=HintResp)
def hint(req: HintReq) -> HintResp:
    state = _load(req.session_id)
    if state.done:
        raise HTTPException(status_code=409, detail="session already finished")
    level = req.level or len(state.mem.get("hints", {}).get(state.phase_id, [])) + 1
    if req.level is None and remaining_hints(state) == 0:
        raise HTTPException(status_code=429, detail="no hints left for this phase")
    with span(state, "hint"):
        text = hint_agent.run(state, state.question, state.phase, level)
    save_session(state)
    return HintResp(session_id=state.session_id, hint=text, level=state.mem["hint_level"], quick_actions=qa_row(state))


@router.post("/finish", response_model=FinishResp)
def finish(req: SessionReq) -> FinishResp:
    state = _load(req.session_id)
    now = _now(req.client_ts)
    result = finish_session(
        state,
        recorder=recorder,
        engine=LlmAssessmentEngine(session_id=state.session_id),
        now=now,
    )
    message = apply_persona(
        "Your assessment is ready on the session summary.",
        persona=state.persona,
        purpose="wrapup",
    )
    return FinishResp(
        session_id=state.session_id,
        incomplete=state.incomplete,
        duration_seconds=round(state.session_elapsed(now), 1),
        message=message,
        assessment=result,
    )


@router.post("/abort", response_model=AbortResp)
def abort(req: SessionReq) -> AbortResp:
    state = _load(req.session_id)
    directive = abort_session(state, machine=_machine(state), recorder=recorder, now=_now(req.client_ts))
    return AbortResp(session_id=state.session_id, directive=directive)


@catalog_router.get("", response_model=List[QuestionSummary])
def questions(track: Optional[str] = None, company: Optional[str] = None) -> List[QuestionSummary]:
    return list_questions(track=track, company_slug=company)


@catalog_router.get("/{question_id}")
def question_detail(question_id: str) -> Dict[str, Any]:
    question = get_question(question_id)
    if question is None:
        raise HTTPException(status_code=404, detail="question not found")
    return question.model_dump(exclude={"solution"})


@router.get("/{session_id}/report")
def report(session_id: str = Path(pattern=SESSION_ID_PATTERN)) -> Dict[str, Any]:
    """Stored transcript, latest assessment and deviations of a flushed session."""

    row = fetch_session(session_id)
    if row is None:
        raise HTTPException(status_code=404, detail="session not found")
    assessment = latest_assessment(session_id)
    return {
        "session": row.model_dump(),
        "assessment": assessment.model_dump() if assessment else None,
        "deviations": [d.model_dump(exclude={"session_id"}) for d in deviations_for(session_id)],
    }
