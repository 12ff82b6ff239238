"""Progressive hints the candidate can request during a phase."""
from __future__ import annotations

import logging
from typing import List

from pydantic import ValidationError

from agents.persona_manager import apply_persona
from agents.types import HintPayload
from catalog.models import Question
from config.registry import HINT_KEY, get_model, is_bound
from config.settings import settings
from graph.phases import PhaseSpec
from graph.state import SessionState

logger = logging.getLogger(__name__)

MAX_REMEMBERED = 5


def _prior_hints(state: SessionState, phase_id: str) -> List[str]:
    store = state.mem.setdefault("hints", {})
    return list(store.get(phase_id, []))


def _remember_hint(state: SessionState, phase_id: str, hint: str) -> None:
    store = state.mem.setdefault("hints", {})
    hints = store.setdefault(phase_id, [])
    hints.append(hint)
    if len(hints) > MAX_REMEMBERED:
        del hints[:-MAX_REMEMBERED]


def static_hint(phase: PhaseSpec, level: int) -> str:
    """Fallback hint; higher levels narrow the scope without giving the answer."""

    hints = phase.hints or [phase.focus]
    if level <= 1:
        return f"Step back and think about what {phase.focus} needs to cover."
    if level == 2:
        return f"It might help to consider {hints[0]}."
    detail = phase.criterion.description or phase.focus
    return f"Interviewers look for {detail} here. Try starting from {hints[-1]}."


def run(state: SessionState, question: Question, phase: PhaseSpec, level: int) -> str:
    """Return a persona-styled hint at ``level`` (clamped to 1..MAX_HINT_LEVEL)."""

    level = max(1, min(level, settings.MAX_HINT_LEVEL))
    hint = ""
    if is_bound(HINT_KEY):
        llm = get_model(HINT_KEY)
        try:
            raw = llm(
                system_prompt_path="prompts/hint_agent.txt",
                inputs={
                    "question": {"title": question.title, "type": question.type, "track": question.track},
                    "phase": {"id": phase.id, "title": phase.title, "focus": phase.focus},
                    "level": level,
                    "max_level": settings.MAX_HINT_LEVEL,
                    "prior_hints": _prior_hints(state, phase.id),
                    "last_utterance": state.last_clear_utterance or "",
                    "constraints": {"max_sentences": 2, "reveal_answer": False},
                },
                temperature=0.2,
                max_tokens=120,
            )
            hint = HintPayload.model_validate(raw).hint.strip()
        except (ValidationError, RuntimeError) as exc:
            logger.warning("hint model failed, using static hint: %s", exc)
    if not hint:
        hint = static_hint(phase, level)

    styled = apply_persona(hint, persona=state.persona, purpose="hint")
    _remember_hint(state, phase.id, styled)
    state.mem["hint_level"] = level
    return styled


__all__ = ["run", "static_hint"]
