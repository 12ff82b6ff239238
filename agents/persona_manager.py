"""Persona styling for interviewer-facing text."""
from __future__ import annotations

import logging
import re
from typing import Dict, Literal

from pydantic import ValidationError

from agents.types import PolishPayload
from config.registry import POLISH_KEY, get_model, is_bound

logger = logging.getLogger(__name__)

Persona = Literal["Friendly Expert", "Firm Evaluator"]
Purpose = Literal["directive", "hint", "clarify", "resume", "wrapup", "feedback"]

TEMPLATES_FE: Dict[str, str] = {
    "directive": "{core}",
    "hint": "Here's a nudge: {core}",
    "clarify": "Quick clarification: {core}",
    "resume": "Welcome back. {core}",
    "wrapup": "Thanks for working through this with me. {core}",
    "feedback": "Here's how it went: {core}",
}

TEMPLATES_FIRM: Dict[str, str] = {
    "directive": "{core}",
    "hint": "Consider this: {core}",
    "clarify": "Clarify: {core}",
    "resume": "Resuming. {core}",
    "wrapup": "That concludes the interview. {core}",
    "feedback": "Assessment: {core}",
}


def _trim_sentences(text: str, max_sentences: int) -> str:
    text = (text or "").strip()
    if not text:
        return ""
    parts = [part.strip() for part in re.split(r"(?<=[.!?])\s+", text) if part.strip()]
    return " ".join(parts[:max_sentences]) or text


def _templates(persona: str) -> Dict[str, str]:
    if persona == "Firm Evaluator":
        return TEMPLATES_FIRM
    return TEMPLATES_FE


def _llm_polish(text: str, *, persona: str, purpose: str, max_sentences: int) -> str:
    if not is_bound(POLISH_KEY):
        return text
    llm = get_model(POLISH_KEY)
    try:
        raw = llm(
            system_prompt_path="prompts/persona_polish.txt",
            inputs={"persona": persona, "purpose": purpose, "text": text, "max_sentences": max_sentences},
        )
        polished = PolishPayload.model_validate(raw).text
    except (ValidationError, RuntimeError) as exc:
        logger.warning("persona polish skipped: %s", exc)
        return text
    return _trim_sentences(polished, max_sentences) or text


def apply_persona(
    text: str,
    *,
    persona: str = "Friendly Expert",
    purpose: Purpose = "directive",
    max_sentences: int = 3,
    use_llm: bool = False,
) -> str:
    """Wrap ``text`` in the persona's template for ``purpose`` and trim it."""

    template = _templates(persona).get(purpose, "{core}")
    core_budget = max_sentences if template == "{core}" else max(1, max_sentences - 1)
    core = _trim_sentences(text, core_budget)
    formatted = _trim_sentences(template.replace("{core}", core), max_sentences)
    if use_llm:
        formatted = _llm_polish(formatted, persona=persona, purpose=purpose, max_sentences=max_sentences)
    return formatted


__all__ = ["apply_persona", "Persona", "Purpose"]
