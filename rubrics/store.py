"""Read-only rubric lookup keyed by question type."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError

from catalog.models import Question
from config.errors import ConfigurationError

from .consulting import CASE_INTERVIEW
from .models import RubricConfig
from .pm import PM_RUBRICS

logger = logging.getLogger(__name__)

TYPE_ALIASES: Dict[str, str] = {"execution": "analytical-thinking"}


def load_rubrics(raw_tables: Iterable[Dict[str, Any]]) -> Dict[str, RubricConfig]:
    """Validate raw rubric tables.

    Raises:
        ConfigurationError: if any table breaks a rubric invariant.
    """

    loaded: Dict[str, RubricConfig] = {}
    for raw in raw_tables:
        try:
            rubric = RubricConfig.model_validate(raw)
        except ValidationError as exc:
            label = raw.get("question_type", "<unknown>") if isinstance(raw, dict) else "<unknown>"
            raise ConfigurationError(f"rubric '{label}' is invalid: {exc}") from exc
        loaded[rubric.question_type] = rubric
    return loaded


_RUBRICS: Dict[str, RubricConfig] = load_rubrics(PM_RUBRICS)
CASE_INTERVIEW_RUBRIC: RubricConfig = load_rubrics([CASE_INTERVIEW])["case-interview"]


def get_rubric(question_type: str) -> Optional[RubricConfig]:
    """Return the rubric for ``question_type`` or ``None`` when none is registered."""

    key = (question_type or "").strip().lower()
    key = TYPE_ALIASES.get(key, key)
    return _RUBRICS.get(key)


def registered_types() -> list[str]:
    return sorted(_RUBRICS)


def assessment_rubric_for(question: Question) -> RubricConfig:
    """Rubric used to grade a finished session; consulting falls back to the case rubric."""

    rubric = get_rubric(question.type)
    if rubric is not None:
        return rubric
    logger.info("no type rubric for %s; grading with case interview rubric", question.type)
    return CASE_INTERVIEW_RUBRIC
