"""Interview format selection."""
from __future__ import annotations

from typing import FrozenSet

from catalog.models import InterviewFormat, Question

INTERVIEWER_LED_FIRMS: FrozenSet[str] = frozenset({"mckinsey"})
DEFAULT_FORMAT: InterviewFormat = "candidate-led"


def select_format(company: str) -> InterviewFormat:
    """Map a company identity to its interview format. Unknown companies get the default."""

    slug = (company or "").strip().lower()
    if slug in INTERVIEWER_LED_FIRMS:
        return "interviewer-led"
    return DEFAULT_FORMAT


def format_for_question(question: Question) -> InterviewFormat:
    if question.interview_format:
        return question.interview_format
    return select_format(question.company_slug)


__all__ = ["DEFAULT_FORMAT", "INTERVIEWER_LED_FIRMS", "format_for_question", "select_format"]
