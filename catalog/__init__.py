"""Question and company reference data."""
from .companies import COMPANIES, company_name, get_company
from .models import (
    CONSULTING_TYPE_LABELS,
    PM_TYPE_LABELS,
    Company,
    Difficulty,
    InterviewFormat,
    Question,
    QuestionSummary,
    Track,
    type_label,
)
from .questions import QUESTIONS, get_question, list_questions

__all__ = [
    "COMPANIES",
    "company_name",
    "get_company",
    "CONSULTING_TYPE_LABELS",
    "PM_TYPE_LABELS",
    "Company",
    "Difficulty",
    "InterviewFormat",
    "Question",
    "QuestionSummary",
    "Track",
    "type_label",
    "QUESTIONS",
    "get_question",
    "list_questions",
]
