"""Rubric store: weighted scoring dimensions per question type."""
from .models import CalibratedExample, Dimension, RubricConfig
from .store import (
    CASE_INTERVIEW_RUBRIC,
    assessment_rubric_for,
    get_rubric,
    load_rubrics,
    registered_types,
)

__all__ = [
    "CalibratedExample",
    "Dimension",
    "RubricConfig",
    "CASE_INTERVIEW_RUBRIC",
    "assessment_rubric_for",
    "get_rubric",
    "load_rubrics",
    "registered_types",
]
