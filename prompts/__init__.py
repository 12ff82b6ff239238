"""Prompt template library, format selection and composition."""
from .composer import EXCELLENCE_HEADING, compose, compose_candidate, escape_for_transport, excellence_guidance
from .formats import format_for_question, select_format
from .library import LIBRARY, TrackTemplates, templates_for, validate_library

__all__ = [
    "EXCELLENCE_HEADING",
    "compose",
    "compose_candidate",
    "escape_for_transport",
    "excellence_guidance",
    "format_for_question",
    "select_format",
    "LIBRARY",
    "TrackTemplates",
    "templates_for",
    "validate_library",
]
