"""Error types shared by the orchestration core."""
from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A static template or rubric table is missing a mandatory section."""


class UnknownQuestionType(UserWarning):
    """No type-specific template exists; a generic one was used instead."""


__all__ = ["ConfigurationError", "UnknownQuestionType"]
