"""Static prompt template tables keyed by track, format and question type."""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field

from config.errors import ConfigurationError

from . import consulting, product

FORMATS: Tuple[str, ...] = ("interviewer-led", "candidate-led")


class TrackTemplates(BaseModel):
    """All composable sections for one interview track."""

    role: str
    tone: str
    formats: Dict[str, str]
    types: Dict[str, str]
    generic_type: str
    closing: str
    candidate_role: str = ""
    aliases: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def type_section(self, question_type: str) -> Optional[str]:
        key = self.aliases.get(question_type, question_type)
        return self.types.get(key)


def validate_library(library: Dict[str, TrackTemplates]) -> Dict[str, TrackTemplates]:
    """Check that every track defines the mandatory sections.

    Raises:
        ConfigurationError: naming every missing section.
    """

    missing: list[str] = []
    for track in ("consulting", "product-management"):
        templates = library.get(track)
        if templates is None:
            missing.append(f"{track}: all sections")
            continue
        for name in ("role", "tone", "generic_type", "closing"):
            if not getattr(templates, name).strip():
                missing.append(f"{track}.{name}")
        for fmt in FORMATS:
            if not templates.formats.get(fmt, "").strip():
                missing.append(f"{track}.formats[{fmt}]")
        for alias, target in templates.aliases.items():
            if target not in templates.types:
                missing.append(f"{track}.types[{target}] (alias of {alias})")
    if missing:
        raise ConfigurationError("prompt library is missing: " + ", ".join(missing))
    return library


LIBRARY: Dict[str, TrackTemplates] = validate_library(
    {
        "consulting": TrackTemplates(
            role=consulting.ROLE,
            tone=consulting.TONE,
            formats=consulting.FORMATS,
            types=consulting.TYPES,
            generic_type=consulting.GENERIC_TYPE,
            closing=consulting.CLOSING,
            candidate_role=consulting.CANDIDATE_ROLE,
        ),
        "product-management": TrackTemplates(
            role=product.ROLE,
            tone=product.TONE,
            formats=product.FORMATS,
            types=product.TYPES,
            generic_type=product.GENERIC_TYPE,
            closing=product.CLOSING,
            candidate_role=product.CANDIDATE_ROLE,
            aliases=product.ALIASES,
        ),
    }
)


def templates_for(track: str) -> TrackTemplates:
    try:
        return LIBRARY[track]
    except KeyError as exc:
        raise ConfigurationError(f"no prompt templates for track '{track}'") from exc
