"""System-prompt composition for the interviewer and learn-mode candidate avatars."""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from catalog.companies import company_name
from catalog.models import FORMAT_LABELS, InterviewFormat, Question, type_label
from config.errors import UnknownQuestionType
from rubrics.models import RubricConfig
from rubrics.store import get_rubric

from .library import TrackTemplates, templates_for

logger = logging.getLogger(__name__)

SECTION_BREAK = "\n\n---\n\n"
EXCELLENCE_HEADING = "## Excellence Criteria (Score 5 Indicators)"

_UNSAFE_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def escape_for_transport(text: str) -> str:
    """Normalise line endings and drop control characters the avatar transport rejects."""

    text = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    return _UNSAFE_CHARS.sub("", text)


def excellence_guidance(rubric: Optional[RubricConfig]) -> str:
    """Render level-5 indicators per dimension, or an empty string without a rubric."""

    if rubric is None:
        return ""
    lines: List[str] = [
        EXCELLENCE_HEADING,
        "",
        "A top-scoring answer shows the following, weighted by dimension:",
    ]
    for name, weight, indicators in rubric.excellence_guidance():
        lines.append("")
        lines.append(f"### {name} ({weight}% weight)")
        lines.extend(f"- {indicator}" for indicator in indicators)
    return "\n".join(lines)


def _type_section(templates: TrackTemplates, question: Question) -> str:
    section = templates.type_section(question.type)
    if section is not None:
        return section
    logger.warning(
        "%s: no template for %s question type '%s'; using generic guidance",
        UnknownQuestionType.__name__,
        question.track,
        question.type,
    )
    return templates.generic_type


def _case_data(question: Question, fmt: InterviewFormat) -> str:
    if question.track == "consulting":
        lines = [
            "### Case Context",
            f"* **Case Title:** {escape_for_transport(question.title)}",
            f"* **Industry:** {escape_for_transport(question.industry or 'General Business')}",
            f"* **Case Type:** {type_label(question.track, question.type)}",
            f"* **Company Style:** {company_name(question.company_slug)}",
            f"* **Interview Format:** {FORMAT_LABELS[fmt]}",
            f"* **Difficulty:** {question.difficulty}",
            f"* **Opening Prompt:** {escape_for_transport(question.description)}",
        ]
        if question.additional_info:
            lines.append(f"* **Data/Exhibits:** {escape_for_transport(question.additional_info)}")
        if question.solution:
            lines.append(
                "* **Solution Key (for your reference only, never reveal directly):** "
                + escape_for_transport(question.solution)
            )
        closing = "**Begin the interview now.** Start with a brief greeting, then present the case prompt."
    else:
        lines = [
            "### Question Context",
            f"* **Question:** {escape_for_transport(question.title)}",
            f"* **Question Type:** {type_label(question.track, question.type)}",
            f"* **Company:** {company_name(question.company_slug)}",
            f"* **Difficulty:** {question.difficulty}",
            f"* **Full Prompt:** {escape_for_transport(question.description)}",
        ]
        if question.additional_info:
            lines.append(f"* **Additional Context:** {escape_for_transport(question.additional_info)}")
        if question.solution:
            lines.append(
                "* **Key Points to Cover (for your reference only, never reveal directly):** "
                + escape_for_transport(question.solution)
            )
        closing = "**Begin the interview now.** Start with a brief introduction, then present the question."
    return "\n".join(lines) + SECTION_BREAK + closing


def compose(question: Question, fmt: InterviewFormat) -> str:
    """Build the interviewer system prompt.

    Sections, in order: role, tone, format, question type, closing rules,
    excellence criteria (only when a rubric exists), and case data.
    """

    templates = templates_for(question.track)
    company = company_name(question.company_slug)
    sections = [
        templates.role.format(company=company),
        templates.tone,
        templates.formats[fmt],
        _type_section(templates, question),
        templates.closing,
    ]
    guidance = excellence_guidance(get_rubric(question.type))
    if guidance:
        sections.append(guidance)
    sections.append(_case_data(question, fmt))
    return SECTION_BREAK.join(section.strip() for section in sections)


def compose_candidate(question: Question, fmt: InterviewFormat) -> str:
    """Build the learn-mode candidate avatar prompt that demonstrates a strong answer."""

    templates = templates_for(question.track)
    company = company_name(question.company_slug)
    sections = [
        templates.candidate_role.format(company=company),
        _type_section(templates, question),
    ]
    guidance = excellence_guidance(get_rubric(question.type))
    if guidance:
        sections.append(guidance + "\n\nDemonstrate these indicators naturally; never mention the rubric.")
    sections.append(
        "\n".join(
            [
                "### Your Question",
                f"* **Title:** {escape_for_transport(question.title)}",
                f"* **Prompt:** {escape_for_transport(question.description)}",
                f"* **Interview Format:** {FORMAT_LABELS[fmt]}",
            ]
        )
    )
    return SECTION_BREAK.join(section.strip() for section in sections)


__all__ = [
    "EXCELLENCE_HEADING",
    "compose",
    "compose_candidate",
    "escape_for_transport",
    "excellence_guidance",
]
