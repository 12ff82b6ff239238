import logging

import pytest

from catalog.models import Question
from catalog.questions import get_question
from config.errors import ConfigurationError
from prompts.composer import EXCELLENCE_HEADING, compose, compose_candidate, escape_for_transport
from prompts.formats import format_for_question, select_format
from prompts.library import LIBRARY, TrackTemplates, templates_for, validate_library


def test_profitability_interviewer_led_scenario():
    question = get_question("mck-profit-airline")
    fmt = select_format("McKinsey")
    assert fmt == "interviewer-led"

    prompt = compose(question, fmt)

    assert "E = R − C" in prompt
    assert "active driver" in prompt
    assert question.title in prompt
    assert question.description in prompt
    assert EXCELLENCE_HEADING not in prompt


def test_sections_are_in_fixed_order():
    prompt = compose(get_question("mck-profit-airline"), "interviewer-led")
    markers = [
        "### Role & Objective",
        "### Personality & Tone",
        "### Interview Format: Interviewer-Led",
        "### Case Guidance: Profitability",
        "### Instructions & Rules",
        "### Case Context",
    ]
    positions = [prompt.index(marker) for marker in markers]
    assert positions == sorted(positions)
    assert prompt.rstrip().endswith("present the case prompt.")


def test_rubric_type_gets_excellence_criteria_before_case_data():
    prompt = compose(get_question("google-maps-parking"), "candidate-led")
    assert EXCELLENCE_HEADING in prompt
    assert "### Product Motivation & Mission (20% weight)" in prompt
    assert "- Specific, actionable mission statement" in prompt
    assert prompt.index(EXCELLENCE_HEADING) < prompt.index("### Question Context")


def test_execution_uses_analytical_thinking_sections():
    prompt = compose(get_question("meta-metrics-groups"), "candidate-led")
    assert "## Analytical Thinking Interview" in prompt
    assert EXCELLENCE_HEADING in prompt


def test_unknown_type_falls_back_without_raising(caplog):
    question = Question(
        id="pm-growth",
        track="product-management",
        type="Growth-Hacking",
        title="Grow a podcast app",
        description="How would you double weekly listeners?",
    )
    with caplog.at_level(logging.WARNING, logger="prompts.composer"):
        prompt = compose(question, "candidate-led")
    assert "## Product Interview" in prompt
    assert EXCELLENCE_HEADING not in prompt
    assert "UnknownQuestionType" in caplog.text


def test_compose_is_deterministic():
    question = get_question("bcg-entry-coffee")
    assert compose(question, "candidate-led") == compose(question, "candidate-led")


def test_case_data_is_escaped_for_transport():
    question = Question(
        id="esc",
        track="consulting",
        type="pricing",
        title="Price\x07 a widget",
        description="Line one\r\nLine two",
    )
    prompt = compose(question, "candidate-led")
    assert "Price a widget" in prompt
    assert "Line one\nLine two" in prompt
    assert "\r" not in prompt
    assert escape_for_transport("a\x00b\rc") == "ab\nc"


def test_candidate_prompt_lists_milestones():
    prompt = compose_candidate(get_question("mck-profit-airline"), "interviewer-led")
    assert "### Milestones" in prompt
    assert "**Recommendation:**" in prompt
    assert "### Your Question" in prompt


@pytest.mark.parametrize("company", ["mckinsey", " McKinsey ", "bcg", "Bain", "", "google"])
def test_format_selection_is_idempotent(company):
    assert select_format(company) == select_format(company)


def test_format_defaults_and_override():
    assert select_format("BCG") == "candidate-led"
    assert select_format("") == "candidate-led"
    question = get_question("bcg-entry-coffee").model_copy(update={"interview_format": "interviewer-led"})
    assert format_for_question(question) == "interviewer-led"
    assert format_for_question(get_question("mck-profit-airline")) == "interviewer-led"


def test_library_validation_names_missing_sections():
    broken = {
        "consulting": TrackTemplates(
            role="role",
            tone="tone",
            formats={"interviewer-led": "led"},
            types={},
            generic_type="generic",
            closing="",
        )
    }
    with pytest.raises(ConfigurationError) as excinfo:
        validate_library(broken)
    message = str(excinfo.value)
    assert "consulting.closing" in message
    assert "consulting.formats[candidate-led]" in message
    assert "product-management" in message


def test_shipped_library_is_valid():
    assert validate_library(dict(LIBRARY)) is not None
    with pytest.raises(ConfigurationError):
        templates_for("sales")
