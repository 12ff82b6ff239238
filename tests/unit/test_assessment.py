import pytest

from config.registry import ASSESS_KEY, bind_model
from graph.state import Transcript
from rubrics.store import CASE_INTERVIEW_RUBRIC, get_rubric
from services.assessment import LlmAssessmentEngine

ANSWER = (
    "I would split profit into revenue and cost, then look at fares, volume, fuel "
    "and labor to see which driver moved the most."
)


@pytest.fixture
def transcript():
    t = Transcript()
    t.append("interviewer", "How would you structure this?", 0.0)
    t.append("candidate", ANSWER, 5.0)
    return t


def test_low_content_scores_ones():
    t = Transcript()
    t.append("candidate", "Not sure.", 1.0)
    result = LlmAssessmentEngine().assess(t, CASE_INTERVIEW_RUBRIC)
    assert set(result.dimension_scores.values()) == {1.0}
    assert result.overall_score == 1.0
    assert result.fallback


def test_unbound_model_is_neutral(transcript):
    result = LlmAssessmentEngine().assess(transcript, CASE_INTERVIEW_RUBRIC)
    assert set(result.dimension_scores.values()) == {3.0}
    assert result.overall_score == 3.0
    assert result.fallback


def test_scores_are_clamped_and_missing_dimensions_neutral(transcript):
    bind_model(
        ASSESS_KEY,
        lambda **kwargs: {
            "dimension_scores": {"Structure": 7, "Problem Solving": 0},
            "feedback": "Good structure.",
            "strengths": ["MECE buckets"],
        },
    )
    result = LlmAssessmentEngine().assess(transcript, CASE_INTERVIEW_RUBRIC)
    assert result.dimension_scores["Structure"] == 5.0
    assert result.dimension_scores["Problem Solving"] == 1.0
    assert result.dimension_scores["Creativity"] == 3.0
    assert result.overall_score == 3.1
    assert result.strengths == ["MECE buckets"]
    assert not result.fallback


def test_weighted_overall_uses_rubric_weights(transcript):
    rubric = get_rubric("product-sense")
    bind_model(
        ASSESS_KEY,
        lambda **kwargs: {"dimension_scores": {d.name: 5 for d in rubric.dimensions}, "feedback": "Excellent."},
    )
    result = LlmAssessmentEngine().assess(transcript, rubric)
    assert result.overall_score == 5.0


def test_invalid_payload_falls_back(transcript):
    bind_model(ASSESS_KEY, lambda **kwargs: {"feedback": "no scores"})
    result = LlmAssessmentEngine().assess(transcript, CASE_INTERVIEW_RUBRIC)
    assert result.fallback
    assert result.overall_score == 3.0


def test_gateway_error_falls_back(transcript):
    def boom(**kwargs):
        raise RuntimeError("timeout")

    bind_model(ASSESS_KEY, boom)
    result = LlmAssessmentEngine().assess(transcript, CASE_INTERVIEW_RUBRIC)
    assert result.fallback
    assert "neutral placeholder" in result.feedback
