"""Rubric-based assessment of a finished transcript."""
from __future__ import annotations

import logging
from typing import Dict, List, Protocol

from pydantic import BaseModel, Field, ValidationError

from agents.types import AssessmentPayload
from config.registry import ASSESS_KEY, get_model, is_bound
from config.settings import settings
from graph.state import Transcript
from observability.logger import log_event
from rubrics.models import RubricConfig

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 3.0
FALLBACK_FEEDBACK = "We could not generate detailed feedback for this session. Scores are a neutral placeholder."
LOW_CONTENT_FEEDBACK = "There was not enough of your own reasoning in the transcript to assess."


class AssessmentResult(BaseModel):
    dimension_scores: Dict[str, float]
    overall_score: float = Field(ge=0, le=5)
    feedback: str
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    fallback: bool = False


class AssessmentEngine(Protocol):
    def assess(self, transcript: Transcript, rubric: RubricConfig) -> AssessmentResult: ...


def _round1(value: float) -> float:
    return float(f"{value:.1f}")


def _clamp(score: float) -> float:
    return max(1.0, min(5.0, float(score)))


def weighted_overall(scores: Dict[str, float], rubric: RubricConfig) -> float:
    total = sum(scores[d.name] * d.weight for d in rubric.dimensions)
    return _round1(total / 100)


def _uniform(rubric: RubricConfig, score: float, feedback: str) -> AssessmentResult:
    scores = {d.name: score for d in rubric.dimensions}
    return AssessmentResult(
        dimension_scores=scores,
        overall_score=weighted_overall(scores, rubric),
        feedback=feedback,
        fallback=True,
    )


class LlmAssessmentEngine:
    """Scores a transcript with the model bound at ``models.assessment``."""

    def __init__(self, session_id: str = "-", prompt_path: str = "prompts/assessment.txt") -> None:
        self.session_id = session_id
        self.prompt_path = prompt_path

    def _normalise(self, payload: AssessmentPayload, rubric: RubricConfig) -> Dict[str, float]:
        scores: Dict[str, float] = {}
        for dim in rubric.dimensions:
            raw = payload.dimension_scores.get(dim.name, payload.dimension_scores.get(dim.id))
            scores[dim.name] = NEUTRAL_SCORE if raw is None else _clamp(raw)
        return scores

    def assess(self, transcript: Transcript, rubric: RubricConfig) -> AssessmentResult:
        candidate_tokens = len(transcript.candidate_text().split())
        if candidate_tokens < settings.LOW_CONTENT_TOKENS:
            log_event("assessment.fallback", self.session_id, reason="low_content", tokens=candidate_tokens)
            return _uniform(rubric, 1.0, LOW_CONTENT_FEEDBACK)
        if not is_bound(ASSESS_KEY):
            log_event("assessment.fallback", self.session_id, reason="unbound")
            return _uniform(rubric, NEUTRAL_SCORE, FALLBACK_FEEDBACK)

        llm = get_model(ASSESS_KEY)
        try:
            raw = llm(
                system_prompt_path=self.prompt_path,
                inputs={
                    "transcript": transcript.render(),
                    "question_type": rubric.question_type,
                    "dimensions": [
                        {
                            "name": d.name,
                            "weight": d.weight,
                            "description": d.description,
                            "scoring_criteria": {str(k): v for k, v in d.scoring_criteria.items()},
                        }
                        for d in rubric.dimensions
                    ],
                    "calibrated_examples": [ex.model_dump() for ex in rubric.calibrated_examples],
                },
                temperature=0.0,
                max_tokens=800,
            )
            payload = AssessmentPayload.model_validate(raw)
        except ValidationError as exc:
            logger.warning("assessment payload invalid: %s", exc)
            log_event("assessment.fallback", self.session_id, reason="invalid_output")
            return _uniform(rubric, NEUTRAL_SCORE, FALLBACK_FEEDBACK)
        except RuntimeError as exc:
            logger.warning("assessment model failed: %s", exc)
            log_event("assessment.fallback", self.session_id, reason="gateway_error")
            return _uniform(rubric, NEUTRAL_SCORE, FALLBACK_FEEDBACK)

        scores = self._normalise(payload, rubric)
        result = AssessmentResult(
            dimension_scores=scores,
            overall_score=weighted_overall(scores, rubric),
            feedback=payload.feedback.strip() or FALLBACK_FEEDBACK,
            strengths=payload.strengths,
            improvements=payload.improvements,
        )
        log_event("assessment.done", self.session_id, outcome=result.overall_score)
        return result


__all__ = ["AssessmentEngine", "AssessmentResult", "LlmAssessmentEngine", "weighted_overall"]
