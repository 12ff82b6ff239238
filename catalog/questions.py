"""Built-in practice question bank."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .models import Question, QuestionSummary, type_label

_QUESTIONS: List[Question] = [
    Question(
        id="mck-profit-airline",
        track="consulting",
        type="profitability",
        company_slug="mckinsey",
        difficulty="medium",
        industry="Aviation",
        title="Regional Airline Profit Decline",
        description=(
            "Our client is a regional airline whose operating profit has fallen 30% over "
            "two years while passenger numbers stayed flat. The CEO wants to know why "
            "and what to do about it."
        ),
        additional_info=(
            "Average fare dropped from $180 to $160. Fuel cost per seat-mile rose 12%. "
            "Load factor held at 78%."
        ),
        solution=(
            "Profit = Revenue - Cost. Revenue fell through fare pressure from a low-cost "
            "entrant; costs rose through fuel. Recommend fuel hedging and an ancillary "
            "revenue programme."
        ),
    ),
    Question(
        id="bcg-entry-coffee",
        track="consulting",
        type="market-entry",
        company_slug="bcg",
        difficulty="medium",
        industry="Consumer Goods",
        title="Coffee Chain Enters Southeast Asia",
        description=(
            "A European specialty coffee chain is considering entering Vietnam. Should "
            "they enter, and if so, how?"
        ),
        additional_info="Vietnam coffee shop market is worth about $1.2 billion, growing 8% a year.",
    ),
    Question(
        id="bain-sizing-ev",
        track="consulting",
        type="market-sizing",
        company_slug="bain",
        difficulty="easy",
        title="EV Chargers in Germany",
        description="Estimate the annual market for home EV chargers in Germany.",
    ),
    Question(
        id="google-maps-parking",
        track="product-management",
        type="product-sense",
        company_slug="google",
        difficulty="medium",
        title="Design a Parking Feature for Google Maps",
        description="Design a feature for Google Maps that helps drivers find parking.",
    ),
    Question(
        id="meta-metrics-groups",
        track="product-management",
        type="execution",
        company_slug="meta",
        difficulty="medium",
        title="Measure Success of Facebook Groups",
        description="How would you measure the success of Facebook Groups?",
    ),
    Question(
        id="amazon-behavioral-conflict",
        track="product-management",
        type="behavioral",
        company_slug="amazon",
        difficulty="easy",
        title="Disagreeing With Engineering",
        description="Tell me about a time you disagreed with your engineering lead.",
    ),
    Question(
        id="google-estimate-youtube",
        track="product-management",
        type="estimation",
        company_slug="google",
        difficulty="hard",
        title="YouTube Storage Per Day",
        description="Estimate how much new storage YouTube needs every day.",
    ),
]

QUESTIONS: Dict[str, Question] = {q.id: q for q in _QUESTIONS}


def get_question(question_id: str) -> Optional[Question]:
    return QUESTIONS.get(question_id)


def list_questions(
    *, track: Optional[str] = None, company_slug: Optional[str] = None
) -> List[QuestionSummary]:
    """Return question summaries filtered by track and company."""

    selected: Iterable[Question] = QUESTIONS.values()
    if track:
        selected = [q for q in selected if q.track == track]
    if company_slug:
        selected = [q for q in selected if q.company_slug == company_slug]
    return [
        QuestionSummary(
            id=q.id,
            track=q.track,
            type=q.type,
            type_label=type_label(q.track, q.type),
            title=q.title,
            difficulty=q.difficulty,
            company_slug=q.company_slug,
        )
        for q in selected
    ]
