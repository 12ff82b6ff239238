"""Persistence helpers for session assessments."""
from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .sqlite import get_conn


class AssessmentRow(BaseModel):
    session_id: str
    overall_score: float
    scores: Dict[str, float] = Field(default_factory=dict)
    feedback: str = ""
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    fallback: bool = False


def insert_assessment(**data: Any) -> int:
    """Insert an assessment row and return its primary key."""

    row = AssessmentRow(**data)
    timestamp = dt.datetime.now(dt.timezone.utc).isoformat()
    with get_conn() as conn:
        cur = conn.cursor()
        cur.execute(
            """INSERT INTO assessments
               (created_at, session_id, overall_score, scores_json, feedback,
                strengths_json, improvements_json, fallback)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                timestamp,
                row.session_id,
                row.overall_score,
                json.dumps(row.scores),
                row.feedback,
                json.dumps(row.strengths),
                json.dumps(row.improvements),
                int(row.fallback),
            ),
        )
        return int(cur.lastrowid)


def latest_assessment(session_id: str) -> AssessmentRow | None:
    with get_conn() as conn:
        cur = conn.execute(
            """SELECT session_id, overall_score, scores_json, feedback, strengths_json,
                      improvements_json, fallback
               FROM assessments WHERE session_id = ? ORDER BY id DESC LIMIT 1""",
            (session_id,),
        )
        found = cur.fetchone()
    if found is None:
        return None
    return AssessmentRow(
        session_id=found[0],
        overall_score=found[1],
        scores=json.loads(found[2]),
        feedback=found[3],
        strengths=json.loads(found[4]),
        improvements=json.loads(found[5]),
        fallback=bool(found[6]),
    )
