"""Persistence helpers for recorded interview sessions."""
from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .sqlite import get_conn


class SessionRow(BaseModel):
    id: str
    question_id: str
    company: Optional[str] = None
    track: str
    question_type: str
    title: str
    transcript: List[Dict[str, Any]] = Field(default_factory=list)
    duration_seconds: float = Field(ge=0)
    incomplete: bool = False
    metadata: Dict[str, Any] = Field(default_factory=dict)


def upsert_session(**data: Any) -> str:
    """Insert or replace a session row and return its id."""

    row = SessionRow(**data)
    timestamp = dt.datetime.now(dt.timezone.utc).isoformat()
    with get_conn() as conn:
        conn.execute(
            """INSERT OR REPLACE INTO interview_sessions
               (id, created_at, question_id, company, track, question_type, title,
                transcript_json, duration_seconds, incomplete, metadata)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                row.id,
                timestamp,
                row.question_id,
                row.company,
                row.track,
                row.question_type,
                row.title,
                json.dumps(row.transcript, ensure_ascii=False),
                row.duration_seconds,
                int(row.incomplete),
                json.dumps(row.metadata, default=str),
            ),
        )
    return row.id


def fetch_session(session_id: str) -> Optional[SessionRow]:
    with get_conn() as conn:
        cur = conn.execute(
            """SELECT id, question_id, company, track, question_type, title,
                      transcript_json, duration_seconds, incomplete, metadata
               FROM interview_sessions WHERE id = ?""",
            (session_id,),
        )
        found = cur.fetchone()
    if found is None:
        return None
    return SessionRow(
        id=found[0],
        question_id=found[1],
        company=found[2],
        track=found[3],
        question_type=found[4],
        title=found[5],
        transcript=json.loads(found[6]),
        duration_seconds=found[7],
        incomplete=bool(found[8]),
        metadata=json.loads(found[9] or "{}"),
    )
