"""Persistence helpers for redirect and timeout deviations."""
from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .sqlite import get_conn


class DeviationPayload(BaseModel):
    session_id: str
    kind: str
    phase: str
    utterance: str = ""
    metadata: Dict[str, Any] = Field(default_factory=dict)


def insert_deviation(**data: Any) -> int:
    """Insert a deviation row and return its primary key."""

    payload = DeviationPayload(**data)
    timestamp = dt.datetime.now(dt.timezone.utc).isoformat()
    with get_conn() as conn:
        cur = conn.cursor()
        cur.execute(
            """INSERT INTO session_deviations
               (timestamp, session_id, kind, phase, utterance, metadata)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (
                timestamp,
                payload.session_id,
                payload.kind,
                payload.phase,
                payload.utterance,
                json.dumps(payload.metadata, default=str),
            ),
        )
        return int(cur.lastrowid)


def deviations_for(session_id: str) -> List[DeviationPayload]:
    with get_conn() as conn:
        cur = conn.execute(
            "SELECT session_id, kind, phase, utterance, metadata FROM session_deviations"
            " WHERE session_id = ? ORDER BY id",
            (session_id,),
        )
        rows = cur.fetchall()
    return [
        DeviationPayload(session_id=r[0], kind=r[1], phase=r[2], utterance=r[3], metadata=json.loads(r[4] or "{}"))
        for r in rows
    ]
