"""Session recorder boundary and its SQLite implementation."""
from __future__ import annotations

from typing import Any, Dict, Protocol

from graph.state import Transcript
from observability.logger import log_event
from storage.deviations import insert_deviation
from storage.sessions import upsert_session


class SessionRecorder(Protocol):
    def persist(self, transcript: Transcript, duration_seconds: float, metadata: Dict[str, Any]) -> str: ...


class SqliteSessionRecorder:
    """Writes the transcript to ``interview_sessions`` and deviations to ``session_deviations``."""

    def persist(self, transcript: Transcript, duration_seconds: float, metadata: Dict[str, Any]) -> str:
        session_id = metadata["session_id"]
        incomplete = bool(metadata.get("incomplete", transcript.metadata.get("incomplete", False)))
        deviations = metadata.get("deviations") or []
        upsert_session(
            id=session_id,
            question_id=metadata.get("question_id", ""),
            company=metadata.get("company"),
            track=metadata.get("track", ""),
            question_type=metadata.get("question_type", ""),
            title=metadata.get("title", ""),
            transcript=[entry.model_dump() for entry in transcript.entries],
            duration_seconds=max(0.0, duration_seconds),
            incomplete=incomplete,
            metadata={"transcript": transcript.metadata, "turns": metadata.get("turns", 0)},
        )
        for deviation in deviations:
            insert_deviation(
                session_id=session_id,
                kind=deviation.get("kind", "redirect"),
                phase=deviation.get("phase", ""),
                utterance=deviation.get("utterance", ""),
                metadata={"timestamp": deviation.get("timestamp")},
            )
        log_event(
            "session.persisted",
            session_id,
            outcome="incomplete" if incomplete else "complete",
            turn=metadata.get("turns", 0),
        )
        return session_id


__all__ = ["SessionRecorder", "SqliteSessionRecorder"]
