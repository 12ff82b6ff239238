"""Atomic JSON checkpoints for session state between HTTP turns."""
from __future__ import annotations

import json
import os
from typing import Optional

from config.settings import settings

from .state import SessionState


def _checkpoint_path(session_id: str) -> str:
    return os.path.join(settings.CHECKPOINT_DIR, f"{session_id}.json")


def save_checkpoint(state: SessionState) -> str:
    """Persist the full session state atomically and return the file path."""
    os.makedirs(settings.CHECKPOINT_DIR, exist_ok=True)
    path = _checkpoint_path(state.session_id)
    tmp_path = path + ".tmp"
    with open(tmp_path, "w", encoding="utf-8") as handle:
        handle.write(state.model_dump_json())
        handle.flush()
        os.fsync(handle.fileno())
    os.replace(tmp_path, path)
    return path


def load_checkpoint(session_id: str) -> Optional[SessionState]:
    path = _checkpoint_path(session_id)
    if not os.path.exists(path):
        return None
    with open(path, "r", encoding="utf-8") as handle:
        data = json.load(handle)
    return SessionState.model_validate(data)


def discard_checkpoint(session_id: str) -> None:
    """Drop a session's checkpoint once it has been flushed to the recorder."""
    path = _checkpoint_path(session_id)
    if os.path.exists(path):
        os.remove(path)
