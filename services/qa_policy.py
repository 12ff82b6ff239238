"""Quick-action row shown under each interviewer turn."""
from __future__ import annotations

from typing import List

from config.settings import settings
from graph.state import SessionState

STANDARD = ["hint", "think", "skip"]


def row(state: SessionState) -> List[str]:
    """Available actions; none once the session is done, no hint once hints are exhausted."""

    if state.done:
        return []
    actions = list(STANDARD)
    if remaining_hints(state) == 0:
        actions.remove("hint")
    if state.phase_index >= state.spec.terminal_index:
        actions.remove("skip")
    return actions


def remaining_hints(state: SessionState) -> int:
    used = len(state.mem.get("hints", {}).get(state.phase_id, []))
    return max(0, settings.MAX_HINT_LEVEL - used)
