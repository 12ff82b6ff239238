"""Span helper recording step timings on a session's event list."""
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator

MAX_EVENTS = 200


@contextmanager
def span(state: Any, name: str) -> Iterator[None]:
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        state.events.append({"span": name, "ms": elapsed_ms})
        if len(state.events) > MAX_EVENTS:
            del state.events[:-MAX_EVENTS]


__all__ = ["span"]
