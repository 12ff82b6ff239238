"""Phrase rotation with a per-session exclusion window."""
from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def choice(self, seq: Sequence[T]) -> T: ...


class PhrasePicker:
    """Pick phrases at random while avoiding the ones used recently.

    The exclusion window lives in the caller's session state, so two sessions
    never influence each other.
    """

    def __init__(self, rng: RandomSource, window: int = 4) -> None:
        self._rng = rng
        self._window = max(1, window)

    def pick(self, options: Sequence[str], recent: List[str], *, avoid: Optional[str] = None) -> str:
        if not options:
            raise ValueError("no phrases to pick from")
        # Shrink the exclusion window until a candidate remains.
        for size in range(len(recent), 0, -1):
            fresh = [o for o in options if o not in recent[-size:] and o != avoid]
            if fresh:
                break
        else:
            fresh = [o for o in options if o != avoid] or list(options)
        phrase = self._rng.choice(fresh)
        recent.append(phrase)
        del recent[: -self._window]
        return phrase


__all__ = ["PhrasePicker", "RandomSource"]
