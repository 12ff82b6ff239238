"""Avatar selection for practice and learn modes."""
from __future__ import annotations

import random
from typing import Optional, Sequence, Tuple

from config.settings import settings
from graph.phrases import RandomSource


class AvatarSelector:
    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        *,
        interviewer_ids: Optional[Sequence[str]] = None,
        candidate_ids: Optional[Sequence[str]] = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.interviewer_ids = list(
            settings.LEARN_INTERVIEWER_AVATAR_IDS if interviewer_ids is None else interviewer_ids
        )
        self.candidate_ids = list(settings.LEARN_CANDIDATE_AVATAR_IDS if candidate_ids is None else candidate_ids)

    def pick(self, ids: Optional[Sequence[str]] = None) -> Optional[str]:
        """Random practice avatar, or ``None`` when nothing is configured."""

        pool = list(settings.AVATAR_IDS if ids is None else ids)
        if not pool:
            return None
        return self.rng.choice(pool)

    def pick_pair(self) -> Optional[Tuple[str, str]]:
        """Learn-mode (interviewer, candidate) pair with distinct ids."""

        if not self.interviewer_ids or not self.candidate_ids:
            return None
        interviewer = self.rng.choice(self.interviewer_ids)
        candidates = [c for c in self.candidate_ids if c != interviewer]
        if not candidates:
            return None
        return interviewer, self.rng.choice(candidates)


__all__ = ["AvatarSelector"]
