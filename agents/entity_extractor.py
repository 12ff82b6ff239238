"""Entity extraction from candidate utterances.

Control signals (think requests, skips, unclear audio, off-topic drift and
count claims) are always recognised with heuristics. Content entities come from
the model bound at ``models.entity_extractor`` when there is one, and from
list/choice heuristics otherwise. Think requests and small-talk asides are
dropped when the same utterance also answers the phase.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Protocol, Set

from pydantic import BaseModel, ValidationError

from agents.types import ExtractionPayload
from config.registry import EXTRACT_KEY, get_model, is_bound
from graph.phases import PhaseSpec

logger = logging.getLogger(__name__)

THINK = "think_request"
SKIP = "skip_request"
UNCLEAR = "unclear"
OFF_TOPIC = "off_topic"
COUNT_CLAIM = "count_claim"
CHOICE = "choice"
REASON = "reason"
CONTROL_KINDS = frozenset({THINK, SKIP, UNCLEAR, OFF_TOPIC, COUNT_CLAIM})

NUMBER_WORDS = {"two": 2, "three": 3, "four": 4, "five": 5, "six": 6, "seven": 7}

_THINK_RE = re.compile(
    r"^\s*(?:(?:um+|uh+|hmm+|ok(?:ay)?|so|well|sure|right)[,.\s]+)*"
    r"(?:let me (?:think|gather my thoughts)|give me (?:a|one) (?:moment|minute|second|sec)|"
    r"(?:can|could|may) i (?:have|take|get) a (?:moment|minute|second|sec)|"
    r"i(?:'d| would)? (?:need|like) a (?:moment|minute|second|sec)|one (?:moment|sec)|hold on)\b",
    re.I,
)
_SKIP_RE = re.compile(
    r"\b(?:can we|could we|let'?s|i'?d like to|i want to)\s+(?:skip|move on)\b|^\s*skip\b|\bskip (?:this|it|ahead)\b",
    re.I,
)
_INAUDIBLE_RE = re.compile(r"\[(?:inaudible|unclear|crosstalk|noise)\]|\(inaudible\)|<unk>", re.I)
_OFF_TOPIC_RE = re.compile(
    r"\b(?:how (?:was|is) your (?:day|weekend|week|vacation|holiday|morning)|"
    r"did you (?:watch|see|catch) (?:the )?(?:\w+ )?(?:game|match|movie|show|news)|"
    r"(?:what'?s|how'?s) the weather|what'?s your name|how are you|where are you from|"
    r"what do you do for fun|what'?s your salary|what'?s for (?:lunch|dinner))\b",
    re.I,
)
_COUNT_RE = re.compile(
    r"\b(two|three|four|five|six|seven|[2-7])\s+(?:\w+\s+)?"
    r"(segments?|players?|problems?|solutions?|risks?|steps?|buckets?|ideas?|options?|metrics?|goals?|"
    r"requirements?|components?|factors?|competitors?|areas?|groups?|drivers?|actions?|assumptions?)\b",
    re.I,
)
_SPLIT_RE = re.compile(r",|;|\n|\band\b|\bor\b|\bplus\b|\(\d+\)|\b\d+[.)]\s", re.I)
_FILLER_RE = re.compile(
    r"^(?:and|or|also|then|maybe|so|well|um+|uh+|like|ok(?:ay)?|i think|i'?d say|i see|there are|"
    r"there'?s|we have|first(?:ly)?|second(?:ly)?|third(?:ly)?|fourth|fifth|finally|next|lastly|the)\b[\s,]*",
    re.I,
)
_CHOICE_RE = re.compile(
    r"\b(?:focus on|go with|pick|choose|prioriti[sz]e|recommend(?: that)?(?: we)?|start with|target|"
    r"bet on|stick with|i'?d (?:build|solve|tackle))\s+(?:on\s+)?(?:the\s+)?"
    r"(?P<choice>[^,.;]+?)(?=\s+(?:because|since|as|given)\b|[,.;!?]|$)",
    re.I,
)
_REASON_RE = re.compile(r"\b(?:because|since|given that|due to)\b", re.I)
_NUMBER_RE = re.compile(
    r"(?<![\w.])(\d+(?:[.,]\d+)*)\s*(%|percent|k|m|bn|million|billion|thousand)?(?!\w)", re.I
)
_WORD_RE = re.compile(r"[A-Za-z]{2,}")


class Entity(BaseModel):
    kind: str
    value: str = ""
    count: Optional[int] = None

    model_config = {"frozen": True}


class EntityExtractor(Protocol):
    def extract_entities(self, utterance: str, phase: PhaseSpec) -> Set[Entity]: ...


def _clean(fragment: str) -> str:
    text = fragment.strip(" \t.!?\"'")
    previous = None
    while previous != text:
        previous = text
        text = _FILLER_RE.sub("", text).strip(" \t.!?\"'")
    return text.lower()


def split_items(text: str) -> List[str]:
    """Split an enumeration into normalised, de-duplicated items."""

    if ":" in text:
        text = text.split(":", 1)[1]
    items: List[str] = []
    for fragment in _SPLIT_RE.split(text):
        if not fragment or _COUNT_RE.search(fragment):
            continue
        item = _clean(fragment)
        if item and _WORD_RE.search(item) and item not in items:
            items.append(item)
    return items


def control_signals(utterance: str) -> Set[Entity]:
    text = utterance or ""
    found: Set[Entity] = set()
    if _INAUDIBLE_RE.search(text) or not _WORD_RE.search(text):
        found.add(Entity(kind=UNCLEAR))
        return found
    if _THINK_RE.search(text):
        found.add(Entity(kind=THINK))
    if _SKIP_RE.search(text):
        found.add(Entity(kind=SKIP))
    if _OFF_TOPIC_RE.search(text):
        found.add(Entity(kind=OFF_TOPIC))
    for word, noun in _COUNT_RE.findall(text):
        count = NUMBER_WORDS.get(word.lower()) or int(word)
        found.add(Entity(kind=COUNT_CLAIM, value=noun.lower(), count=count))
    return found


def _reasons(text: str) -> Set[Entity]:
    match = _REASON_RE.search(text)
    if not match:
        return set()
    return {Entity(kind=REASON, value=item) for item in split_items(text[match.end():])}


def heuristic_content(utterance: str, phase: PhaseSpec) -> Set[Entity]:
    criterion = phase.criterion
    found: Set[Entity] = set()
    if criterion.mode == "list":
        found.update(Entity(kind=criterion.category, value=item) for item in split_items(utterance))
    elif criterion.mode == "number":
        for number, unit in _NUMBER_RE.findall(utterance):
            value = f"{number} {unit}".strip().lower()
            found.add(Entity(kind=criterion.category, value=value))
    elif criterion.mode == "choice":
        match = _CHOICE_RE.search(utterance)
        if match:
            choice = _clean(match.group("choice"))
            if choice:
                found.add(Entity(kind=CHOICE, value=choice))
    elif len(_WORD_RE.findall(utterance)) >= 3:
        found.add(Entity(kind=criterion.category, value=utterance.strip()[:200]))
    found.update(_reasons(utterance))
    return found


def _is_aside(value: str) -> bool:
    return bool(value) and bool(_THINK_RE.search(value) or _OFF_TOPIC_RE.search(value))


def answers_phase(content: Set[Entity], phase: PhaseSpec) -> bool:
    """True when ``content`` carries list, number or choice items for ``phase``.

    Statement phases never count: any three words form a statement.
    """

    criterion = phase.criterion
    if criterion.mode == "statement":
        return False
    wanted = CHOICE if criterion.mode == "choice" else criterion.category
    return any(e.kind == wanted and e.value for e in content)


class HeuristicExtractor:
    """Default extractor; delegates content to the bound model when available."""

    def __init__(self, prompt_path: str = "prompts/entity_extractor.txt") -> None:
        self.prompt_path = prompt_path

    def _llm_content(self, utterance: str, phase: PhaseSpec) -> Optional[Set[Entity]]:
        llm = get_model(EXTRACT_KEY)
        try:
            raw = llm(
                system_prompt_path=self.prompt_path,
                inputs={
                    "utterance": utterance,
                    "phase": {"id": phase.id, "title": phase.title, "criterion": phase.criterion.model_dump()},
                },
                temperature=0.0,
                max_tokens=300,
            )
            payload = ExtractionPayload.model_validate(raw)
        except ValidationError:
            logger.warning("entity extractor returned an invalid payload; using heuristics")
            return None
        except RuntimeError as exc:
            logger.warning("entity extractor unavailable (%s); using heuristics", exc)
            return None
        return {
            Entity(kind=item.kind, value=item.value.strip().lower(), count=item.count)
            for item in payload.entities
        }

    def extract_entities(self, utterance: str, phase: PhaseSpec) -> Set[Entity]:
        signals = control_signals(utterance)
        if any(e.kind in (UNCLEAR, SKIP) for e in signals):
            return signals
        content = None
        if is_bound(EXTRACT_KEY):
            content = self._llm_content(utterance, phase)
        if content is None:
            content = heuristic_content(utterance, phase)
        content = {e for e in content if not _is_aside(e.value)}
        if answers_phase(content, phase):
            # An answer that fills the phase outranks a stray aside or filler request.
            signals = {e for e in signals if e.kind not in (THINK, OFF_TOPIC)}
            content = {e for e in content if e.kind not in (THINK, OFF_TOPIC)}
        elif any(e.kind in (THINK, OFF_TOPIC) for e in signals):
            return signals
        return signals | content


__all__ = [
    "CHOICE",
    "CONTROL_KINDS",
    "COUNT_CLAIM",
    "Entity",
    "EntityExtractor",
    "HeuristicExtractor",
    "OFF_TOPIC",
    "REASON",
    "SKIP",
    "THINK",
    "UNCLEAR",
    "answers_phase",
    "control_signals",
    "heuristic_content",
    "split_items",
]
