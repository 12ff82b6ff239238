"""Runtime controller that turns candidate input and timer ticks into directives.

Interrupt precedence, highest first: CLARIFY_AUDIO, THINKING_PAUSE, CHALLENGE,
NUDGE, REDIRECT. Explicit skips and recount prompts are handled after the
thinking pause and before the challenge.
"""
from __future__ import annotations

import random
from typing import List, Optional, Set

from agents.entity_extractor import (
    CHOICE,
    COUNT_CLAIM,
    OFF_TOPIC,
    REASON,
    SKIP,
    THINK,
    UNCLEAR,
    Entity,
    EntityExtractor,
    HeuristicExtractor,
)
from config.settings import settings
from observability.logger import log_event

from .phases import PhaseSpec
from .phrases import PhrasePicker, RandomSource
from .state import Directive, DirectiveKind, InterruptKind, SessionState

CLARIFY_LINES = {
    1: "I didn't catch that clearly. Could you repeat?",
    2: "Still having trouble. Could you say that more slowly?",
}
CLARIFY_SUMMARY = "Let me summarize what I understood: {summary}. Is that right?"
PAUSE_ACKS = ["Take your time.", "Sure, take a moment.", "Of course, take your time."]
CHECK_IN = "Take your time. Let me know when you're ready."
NUDGE = "Would it help to think about {hint}?"
REDIRECT = "Let me pull you back to {focus}."
SKIP_LINES = ["No problem, let's move on.", "Sure, let's skip ahead.", "Okay, let's pick it up from the next part."]
TIMEOUT_LINE = "We're out of time, so let's wrap up here. Thanks for working through this with me."
CLOSED_LINE = "The interview has ended."
ACKS = ["Got it.", "Makes sense.", "Okay.", "I see.", "Right."]
DEFENSE_PROBE = "What makes you confident in that choice?"

ORDINALS = {1: "first", 2: "second", 3: "third", 4: "fourth", 5: "fifth", 6: "sixth", 7: "seventh"}
NUMBER_NAMES = {0: "none", 1: "one", 2: "two", 3: "three", 4: "four", 5: "five", 6: "six", 7: "seven"}


def _summary(text: Optional[str], fallback: str) -> str:
    if not text:
        return fallback
    words = text.strip().rstrip(".!?").split()
    if len(words) > 20:
        return " ".join(words[:20]) + "..."
    return " ".join(words)


class InterviewStateMachine:
    """Drives one session's phases; all state lives on the ``SessionState``."""

    def __init__(
        self,
        extractor: Optional[EntityExtractor] = None,
        rng: Optional[RandomSource] = None,
        *,
        quiet_window: Optional[int] = None,
        stall_threshold: Optional[int] = None,
        max_session: Optional[int] = None,
        phrase_window: Optional[int] = None,
    ) -> None:
        self.extractor = extractor or HeuristicExtractor()
        self.rng = rng or random.Random()
        self.quiet_window = quiet_window or settings.QUIET_WINDOW_SECONDS
        self.stall_threshold = stall_threshold or settings.STALL_THRESHOLD_SECONDS
        self.max_session = max_session or settings.MAX_SESSION_SECONDS
        self.phrases = PhrasePicker(self.rng, phrase_window or settings.RECENT_PHRASE_WINDOW)

    # -- entry points -----------------------------------------------------

    def open(self, state: SessionState, now: float) -> Directive:
        state.last_progress_at = now
        text = f"{state.question.description}\n\n{state.phase.prompt}"
        return self._emit(state, "OPEN", text, now)

    def advance(self, state: SessionState, utterance: str, now: float) -> Directive:
        if state.done:
            return self._closed(state)
        state.transcript.append("candidate", utterance, now)
        if state.session_elapsed(now) >= self.max_session:
            return self._timeout(state, now)

        phase = state.phase
        entities = self.extractor.extract_entities(utterance, phase)
        kinds = {e.kind for e in entities}
        self._end_pause(state, now)

        if UNCLEAR in kinds:
            return self._clarify(state, now)
        if state.clarify_level:
            state.clarify_level = 0
            state.pop_interrupt("CLARIFY_AUDIO")
        state.last_clear_utterance = utterance

        off_topic = OFF_TOPIC in kinds
        if not off_topic:
            state.turn_count += 1
        log_event("turn.start", state.session_id, phase=phase.id, turn=state.turn_count)

        if THINK in kinds:
            return self._start_pause(state, now)
        if SKIP in kinds:
            return self.skip(state, now)

        progressed = False if off_topic else self._merge(state, phase, entities)
        if progressed:
            state.last_progress_at = now

        facts = state.phase_facts()
        status = state.challenge_status.get(phase.id)
        if status == "pending" and not off_topic:
            if kinds & {REASON, CHOICE}:
                state.challenge_status[phase.id] = "satisfied"
                state.pop_interrupt("CHALLENGE")
                log_event("interrupt", state.session_id, phase=phase.id, interrupt="CHALLENGE", outcome="defended")
                return self._complete_phase(state, now)
            return self._emit(state, "ACKNOWLEDGE", DEFENSE_PROBE, now)

        recovery = self._recovery(state, phase, entities, facts, now)
        if recovery is not None:
            return recovery

        if phase.criterion.satisfied(facts) and status is None:
            if phase.requires_challenge:
                return self._challenge(state, phase, now)
            return self._complete_phase(state, now)

        if not progressed and self._stalled(state, now):
            return self._nudge(state, now)
        if off_topic:
            return self._redirect(state, utterance, now)

        ack = self.phrases.pick(ACKS, state.recent_phrases)
        probe = self.phrases.pick(phase.probes, state.recent_phrases)
        return self._emit(state, "ACKNOWLEDGE", f"{ack} {probe}", now)

    def tick(self, state: SessionState, now: float) -> Optional[Directive]:
        """Timer poll: quiet-window check-in, stall nudge, timeout, budget advisory."""

        if state.done:
            return None
        if state.session_elapsed(now) >= self.max_session:
            return self._timeout(state, now)
        if state.pause_started_at is not None:
            if not state.pause_checked_in and now - state.pause_started_at >= self.quiet_window:
                state.pause_checked_in = True
                return self._emit(state, "CHECK_IN", CHECK_IN, now, interrupt="THINKING_PAUSE")
            return None
        phase = state.phase
        if phase.budget_seconds and state.phase_elapsed(now) > phase.budget_seconds:
            if phase.id not in state.over_budget:
                state.over_budget.append(phase.id)
                log_event(
                    "phase.over_budget",
                    state.session_id,
                    phase=phase.id,
                    budget=phase.budget_seconds,
                    elapsed=round(state.phase_elapsed(now)),
                )
        if self._stalled(state, now):
            return self._nudge(state, now)
        return None

    def skip(self, state: SessionState, now: float) -> Directive:
        if state.done:
            return self._closed(state)
        self._end_pause(state, now)
        log_event("phase.skip", state.session_id, phase=state.phase_id)
        return self._complete_phase(state, now, skipped=True)

    def abort(self, state: SessionState, now: float) -> Directive:
        state.done = True
        state.incomplete = True
        state.transcript.metadata["incomplete"] = True
        log_event("session.abort", state.session_id, phase=state.phase_id, turn=state.turn_count)
        return Directive(kind="CLOSE", text=CLOSED_LINE, phase=state.phase_id, done=True, incomplete=True)

    # -- helpers ----------------------------------------------------------

    def _emit(
        self,
        state: SessionState,
        kind: DirectiveKind,
        text: str,
        now: float,
        *,
        interrupt: Optional[InterruptKind] = None,
    ) -> Directive:
        directive = Directive(
            kind=kind,
            text=text,
            phase=state.phase_id,
            done=state.done,
            incomplete=state.incomplete,
            interrupt=interrupt,
        )
        state.transcript.append("interviewer", text, now)
        log_event(
            "directive",
            state.session_id,
            phase=directive.phase,
            directive=kind,
            interrupt=interrupt,
            turn=state.turn_count,
        )
        return directive

    def _closed(self, state: SessionState) -> Directive:
        return Directive(
            kind="CLOSE", text=CLOSED_LINE, phase=state.phase_id, done=True, incomplete=state.incomplete
        )

    def _merge(self, state: SessionState, phase: PhaseSpec, entities: Set[Entity]) -> bool:
        facts = state.phase_facts(phase.id)
        added = False
        for entity in sorted(entities, key=lambda e: (e.kind, e.value)):
            if entity.kind in (COUNT_CLAIM, OFF_TOPIC) or not entity.value:
                continue
            bucket = facts.setdefault(entity.kind, [])
            if entity.value not in bucket:
                bucket.append(entity.value)
                added = True
        return added

    def _complete_phase(self, state: SessionState, now: float, *, skipped: bool = False) -> Directive:
        phase = state.phase
        state.completed[phase.id] = not skipped
        state.pop_interrupt("CHALLENGE")
        if state.phase_index >= state.spec.terminal_index:
            state.done = True
            state.transcript.metadata["incomplete"] = state.incomplete
            closing = self.phrases.pick(phase.transitions, state.recent_phrases)
            return self._emit(state, "CLOSE", closing, now)

        options = SKIP_LINES if skipped else phase.transitions
        phrase = self.phrases.pick(options, state.recent_phrases, avoid=state.last_transition_phrase)
        state.last_transition_phrase = phrase
        state.phase_index += 1
        state.phase_started_at = now
        state.last_progress_at = now
        state.last_nudge_at = None
        log_event(
            "phase.transition",
            state.session_id,
            phase=state.phase_id,
            reason="skip" if skipped else "criterion",
            turn=state.turn_count,
        )
        kind: DirectiveKind = "SKIP" if skipped else "TRANSITION"
        if state.phase_index == state.spec.terminal_index and not skipped:
            kind = "WRAP_UP"
        return self._emit(state, kind, f"{phrase} {state.phase.prompt}", now)

    def _alternative(self, state: SessionState, phase: PhaseSpec) -> str:
        chosen = " ".join(state.phase_facts(phase.id).get(CHOICE, []))
        options: List[str] = []
        if phase.alternatives_from:
            source = state.spec.phase(state.spec.index_of(phase.alternatives_from))
            options.extend(state.phase_facts(source.id).get(source.criterion.category, []))
        options.extend(phase.alternatives)
        for option in options:
            if option not in chosen and chosen not in option:
                return option
        return "another option"

    def _challenge(self, state: SessionState, phase: PhaseSpec, now: float) -> Directive:
        state.challenge_status[phase.id] = "pending"
        state.push_interrupt("CHALLENGE")
        template = self.phrases.pick(phase.challenges, state.recent_phrases)
        text = template.format(alternative=self._alternative(state, phase))
        log_event("interrupt", state.session_id, phase=phase.id, interrupt="CHALLENGE")
        return self._emit(state, "CHALLENGE", text, now, interrupt="CHALLENGE")

    def _recovery(
        self,
        state: SessionState,
        phase: PhaseSpec,
        entities: Set[Entity],
        facts,
        now: float,
    ) -> Optional[Directive]:
        if phase.criterion.mode != "list":
            return None
        heard = len(facts.get(phase.criterion.category, []))
        for claim in entities:
            if claim.kind != COUNT_CLAIM or claim.count is None or claim.count <= heard:
                continue
            key = f"{phase.id}:{claim.count}"
            if key in state.recoveries:
                continue
            state.recoveries.append(key)
            claimed = NUMBER_NAMES.get(claim.count, str(claim.count))
            if heard:
                text = (
                    f"You mentioned {claimed}, I heard {NUMBER_NAMES.get(heard, str(heard))} so far. "
                    f"What's the {ORDINALS.get(heard + 1, 'next')}?"
                )
            else:
                text = f"You mentioned {claimed}. What are they?"
            log_event("interrupt", state.session_id, phase=phase.id, interrupt="RECOVERY", level=claim.count)
            return self._emit(state, "RECOVERY", text, now)
        return None

    def _stalled(self, state: SessionState, now: float) -> bool:
        if state.pause_started_at is not None:
            return False
        if now - state.last_progress_at < self.stall_threshold:
            return False
        return state.last_nudge_at is None or now - state.last_nudge_at >= self.stall_threshold

    def _nudge(self, state: SessionState, now: float) -> Directive:
        phase = state.phase
        state.last_nudge_at = now
        hint = self.phrases.pick(phase.hints, state.recent_phrases) if phase.hints else phase.focus
        log_event("interrupt", state.session_id, phase=phase.id, interrupt="NUDGE")
        return self._emit(state, "NUDGE", NUDGE.format(hint=hint), now, interrupt="NUDGE")

    def _redirect(self, state: SessionState, utterance: str, now: float) -> Directive:
        phase = state.phase
        state.mem.setdefault("deviations", []).append(
            {"kind": "redirect", "phase": phase.id, "utterance": utterance, "timestamp": now}
        )
        log_event("deviation", state.session_id, phase=phase.id, interrupt="REDIRECT")
        return self._emit(state, "REDIRECT", REDIRECT.format(focus=phase.focus), now, interrupt="REDIRECT")

    def _clarify(self, state: SessionState, now: float) -> Directive:
        state.clarify_level = min(state.clarify_level + 1, 3)
        state.push_interrupt("CLARIFY_AUDIO")
        if state.clarify_level < 3:
            text = CLARIFY_LINES[state.clarify_level]
        else:
            fallback = f"we were discussing {state.phase.focus}"
            text = CLARIFY_SUMMARY.format(summary=_summary(state.last_clear_utterance, fallback))
        log_event(
            "interrupt", state.session_id, phase=state.phase_id, interrupt="CLARIFY_AUDIO", level=state.clarify_level
        )
        return self._emit(state, "CLARIFY_AUDIO", text, now, interrupt="CLARIFY_AUDIO")

    def _start_pause(self, state: SessionState, now: float) -> Directive:
        state.pause_started_at = now
        state.pause_checked_in = False
        state.push_interrupt("THINKING_PAUSE")
        ack = self.phrases.pick(PAUSE_ACKS, state.recent_phrases)
        log_event("interrupt", state.session_id, phase=state.phase_id, interrupt="THINKING_PAUSE")
        return self._emit(state, "THINKING_PAUSE", ack, now, interrupt="THINKING_PAUSE")

    def _end_pause(self, state: SessionState, now: float) -> None:
        if state.pause_started_at is None:
            return
        state.pause_started_at = None
        state.pause_checked_in = False
        state.pop_interrupt("THINKING_PAUSE")
        state.last_progress_at = now

    def _timeout(self, state: SessionState, now: float) -> Directive:
        state.phase_index = state.spec.terminal_index
        state.done = True
        state.incomplete = True
        state.transcript.metadata["incomplete"] = True
        state.mem.setdefault("deviations", []).append(
            {"kind": "timeout", "phase": state.phase_id, "utterance": "", "timestamp": now}
        )
        log_event("session.timeout", state.session_id, phase=state.phase_id, turn=state.turn_count)
        return self._emit(state, "WRAP_UP", TIMEOUT_LINE, now)


__all__ = ["InterviewStateMachine"]
