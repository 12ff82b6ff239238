import random

from catalog.questions import get_question
from graph.machine import InterviewStateMachine
from services.assessment import AssessmentResult
from services.recorder import SqliteSessionRecorder
from services.sessions import abort_session, finish_session, load_session, save_session, start_session
from storage.assessments import latest_assessment
from storage.deviations import deviations_for
from storage.sessions import fetch_session


class RecordingRecorder:
    def __init__(self):
        self.calls = []

    def persist(self, transcript, duration_seconds, metadata):
        self.calls.append((transcript, duration_seconds, metadata))
        return metadata["session_id"]


class FixedEngine:
    def assess(self, transcript, rubric):
        scores = {d.name: 4.0 for d in rubric.dimensions}
        return AssessmentResult(dimension_scores=scores, overall_score=4.0, feedback="Solid.")


def test_start_session_selects_format_and_protocol():
    state, prompt = start_session(get_question("mck-profit-airline"), now=0.0)
    assert state.format == "interviewer-led"
    assert state.protocol == "consulting-case"
    assert state.phase_id == "INTRO"
    assert "E = R − C" in prompt


def test_company_override_changes_format():
    state, _ = start_session(get_question("bcg-entry-coffee"), company="McKinsey", now=0.0)
    assert state.format == "interviewer-led"
    assert state.question.company_slug == "mckinsey"


def test_checkpoint_round_trip():
    state, _ = start_session(get_question("google-maps-parking"), now=0.0, session_id="cp-1")
    machine = InterviewStateMachine(rng=random.Random(1))
    machine.open(state, 0.0)
    machine.advance(state, "Sure, that makes sense to me", 4.0)
    save_session(state)

    restored = load_session("cp-1")
    assert restored.phase_id == "MISSION"
    assert restored.transcript.entries == state.transcript.entries
    assert load_session("missing") is None


def test_finish_early_is_incomplete_and_discards_checkpoint():
    state, _ = start_session(get_question("google-maps-parking"), now=0.0, session_id="fin-1")
    save_session(state)
    recorder = RecordingRecorder()

    result = finish_session(state, recorder=recorder, engine=FixedEngine(), now=120.0)

    assert result.overall_score == 4.0
    assert state.incomplete
    transcript, duration, metadata = recorder.calls[0]
    assert duration == 120.0
    assert metadata["incomplete"] is True
    assert transcript.metadata["incomplete"] is True
    assert load_session("fin-1") is None
    assert latest_assessment("fin-1").feedback == "Solid."


def test_abort_flushes_partial_transcript_and_deviations():
    machine = InterviewStateMachine(rng=random.Random(2))
    state, _ = start_session(get_question("google-maps-parking"), now=0.0, session_id="ab-1")
    machine.open(state, 0.0)
    machine.advance(state, "What's your name by the way?", 3.0)

    directive = abort_session(state, machine=machine, recorder=SqliteSessionRecorder(), now=9.0)

    assert directive.kind == "CLOSE"
    row = fetch_session("ab-1")
    assert row.incomplete
    assert row.duration_seconds == 9.0
    assert [entry["role"] for entry in row.transcript] == ["interviewer", "candidate", "interviewer"]
    assert [d.kind for d in deviations_for("ab-1")] == ["redirect"]
