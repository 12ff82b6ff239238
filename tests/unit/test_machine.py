import random

import pytest

from catalog.questions import get_question
from graph.machine import CHECK_IN, CLOSED_LINE, SKIP_LINES, InterviewStateMachine
from graph.phrases import PhrasePicker
from services.sessions import start_session


def _session(question_id="google-maps-parking"):
    machine = InterviewStateMachine(rng=random.Random(7))
    state, _ = start_session(get_question(question_id), now=0.0, session_id="s-1")
    machine.open(state, 0.0)
    return machine, state


def _jump(state, phase_id, now=0.0):
    state.phase_index = state.spec.index_of(phase_id)
    state.phase_started_at = now
    state.last_progress_at = now


def test_open_presents_question_and_first_prompt():
    machine, state = _session()
    entry = state.transcript.entries[-1]
    assert entry.role == "interviewer"
    assert entry.text.startswith("Design a feature for Google Maps")
    assert entry.text.endswith("feel free to ask any clarifying questions.")
    assert state.phase_id == "INTRO"


def test_segment_challenge_is_defended_before_moving_on():
    machine, state = _session()
    _jump(state, "PRIORITIZE_SEGMENT")
    state.facts["SEGMENTS"] = {"segment": ["daily commuters", "students", "tourists"]}

    challenge = machine.advance(
        state, "I'd focus on daily commuters because they park daily and the pain is highest", 5.0
    )
    assert challenge.kind == "CHALLENGE"
    assert challenge.interrupt == "CHALLENGE"
    assert "students" in challenge.text
    assert state.phase_id == "PRIORITIZE_SEGMENT"

    probe = machine.advance(state, "I still like that group", 10.0)
    assert probe.kind == "ACKNOWLEDGE"
    assert state.phase_id == "PRIORITIZE_SEGMENT"

    moved = machine.advance(state, "Because commuters hit the problem every single day", 15.0)
    assert moved.kind == "TRANSITION"
    assert state.phase_id == "PERSONA"
    assert moved.text.endswith("Give me a persona with a name, age and context.")
    assert state.challenge_status["PRIORITIZE_SEGMENT"] == "satisfied"
    assert "CHALLENGE" not in state.interrupt_stack


def test_quiet_window_checks_in_once():
    machine, state = _session()
    pause = machine.advance(state, "Let me think for a moment", 100.0)
    assert pause.kind == "THINKING_PAUSE"
    assert machine.tick(state, 130.0) is None
    assert machine.tick(state, 159.0) is None
    check_in = machine.tick(state, 160.0)
    assert check_in.kind == "CHECK_IN"
    assert check_in.text == CHECK_IN
    assert machine.tick(state, 161.0) is None
    assert machine.tick(state, 400.0) is None


def test_speaking_ends_the_pause():
    machine, state = _session()
    machine.advance(state, "Give me a minute", 10.0)
    directive = machine.advance(state, "Sure, that makes sense to me", 20.0)
    assert directive.kind == "TRANSITION"
    assert state.pause_started_at is None
    assert "THINKING_PAUSE" not in state.interrupt_stack


def test_stall_nudges_respect_threshold():
    machine, state = _session()
    nudge = machine.tick(state, 31.0)
    assert nudge.kind == "NUDGE"
    assert nudge.text.startswith("Would it help to think about")
    assert machine.tick(state, 40.0) is None
    assert machine.tick(state, 61.0).kind == "NUDGE"


def test_over_budget_is_advisory():
    machine, state = _session()
    machine.tick(state, 90.0)
    assert state.over_budget == ["INTRO"]
    assert state.phase_id == "INTRO"


def test_timeout_moves_to_wrap_up_and_marks_incomplete():
    machine, state = _session()
    directive = machine.advance(state, "Sure, that makes sense to me", 2700.0)
    assert directive.kind == "WRAP_UP"
    assert directive.done and directive.incomplete
    assert state.phase_id == "WRAP_UP"
    assert state.transcript.metadata["incomplete"] is True
    assert state.mem["deviations"][-1]["kind"] == "timeout"
    assert machine.advance(state, "hello?", 2710.0).text == CLOSED_LINE
    assert machine.tick(state, 2720.0) is None


def test_tick_times_out_too():
    machine, state = _session()
    assert machine.tick(state, 2701.0).kind == "WRAP_UP"
    assert state.done


def test_clarify_escalates_and_resets():
    machine, state = _session()
    machine.advance(state, "Sure, that makes sense to me", 5.0)
    turns = state.turn_count

    first = machine.advance(state, "[inaudible]", 6.0)
    second = machine.advance(state, "[inaudible] the [noise]", 7.0)
    third = machine.advance(state, "<unk>", 8.0)
    assert first.text == "I didn't catch that clearly. Could you repeat?"
    assert second.text == "Still having trouble. Could you say that more slowly?"
    assert third.text == "Let me summarize what I understood: Sure, that makes sense to me. Is that right?"
    assert {first.kind, second.kind, third.kind} == {"CLARIFY_AUDIO"}
    assert state.turn_count == turns

    machine.advance(state, "Yes, help drivers find parking without stress", 9.0)
    assert state.clarify_level == 0
    assert "CLARIFY_AUDIO" not in state.interrupt_stack


def test_clarify_outranks_thinking_pause():
    machine, state = _session()
    directive = machine.advance(state, "[inaudible] let me think", 5.0)
    assert directive.kind == "CLARIFY_AUDIO"
    assert state.pause_started_at is None


def test_recovery_prompt_is_issued_once():
    machine, state = _session()
    _jump(state, "SEGMENTS")

    recovery = machine.advance(state, "I see three segments: daily commuters and students", 5.0)
    assert recovery.kind == "RECOVERY"
    assert recovery.text == "You mentioned three, I heard two so far. What's the third?"

    again = machine.advance(state, "Like I said there are three segments", 8.0)
    assert again.kind == "ACKNOWLEDGE"

    done = machine.advance(state, "And tourists", 12.0)
    assert done.kind == "TRANSITION"
    assert state.phase_id == "PRIORITIZE_SEGMENT"
    assert done.text.endswith("Which would you focus on and why?")


def test_off_topic_is_redirected_without_counting_a_turn():
    machine, state = _session()
    _jump(state, "MISSION")
    turns = state.turn_count
    directive = machine.advance(state, "Did you watch the football game at the weekend?", 5.0)
    assert directive.kind == "REDIRECT"
    assert directive.text == "Let me pull you back to the product mission."
    assert state.turn_count == turns
    assert state.mem["deviations"] == [
        {
            "kind": "redirect",
            "phase": "MISSION",
            "utterance": "Did you watch the football game at the weekend?",
            "timestamp": 5.0,
        }
    ]


def test_skip_moves_on_and_marks_phase_skipped():
    machine, state = _session()
    _jump(state, "SEGMENTS")
    directive = machine.advance(state, "Can we skip this one?", 5.0)
    assert directive.kind == "SKIP"
    lead, _, prompt = directive.text.partition(". ")
    assert f"{lead}." in SKIP_LINES
    assert prompt == "Which would you focus on and why?"
    assert state.completed["SEGMENTS"] is False

    _jump(state, "WRAP_UP")
    closing = machine.skip(state, 10.0)
    assert closing.kind == "CLOSE"
    assert closing.done and not closing.incomplete


def test_abort_closes_incomplete():
    machine, state = _session()
    directive = machine.abort(state, 5.0)
    assert directive.kind == "CLOSE"
    assert directive.done and directive.incomplete
    assert state.transcript.metadata["incomplete"] is True


PRODUCT_SENSE_SCRIPT = [
    "Sure, that makes sense to me",
    "Help drivers find a parking spot quickly and without stress",
    "Players: drivers, parking operators, cities, and payment providers",
    "Segments: daily commuters, students, and tourists",
    "I'd focus on daily commuters because they park daily and the pain is highest",
    "Because commuters hit the problem every single day",
    "Her name is Maya, she is thirty four, and she drives downtown daily",
    "Steps: leaves home, drives downtown, circles the block, finds a spot, pays at the meter",
    "Problems: circling wastes time, meters are confusing, and tickets are expensive",
    "I'd tackle circling wastes time because it happens daily and it hurts the most",
    "Because it is the most frequent pain",
    "Solutions: live spot availability, prepaid reservations, and a parking buddy feature",
    "I'd build live spot availability because impact is highest and effort is moderate",
    "Because it unblocks every other solution",
    "Show open spots near the destination in one city",
    "Risks: stale availability data and low adoption by operators",
    "We focused on commuters and shipped live availability first",
]


def test_full_product_sense_walkthrough():
    machine, state = _session()
    indices = [state.phase_index]
    kinds = []
    for offset, utterance in enumerate(PRODUCT_SENSE_SCRIPT, start=1):
        directive = machine.advance(state, utterance, offset * 10.0)
        kinds.append(directive.kind)
        indices.append(state.phase_index)

    assert indices == sorted(indices)
    assert kinds.count("CHALLENGE") == 3
    assert kinds[-2] == "WRAP_UP"
    assert kinds[-1] == "CLOSE"
    assert state.done and not state.incomplete
    assert all(state.completed.values())
    assert len(state.completed) == len(state.spec.phases)


def test_transition_phrases_do_not_repeat_back_to_back():
    picker = PhrasePicker(random.Random(3), window=2)
    recent = []
    previous = None
    for _ in range(50):
        phrase = picker.pick(["a", "b", "c"], recent, avoid=previous)
        assert phrase != previous
        previous = phrase


def test_picker_requires_options():
    with pytest.raises(ValueError):
        PhrasePicker(random.Random(0)).pick([], [])


def test_back_to_back_skips_vary_the_lead_in():
    machine, state = _session()
    _jump(state, "SEGMENTS")
    leads = []
    for offset in range(6):
        directive = machine.skip(state, 5.0 + offset)
        assert directive.kind == "SKIP"
        lead = next(line for line in SKIP_LINES if directive.text.startswith(line))
        leads.append(lead)
    assert all(a != b for a, b in zip(leads, leads[1:]))


def test_solution_choice_is_challenged():
    machine, state = _session()
    _jump(state, "PRIORITIZE_SOLUTION")
    state.facts["SOLUTIONS"] = {"solution": ["live spot availability", "prepaid reservations"]}

    challenge = machine.advance(
        state, "I'd build live spot availability because impact is highest and effort is moderate", 5.0
    )
    assert challenge.kind == "CHALLENGE"
    assert "prepaid reservations" in challenge.text
    assert state.phase_id == "PRIORITIZE_SOLUTION"

    moved = machine.advance(state, "Because it unblocks every other solution", 10.0)
    assert moved.kind == "TRANSITION"
    assert state.phase_id == "MVP"
    assert state.challenge_status["PRIORITIZE_SOLUTION"] == "satisfied"


def test_consulting_timeout_mid_case_wraps_up():
    machine, state = _session("mck-profit-airline")
    _jump(state, "QUANT_ANALYSIS", now=2690.0)
    assert state.phase_index == 2
    assert len(state.spec.phases) == 6

    before = machine.advance(state, "Let me walk through the math", 2699.9)
    assert not before.done
    assert state.phase_id == "QUANT_ANALYSIS"

    directive = machine.advance(state, "So revenue per seat fell", 2700.0)
    assert directive.kind == "WRAP_UP"
    assert directive.done and directive.incomplete
    assert state.phase_id == "WRAP_UP"
    assert state.transcript.metadata["incomplete"] is True


def test_segment_list_with_small_talk_keywords_advances():
    machine, state = _session()
    _jump(state, "SEGMENTS")
    directive = machine.advance(state, "Segments: weekend drivers, daily commuters, and tourists", 5.0)
    assert directive.kind == "TRANSITION"
    assert state.phase_id == "PRIORITIZE_SEGMENT"


def test_journey_with_minute_mid_sentence_advances():
    machine, state = _session()
    _jump(state, "JOURNEY")
    directive = machine.advance(
        state, "Steps: opens the app, they take a minute to search, picks a spot, drives there, and pays", 5.0
    )
    assert directive.kind == "TRANSITION"
    assert state.phase_id == "PROBLEMS"
    assert state.pause_started_at is None
