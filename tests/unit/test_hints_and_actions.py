import random

from catalog.questions import get_question
from agents import hint_agent
from agents.persona_manager import apply_persona
from config.registry import POLISH_KEY, bind_model
from graph.phases import PRODUCT_SENSE
from services import qa_policy
from services.avatars import AvatarSelector
from services.sessions import start_session


class FirstChoice:
    def choice(self, seq):
        return seq[0]


def _state():
    state, _ = start_session(get_question("google-maps-parking"), now=0.0)
    return state


def test_static_hints_narrow_with_level():
    phase = PRODUCT_SENSE.phase(PRODUCT_SENSE.index_of("SEGMENTS"))
    assert hint_agent.static_hint(phase, 1) == "Step back and think about what the user segments needs to cover."
    assert hint_agent.static_hint(phase, 2) == (
        "It might help to consider how users differ in their motivation or context."
    )
    assert "3 distinct user segments" in hint_agent.static_hint(phase, 3)


def test_hint_without_model_uses_static_text():
    state = _state()
    hint = hint_agent.run(state, state.question, state.phase, 9)
    assert hint.startswith("Here's a nudge: Interviewers look for")
    assert state.mem["hint_level"] == 3
    assert state.mem["hints"]["INTRO"] == [hint]


def test_hint_with_model(fake_models):
    state = _state()
    assert hint_agent.run(state, state.question, state.phase, 2) == "Here's a nudge: Level 2 hint."


def test_quick_actions_follow_session_state():
    state = _state()
    assert qa_policy.row(state) == ["hint", "think", "skip"]
    for level in (1, 2, 3):
        hint_agent.run(state, state.question, state.phase, level)
    assert qa_policy.remaining_hints(state) == 0
    assert qa_policy.row(state) == ["think", "skip"]

    state.phase_index = state.spec.terminal_index
    assert qa_policy.row(state) == ["hint", "think"]
    state.done = True
    assert qa_policy.row(state) == []


def test_persona_templates_and_trimming():
    assert apply_persona("One. Two. Three. Four.") == "One. Two. Three."
    assert apply_persona("Think about reach.", purpose="hint") == "Here's a nudge: Think about reach."
    assert apply_persona("Scores follow.", persona="Firm Evaluator", purpose="wrapup") == (
        "That concludes the interview. Scores follow."
    )


def test_persona_polish_uses_model_and_survives_failure():
    bind_model(POLISH_KEY, lambda **kwargs: {"text": "Polished line. Extra. More. Too much."})
    assert apply_persona("Raw line.", use_llm=True) == "Polished line. Extra. More."

    def boom(**kwargs):
        raise RuntimeError("down")

    bind_model(POLISH_KEY, boom)
    assert apply_persona("Raw line.", use_llm=True) == "Raw line."


def test_avatar_selection():
    selector = AvatarSelector(FirstChoice(), interviewer_ids=["a", "b"], candidate_ids=["a", "c"])
    assert selector.pick(["x", "y"]) == "x"
    assert selector.pick([]) is None
    assert selector.pick_pair() == ("a", "c")
    assert AvatarSelector(FirstChoice(), interviewer_ids=["a"], candidate_ids=["a"]).pick_pair() is None
    assert AvatarSelector(FirstChoice(), interviewer_ids=[], candidate_ids=["a"]).pick_pair() is None


def test_learn_pairs_are_always_distinct():
    selector = AvatarSelector(random.Random(5), interviewer_ids=["a", "b", "c"], candidate_ids=["a", "b", "c"])
    for _ in range(30):
        interviewer, candidate = selector.pick_pair()
        assert interviewer != candidate
