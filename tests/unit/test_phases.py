import pytest
from pydantic import ValidationError

from catalog.models import Question
from catalog.questions import get_question
from graph.phases import CONSULTING, PRODUCT_SENSE, ExitCriterion, PhaseSpec, ProtocolSpec, protocol_for


def test_canonical_consulting_phases():
    assert [p.id for p in CONSULTING.phases] == [
        "INTRO",
        "FRAMEWORK",
        "QUANT_ANALYSIS",
        "QUAL_ANALYSIS",
        "RECOMMENDATION",
        "WRAP_UP",
    ]


def test_canonical_product_sense_phases():
    assert [p.id for p in PRODUCT_SENSE.phases] == [
        "INTRO",
        "MISSION",
        "ECOSYSTEM",
        "SEGMENTS",
        "PRIORITIZE_SEGMENT",
        "PERSONA",
        "JOURNEY",
        "PROBLEMS",
        "PRIORITIZE_PROBLEM",
        "SOLUTIONS",
        "PRIORITIZE_SOLUTION",
        "MVP",
        "RISKS",
        "WRAP_UP",
    ]
    segments = PRODUCT_SENSE.phase(PRODUCT_SENSE.index_of("SEGMENTS"))
    assert segments.criterion.min_items == 3
    prioritize = PRODUCT_SENSE.phase(PRODUCT_SENSE.index_of("PRIORITIZE_SEGMENT"))
    assert prioritize.requires_challenge and prioritize.alternatives_from == "SEGMENTS"


def test_protocol_selection():
    assert protocol_for(get_question("mck-profit-airline")).name == "consulting-case"
    assert protocol_for(get_question("meta-metrics-groups")).name == "analytical-thinking"
    assert protocol_for(get_question("amazon-behavioral-conflict")).name == "behavioral"
    odd = Question(id="x", track="product-management", type="pricing", title="t", description="d")
    assert protocol_for(odd).name == "generic"


def test_choice_criterion_needs_reasons():
    criterion = ExitCriterion(mode="choice", category="choice", min_reasons=2)
    assert not criterion.satisfied({"choice": ["commuters"], "reason": ["reach"]})
    assert criterion.satisfied({"choice": ["commuters"], "reason": ["reach", "pain"]})


def _phase(phase_id, **extra):
    data = dict(
        id=phase_id,
        title=phase_id.title(),
        prompt="Go.",
        criterion=ExitCriterion(mode="statement", category="summary"),
        transitions=["Next."],
        focus="this",
    )
    data.update(extra)
    return PhaseSpec(**data)


def test_protocol_must_end_in_wrap_up():
    with pytest.raises(ValidationError):
        ProtocolSpec(name="bad", phases=[_phase("INTRO"), _phase("OUTRO")])


def test_challenge_phase_needs_choice_criterion():
    with pytest.raises(ValidationError):
        _phase("PICK", requires_challenge=True)


def test_every_choice_phase_is_challenged():
    from graph.phases import PROTOCOLS

    for protocol in PROTOCOLS.values():
        for phase in protocol.phases:
            if phase.criterion.mode == "choice":
                assert phase.requires_challenge, (protocol.name, phase.id)
    solution = PRODUCT_SENSE.phase(PRODUCT_SENSE.index_of("PRIORITIZE_SOLUTION"))
    assert solution.requires_challenge and solution.alternatives_from == "SOLUTIONS"


def test_unchallenged_choice_phase_is_rejected():
    pick = _phase("PICK", criterion=ExitCriterion(mode="choice", category="choice"))
    with pytest.raises(ValidationError):
        ProtocolSpec(name="bad", phases=[_phase("INTRO"), pick, _phase("WRAP_UP")])
