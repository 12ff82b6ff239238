from graph.phases import CONSULTING, PRODUCT_SENSE
from agents.entity_extractor import (
    CHOICE,
    COUNT_CLAIM,
    OFF_TOPIC,
    REASON,
    SKIP,
    THINK,
    UNCLEAR,
    Entity,
    HeuristicExtractor,
    control_signals,
    heuristic_content,
    split_items,
)
from config.registry import EXTRACT_KEY, bind_model

SEGMENTS = PRODUCT_SENSE.phase(PRODUCT_SENSE.index_of("SEGMENTS"))
PRIORITIZE = PRODUCT_SENSE.phase(PRODUCT_SENSE.index_of("PRIORITIZE_SEGMENT"))


def test_split_items_handles_enumerations():
    assert split_items("I see three segments: daily commuters, students, and tourists") == [
        "daily commuters",
        "students",
        "tourists",
    ]
    assert split_items("commuters; commuters or delivery drivers") == ["commuters", "delivery drivers"]


def test_control_signals():
    kinds = lambda text: {e.kind for e in control_signals(text)}  # noqa: E731
    assert kinds("Let me think for a second") == {THINK}
    assert kinds("[inaudible] parking") == {UNCLEAR}
    assert kinds("...") == {UNCLEAR}
    assert kinds("Can we skip this one?") == {SKIP}
    assert kinds("How was your weekend?") == {OFF_TOPIC}
    claims = [e for e in control_signals("There are three main problems here") if e.kind == COUNT_CLAIM]
    assert claims == [Entity(kind=COUNT_CLAIM, value="problems", count=3)]


def test_choice_with_reasons():
    found = heuristic_content("I'd focus on commuters because they park daily and the pain is highest", PRIORITIZE)
    assert Entity(kind=CHOICE, value="commuters") in found
    assert {e.value for e in found if e.kind == REASON} == {"they park daily", "pain is highest"}


def test_number_and_statement_modes():
    quant = CONSULTING.phase(CONSULTING.index_of("QUANT_ANALYSIS"))
    found = heuristic_content("So revenue falls by 12 million, roughly 8%", quant)
    assert {e.value for e in found} == {"12 million", "8 %"}
    intro = PRODUCT_SENSE.phase(0)
    assert heuristic_content("ok", intro) == set()
    assert {e.kind for e in heuristic_content("Sure, that makes sense", intro)} == {"acknowledged"}


def test_bound_model_supplies_content():
    calls = []

    def fake(**kwargs):
        calls.append(kwargs)
        return {"entities": [{"kind": "segment", "value": " Commuters "}]}

    bind_model(EXTRACT_KEY, fake)
    found = HeuristicExtractor().extract_entities("Commuters mostly", SEGMENTS)
    assert found == {Entity(kind="segment", value="commuters")}
    assert calls[0]["inputs"]["phase"]["id"] == "SEGMENTS"


def test_control_signals_skip_the_model():
    calls = []
    bind_model(EXTRACT_KEY, lambda **kwargs: calls.append(kwargs) or {"entities": []})
    found = HeuristicExtractor().extract_entities("[inaudible]", SEGMENTS)
    assert {e.kind for e in found} == {UNCLEAR}
    assert calls == []


def test_invalid_model_output_falls_back_to_heuristics():
    bind_model(EXTRACT_KEY, lambda **kwargs: {"entities": [{"kind": ""}]})
    found = HeuristicExtractor().extract_entities("Segments: commuters, students", SEGMENTS)
    assert {e.value for e in found} == {"commuters", "students"}


def test_gateway_failure_falls_back_to_heuristics():
    def boom(**kwargs):
        raise RuntimeError("gateway down")

    bind_model(EXTRACT_KEY, boom)
    found = HeuristicExtractor().extract_entities("Segments: commuters, students", SEGMENTS)
    assert {e.value for e in found} == {"commuters", "students"}


def test_keywords_inside_answers_are_not_asides():
    extractor = HeuristicExtractor()
    found = extractor.extract_entities("Segments: weekend drivers, daily commuters, and tourists", SEGMENTS)
    assert {e.kind for e in found} == {"segment"}
    assert {e.value for e in found} == {"weekend drivers", "daily commuters", "tourists"}

    journey = PRODUCT_SENSE.phase(PRODUCT_SENSE.index_of("JOURNEY"))
    steps = extractor.extract_entities(
        "Steps: opens the app, they take a minute to search, picks a spot, drives there, and pays", journey
    )
    assert THINK not in {e.kind for e in steps}
    assert len([e for e in steps if e.kind == "step"]) == 5
    assert THINK not in {e.kind for e in control_signals("We have a second segment worth a look")}


def test_answer_outranks_a_leading_aside():
    found = HeuristicExtractor().extract_entities(
        "How was your weekend? Anyway segments: commuters, students, tourists", SEGMENTS
    )
    assert OFF_TOPIC not in {e.kind for e in found}
    assert {"commuters", "students", "tourists"} <= {e.value for e in found}


def test_pure_asides_are_not_list_items():
    extractor = HeuristicExtractor()
    assert {e.kind for e in extractor.extract_entities("Let me think for a second", SEGMENTS)} == {THINK}
    assert {e.kind for e in extractor.extract_entities("How was your weekend?", SEGMENTS)} == {OFF_TOPIC}
