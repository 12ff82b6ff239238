import copy

import pytest

from catalog.questions import get_question
from config.errors import ConfigurationError
from rubrics.pm import PRODUCT_SENSE
from rubrics.store import assessment_rubric_for, get_rubric, load_rubrics, registered_types


def test_execution_is_an_alias():
    assert get_rubric("execution") is get_rubric("analytical-thinking")
    assert get_rubric(" Product-Sense ") is get_rubric("product-sense")


def test_missing_rubric_is_none():
    assert get_rubric("profitability") is None
    assert get_rubric("growth-hacking") is None


def test_registered_rubrics_are_well_formed():
    for question_type in registered_types():
        rubric = get_rubric(question_type)
        assert sum(d.weight for d in rubric.dimensions) == 100
        assert all(d.excellence_indicators for d in rubric.dimensions)


def test_weights_must_total_100():
    raw = copy.deepcopy(PRODUCT_SENSE)
    raw["dimensions"][0]["weight"] = 5
    with pytest.raises(ConfigurationError):
        load_rubrics([raw])


def test_level_five_is_required():
    raw = copy.deepcopy(PRODUCT_SENSE)
    del raw["dimensions"][1]["scoring_criteria"][5]
    with pytest.raises(ConfigurationError):
        load_rubrics([raw])


def test_consulting_questions_are_graded_with_case_rubric():
    rubric = assessment_rubric_for(get_question("mck-profit-airline"))
    assert rubric.question_type == "case-interview"
    assert {d.name: d.weight for d in rubric.dimensions} == {
        "Structure": 25,
        "Problem Solving": 20,
        "Business Judgment": 20,
        "Communication": 15,
        "Quantitative Rigor": 10,
        "Creativity": 10,
    }
    assert assessment_rubric_for(get_question("google-maps-parking")).question_type == "product-sense"


def test_product_sense_has_calibrated_example():
    rubric = get_rubric("product-sense")
    assert rubric.calibrated_examples
    assert 0 <= rubric.calibrated_examples[0].overall_score <= 5
