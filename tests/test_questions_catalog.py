import pytest

from state_advisor.catalog import CATALOG, build_catalog, candidate_ids, get_candidate
from state_advisor.questions import QUESTIONS, get_question, question_ids, questions_by_id, valid_values


def test_catalog_canonical_order():
    assert candidate_ids() == ["redux-toolkit", "zustand", "context-api", "jotai", "react-query", "valtio"]


def test_catalog_entries_have_display_metadata():
    for cid, cand in CATALOG.items():
        assert cand.id == cid
        assert cand.name and cand.description and cand.installation
        assert cand.pros and cand.cons and cand.best_for
        assert cand.difficulty and cand.performance and cand.learning_curve


def test_get_candidate():
    assert get_candidate("valtio").name == "Valtio"
    assert get_candidate("mobx") is None


def test_build_catalog_rejects_duplicates():
    cand = CATALOG["zustand"]
    with pytest.raises(ValueError):
        build_catalog([cand, cand])


def test_question_set_shape():
    assert question_ids() == [
        "projectSize",
        "teamExperience",
        "stateComplexity",
        "primaryUse",
        "performance",
        "learningCurve",
    ]
    assert len(questions_by_id()) == len(QUESTIONS)
    for q in QUESTIONS:
        values = q.option_values()
        assert len(values) == len(set(values))
        assert all(o.label and o.emoji for o in q.options)


def test_valid_values_and_lookup():
    assert valid_values("primaryUse") == ["forms", "api-data", "real-time", "shared-state"]
    assert valid_values("learningCurve") == ["gentle", "willing"]
    assert valid_values("nope") == []
    assert get_question("performance").prompt.startswith("How important")
    assert get_question("nope") is None
