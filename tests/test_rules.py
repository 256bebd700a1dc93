import pytest

from state_advisor.catalog import CATALOG
from state_advisor.config import MATCH_SCORE_NORMALIZER
from state_advisor.errors import ConfigurationError
from state_advisor.questions import QUESTIONS
from state_advisor.rules import (
    SCORING_RULES,
    find_rule_problems,
    lookup_increments,
    max_attainable_scores,
    validate_rule_table,
)
from state_advisor._singletons import get_validated_rules


def test_shipped_rule_table_is_consistent():
    assert find_rule_problems(SCORING_RULES, CATALOG, QUESTIONS) == []
    validate_rule_table(SCORING_RULES, CATALOG, QUESTIONS)
    assert get_validated_rules() is SCORING_RULES


def test_every_rule_question_is_in_question_set():
    ids = {q.id for q in QUESTIONS}
    assert set(SCORING_RULES) <= ids


def test_lookup_increments_misses_quietly():
    assert lookup_increments(SCORING_RULES, "primaryUse", "api-data")["react-query"] == 35
    assert lookup_increments(SCORING_RULES, "primaryUse", "nope") == {}
    assert lookup_increments(SCORING_RULES, "nope", "small") == {}
    assert lookup_increments(SCORING_RULES, "performance", "not-critical") == {}


def test_unknown_candidate_is_reported():
    rules = {"projectSize": {"small": {"mobx": 10, "zustand": 5}}}
    with pytest.raises(ConfigurationError) as exc:
        validate_rule_table(rules, CATALOG)
    assert "mobx" in str(exc.value)
    assert len(exc.value.problems) == 1


def test_bad_increments_are_reported():
    rules = {"projectSize": {"small": {"zustand": -5, "jotai": 1.5, "valtio": True}}}
    problems = find_rule_problems(rules, CATALOG)
    assert len(problems) == 3
    assert any("negative" in p for p in problems)


def test_unknown_question_and_value_only_checked_with_questions():
    rules = {"framework": {"vue": {"zustand": 5}}, "projectSize": {"huge": {"zustand": 5}}}
    assert find_rule_problems(rules, CATALOG) == []
    problems = find_rule_problems(rules, CATALOG, QUESTIONS)
    assert "rule for unknown question 'framework'" in problems
    assert "rule for unknown value projectSize='huge'" in problems


def test_max_attainable_scores_stay_below_normalizer():
    best = max_attainable_scores(SCORING_RULES, CATALOG)
    assert best["redux-toolkit"] == 145
    assert best["context-api"] == 115
    assert max(best.values()) < MATCH_SCORE_NORMALIZER


def test_validated_rules_warn_when_normalizer_is_too_small(monkeypatch):
    from loguru import logger

    from state_advisor import config

    messages = []
    sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    monkeypatch.setattr(config, "MATCH_SCORE_NORMALIZER", 100)
    get_validated_rules.cache_clear()
    try:
        assert get_validated_rules() is SCORING_RULES
    finally:
        logger.remove(sink_id)
        get_validated_rules.cache_clear()
    assert any("redux-toolkit can reach raw score 145" in m for m in messages)
