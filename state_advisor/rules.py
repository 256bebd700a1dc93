from __future__ import annotations

"""
Hand-authored scoring weights.

Layout: question id -> answer value -> {candidate id: increment}.
Pairs that are absent contribute nothing; the weights are the only knob for
recommendation quality.
"""

from typing import Dict, List, Mapping, Optional, Sequence

from loguru import logger

from .config import Candidate, Question
from .errors import ConfigurationError
from .questions import questions_by_id

RuleTable = Mapping[str, Mapping[str, Mapping[str, int]]]


SCORING_RULES: Dict[str, Dict[str, Dict[str, int]]] = {
    "projectSize": {
        "small": {"context-api": 30, "zustand": 25, "valtio": 20, "jotai": 15},
        "medium": {"zustand": 30, "jotai": 25, "redux-toolkit": 20, "react-query": 20},
        "large": {"redux-toolkit": 35, "zustand": 25, "jotai": 20},
    },
    "teamExperience": {
        "beginner": {"context-api": 25, "zustand": 20, "valtio": 20},
        "intermediate": {"zustand": 25, "redux-toolkit": 20, "jotai": 20},
        "expert": {"redux-toolkit": 25, "jotai": 20, "zustand": 15},
    },
    "stateComplexity": {
        "simple": {"context-api": 25, "zustand": 20, "valtio": 15},
        "moderate": {"zustand": 25, "jotai": 20, "redux-toolkit": 15},
        "complex": {"redux-toolkit": 30, "jotai": 20, "zustand": 15},
    },
    "primaryUse": {
        "forms": {"context-api": 15, "zustand": 15, "jotai": 10},
        "api-data": {"react-query": 35, "redux-toolkit": 20, "zustand": 15},
        "real-time": {"redux-toolkit": 25, "zustand": 20, "react-query": 20},
        "shared-state": {"redux-toolkit": 25, "zustand": 20, "jotai": 15},
    },
    "performance": {
        # "not-critical" intentionally carries no weight
        "important": {"zustand": 15, "jotai": 10, "redux-toolkit": 10},
        "critical": {"jotai": 20, "zustand": 15, "redux-toolkit": 15},
    },
    "learningCurve": {
        "gentle": {"context-api": 20, "zustand": 15, "valtio": 15},
        "willing": {"redux-toolkit": 15, "jotai": 10, "zustand": 10},
    },
}


def lookup_increments(rules: RuleTable, question_id: str, value: str) -> Mapping[str, int]:
    """Increments for one answer; empty mapping when the pair has no rule."""
    return rules.get(question_id, {}).get(value, {})


def find_rule_problems(
    rules: RuleTable,
    catalog: Mapping[str, Candidate],
    questions: Optional[Sequence[Question]] = None,
) -> List[str]:
    """
    Collect every inconsistency between the rule table and the static data.

    Always checks that referenced candidates exist and increments are
    non-negative ints. With ``questions`` it also rejects rules keyed on
    unknown question ids or values outside a question's option set.
    """
    problems: List[str] = []
    by_id = questions_by_id(questions) if questions is not None else None

    for qid, per_value in rules.items():
        question = None
        if by_id is not None:
            question = by_id.get(qid)
            if question is None:
                problems.append(f"rule for unknown question {qid!r}")
        for value, increments in per_value.items():
            if question is not None and not question.has_option(value):
                problems.append(f"rule for unknown value {qid}={value!r}")
            for cid, inc in increments.items():
                if cid not in catalog:
                    problems.append(f"{qid}={value} references unknown candidate {cid!r}")
                # bool is an int subclass; reject it explicitly
                if isinstance(inc, bool) or not isinstance(inc, int):
                    problems.append(f"{qid}={value} -> {cid}: increment {inc!r} is not an integer")
                elif inc < 0:
                    problems.append(f"{qid}={value} -> {cid}: negative increment {inc}")
    return problems


def validate_rule_table(
    rules: RuleTable,
    catalog: Mapping[str, Candidate],
    questions: Optional[Sequence[Question]] = None,
) -> None:
    """Raise ConfigurationError if the rule table does not fit the catalog."""
    problems = find_rule_problems(rules, catalog, questions)
    if problems:
        logger.error("Scoring rule table is inconsistent ({} problems)", len(problems))
        raise ConfigurationError("Scoring rule table is inconsistent", problems)
    logger.debug("Scoring rule table validated: {} questions", len(rules))


def max_attainable_scores(rules: RuleTable, catalog: Mapping[str, Candidate]) -> Dict[str, int]:
    """
    Best raw score each candidate can reach with one answer per question.
    Used to sanity-check the normalization constant.
    """
    best: Dict[str, int] = {cid: 0 for cid in catalog}
    for per_value in rules.values():
        for cid in best:
            best[cid] += max((inc.get(cid, 0) for inc in per_value.values()), default=0)
    return best
