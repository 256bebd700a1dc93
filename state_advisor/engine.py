from __future__ import annotations

"""
Recommendation engine.

Turns an answer set (question id -> option value) into a ranked, normalized
list of catalog candidates:

  1. every catalog candidate starts at 0
  2. each answered (question, value) pair adds its rule increments
  3. sort by score desc; equal scores keep canonical catalog order
  4. keep the top N
  5. convert to a clamped match percentage and join catalog metadata

Unknown questions and values simply miss the rule table and add nothing.
Pass ``strict=True`` to reject them instead.
"""

from typing import Dict, List, Mapping, Optional, Sequence

from loguru import logger

from . import config
from .catalog import CATALOG, candidate_ids
from .config import Candidate, Question, Recommendation
from .errors import AnswerValidationError, ConfigurationError
from .mapping import map_ranked_to_recommendations
from .pipeline_types import ScoredCandidate
from .questions import QUESTIONS, questions_by_id
from .rules import SCORING_RULES, RuleTable, lookup_increments

AnswerSet = Mapping[str, str]


def init_score_table(catalog: Mapping[str, Candidate]) -> Dict[str, int]:
    return {cid: 0 for cid in catalog}


def accumulate_scores(
    answers: AnswerSet,
    rules: RuleTable,
    catalog: Mapping[str, Candidate],
) -> Dict[str, int]:
    """
    Fresh score table with every matching rule increment applied.

    An increment for a candidate outside the catalog raises
    ConfigurationError, wherever that candidate would have ranked.
    """
    scores = init_score_table(catalog)
    unknown: List[str] = []
    for qid, value in answers.items():
        increments = lookup_increments(rules, qid, value)
        if not increments:
            logger.debug("No scoring rule for {}={!r}", qid, value)
            continue
        for cid, inc in increments.items():
            if cid not in scores:
                unknown.append(f"{qid}={value} references unknown candidate {cid!r}")
                continue
            scores[cid] += inc
    if unknown:
        raise ConfigurationError("Scoring rules reference candidates missing from catalog", unknown)
    return scores


def rank_scores(scores: Mapping[str, int], catalog: Mapping[str, Candidate]) -> List[ScoredCandidate]:
    """
    Order by score descending. Ties keep catalog order; ids outside the
    catalog sort after every catalog id with the same score.
    """
    order = {cid: i for i, cid in enumerate(candidate_ids(catalog))}
    fallback = len(order)
    ids = sorted(scores, key=lambda cid: (-scores[cid], order.get(cid, fallback)))
    return [ScoredCandidate(candidate_id=cid, score=scores[cid], rank=i + 1) for i, cid in enumerate(ids)]


def find_answer_problems(
    answers: AnswerSet,
    questions: Sequence[Question] = QUESTIONS,
    require_complete: bool = True,
) -> List[str]:
    problems: List[str] = []
    by_id = questions_by_id(questions)
    for qid, value in answers.items():
        q = by_id.get(qid)
        if q is None:
            problems.append(f"unknown question {qid!r}")
        elif not q.has_option(value):
            problems.append(f"invalid value {value!r} for {qid} (expected one of {q.option_values()})")
    if require_complete:
        for q in questions:
            if q.id not in answers:
                problems.append(f"missing answer for {q.id}")
    return problems


def validate_answers(
    answers: AnswerSet,
    questions: Sequence[Question] = QUESTIONS,
    require_complete: bool = True,
) -> None:
    """Strict check; raises AnswerValidationError listing every problem."""
    problems = find_answer_problems(answers, questions, require_complete)
    if problems:
        raise AnswerValidationError(problems)


def is_complete(answers: AnswerSet, questions: Sequence[Question] = QUESTIONS) -> bool:
    return all(q.id in answers for q in questions)


def score_answers(
    answers: AnswerSet,
    rules: Optional[RuleTable] = None,
    catalog: Optional[Mapping[str, Candidate]] = None,
) -> Dict[str, int]:
    """Raw per-candidate scores for an answer set, in catalog order."""
    return accumulate_scores(
        answers,
        rules if rules is not None else SCORING_RULES,
        catalog if catalog is not None else CATALOG,
    )


def recommend(
    answers: AnswerSet,
    top_n: Optional[int] = None,
    *,
    strict: bool = False,
    rules: Optional[RuleTable] = None,
    catalog: Optional[Mapping[str, Candidate]] = None,
    questions: Sequence[Question] = QUESTIONS,
    normalizer: int = config.MATCH_SCORE_NORMALIZER,
) -> List[Recommendation]:
    """
    Rank catalog candidates for ``answers`` and return the best ``top_n``
    (default config.DEFAULT_TOP_N) as Recommendation records.

    Deterministic and side-effect free: the same answers against the same
    catalog and rules always produce the same list.
    """
    if top_n is None:
        top_n = config.DEFAULT_TOP_N
    if top_n < 1:
        raise ValueError(f"top_n must be >= 1, got {top_n}")

    rules = rules if rules is not None else SCORING_RULES
    catalog = catalog if catalog is not None else CATALOG

    if strict:
        validate_answers(answers, questions, require_complete=True)

    scores = accumulate_scores(answers, rules, catalog)
    ranked = rank_scores(scores, catalog)[:top_n]
    logger.debug(
        "Ranked {} answers -> {}",
        len(answers),
        ", ".join(f"{s.candidate_id}={s.score}" for s in ranked),
    )
    return map_ranked_to_recommendations(ranked, catalog, normalizer)
