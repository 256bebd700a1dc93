from __future__ import annotations
"""
Mapping utilities to convert ranked candidate ids into API responses.

Centralises the join between the ranking output and the catalog metadata
(Recommendation / RecommendResponse) and the raw score -> match percentage
conversion, so the API, the CLI and the batch runner render identically.
"""

import math
from typing import List, Mapping, Sequence

from loguru import logger

from .config import (
    Candidate,
    Recommendation,
    RecommendResponse,
    MATCH_SCORE_MAX,
    MATCH_SCORE_NORMALIZER,
)
from .errors import ConfigurationError
from .pipeline_types import ScoredCandidate


def match_percentage(raw_score: int, normalizer: int = MATCH_SCORE_NORMALIZER) -> int:
    """
    Convert an accumulated score into a percentage in [0, MATCH_SCORE_MAX].

    Rounds half up (12.5 -> 13) and clamps rather than wrapping when the raw
    score exceeds the normalizer.
    """
    if normalizer <= 0:
        raise ValueError(f"normalizer must be positive, got {normalizer}")
    pct = math.floor(raw_score / normalizer * 100 + 0.5)
    return max(0, min(MATCH_SCORE_MAX, pct))


def _build_recommendation(cand: Candidate, scored: ScoredCandidate, normalizer: int) -> Recommendation:
    return Recommendation(
        **cand.model_dump(),
        score=match_percentage(scored.score, normalizer),
        raw_score=scored.score,
        rank=scored.rank,
    )


def map_ranked_to_recommendations(
    ranked: Sequence[ScoredCandidate],
    catalog: Mapping[str, Candidate],
    normalizer: int = MATCH_SCORE_NORMALIZER,
) -> List[Recommendation]:
    """
    Join ranked entries with catalog metadata, preserving rank order.

    A ranked id that is not in the catalog means the static data is broken;
    it is raised, never skipped.
    """
    missing = [s.candidate_id for s in ranked if s.candidate_id not in catalog]
    if missing:
        raise ConfigurationError("Ranked candidates missing from catalog", missing)

    items = [_build_recommendation(catalog[s.candidate_id], s, normalizer) for s in ranked]
    logger.info("Mapped {} candidates into recommendations", len(items))
    return items


def to_response(recommendations: Sequence[Recommendation]) -> RecommendResponse:
    return RecommendResponse(recommendations=list(recommendations))
