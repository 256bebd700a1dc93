"""Typed containers shared across engine modules."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoredCandidate:
    """Ranked score entry for a catalog candidate, before metadata is joined."""

    candidate_id: str
    score: int
    rank: int
