from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------
# Paths
# ---------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[1]

LOG_DIR = Path(os.getenv("ADVISOR_LOG_DIR", str(PROJECT_ROOT / "logs")))
LOG_FILE_NAME = "state_advisor.log"


# ---------------------------
# Result size policy
# ---------------------------

DEFAULT_TOP_N_FALLBACK = 3
DEFAULT_TOP_N = int(os.getenv("ADVISOR_TOP_N", str(DEFAULT_TOP_N_FALLBACK)))


# ---------------------------
# Match score normalization
# ---------------------------

# Raw scores are divided by this and scaled to a percentage. 200 is the
# empirical ceiling used by the questionnaire since its first release; the
# highest raw score the shipped rule table can produce is 145.
MATCH_SCORE_NORMALIZER = 200
MATCH_SCORE_MAX = 100


# ---------------------------
# Questionnaire sessions (API)
# ---------------------------

MAX_SESSIONS = int(os.getenv("ADVISOR_MAX_SESSIONS", "1000"))


# ---------------------------
# Logging / observability
# ---------------------------

LOG_LEVEL = os.getenv("ADVISOR_LOG_LEVEL", "INFO").upper()
LOG_FILE_ROTATION = "5 MB"
LOG_FILE_RETENTION = 5


# ---------------------------
# Pydantic models shared around the app
# ---------------------------

class Option(BaseModel):
    """A single selectable answer for a question."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str
    emoji: str = ""


class Question(BaseModel):
    """
    One questionnaire step. ``id`` is the key used in answer sets and in the
    scoring rule table.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    prompt: str
    options: List[Option]

    def option_values(self) -> List[str]:
        return [o.value for o in self.options]

    def has_option(self, value: str) -> bool:
        return any(o.value == value for o in self.options)


class Candidate(BaseModel):
    """
    Canonical schema for a recommendable state-management solution.
    Metadata only; nothing here takes part in scoring.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    pros: List[str] = Field(default_factory=list)
    cons: List[str] = Field(default_factory=list)
    best_for: List[str] = Field(default_factory=list)
    difficulty: str
    performance: str
    learning_curve: str
    installation: str
    code_example: str = ""


class Recommendation(Candidate):
    """
    A catalog candidate joined with its ranking result.

    ``score`` is the match percentage shown to users, clamped to
    [0, MATCH_SCORE_MAX]; ``raw_score`` is the accumulated rule weight.
    """

    score: int = Field(ge=0, le=MATCH_SCORE_MAX)
    raw_score: int = Field(ge=0)
    rank: int = Field(ge=1)


class RecommendResponse(BaseModel):
    """
    Response body for POST /recommend.
    """

    recommendations: List[Recommendation]


class HealthResponse(BaseModel):
    """
    Response body for GET /health.
    """

    status: str


class FlowState(BaseModel):
    """
    Snapshot of a questionnaire walk-through.

    ``question`` is None once every question has been answered, at which
    point ``recommendations`` holds the engine output.
    """

    step: int
    total: int
    progress: int
    question: Optional[Question] = None
    answers: Dict[str, str] = Field(default_factory=dict)
    complete: bool = False
    recommendations: List[Recommendation] = Field(default_factory=list)
