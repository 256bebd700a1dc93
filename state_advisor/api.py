from __future__ import annotations

"""
FastAPI application for the state management advisor.

- Static data (questions, catalog) served as-is
- POST /recommend scores a full answer set in one call
- /sessions drives the questionnaire one answer at a time; sessions live in
  process memory only and the oldest is evicted past MAX_SESSIONS
"""

import threading
import uuid
from collections import OrderedDict
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel, Field

from . import config
from ._singletons import get_validated_rules
from .catalog import CATALOG, get_candidate
from .config import Candidate, FlowState, HealthResponse, Question, RecommendResponse
from .engine import recommend as run_recommend
from .errors import AnswerValidationError, ConfigurationError, FlowError
from .flow import QuestionFlow
from .logging_setup import configure_logging
from .mapping import to_response
from .questions import QUESTIONS


# -----------------------
# Request / response bodies
# -----------------------

class RecommendRequest(BaseModel):
    answers: Dict[str, str]
    top_n: Optional[int] = Field(default=None, ge=1)
    strict: bool = False


class AnswerRequest(BaseModel):
    question_id: str = Field(..., min_length=1)
    value: str = Field(..., min_length=1)


class SessionState(FlowState):
    session_id: str


# -----------------------
# Engine wiring
# -----------------------

def run_recommendation(answers: Dict[str, str], top_n: Optional[int] = None, strict: bool = False) -> RecommendResponse:
    rules = get_validated_rules()
    recs = run_recommend(answers, top_n, strict=strict, rules=rules, catalog=CATALOG)
    return to_response(recs)


def _flow_on_complete(answers: Dict[str, str]):
    return run_recommend(answers, rules=get_validated_rules(), catalog=CATALOG)


# -----------------------
# Session store
# -----------------------

class _Session:
    __slots__ = ("flow", "lock")

    def __init__(self, flow: QuestionFlow) -> None:
        self.flow = flow
        self.lock = threading.Lock()


class SessionStore:
    """
    Thread-safe, bounded, in-memory map of session id -> QuestionFlow.

    The store lock guards the map; each session has its own lock, held for
    the whole of a transition so concurrent requests on one session run one
    at a time.
    """

    def __init__(self, max_sessions: int = config.MAX_SESSIONS) -> None:
        self._max = max_sessions
        self._sessions: "OrderedDict[str, _Session]" = OrderedDict()
        self._lock = threading.Lock()

    def create(self) -> tuple[str, QuestionFlow]:
        sid = uuid.uuid4().hex
        flow = QuestionFlow(QUESTIONS, on_complete=_flow_on_complete)
        with self._lock:
            self._sessions[sid] = _Session(flow)
            while len(self._sessions) > self._max:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted questionnaire session {}", evicted)
        return sid, flow

    def _entry(self, sid: str) -> _Session:
        with self._lock:
            entry = self._sessions.get(sid)
        if entry is None:
            raise HTTPException(status_code=404, detail=f"Unknown session {sid}")
        return entry

    def lock_for(self, sid: str) -> threading.Lock:
        return self._entry(sid).lock

    @contextmanager
    def locked(self, sid: str) -> Iterator[QuestionFlow]:
        entry = self._entry(sid)
        with entry.lock:
            yield entry.flow

    def delete(self, sid: str) -> None:
        with self._lock:
            if self._sessions.pop(sid, None) is None:
                raise HTTPException(status_code=404, detail=f"Unknown session {sid}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


sessions = SessionStore()


def _session_state(sid: str, flow: QuestionFlow) -> SessionState:
    return SessionState(session_id=sid, **flow.state().model_dump())


# -----------------------
# FastAPI app + startup
# -----------------------

app = FastAPI(title="State Management Advisor")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup_event() -> None:
    configure_logging()
    logger.info("Starting app warmup...")
    # fail fast on a broken rule table instead of on the first request
    get_validated_rules()
    logger.info(
        "Loaded {} questions, {} candidates",
        len(QUESTIONS),
        len(CATALOG),
    )
    logger.info("Warmup complete.")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


@app.get("/questions", response_model=List[Question])
def list_questions() -> List[Question]:
    return list(QUESTIONS)


@app.get("/solutions", response_model=List[Candidate])
def list_solutions() -> List[Candidate]:
    return list(CATALOG.values())


@app.get("/solutions/{candidate_id}", response_model=Candidate)
def get_solution(candidate_id: str) -> Candidate:
    cand = get_candidate(candidate_id)
    if cand is None:
        raise HTTPException(status_code=404, detail=f"Unknown solution {candidate_id}")
    return cand


@app.post("/recommend", response_model=RecommendResponse)
def recommend(req: RecommendRequest) -> RecommendResponse:
    if req.top_n is not None and req.top_n > len(CATALOG):
        raise HTTPException(status_code=422, detail=f"top_n must be between 1 and {len(CATALOG)}")
    try:
        return run_recommendation(req.answers, req.top_n, req.strict)
    except AnswerValidationError as e:
        raise HTTPException(status_code=422, detail=e.problems)
    except ConfigurationError as e:
        logger.error("Configuration error while recommending: {}", e)
        raise HTTPException(status_code=500, detail="Advisor configuration is inconsistent")


@app.post("/sessions", response_model=SessionState, status_code=201)
def create_session() -> SessionState:
    sid, flow = sessions.create()
    logger.info("Started questionnaire session {}", sid)
    return _session_state(sid, flow)


@app.get("/sessions/{sid}", response_model=SessionState)
def get_session(sid: str) -> SessionState:
    with sessions.locked(sid) as flow:
        return _session_state(sid, flow)


@app.post("/sessions/{sid}/answer", response_model=SessionState)
def answer(sid: str, req: AnswerRequest) -> SessionState:
    with sessions.locked(sid) as flow:
        try:
            flow.advance(req.question_id, req.value)
        except AnswerValidationError as e:
            raise HTTPException(status_code=422, detail=e.problems)
        except FlowError as e:
            raise HTTPException(status_code=409, detail=str(e))
        except ConfigurationError as e:
            logger.error("Configuration error in session {}: {}", sid, e)
            raise HTTPException(status_code=500, detail="Advisor configuration is inconsistent")
        return _session_state(sid, flow)


@app.post("/sessions/{sid}/back", response_model=SessionState)
def back(sid: str) -> SessionState:
    with sessions.locked(sid) as flow:
        try:
            flow.back()
        except FlowError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return _session_state(sid, flow)


@app.post("/sessions/{sid}/reset", response_model=SessionState)
def reset(sid: str) -> SessionState:
    with sessions.locked(sid) as flow:
        flow.reset()
        return _session_state(sid, flow)


@app.delete("/sessions/{sid}", status_code=204)
def delete_session(sid: str) -> Response:
    sessions.delete(sid)
    return Response(status_code=204)
