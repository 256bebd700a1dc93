import pytest
from pydantic import ValidationError

from state_advisor.config import (
    Candidate,
    FlowState,
    HealthResponse,
    Option,
    Question,
    Recommendation,
    RecommendResponse,
)


def _candidate(**overrides):
    data = dict(
        id="x",
        name="X",
        description="Desc",
        pros=["fast"],
        cons=["new"],
        best_for=["tests"],
        difficulty="Easy",
        performance="Good",
        learning_curve="Gentle",
        installation="npm install x",
    )
    data.update(overrides)
    return Candidate(**data)


def test_candidate_is_immutable():
    cand = _candidate()
    with pytest.raises(ValidationError):
        cand.name = "Y"


def test_question_option_helpers():
    q = Question(
        id="q",
        prompt="Pick one",
        options=[Option(value="a", label="A"), Option(value="b", label="B", emoji="🅱")],
    )
    assert q.option_values() == ["a", "b"]
    assert q.has_option("b")
    assert not q.has_option("c")


def test_recommendation_score_bounds():
    base = _candidate().model_dump()
    rec = Recommendation(**base, score=100, raw_score=250, rank=1)
    assert rec.score == 100

    with pytest.raises(ValidationError):
        Recommendation(**base, score=101, raw_score=0, rank=1)
    with pytest.raises(ValidationError):
        Recommendation(**base, score=-1, raw_score=0, rank=1)
    with pytest.raises(ValidationError):
        Recommendation(**base, score=10, raw_score=0, rank=0)


def test_recommend_response_structure():
    rec = Recommendation(**_candidate().model_dump(), score=50, raw_score=100, rank=1)
    resp = RecommendResponse(recommendations=[rec])
    assert len(resp.recommendations) == 1
    assert resp.model_dump()["recommendations"][0]["id"] == "x"


def test_flow_state_defaults():
    state = FlowState(step=0, total=6, progress=17)
    assert state.answers == {}
    assert state.recommendations == []
    assert state.complete is False
    assert state.question is None


def test_health_response():
    health = HealthResponse(status="healthy")
    assert health.status == "healthy"
