from fastapi.testclient import TestClient

from state_advisor.api import app, sessions
from state_advisor.errors import ConfigurationError


client = TestClient(app)

SMALL_BEGINNER = {
    "projectSize": "small",
    "teamExperience": "beginner",
    "stateComplexity": "simple",
    "primaryUse": "forms",
    "performance": "not-critical",
    "learningCurve": "gentle",
}


def test_health_endpoint():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_questions_and_solutions():
    qs = client.get("/questions").json()
    assert [q["id"] for q in qs][0] == "projectSize"
    assert len(qs) == 6

    sols = client.get("/solutions").json()
    assert [s["id"] for s in sols] == ["redux-toolkit", "zustand", "context-api", "jotai", "react-query", "valtio"]

    one = client.get("/solutions/jotai")
    assert one.status_code == 200
    assert one.json()["name"] == "Jotai"
    assert client.get("/solutions/mobx").status_code == 404


def test_recommend_returns_ranked_top3():
    resp = client.post("/recommend", json={"answers": SMALL_BEGINNER})
    assert resp.status_code == 200
    recs = resp.json()["recommendations"]
    assert [r["id"] for r in recs] == ["context-api", "zustand", "valtio"]
    assert [r["score"] for r in recs] == [58, 48, 35]
    first = recs[0]
    for key in ("name", "description", "pros", "cons", "best_for", "difficulty",
                "performance", "learning_curve", "installation", "code_example", "rank"):
        assert key in first


def test_recommend_is_lenient_by_default():
    resp = client.post("/recommend", json={"answers": {"primaryUse": "api-data", "projectSize": "??"}})
    assert resp.status_code == 200
    assert resp.json()["recommendations"][0]["id"] == "react-query"


def test_recommend_strict_and_top_n_validation():
    resp = client.post("/recommend", json={"answers": {"projectSize": "??"}, "strict": True})
    assert resp.status_code == 422

    assert client.post("/recommend", json={"answers": SMALL_BEGINNER, "top_n": 0}).status_code == 422
    assert client.post("/recommend", json={"answers": SMALL_BEGINNER, "top_n": 7}).status_code == 422

    resp = client.post("/recommend", json={"answers": SMALL_BEGINNER, "top_n": 6})
    assert len(resp.json()["recommendations"]) == 6


def test_recommend_configuration_error_is_500(monkeypatch):
    def broken(*args, **kwargs):
        raise ConfigurationError("broken table", ["mobx"])

    monkeypatch.setattr("state_advisor.api.run_recommend", broken)
    resp = client.post("/recommend", json={"answers": SMALL_BEGINNER})
    assert resp.status_code == 500


def test_session_walkthrough():
    resp = client.post("/sessions")
    assert resp.status_code == 201
    state = resp.json()
    sid = state["session_id"]
    assert state["step"] == 0
    assert state["question"]["id"] == "projectSize"

    # wrong question for the current step
    bad = client.post(f"/sessions/{sid}/answer", json={"question_id": "primaryUse", "value": "forms"})
    assert bad.status_code == 422

    for qid, value in SMALL_BEGINNER.items():
        resp = client.post(f"/sessions/{sid}/answer", json={"question_id": qid, "value": value})
        assert resp.status_code == 200
    state = resp.json()
    assert state["complete"] is True
    assert state["progress"] == 100
    assert [r["id"] for r in state["recommendations"]] == ["context-api", "zustand", "valtio"]

    again = client.post(f"/sessions/{sid}/answer", json={"question_id": "learningCurve", "value": "willing"})
    assert again.status_code == 409
    assert client.post(f"/sessions/{sid}/back").status_code == 409

    reset = client.post(f"/sessions/{sid}/reset").json()
    assert reset["step"] == 0 and reset["answers"] == {}

    assert client.get(f"/sessions/{sid}").status_code == 200
    assert client.delete(f"/sessions/{sid}").status_code == 204
    assert client.get(f"/sessions/{sid}").status_code == 404


def test_session_back_and_unknown_session():
    sid = client.post("/sessions").json()["session_id"]
    client.post(f"/sessions/{sid}/answer", json={"question_id": "projectSize", "value": "large"})
    state = client.post(f"/sessions/{sid}/back").json()
    assert state["step"] == 0
    assert state["answers"] == {"projectSize": "large"}

    assert client.post("/sessions/nope/back").status_code == 404
    assert client.delete("/sessions/nope").status_code == 404


def test_session_store_evicts_oldest(monkeypatch):
    monkeypatch.setattr(sessions, "_max", 2)
    first = client.post("/sessions").json()["session_id"]
    client.post("/sessions")
    client.post("/sessions")
    assert len(sessions) <= 2
    assert client.get(f"/sessions/{first}").status_code == 404


def test_session_engine_failure_is_500_and_retryable(monkeypatch):
    sid = client.post("/sessions").json()["session_id"]
    items = list(SMALL_BEGINNER.items())
    for qid, value in items[:-1]:
        client.post(f"/sessions/{sid}/answer", json={"question_id": qid, "value": value})

    def broken(*args, **kwargs):
        raise ConfigurationError("broken table", ["mobx"])

    qid, value = items[-1]
    with monkeypatch.context() as m:
        m.setattr("state_advisor.api.run_recommend", broken)
        resp = client.post(f"/sessions/{sid}/answer", json={"question_id": qid, "value": value})
    assert resp.status_code == 500

    state = client.get(f"/sessions/{sid}").json()
    assert state["complete"] is False
    assert state["question"]["id"] == qid

    resp = client.post(f"/sessions/{sid}/answer", json={"question_id": qid, "value": value})
    assert resp.status_code == 200
    assert [r["id"] for r in resp.json()["recommendations"]] == ["context-api", "zustand", "valtio"]


def test_session_lock_is_held_during_a_transition():
    sid = client.post("/sessions").json()["session_id"]
    lock = sessions.lock_for(sid)
    with sessions.locked(sid) as flow:
        assert flow.step == 0
        assert not lock.acquire(blocking=False)
    assert lock.acquire(blocking=False)
    lock.release()
    assert client.delete(f"/sessions/{sid}").status_code == 204
