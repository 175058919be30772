"""Tests for the public /api/games statistics routes."""

from __future__ import annotations

from fastapi.testclient import TestClient


def _save(client: TestClient, **fields) -> str:
    res = client.post("/api/games/stats", json=fields)
    assert res.status_code == 201, res.text
    return res.json()["session_id"]


def test_save_applies_defaults(client: TestClient) -> None:
    session_id = _save(client)

    session = client.get("/api/games/stats", params={"sessionId": session_id}).json()

    assert session["game_type"] == "shimozurdo"
    assert session["score"] == 0
    assert session["vocabulary"] == []
    assert session["start_time"] is not None


def test_unknown_session_is_404(client: TestClient) -> None:
    res = client.get("/api/games/stats", params={"sessionId": "65f1c0ffee0123456789abcd"})
    assert res.status_code == 404
    assert res.json() == {"error": "Game session not found"}


def test_sessions_for_user(client: TestClient) -> None:
    _save(client, user_id="u1", score=10)
    _save(client, user_id="u1", score=20)
    _save(client, user_id="u2", score=30)

    sessions = client.get("/api/games/stats", params={"userId": "u1"}).json()

    assert sorted(s["score"] for s in sessions) == [10, 20]


def test_overall_stats(client: TestClient) -> None:
    _save(client, score=50, questions_answered=10, correct_answers=8)
    _save(client, score=70, questions_answered=10, correct_answers=4)

    stats = client.get("/api/games/stats").json()

    assert stats == {
        "total_sessions": 2,
        "average_score": 60.0,
        "total_questions": 20,
        "overall_accuracy": 60.0,
    }


def test_overall_stats_empty(client: TestClient) -> None:
    stats = client.get("/api/games/stats").json()
    assert stats["total_sessions"] == 0
    assert stats["overall_accuracy"] == 0


def test_update_session(client: TestClient) -> None:
    session_id = _save(client, score=5)

    res = client.put(f"/api/games/stats/{session_id}", json={"score": 95, "correct_answers": 9})

    assert res.status_code == 200, res.text
    session = res.json()["session"]
    assert session["score"] == 95
    assert session["correct_answers"] == 9


def test_update_missing_session_is_404(client: TestClient) -> None:
    res = client.put("/api/games/stats/65f1c0ffee0123456789abcd", json={"score": 1})
    assert res.status_code == 404


def test_null_score_is_rejected(client: TestClient) -> None:
    session_id = _save(client, score=5)

    res = client.put(f"/api/games/stats/{session_id}", json={"score": None})

    assert res.status_code == 400
    session = client.get("/api/games/stats", params={"sessionId": session_id})
    assert session.status_code == 200
    assert session.json()["score"] == 5


def test_null_end_time_is_allowed(client: TestClient) -> None:
    session_id = _save(client)
    res = client.put(f"/api/games/stats/{session_id}", json={"end_time": None})
    assert res.status_code == 200, res.text
    assert res.json()["session"]["end_time"] is None
