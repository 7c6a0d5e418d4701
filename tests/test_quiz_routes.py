"""HTTP-level tests for the quiz router and error mapping."""

import json
import uuid

import pytest

from app.core.errors import UpstreamError
from app.models.quiz_db.quiz_db import Quiz
from conftest import QUESTION_A, QUESTION_B


def generate(client, auth_headers, **body):
    payload = {"topic": "space", "num_questions": 2}
    payload.update(body)
    return client.post("/quiz/generate", json=payload, headers=auth_headers)


def test_generate_returns_session_details(client, auth_headers, fake_llm):
    fake_llm.output = "```json\n" + json.dumps([QUESTION_A, QUESTION_B]) + "\n```"

    response = generate(client, auth_headers, duration=15, question_configs=[{"points": 5}])

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["question_count"] == 2
    assert body["total_points"] == 15
    assert body["dropped_questions"] == 0
    assert len(body["join_code"]) == 6
    assert body["message"] == "ai quiz generated successfully"


def test_generate_requires_authentication(client, fake_llm):
    response = client.post("/quiz/generate", json={"topic": "space", "num_questions": 2})
    assert response.status_code == 401
    assert fake_llm.calls == []


@pytest.mark.parametrize(
    "output, error, status_code, code",
    [
        ("no structure at all", None, 502, "parse_failure"),
        (json.dumps([{"question_text": "A", "options": ["a"]}]), None, 422, "validation_exhausted"),
        ("", UpstreamError("generative backend unreachable"), 502, "upstream_error"),
    ],
)
def test_generate_failures_are_mapped(client, auth_headers, fake_llm, session_factory,
                                      output, error, status_code, code):
    fake_llm.output = output
    fake_llm.error = error

    response = generate(client, auth_headers)

    assert response.status_code == status_code
    assert response.json()["error"] == code
    with session_factory() as db:
        assert db.query(Quiz).count() == 0


def test_parse_failure_does_not_leak_raw_text(client, auth_headers, fake_llm):
    fake_llm.output = "secret model rambling"
    response = generate(client, auth_headers)
    assert "secret model rambling" not in response.text


@pytest.mark.parametrize("body", [{"topic": ""}, {"num_questions": None}, {"num_questions": 0}, {"topic": 5}])
def test_generate_input_errors(client, auth_headers, fake_llm, body):
    response = generate(client, auth_headers, **body)
    assert response.status_code == 400
    assert response.json()["error"] == "input_error"
    assert fake_llm.calls == []


def test_join_code_capacity_maps_to_503(client, auth_headers, fake_llm, monkeypatch):
    monkeypatch.setattr("app.services.session_policy.join_code_in_use", lambda session, code: True)
    fake_llm.output = json.dumps([QUESTION_A])
    response = generate(client, auth_headers)
    assert response.status_code == 503
    assert response.json()["error"] == "join_code_capacity"


def test_published_quiz_can_be_read_and_rehosted(client, auth_headers, fake_llm):
    fake_llm.output = json.dumps([QUESTION_A, QUESTION_B])
    hosted = generate(client, auth_headers, duration=12).json()
    quiz_id = hosted["quiz_id"]

    quiz = client.get(f"/quiz/{quiz_id}").json()
    assert quiz["status"] == "published"
    assert [q["question_text"] for q in quiz["questions"]] == ["A", "B"]
    assert all(q["question_type"] == "multiple-choice" for q in quiz["questions"])

    rehosted = client.post(f"/quiz/{quiz_id}/rehost", headers=auth_headers)
    assert rehosted.status_code == 201
    assert rehosted.json()["quiz_id"] == quiz_id
    assert rehosted.json()["session_id"] != hosted["session_id"]
    assert rehosted.json()["join_code"] != hosted["join_code"]

    sessions = client.get(f"/quiz/{quiz_id}/sessions").json()
    assert {s["id"] for s in sessions} == {hosted["session_id"], rehosted.json()["session_id"]}
    assert all(s["is_active"] for s in sessions)


def test_unknown_quiz_is_404(client, auth_headers):
    missing = uuid.uuid4()
    assert client.get(f"/quiz/{missing}").status_code == 404
    response = client.post(f"/quiz/{missing}/rehost", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_mine_lists_only_published_quizzes(client, auth_headers, fake_llm):
    fake_llm.output = json.dumps([QUESTION_A])
    generate(client, auth_headers, topic="oceans")
    fake_llm.output = "garbage"
    generate(client, auth_headers, topic="deserts")

    response = client.get("/quiz/mine", headers=auth_headers)
    assert response.status_code == 200
    assert [q["title"] for q in response.json()] == ["ai quiz on oceans"]


def test_manual_quiz_creation(client, auth_headers):
    response = client.post(
        "/quiz/",
        json={
            "title": "Capitals",
            "duration": 5,
            "questions": [
                {"question_text": "France?", "options": ["Paris", "Rome", "Oslo", "Bern"],
                 "correct_answer": "Paris", "points": 2},
            ],
        },
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.json()["total_points"] == 2
    assert response.json()["message"] == "quiz created successfully"


def test_manual_quiz_rejects_answer_outside_options(client, auth_headers):
    response = client.post(
        "/quiz/",
        json={
            "title": "Capitals",
            "questions": [
                {"question_text": "France?", "options": ["Paris", "Rome", "Oslo", "Bern"],
                 "correct_answer": "Lyon"},
            ],
        },
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "input_error"


@pytest.mark.parametrize(
    "question",
    [
        {"question_text": "Pick b", "options": ["a", "a", "b", "c"], "correct_answer": "b"},
        {"question_text": "Pick b", "options": ["a", " ", "b", "c"], "correct_answer": "b"},
        {"question_text": "   ", "options": ["a", "b", "c", "d"], "correct_answer": "b"},
    ],
)
def test_manual_quiz_rejects_questions_that_would_be_rewritten(client, auth_headers, session_factory, question):
    response = client.post("/quiz/", json={"title": "Letters", "questions": [question]}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "input_error"
    with session_factory() as db:
        assert db.query(Quiz).count() == 0
