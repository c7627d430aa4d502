from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from quild.models.progress import UserProgress
from quild.models.user import User
from tests.helpers.asserts import api_call, assert_error_body


def test_complete_lesson_then_repeat(client: TestClient, db_session: Session, auth_headers, curriculum_factory):
    curriculum = curriculum_factory([[2]])
    first, second = curriculum.all_lessons()
    headers = auth_headers("user_complete")

    response = api_call(client, "POST", f"/lesson/{first.id}/complete", headers=headers, json={"timeSpent": 12})
    body = response.json()
    assert body["message"] == "Lesson completed successfully!"
    assert body["data"]["already_completed"] is False
    assert body["data"]["points_earned"] == 10
    assert body["data"]["new_total_points"] == 10
    assert body["data"]["new_total_time_spent"] == 12
    assert body["data"]["new_streak"] == 1
    assert body["data"]["next_lesson"]["id"] == second.id

    response = api_call(client, "POST", f"/lesson/{first.id}/complete", headers=headers, json={"timeSpent": 12})
    body = response.json()
    assert body["message"] == "Lesson already completed"
    assert body["data"]["already_completed"] is True
    assert body["data"]["new_total_points"] == 10


def test_complete_without_body_uses_duration(client: TestClient, auth_headers, curriculum_factory):
    curriculum = curriculum_factory([[1]], duration=40)

    response = api_call(client, "POST", f"/lesson/{curriculum.lesson(0, 0, 0).id}/complete", headers=auth_headers())

    assert response.json()["data"]["new_total_time_spent"] == 40


def test_first_request_mirrors_user_and_ledger(client: TestClient, db_session: Session, auth_headers, curriculum_factory):
    curriculum = curriculum_factory([[1]])

    api_call(client, "POST", f"/lesson/{curriculum.lesson(0, 0, 0).id}/complete", headers=auth_headers("user_fresh"))

    user = db_session.query(User).filter(User.external_id == "user_fresh").one()
    assert user.email == "temp@example.com"
    ledger = db_session.query(UserProgress).filter(UserProgress.user_id == user.id).one()
    assert ledger.total_points == 10


def test_unknown_lesson_is_404(client: TestClient, auth_headers, curriculum_factory):
    curriculum_factory([[1]])
    response = client.post("/lesson/999/complete", headers=auth_headers(), json={})
    body = assert_error_body(response, 404, "NOT_FOUND")
    assert body["error"] == "Lesson not found"
    assert body["path"] == "/lesson/999/complete"


def test_negative_time_spent_is_rejected(client: TestClient, auth_headers, curriculum_factory):
    curriculum = curriculum_factory([[1]])
    response = client.post(
        f"/lesson/{curriculum.lesson(0, 0, 0).id}/complete", headers=auth_headers(), json={"timeSpent": -5}
    )
    assert_error_body(response, 422, "VALIDATION_ERROR")


def test_completion_requires_authentication(client: TestClient, db_session: Session, curriculum_factory):
    curriculum = curriculum_factory([[1]])

    response = client.post(f"/lesson/{curriculum.lesson(0, 0, 0).id}/complete", json={})

    assert_error_body(response, 401, "UNAUTHORIZED")
    assert db_session.query(UserProgress).count() == 0
