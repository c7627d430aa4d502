from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from quild.core.exceptions import ProviderUnavailableError
from quild.schemas.user import IdentityProfile
from quild.services.identity import identity_service
from tests.helpers.asserts import api_call, assert_error_body


def test_me_creates_placeholder_when_provider_unavailable(client: TestClient, auth_headers):
    data = api_call(client, "GET", "/users/me", headers=auth_headers("user_placeholder")).json()["data"]

    assert data["external_id"] == "user_placeholder"
    assert data["email"] == "temp@example.com"
    assert data["first_name"] == "User"
    assert data["last_name"] == "Name"


def test_me_uses_provider_profile(client: TestClient, auth_headers, monkeypatch):
    async def fake_get_user(external_id):
        return IdentityProfile(external_id=external_id, email="ada@example.com", first_name="Ada", last_name="Lovelace")

    monkeypatch.setattr(identity_service.client, "get_user", fake_get_user)

    data = api_call(client, "GET", "/users/me", headers=auth_headers("user_profiled")).json()["data"]

    assert data["email"] == "ada@example.com"
    assert data["first_name"] == "Ada"


def test_sync_without_provider_is_500(client: TestClient, auth_headers):
    response = client.post("/users/me/sync", headers=auth_headers("user_sync_down"))

    body = assert_error_body(response, 500, "PROVIDER_UNAVAILABLE")
    assert body["error"] == "Identity provider unavailable"


def test_sync_refreshes_profile(client: TestClient, db_session: Session, auth_headers, user_factory, monkeypatch):
    user_factory("user_sync_up", email="temp@example.com", first_name="User", last_name="Name")

    async def fake_get_user(external_id):
        return IdentityProfile(external_id=external_id, email="grace@example.com", first_name="Grace", last_name="Hopper")

    monkeypatch.setattr(identity_service.client, "get_user", fake_get_user)

    data = api_call(client, "POST", "/users/me/sync", headers=auth_headers("user_sync_up")).json()["data"]

    assert data["email"] == "grace@example.com"
    assert data["last_name"] == "Hopper"


def test_me_with_provider_failure_status(client: TestClient, auth_headers, monkeypatch):
    async def failing_get_user(external_id):
        raise ProviderUnavailableError("boom", external_id=external_id, status_code=503)

    monkeypatch.setattr(identity_service.client, "get_user", failing_get_user)

    data = api_call(client, "GET", "/users/me", headers=auth_headers("user_503")).json()["data"]
    assert data["email"] == "temp@example.com"
