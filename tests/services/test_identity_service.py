import httpx
import pytest
from sqlalchemy.orm import Session

from quild.core.config import settings
from quild.core.exceptions import ProviderUnavailableError
from quild.models.user import User
from quild.schemas.user import IdentityProfile
from quild.services.identity import IdentityProviderClient, IdentityService, identity_service


def _clerk_user(external_id: str) -> dict:
    return {
        "id": external_id,
        "email_addresses": [
            {"id": "idn_1", "email_address": "ada@example.com"},
            {"id": "idn_2", "email_address": "ada@work.example.com"},
        ],
        "first_name": "Ada",
        "last_name": "Lovelace",
        "image_url": "https://img.example.com/ada.png",
    }


class StaticProvider:
    def __init__(self, profile: IdentityProfile = None, error: Exception = None):
        self.profile = profile
        self.error = error
        self.calls = 0

    async def get_user(self, external_id: str) -> IdentityProfile:
        self.calls += 1
        if self.error:
            raise self.error
        return self.profile


@pytest.mark.asyncio
async def test_client_reads_first_email_address(monkeypatch):
    monkeypatch.setattr(settings, "CLERK_SECRET_KEY", "sk_test_123")
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        return httpx.Response(200, json=_clerk_user("user_abc"))

    client = IdentityProviderClient(transport=httpx.MockTransport(handler))
    profile = await client.get_user("user_abc")

    assert seen["url"].endswith("/users/user_abc")
    assert seen["auth"] == "Bearer sk_test_123"
    assert profile.email == "ada@example.com"
    assert profile.first_name == "Ada"
    assert profile.photo == "https://img.example.com/ada.png"


@pytest.mark.asyncio
async def test_client_raises_on_error_status(monkeypatch):
    monkeypatch.setattr(settings, "CLERK_SECRET_KEY", "sk_test_123")
    client = IdentityProviderClient(transport=httpx.MockTransport(lambda request: httpx.Response(404)))

    with pytest.raises(ProviderUnavailableError) as exc_info:
        await client.get_user("user_missing")

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_client_raises_on_transport_error(monkeypatch):
    monkeypatch.setattr(settings, "CLERK_SECRET_KEY", "sk_test_123")

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = IdentityProviderClient(transport=httpx.MockTransport(handler))

    with pytest.raises(ProviderUnavailableError):
        await client.get_user("user_abc")


@pytest.mark.asyncio
async def test_client_without_secret_is_unavailable(monkeypatch):
    monkeypatch.setattr(settings, "CLERK_SECRET_KEY", None)

    with pytest.raises(ProviderUnavailableError):
        await IdentityProviderClient().get_user("user_abc")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "reply",
    [
        httpx.Response(200, text="<html>gateway</html>"),
        httpx.Response(200, json={"object": "user"}),
    ],
)
async def test_client_raises_on_unreadable_profile(monkeypatch, reply):
    monkeypatch.setattr(settings, "CLERK_SECRET_KEY", "sk_test_123")
    client = IdentityProviderClient(transport=httpx.MockTransport(lambda request: reply))

    with pytest.raises(ProviderUnavailableError) as exc_info:
        await client.get_user("user_abc")

    assert exc_info.value.status_code == 200


@pytest.mark.asyncio
async def test_ensure_user_falls_back_when_profile_is_not_json(db_session: Session, monkeypatch):
    monkeypatch.setattr(settings, "CLERK_SECRET_KEY", "sk_test_123")
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>gateway</html>"))
    service = IdentityService(client=IdentityProviderClient(transport=transport))

    user = await service.ensure_user(db_session, "user_gateway")

    assert user.id is not None
    assert user.external_id == "user_gateway"
    assert user.email == "temp@example.com"
    assert db_session.query(User).count() == 1


@pytest.mark.asyncio
async def test_ensure_user_mirrors_provider_profile(db_session: Session):
    profile = IdentityProfile(external_id="user_new", email="ada@example.com", first_name="Ada", last_name="Lovelace")
    service = IdentityService(client=StaticProvider(profile=profile))

    user = await service.ensure_user(db_session, "user_new")

    assert user.id is not None
    assert user.email == "ada@example.com"
    assert user.display_name == "Ada Lovelace"


@pytest.mark.asyncio
async def test_ensure_user_falls_back_to_placeholder(db_session: Session):
    service = IdentityService(client=StaticProvider(error=ProviderUnavailableError("down")))

    user = await service.ensure_user(db_session, "user_offline")

    assert user.external_id == "user_offline"
    assert user.email == "temp@example.com"
    assert user.first_name == "User"
    assert user.last_name == "Name"
    assert user.photo is None


@pytest.mark.asyncio
async def test_ensure_user_without_fallback_propagates(db_session: Session):
    service = IdentityService(client=StaticProvider(error=ProviderUnavailableError("down")))

    with pytest.raises(ProviderUnavailableError):
        await service.ensure_user(db_session, "user_offline", fallback=False)

    assert db_session.query(User).count() == 0


@pytest.mark.asyncio
async def test_ensure_user_returns_existing_without_lookup(db_session: Session, user_factory):
    existing = user_factory("user_known")
    provider = StaticProvider(error=AssertionError("provider should not be called"))
    service = IdentityService(client=provider)

    user = await service.ensure_user(db_session, "user_known")

    assert user.id == existing.id
    assert provider.calls == 0


@pytest.mark.asyncio
async def test_upsert_is_idempotent_and_keeps_latest_fields(db_session: Session):
    first = IdentityProfile(external_id="user_hook", email="old@example.com", first_name="Old")
    latest = IdentityProfile(external_id="user_hook", email="new@example.com", first_name="New", last_name="Name")

    await identity_service.upsert_from_profile(db_session, first)
    await identity_service.upsert_from_profile(db_session, latest)
    user = await identity_service.upsert_from_profile(db_session, latest)

    assert db_session.query(User).filter(User.external_id == "user_hook").count() == 1
    assert user.email == "new@example.com"
    assert user.first_name == "New"
    assert user.last_name == "Name"


@pytest.mark.asyncio
async def test_sync_user_overwrites_placeholder(db_session: Session, user_factory):
    placeholder = user_factory("user_sync", email="temp@example.com", first_name="User", last_name="Name")
    profile = IdentityProfile(external_id="user_sync", email="ada@example.com", first_name="Ada", last_name="Lovelace")
    service = IdentityService(client=StaticProvider(profile=profile))

    synced = await service.sync_user(db_session, placeholder)

    assert synced.id == placeholder.id
    assert synced.email == "ada@example.com"
    assert synced.display_name == "Ada Lovelace"
