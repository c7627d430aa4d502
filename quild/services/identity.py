import httpx
from typing import Optional
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quild.core.config import settings
from quild.core.constants import (
    EventTypeEnum,
    PLACEHOLDER_EMAIL,
    PLACEHOLDER_FIRST_NAME,
    PLACEHOLDER_LAST_NAME,
)
from quild.core.exceptions import ProviderUnavailableError
from quild.crud.user import user as crud_user
from quild.models.user import User
from quild.schemas.user import IdentityProfile, UserCreate
from quild.schemas.webhook import IdentityUserData
from quild.utils.events import event_bus
from quild.utils.logger import setup_logger

logger = setup_logger("identity_service", "identity.log")


class IdentityProviderClient:
    """Reads user profiles from the identity provider's users API."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport

    async def get_user(self, external_id: str) -> IdentityProfile:
        if not settings.CLERK_SECRET_KEY:
            raise ProviderUnavailableError("Identity provider is not configured", external_id=external_id)

        url = f"{settings.CLERK_API_URL.rstrip('/')}/users/{external_id}"
        headers = {"Authorization": f"Bearer {settings.CLERK_SECRET_KEY}"}
        try:
            async with httpx.AsyncClient(
                timeout=settings.IDENTITY_PROVIDER_TIMEOUT, transport=self._transport
            ) as client:
                response = await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Identity provider lookup failed for {external_id}: {str(e)}")
            raise ProviderUnavailableError(
                "Identity provider is unreachable", external_id=external_id
            ) from e

        if response.status_code != 200:
            logger.error(f"Identity provider answered {response.status_code} for {external_id}")
            raise ProviderUnavailableError(
                "Identity provider rejected the lookup",
                external_id=external_id,
                status_code=response.status_code,
            )

        try:
            return IdentityUserData.model_validate(response.json()).to_profile()
        except (ValueError, ValidationError) as e:
            logger.error(f"Identity provider sent an unreadable profile for {external_id}: {str(e)}")
            raise ProviderUnavailableError(
                "Identity provider returned an invalid profile",
                external_id=external_id,
                status_code=response.status_code,
            ) from e


class IdentityService:
    def __init__(self, client: Optional[IdentityProviderClient] = None):
        self.client = client or IdentityProviderClient()

    def _placeholder_profile(self, external_id: str) -> IdentityProfile:
        return IdentityProfile(
            external_id=external_id,
            email=PLACEHOLDER_EMAIL,
            first_name=PLACEHOLDER_FIRST_NAME,
            last_name=PLACEHOLDER_LAST_NAME,
            photo=None,
        )

    def _create_or_get(self, db: Session, profile: IdentityProfile) -> tuple[User, bool]:
        user_in = UserCreate(external_id=profile.external_id, **profile.to_user_fields())
        try:
            return crud_user.create(db, obj_in=user_in), True
        except IntegrityError:
            # A concurrent request inserted the same external id first.
            db.rollback()
            existing = crud_user.get_by_external_id(db, external_id=profile.external_id)
            if existing is None:
                raise
            return existing, False

    async def ensure_user(self, db: Session, external_id: str, fallback: bool = True) -> User:
        existing = crud_user.get_by_external_id(db, external_id=external_id)
        if existing:
            return existing

        try:
            profile = await self.client.get_user(external_id)
        except ProviderUnavailableError as e:
            if not fallback:
                raise
            logger.warning(f"Creating {external_id} with placeholder profile: {e.message}")
            profile = self._placeholder_profile(external_id)

        user, created = self._create_or_get(db, profile)
        if created:
            logger.info(f"Mirrored new user {external_id} (id={user.id})")
        return user

    async def upsert_from_profile(self, db: Session, profile: IdentityProfile) -> User:
        """Insert or overwrite the mirror for ``profile.external_id``."""
        user = crud_user.get_by_external_id(db, external_id=profile.external_id)
        if user is None:
            user, created = self._create_or_get(db, profile)
            if not created:
                user = crud_user.update(db, db_obj=user, obj_in=profile.to_user_fields())
        else:
            user = crud_user.update(db, db_obj=user, obj_in=profile.to_user_fields())

        await event_bus.publish(EventTypeEnum.USER_SYNCED.value, {"user_id": user.id})
        return user

    async def sync_user(self, db: Session, user: User) -> User:
        profile = await self.client.get_user(user.external_id)
        return await self.upsert_from_profile(db, profile)


identity_service = IdentityService()
