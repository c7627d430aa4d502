from fastapi import APIRouter, Request, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session
from svix.webhooks import Webhook, WebhookVerificationError

from quild.core.config import settings
from quild.core.constants import WebhookEventEnum
from quild.schemas.response import APIResponse
from quild.schemas.webhook import IdentityEvent, IdentityUserData
from quild.services.identity import identity_service
from quild.utils import deps
from quild.utils.logger import setup_logger

logger = setup_logger("identity_webhooks", "webhooks.log")

router = APIRouter()

SIGNATURE_HEADERS = ("svix-id", "svix-timestamp", "svix-signature")

@router.post("/identity", response_model=APIResponse[dict])
async def identity_webhook(request: Request, db: Session = Depends(deps.get_db)):
    if not settings.CLERK_WEBHOOK_SECRET:
        logger.error("Webhook secret is not configured")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Webhook secret not configured")

    headers = {name: request.headers.get(name) for name in SIGNATURE_HEADERS}
    if not all(headers.values()):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing webhook signature headers")

    payload = await request.body()
    try:
        Webhook(settings.CLERK_WEBHOOK_SECRET).verify(payload, headers)
    except WebhookVerificationError as e:
        logger.warning(f"Rejected webhook {headers['svix-id']}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid webhook signature")

    try:
        event = IdentityEvent.model_validate_json(payload)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid webhook payload: {e.error_count()} errors")

    if event.type in (WebhookEventEnum.USER_CREATED.value, WebhookEventEnum.USER_UPDATED.value):
        try:
            user_data = IdentityUserData.model_validate(event.data)
        except ValidationError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid user payload")
        user = await identity_service.upsert_from_profile(db, user_data.to_profile())
        logger.info(f"Processed {event.type} for {user.external_id}")
    else:
        logger.info(f"Ignoring unhandled webhook event {event.type}")

    return APIResponse(message="Webhook received", data={"type": event.type})
