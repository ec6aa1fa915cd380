"""
Identity provider (Clerk) webhooks.

Clerk delivers events through Svix; every request is verified against
``CLERK_WEBHOOK_SECRET`` before its payload is looked at.
"""
import logging
from typing import Any, Dict, Type, TypeVar, Union

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from svix.webhooks import Webhook, WebhookVerificationError

from app.core.config import Settings
from app.core.deps import get_settings, get_user_service
from app.core.exceptions import BadRequestError
from app.schemas.common import Envelope
from app.schemas.user import UserProfile
from app.schemas.webhook import ClerkUserData, ClerkWebhookEvent
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clerk", tags=["webhooks"])  # /api/webhooks/clerk

SVIX_HEADERS = ("svix-id", "svix-timestamp", "svix-signature")

ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse(model: Type[ModelT], raw: Union[bytes, Dict[str, Any]]) -> ModelT:
    try:
        if isinstance(raw, bytes):
            return model.model_validate_json(raw)
        return model.model_validate(raw)
    except ValidationError as e:
        raise BadRequestError("Invalid webhook payload", e.errors(include_url=False, include_context=False)) from e


async def verified_event(request: Request, settings: Settings = Depends(get_settings)) -> ClerkWebhookEvent:
    """Check the Svix signature of the raw body and parse the event."""
    headers = {name: request.headers.get(name) for name in SVIX_HEADERS}
    missing = [name for name, value in headers.items() if not value]
    if missing:
        raise BadRequestError("Missing webhook signature headers", [f"missing header: {name}" for name in missing])

    payload = await request.body()
    try:
        # Signature check only; the event is parsed from the raw body below
        Webhook(settings.CLERK_WEBHOOK_SECRET).verify(payload, headers)
    except WebhookVerificationError as e:
        logger.warning("Rejected webhook %s: %s", headers["svix-id"], e)
        raise BadRequestError("Webhook verification failed", [str(e)]) from e
    return _parse(ClerkWebhookEvent, payload)


def _ignored(event: ClerkWebhookEvent) -> JSONResponse:
    logger.info("Ignoring webhook event of type %s", event.type)
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"data": None, "message": f"Event {event.type} ignored"},
    )


@router.post("/user-created", response_model=Envelope[UserProfile], status_code=status.HTTP_201_CREATED)
def user_created(
    event: ClerkWebhookEvent = Depends(verified_event),
    user_service: UserService = Depends(get_user_service),
):
    """Provision a local user for a newly registered Clerk user"""
    if event.type != "user.created":
        return _ignored(event)
    user = user_service.create_from_identity_provider(_parse(ClerkUserData, event.data))
    return {"data": user, "message": "User created successfully"}


@router.post("/user-deleted", response_model=Envelope[UserProfile])
def user_deleted(
    event: ClerkWebhookEvent = Depends(verified_event),
    user_service: UserService = Depends(get_user_service),
):
    """Remove the local user (and everything it owns) for a deleted Clerk user"""
    if event.type != "user.deleted":
        return _ignored(event)
    external_id = event.data.get("id")
    if not external_id:
        raise BadRequestError("User payload has no id", ["data.id is required for user.deleted"])
    user = user_service.delete_from_identity_provider(external_id)
    return {"data": user, "message": "User deleted successfully"}
