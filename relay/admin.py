"""
Admin endpoints: grant or revoke a user's entitlement.

When ADMIN_TOKEN is configured both endpoints require
`Authorization: Bearer <ADMIN_TOKEN>`. Without it they are open, so the
deployment must restrict who can reach them.
"""

import hmac
import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from infra.bootstrap import RelayServices, get_services
from relay.messages import (
    ENTITLEMENT_GRANTED,
    ENTITLEMENT_REVOKED,
    USER_ADDED,
    USER_ID_REQUIRED,
    USER_NOT_FOUND,
    USER_REMOVED,
)

logger = logging.getLogger(__name__)


class AdminUserRequest(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId")

    @field_validator("user_id", mode="before")
    @classmethod
    def _only_strings(cls, value: Any) -> Optional[str]:
        # A non-string userId counts as missing
        return value if isinstance(value, str) else None


class AdminResponse(BaseModel):
    status: str
    message: str


def require_admin(
    request: Request,
    services: RelayServices = Depends(get_services),
) -> None:
    """
    Check the admin bearer token when one is configured.

    Raises:
        HTTPException(401): Token configured and missing or wrong
    """
    expected = services.config.admin_token
    if not expected:
        return

    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not hmac.compare_digest(token.encode(), expected.encode()):
        logger.warning(f"Rejected admin request to {request.url.path}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token",
            headers={"WWW-Authenticate": "Bearer"},
        )


router = APIRouter(tags=["admin"], dependencies=[Depends(require_admin)])


async def read_user_id(request: Request) -> Optional[str]:
    """
    userId from the request body, or None when the body is empty, not JSON,
    not an object, or carries no usable userId.
    """
    body = await request.body()
    try:
        data = json.loads(body) if body else None
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    return AdminUserRequest.model_validate(data).user_id or None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


@router.post("/add-paid-user", response_model=AdminResponse)
async def add_paid_user(
    request: Request,
    services: RelayServices = Depends(get_services),
):
    """Grant entitlement and tell the user. Adding twice is harmless."""
    user_id = await read_user_id(request)
    if not user_id:
        return _error(status.HTTP_400_BAD_REQUEST, USER_ID_REQUIRED)

    added = services.entitlements.add(user_id)
    logger.info(f"Paid user added: {user_id}", extra={"user_id": user_id, "newly_added": added})

    await services.sender.push_text(user_id, ENTITLEMENT_GRANTED)
    return AdminResponse(status="success", message=USER_ADDED)


@router.post("/remove-paid-user", response_model=AdminResponse)
async def remove_paid_user(
    request: Request,
    services: RelayServices = Depends(get_services),
):
    """Revoke entitlement and tell the user. Unknown ids get a 404 and no message."""
    user_id = await read_user_id(request)
    if not user_id:
        return _error(status.HTTP_400_BAD_REQUEST, USER_ID_REQUIRED)

    if not services.entitlements.remove(user_id):
        logger.info(f"Remove requested for unknown user: {user_id}")
        return _error(status.HTTP_404_NOT_FOUND, USER_NOT_FOUND)

    logger.info(f"Paid user removed: {user_id}", extra={"user_id": user_id})
    await services.sender.push_text(user_id, ENTITLEMENT_REVOKED)
    return AdminResponse(status="success", message=USER_REMOVED)
