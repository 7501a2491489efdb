"""
LINE Webhook Receiver

FastAPI router for POST /webhook. Verifies the signature over the raw body,
parses the events and hands them to the relay's WebhookHandler.
"""

import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from infra.bootstrap import RelayServices, get_services

from .schemas import LineWebhookPayload
from .security import require_valid_signature

logger = logging.getLogger(__name__)

router = APIRouter(tags=["LINE Transport"])


@router.post("/webhook")
async def line_webhook_receiver(
    request: Request,
    services: RelayServices = Depends(get_services),
):
    """
    Receive LINE webhook events.

    Flow:
    1. Get raw body
    2. Verify signature over those exact bytes (403 if missing/invalid)
    3. Parse into LineWebhookPayload (400 if malformed)
    4. Run the events through the WebhookHandler

    Returns:
        {"status": "ok"} once every event was handled
        403 {"status": "unauthorized"} if the batch was aborted on an
        unentitled user
    """

    # Step 1: Raw body, before any parsing
    body = await request.body()

    # Step 2: Security boundary
    await require_valid_signature(request, body, services.config.line_channel_secret)

    # Step 3: Parse
    try:
        payload = LineWebhookPayload.model_validate(json.loads(body))
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid JSON payload",
        )
    except ValidationError as e:
        logger.warning(f"Malformed webhook payload: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid webhook payload",
        )

    logger.debug(f"Webhook received with {len(payload.events)} event(s)")

    # Step 4: Relay
    outcome = await services.handler.handle(payload.events)

    if outcome.unauthorized:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"status": "unauthorized"},
        )

    logger.info(
        "Webhook batch handled",
        extra={
            "relayed": outcome.relayed,
            "skipped": outcome.skipped,
            "unentitled": outcome.unentitled,
        },
    )
    return {"status": "ok"}
