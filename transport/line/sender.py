"""
LINE Push Message Sender

Sends text back to a user through the Messaging API push endpoint.
Best effort: no retries, failures are logged and returned, never raised.
"""

import logging
from typing import Optional

import httpx

from .schemas import PushMessageRequest, SendResult

logger = logging.getLogger(__name__)

LINE_PUSH_URL = "https://api.line.me/v2/bot/message/push"


class LinePushError(Exception):
    """Failed to push a message to LINE."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class LinePushClient:
    """
    Push client for the LINE Messaging API.

    Args:
        access_token: Channel access token (sent as a bearer token)
        timeout_s: Per-request timeout
        http_client: Optional shared httpx.AsyncClient. When omitted a client
            is opened per push.
    """

    def __init__(
        self,
        access_token: str,
        timeout_s: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
        endpoint: str = LINE_PUSH_URL,
    ):
        self.access_token = access_token
        self.timeout_s = timeout_s
        self.http_client = http_client
        self.endpoint = endpoint

    async def push_text(self, user_id: str, text: str) -> SendResult:
        """
        Push a single text message to `user_id`.

        Returns:
            SendResult with status "sent" or "failed"
        """
        try:
            status_code = await self._post(PushMessageRequest.text(user_id, text))
        except LinePushError as e:
            logger.error(
                f"Error sending message to LINE: {e}",
                extra={"user_id": user_id, "status_code": e.status_code},
            )
            return SendResult(
                user_id=user_id,
                status="failed",
                status_code=e.status_code,
                error=str(e),
            )
        except Exception as e:
            logger.error(
                f"Unexpected error sending message to LINE: {e}",
                exc_info=True,
                extra={"user_id": user_id},
            )
            return SendResult(user_id=user_id, status="failed", error=str(e))

        logger.info(
            f"Pushed message to {user_id}",
            extra={"user_id": user_id, "text_length": len(text)},
        )
        return SendResult(user_id=user_id, status="sent", status_code=status_code)

    async def _post(self, body: PushMessageRequest) -> int:
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }
        payload = body.model_dump()

        try:
            if self.http_client is not None:
                response = await self.http_client.post(
                    self.endpoint, json=payload, headers=headers, timeout=self.timeout_s
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(
                        self.endpoint, json=payload, headers=headers, timeout=self.timeout_s
                    )
        except httpx.TimeoutException as e:
            raise LinePushError(f"Request timed out: {e}")
        except httpx.RequestError as e:
            raise LinePushError(f"HTTP request failed: {e}")

        if response.status_code != 200:
            raise LinePushError(
                f"LINE API returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        return response.status_code
