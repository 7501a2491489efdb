"""
LINE Transport Layer - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Only defines the contract between the LINE Messaging API and the relay.

ref: https://developers.line.biz/en/reference/messaging-api/#webhook-event-objects
"""

from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# LINE rejects text message objects longer than this
MAX_TEXT_LENGTH = 5000


# ============================================================================
# WEBHOOK PAYLOAD SCHEMAS (INPUT)
# ============================================================================

class EventSource(BaseModel):
    """Who triggered the event (user, group or room)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str = "user"
    user_id: Optional[str] = Field(None, alias="userId")
    group_id: Optional[str] = Field(None, alias="groupId")
    room_id: Optional[str] = Field(None, alias="roomId")


class EventMessage(BaseModel):
    """Message content of a message event. Only text messages carry `text`."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    type: str
    text: Optional[str] = None


class LineEvent(BaseModel):
    """A single webhook event (message, follow, unfollow, postback, ...)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str
    source: Optional[EventSource] = None
    message: Optional[EventMessage] = None
    reply_token: Optional[str] = Field(None, alias="replyToken")
    timestamp: Optional[int] = None
    mode: Optional[str] = None
    webhook_event_id: Optional[str] = Field(None, alias="webhookEventId")

    @property
    def user_id(self) -> Optional[str]:
        if self.source is None:
            return None
        return self.source.user_id

    @property
    def text(self) -> Optional[str]:
        """Text of a text-message event, None for anything else."""
        if self.type != "message" or self.message is None:
            return None
        if self.message.type != "text":
            return None
        return self.message.text


class LineWebhookPayload(BaseModel):
    """
    Full LINE webhook request body.

    LINE sends an empty `events` list when verifying the webhook URL.
    """

    model_config = ConfigDict(extra="allow")

    destination: Optional[str] = None
    events: list[LineEvent] = Field(default_factory=list)


# ============================================================================
# PUSH MESSAGE SCHEMAS (OUTPUT)
# ============================================================================

class TextMessage(BaseModel):
    """Outbound text message object."""

    type: Literal["text"] = "text"
    text: str


class PushMessageRequest(BaseModel):
    """Body of POST /v2/bot/message/push."""

    to: str
    messages: list[TextMessage]

    @classmethod
    def text(cls, user_id: str, text: str) -> "PushMessageRequest":
        if len(text) > MAX_TEXT_LENGTH:
            text = text[: MAX_TEXT_LENGTH - 1] + "…"
        return cls(to=user_id, messages=[TextMessage(text=text)])


@dataclass(frozen=True)
class SendResult:
    """
    Outcome of a best-effort push.

    Logged by the sender and returned to the caller, never raised.
    """

    user_id: str
    status: Literal["sent", "failed"]
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "sent"
