"""LINE Transport Layer - Module Exports"""

from .schemas import (
    EventMessage,
    EventSource,
    LineEvent,
    LineWebhookPayload,
    PushMessageRequest,
    SendResult,
    TextMessage,
)
from .security import SIGNATURE_HEADER, compute_signature, require_valid_signature, verify_signature
from .sender import LinePushClient, LinePushError

__all__ = [
    # Schemas
    "EventMessage",
    "EventSource",
    "LineEvent",
    "LineWebhookPayload",
    "PushMessageRequest",
    "SendResult",
    "TextMessage",
    # Security
    "SIGNATURE_HEADER",
    "compute_signature",
    "require_valid_signature",
    "verify_signature",
    # Sender
    "LinePushClient",
    "LinePushError",
]
