"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from typing import Iterable, Optional

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from config import Config  # noqa: E402
from inference import StubModelBackend  # noqa: E402
from infra.bootstrap import RelayServices  # noqa: E402
from relay.completion import CompletionClient  # noqa: E402
from relay.handler import UnentitledPolicy, WebhookHandler  # noqa: E402
from relay.store import InMemoryUserStore  # noqa: E402
from transport.line.schemas import SendResult  # noqa: E402

CHANNEL_SECRET = "test_channel_secret"
PAID_USER = "U_paid"


class RecordingSender:
    """Push client double: records every push instead of calling LINE."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.pushes: list[tuple[str, str]] = []

    async def push_text(self, user_id: str, text: str) -> SendResult:
        self.pushes.append((user_id, text))
        if self.fail:
            return SendResult(user_id=user_id, status="failed", error="simulated")
        return SendResult(user_id=user_id, status="sent", status_code=200)

    def texts_for(self, user_id: str) -> list[str]:
        return [text for to, text in self.pushes if to == user_id]


def make_config(**overrides) -> Config:
    values = dict(
        line_access_token="test_access_token",
        line_channel_secret=CHANNEL_SECRET,
        llm_backend="stub",
        paid_user_ids=(PAID_USER,),
    )
    values.update(overrides)
    return Config(**values)


def make_services(
    config: Optional[Config] = None,
    backend=None,
    sender: Optional[RecordingSender] = None,
    paid: Optional[Iterable[str]] = None,
    policy: UnentitledPolicy = UnentitledPolicy.ABORT_BATCH,
) -> RelayServices:
    config = config or make_config()
    backend = backend or StubModelBackend(output="A bright week ahead.")
    sender = sender or RecordingSender()

    entitlements = InMemoryUserStore(seed=config.paid_user_ids if paid is None else paid)
    disclosures = InMemoryUserStore()
    completion = CompletionClient(backend=backend)
    handler = WebhookHandler(
        entitlements=entitlements,
        disclosures=disclosures,
        completion=completion,
        sender=sender,
        policy=policy,
    )
    return RelayServices(
        config=config,
        entitlements=entitlements,
        disclosures=disclosures,
        sender=sender,
        completion=completion,
        handler=handler,
    )


def text_event(user_id: Optional[str], text: str) -> dict:
    event = {
        "type": "message",
        "mode": "active",
        "timestamp": 1707500000000,
        "replyToken": "reply_token",
        "webhookEventId": "01H0000000000000000000000",
        "message": {"id": "468789577898262530", "type": "text", "text": text},
        "source": {"type": "user"},
    }
    if user_id is not None:
        event["source"]["userId"] = user_id
    return event


def sticker_event(user_id: str) -> dict:
    return {
        "type": "message",
        "timestamp": 1707500000000,
        "message": {"id": "1", "type": "sticker", "packageId": "446", "stickerId": "1988"},
        "source": {"type": "user", "userId": user_id},
    }


def follow_event(user_id: str) -> dict:
    return {
        "type": "follow",
        "timestamp": 1707500000000,
        "replyToken": "reply_token",
        "source": {"type": "user", "userId": user_id},
    }


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def backend():
    return StubModelBackend(output="A bright week ahead.")


@pytest.fixture
def services(sender, backend):
    return make_services(sender=sender, backend=backend)


@pytest.fixture
def client(services):
    from main import create_app

    with TestClient(create_app(services=services)) as test_client:
        yield test_client
