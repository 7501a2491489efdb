"""
Webhook event handler.

Per event, in order:
  1. disclose the user's LINE id once
  2. skip events that are not text messages
  3. check entitlement (payment-required reply otherwise)
  4. get a reading and push it back

What happens after an unentitled user is met is governed by
UnentitledPolicy. ABORT_BATCH stops the whole batch, so events queued
behind an unentitled user in the same delivery are dropped even when their
senders are entitled.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from relay.completion import CompletionClient
from relay.messages import PAYMENT_REQUIRED, disclosure_message
from relay.store import UserStore
from transport.line.schemas import LineEvent
from transport.line.sender import LinePushClient

logger = logging.getLogger(__name__)


class UnentitledPolicy(str, Enum):
    ABORT_BATCH = "abort_batch"
    SKIP_EVENT = "skip_event"


@dataclass
class BatchOutcome:
    status: Literal["ok", "unauthorized"] = "ok"
    relayed: int = 0
    skipped: int = 0
    unentitled: int = 0

    @property
    def unauthorized(self) -> bool:
        return self.status == "unauthorized"


class WebhookHandler:
    def __init__(
        self,
        entitlements: UserStore,
        disclosures: UserStore,
        completion: CompletionClient,
        sender: LinePushClient,
        policy: UnentitledPolicy = UnentitledPolicy.ABORT_BATCH,
    ):
        self.entitlements = entitlements
        self.disclosures = disclosures
        self.completion = completion
        self.sender = sender
        self.policy = UnentitledPolicy(policy)

    async def handle(self, events: list[LineEvent]) -> BatchOutcome:
        outcome = BatchOutcome()

        for index, event in enumerate(events):
            user_id = event.user_id
            if not user_id:
                logger.warning(
                    f"Skipping {event.type} event without source.userId",
                    extra={"event_type": event.type},
                )
                outcome.skipped += 1
                continue

            logger.info(f"Received {event.type} event from userId: {user_id}")

            await self.disclose_once(user_id)

            text = event.text
            if text is None:
                logger.info(
                    f"Ignoring non-text event from {user_id}",
                    extra={
                        "event_type": event.type,
                        "message_type": event.message.type if event.message else None,
                    },
                )
                outcome.skipped += 1
                continue

            if not self.entitlements.contains(user_id):
                await self.sender.push_text(user_id, PAYMENT_REQUIRED)
                outcome.unentitled += 1

                if self.policy is UnentitledPolicy.ABORT_BATCH:
                    logger.warning(
                        f"Unentitled user {user_id}, aborting batch",
                        extra={"remaining_events": len(events) - index - 1},
                    )
                    outcome.status = "unauthorized"
                    return outcome

                logger.info(f"Unentitled user {user_id}, skipping event")
                continue

            reading = await self.completion.complete(text)
            await self.sender.push_text(user_id, reading)
            outcome.relayed += 1

        return outcome

    async def disclose_once(self, user_id: str) -> bool:
        """Send the id disclosure message the first time a user is seen."""
        if self.disclosures.contains(user_id):
            return False

        await self.sender.push_text(user_id, disclosure_message(user_id))
        self.disclosures.add(user_id)
        return True
