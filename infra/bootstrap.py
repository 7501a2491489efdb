"""
Infrastructure initialization and bootstrap.

Builds every relay service from configuration once per process. Routes get
them back through the get_services dependency.
"""

import logging
from dataclasses import dataclass

from fastapi import Request

from config import Config
from inference import ModelBackend, OpenAIChatBackend, StubModelBackend
from relay.completion import CompletionClient
from relay.handler import UnentitledPolicy, WebhookHandler
from relay.store import InMemoryUserStore, UserStore
from transport.line.sender import LinePushClient

logger = logging.getLogger(__name__)


def create_llm_backend(config: Config) -> ModelBackend:
    """Create the completion backend selected by LLM_BACKEND."""
    if config.llm_backend == "stub":
        return StubModelBackend()
    return OpenAIChatBackend(
        api_key=config.openai_api_key,
        model_name=config.openai_model,
    )


@dataclass
class RelayServices:
    """Everything a request handler needs, built once at startup."""

    config: Config
    entitlements: UserStore
    disclosures: UserStore
    sender: LinePushClient
    completion: CompletionClient
    handler: WebhookHandler

    @classmethod
    def from_config(cls, config: Config) -> "RelayServices":
        entitlements = InMemoryUserStore(seed=config.paid_user_ids)
        disclosures = InMemoryUserStore()
        sender = LinePushClient(
            access_token=config.line_access_token,
            timeout_s=config.http_timeout_s,
        )
        completion = CompletionClient(
            backend=create_llm_backend(config),
            temperature=config.openai_temperature,
            max_tokens=config.openai_max_tokens,
            timeout_s=config.http_timeout_s,
        )
        handler = WebhookHandler(
            entitlements=entitlements,
            disclosures=disclosures,
            completion=completion,
            sender=sender,
            policy=UnentitledPolicy(config.unentitled_policy),
        )

        logger.info(
            f"Services ready: llm_backend={config.llm_backend} "
            f"seeded_paid_users={len(entitlements)} "
            f"unentitled_policy={config.unentitled_policy}"
        )
        return cls(
            config=config,
            entitlements=entitlements,
            disclosures=disclosures,
            sender=sender,
            completion=completion,
            handler=handler,
        )


def get_services(request: Request) -> RelayServices:
    """FastAPI dependency: services stored on the app during startup."""
    return request.app.state.services
