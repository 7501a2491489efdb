"""
Relay core: entitlement stores, completion client, webhook handler.
"""

from relay.completion import CompletionClient
from relay.handler import BatchOutcome, UnentitledPolicy, WebhookHandler
from relay.store import InMemoryUserStore, UserStore

__all__ = [
    "BatchOutcome",
    "CompletionClient",
    "InMemoryUserStore",
    "UnentitledPolicy",
    "UserStore",
    "WebhookHandler",
]
