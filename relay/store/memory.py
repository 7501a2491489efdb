"""
In-memory user-id store.

Process memory only: contents are lost on restart and are not shared
between replicas.
"""

from typing import Iterable, Optional

from relay.store.base import UserStore


class InMemoryUserStore(UserStore):
    """UserStore backed by a Python set, optionally seeded at startup."""

    def __init__(self, seed: Optional[Iterable[str]] = None):
        self._ids = set(seed or ())

    def add(self, user_id: str) -> bool:
        if user_id in self._ids:
            return False
        self._ids.add(user_id)
        return True

    def remove(self, user_id: str) -> bool:
        if user_id not in self._ids:
            return False
        self._ids.discard(user_id)
        return True

    def contains(self, user_id: str) -> bool:
        return user_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)
