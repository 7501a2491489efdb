from relay.store.base import UserStore
from relay.store.memory import InMemoryUserStore

__all__ = ["UserStore", "InMemoryUserStore"]
