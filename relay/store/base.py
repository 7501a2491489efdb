"""
Abstract user-id store interface.

Handlers depend only on this interface, so the backend holding entitled
users (or users who already got their id disclosed) can change without
touching handler code.
"""

from abc import ABC, abstractmethod


class UserStore(ABC):
    """
    A set of LINE user ids.

    Membership is plain string equality.
    """

    @abstractmethod
    def add(self, user_id: str) -> bool:
        """
        Add a user id.

        Returns:
            True if the id was newly added, False if it was already present
        """
        raise NotImplementedError

    @abstractmethod
    def remove(self, user_id: str) -> bool:
        """
        Remove a user id.

        Returns:
            True if the id was present and removed, False otherwise
        """
        raise NotImplementedError

    @abstractmethod
    def contains(self, user_id: str) -> bool:
        """Check membership."""
        raise NotImplementedError

    def __contains__(self, user_id: object) -> bool:
        return isinstance(user_id, str) and self.contains(user_id)
