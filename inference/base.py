from abc import ABC, abstractmethod
from .types import ModelRequest, ModelResponse


class ModelBackend(ABC):
    """
    Abstract model boundary.
    Relay code must depend ONLY on this interface.

    generate() never raises: every failure comes back as a ModelResponse
    with a non-success status.
    """

    @abstractmethod
    async def generate(self, request: ModelRequest) -> ModelResponse:
        """Generate a response from the model."""
        raise NotImplementedError
