"""
Model boundary layer for chat completions.

This package provides a clean abstraction for model invocation,
allowing the relay to remain agnostic of the underlying backend.

Supported backends:
- StubModelBackend: Deterministic fake model (default for tests)
- OpenAIChatBackend: OpenAI chat completions API

Example usage:
    from inference import StubModelBackend, ModelRequest

    backend = StubModelBackend()
    request = ModelRequest(prompt="Will I find love this year?")
    response = await backend.generate(request)
"""

from .types import ModelRequest, ModelResponse, ModelStatus
from .base import ModelBackend
from .stub import StubModelBackend
from .openai_chat import OpenAIChatBackend

__all__ = [
    "ModelRequest",
    "ModelResponse",
    "ModelStatus",
    "ModelBackend",
    "StubModelBackend",
    "OpenAIChatBackend",
]
