"""
Fortune-telling completion client.

Wraps a ModelBackend with the fixed system prompt and sampling settings.
Always returns text: on any failure the fixed fallback reading is returned
and the failure is logged.
"""

import logging
import uuid
from typing import Optional

from inference import ModelBackend, ModelRequest
from relay.messages import FALLBACK_READING, SYSTEM_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 100


class CompletionClient:
    def __init__(
        self,
        backend: ModelBackend,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        timeout_s: Optional[float] = 30.0,
        system_prompt: str = SYSTEM_PROMPT,
    ):
        self.backend = backend
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout_s = timeout_s
        self.system_prompt = system_prompt

    def build_request(self, text: str) -> ModelRequest:
        return ModelRequest(
            prompt=text,
            system_prompt=self.system_prompt,
            constraints={
                "temperature": self.temperature,
                "max_tokens": self.max_tokens,
            },
            timeout_s=self.timeout_s,
            trace_id=str(uuid.uuid4()),
        )

    async def complete(self, text: str) -> str:
        """Get a reading for `text`. Never raises."""
        request = self.build_request(text)

        try:
            response = await self.backend.generate(request)
        except Exception as e:
            logger.error(
                f"Completion backend raised: {e}",
                exc_info=True,
                extra={"trace_id": request.trace_id},
            )
            return FALLBACK_READING

        if response.status != "success" or not response.output:
            metadata = response.metadata or {}
            logger.error(
                f"Completion failed: status={response.status} error_type={response.error_type} "
                f"status_code={metadata.get('status_code')} error={metadata.get('error')}",
                extra={"trace_id": request.trace_id, "error_type": response.error_type},
            )
            return FALLBACK_READING

        return response.output
