from typing import Optional

from .base import ModelBackend
from .types import ModelRequest, ModelResponse


class StubModelBackend(ModelBackend):
    """
    Deterministic fake model for local runs and tests.

    Echoes the prompt unless a fixed output is given. With fail=True every
    call returns a recoverable error instead.
    """

    def __init__(self, output: Optional[str] = None, fail: bool = False):
        self.output = output
        self.fail = fail
        self.requests: list[ModelRequest] = []

    async def generate(self, request: ModelRequest) -> ModelResponse:
        self.requests.append(request)

        if self.fail:
            return ModelResponse(
                status="recoverable_error",
                error_type="backend_unavailable",
                metadata={"backend": "stub", "trace_id": request.trace_id},
            )

        return ModelResponse(
            status="success",
            output=self.output if self.output is not None else f"Stub reading for: {request.prompt}",
            metadata={"backend": "stub", "trace_id": request.trace_id},
        )
