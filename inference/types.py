from dataclasses import dataclass
from typing import Optional, Dict, Any, Literal

ModelStatus = Literal["success", "recoverable_error", "fatal_error"]


@dataclass
class ModelRequest:
    prompt: str                         # the user turn
    system_prompt: Optional[str] = None
    constraints: Optional[Dict[str, Any]] = None   # temperature, max_tokens
    timeout_s: Optional[float] = 30
    trace_id: Optional[str] = None


@dataclass
class ModelResponse:
    status: ModelStatus
    output: Optional[str] = None
    error_type: Optional[str] = None   # timeout | api_error | invalid_output | backend_unavailable
    metadata: Optional[Dict[str, Any]] = None
