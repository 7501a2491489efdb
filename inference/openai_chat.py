import logging
from typing import Optional

import httpx

from .base import ModelBackend
from .types import ModelRequest, ModelResponse

logger = logging.getLogger(__name__)

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"


class OpenAIChatBackend(ModelBackend):
    """
    OpenAI chat completions backend.

    Sends [system, user] messages and returns the first choice's content.
    Failures are mapped onto ModelResponse statuses:
      - timeout            -> recoverable_error / "timeout"
      - non-2xx response   -> fatal_error / "api_error"
      - connection failure -> fatal_error / "backend_unavailable"
      - unexpected payload -> fatal_error / "invalid_output"
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "gpt-4",
        http_client: Optional[httpx.AsyncClient] = None,
        endpoint: str = OPENAI_CHAT_URL,
    ):
        """
        Args:
            api_key:     OpenAI API key (sent as a bearer token)
            model_name:  Chat model, e.g. "gpt-4"
            http_client: Optional shared httpx.AsyncClient
            endpoint:    Chat completions URL
        """
        self.api_key = api_key
        self.model_name = model_name
        self.http_client = http_client
        self.endpoint = endpoint

    def build_payload(self, request: ModelRequest) -> dict:
        messages = []
        if request.system_prompt:
            messages.append({"role": "system", "content": request.system_prompt})
        messages.append({"role": "user", "content": request.prompt})

        payload = {"model": self.model_name, "messages": messages}
        payload.update(request.constraints or {})
        return payload

    async def generate(self, request: ModelRequest) -> ModelResponse:
        base_metadata = {
            "backend": "openai",
            "model": self.model_name,
            "trace_id": request.trace_id,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            resp = await self._post(self.build_payload(request), headers, request.timeout_s)
            resp.raise_for_status()
            data = resp.json()
            output: str = data["choices"][0]["message"]["content"]

        except httpx.TimeoutException:
            return ModelResponse(
                status="recoverable_error",
                error_type="timeout",
                metadata=base_metadata,
            )

        except httpx.HTTPStatusError as e:
            return ModelResponse(
                status="fatal_error",
                error_type="api_error",
                metadata={
                    **base_metadata,
                    "status_code": e.response.status_code,
                    "error": e.response.text,
                },
            )

        except httpx.RequestError as e:
            return ModelResponse(
                status="fatal_error",
                error_type="backend_unavailable",
                metadata={**base_metadata, "error": str(e)},
            )

        except (KeyError, IndexError, TypeError, ValueError) as e:
            return ModelResponse(
                status="fatal_error",
                error_type="invalid_output",
                metadata={**base_metadata, "error": repr(e)},
            )

        usage = data.get("usage") or {}
        logger.debug(
            "Completion received",
            extra={"model": self.model_name, "total_tokens": usage.get("total_tokens")},
        )
        return ModelResponse(
            status="success",
            output=output,
            metadata={**base_metadata, "usage": usage},
        )

    async def _post(self, payload: dict, headers: dict, timeout_s: Optional[float]) -> httpx.Response:
        if self.http_client is not None:
            return await self.http_client.post(
                self.endpoint, json=payload, headers=headers, timeout=timeout_s
            )
        async with httpx.AsyncClient() as client:
            return await client.post(
                self.endpoint, json=payload, headers=headers, timeout=timeout_s
            )
