"""Chat-completions client that turns a template and a diff into a filled description."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List, Optional

from ..errors import ParseError, RemoteError
from ..http import HttpRequest, Transport, json_body, send
from ..logging import get_logger
from ..prompting.builder import PromptBuilder, PromptMessage
from ..prompting.constants import DEFAULT_MODEL, MAX_TOKENS, TEMPERATURE


@dataclass
class LLMRequest:
    """Represents one inference request against the Models endpoint."""

    messages: List[PromptMessage]
    model: str
    temperature: float
    max_tokens: int
    base_url: str
    api_key: str
    request_timeout: Optional[float]

    def payload(self) -> dict[str, object]:
        return {
            "model": self.model,
            "messages": [{"role": m.role, "content": m.content} for m in self.messages],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }


class DescriptionGenerator:
    """Asks the inference endpoint to fill in a pull request template."""

    DEFAULT_BASE_URL = "https://models.inference.ai.azure.com"

    def __init__(
        self,
        token: str,
        *,
        model: str | None = None,
        base_url: str | None = None,
        request_timeout: float | None = None,
        prompt_builder: PromptBuilder | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._token = token
        self.model = model or DEFAULT_MODEL
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.request_timeout = request_timeout
        self.prompt_builder = prompt_builder or PromptBuilder(model=self.model)
        self._transport = transport or send
        self.logger = get_logger("llm")

    def generate(self, template: str, current_body: str, diff: str) -> str:
        """Return the model's filled template, passed through unchanged."""
        request = LLMRequest(
            messages=self.prompt_builder.build_messages(template, current_body, diff),
            model=self.model,
            temperature=TEMPERATURE,
            max_tokens=MAX_TOKENS,
            base_url=self.base_url,
            api_key=self._token,
            request_timeout=self.request_timeout,
        )
        return self._complete(request)

    def _complete(self, request: LLMRequest) -> str:
        endpoint = f"{request.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {request.api_key}",
            "Content-Type": "application/json",
        }
        self.logger.debug(
            "POST %s (model=%s, prompt=%d chars)",
            endpoint,
            request.model,
            len(request.messages[-1].content),
        )
        response = self._transport(
            HttpRequest(
                method="POST",
                url=endpoint,
                headers=headers,
                body=json_body(request.payload()),
                timeout=request.request_timeout,
            )
        )
        if response.status != 200:
            raise RemoteError(
                "Models API returned an unexpected status",
                status_code=response.status,
                body=response.text,
            )

        try:
            payload = json.loads(response.text)
        except json.JSONDecodeError as exc:
            raise ParseError("Models API returned invalid JSON") from exc
        return self._extract_content(payload)

    @staticmethod
    def _extract_content(payload: object) -> str:
        if not isinstance(payload, dict):
            raise ParseError("Models API response is not a JSON object")
        choices = payload.get("choices")
        if not isinstance(choices, list):
            raise ParseError("Models API response has no choices list")
        if not choices:
            raise ParseError("no choices returned from Models API")
        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise ParseError("first choice carries no message content")
        return content


__all__ = ["DescriptionGenerator", "LLMRequest"]
