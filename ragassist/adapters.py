"""Adapters that shape requests and replies for the Ollama endpoints."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Mapping

from .models import ChatMessage, OllamaRequest, OllamaResponse


class ApiAdapter(ABC):
    """How one kind of model is called and how its reply is read."""

    endpoint: ClassVar[str]

    @abstractmethod
    def create_request_body(self, model: str, prompt: str, stream: bool) -> dict[str, Any]:
        """Build the JSON request body."""

    @abstractmethod
    def parse_response_body(self, data: Mapping[str, Any] | None) -> str:
        """Extract the generated text from a JSON reply."""


class ChatApiAdapter(ApiAdapter):
    """Adapter for chat and instruct models using ``/api/chat``."""

    endpoint = "/api/chat"

    def create_request_body(self, model: str, prompt: str, stream: bool) -> dict[str, Any]:
        request = OllamaRequest(
            model=model, messages=[ChatMessage(role="user", content=prompt)], stream=stream
        )
        return request.to_json(is_chat=True)

    def parse_response_body(self, data: Mapping[str, Any] | None) -> str:
        return OllamaResponse.from_json(data, is_chat=True).message.content


class GenerateApiAdapter(ApiAdapter):
    """Adapter for plain completion models using ``/api/generate``."""

    endpoint = "/api/generate"

    def create_request_body(self, model: str, prompt: str, stream: bool) -> dict[str, Any]:
        return OllamaRequest(model=model, prompt=prompt, stream=stream).to_json(is_chat=False)

    def parse_response_body(self, data: Mapping[str, Any] | None) -> str:
        return OllamaResponse.from_json(data, is_chat=False).response


_CHAT_MARKERS = ("-instruct", "-chat")


def select_adapter(model_name: str) -> ApiAdapter:
    """Pick the chat adapter for instruct/chat models, the generate adapter otherwise."""
    if any(marker in model_name for marker in _CHAT_MARKERS):
        return ChatApiAdapter()
    return GenerateApiAdapter()