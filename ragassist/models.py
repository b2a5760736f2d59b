"""Data records exchanged with the Ollama and vector-store services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


def _string_field(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


@dataclass
class IndexedChunk:
    """A piece of source text together with its embedding vector."""

    chunk_text: str = ""
    embedding_vector: list[float] = field(default_factory=list)
    chunk_id: str = ""
    additional_info: str = ""
    created_timestamp: str = ""
    updated_timestamp: str = ""
    chunk_description: str = ""
    metadata: str = ""
    author: str = ""


@dataclass
class CollectionInfo:
    """Name and unique id of a vector-store collection."""

    name: str = ""
    id: str = ""


@dataclass
class ChatMessage:
    """One message of a chat conversation."""

    role: str = ""
    content: str = ""


@dataclass
class OllamaRequest:
    """A request for either the chat or the generate endpoint."""

    model: str = ""
    prompt: str = ""
    messages: list[ChatMessage] = field(default_factory=list)
    stream: bool = False

    def to_json(self, is_chat: bool = True) -> dict[str, Any]:
        """Build the JSON body; chat requests carry messages, others a prompt."""
        body: dict[str, Any] = {"model": self.model, "stream": self.stream}
        if is_chat:
            body["messages"] = [
                {"role": message.role, "content": message.content}
                for message in self.messages
            ]
        else:
            body["prompt"] = self.prompt
        return body


@dataclass
class ResponseMessage:
    """The message object inside a chat response."""

    role: str = ""
    content: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> ResponseMessage:
        """Read role and content, leaving missing or mistyped fields empty."""
        if not isinstance(data, Mapping):
            return cls()
        return cls(role=_string_field(data, "role"), content=_string_field(data, "content"))


@dataclass
class OllamaResponse:
    """A parsed reply from the chat or the generate endpoint."""

    response: str = ""
    message: ResponseMessage = field(default_factory=ResponseMessage)
    model: str = ""
    created_at: str = ""
    done: bool = False

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None, is_chat: bool = True) -> OllamaResponse:
        """Parse a response body; chat replies read ``message``, others ``response``."""
        result = cls()
        if not isinstance(data, Mapping):
            return result
        result.model = _string_field(data, "model")
        result.created_at = _string_field(data, "created_at")
        done = data.get("done")
        if isinstance(done, bool):
            result.done = done
        if is_chat:
            message = data.get("message")
            if isinstance(message, Mapping):
                result.message = ResponseMessage.from_json(message)
        else:
            result.response = _string_field(data, "response")
        return result