"""Client for a local Ollama server: text completions and embeddings."""

from __future__ import annotations

import logging
from typing import Any

import requests

from .adapters import ApiAdapter, select_adapter

log = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "http://localhost:11434"
DEFAULT_MODEL = "deepseek-coder-v2:latest"
EMBEDDING_MODEL = "nomic-embed-text"
EMBEDDINGS_ENDPOINT = "/api/embeddings"

_NETWORK_FAILURE = "Ollama HTTP Request Failed: Network issue or invalid response."


class OllamaError(RuntimeError):
    """Raised when a request to the Ollama server fails or cannot be read."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class OllamaProvider:
    """Talks to an Ollama server to generate completions and embeddings."""

    def __init__(
        self,
        server_url: str = "",
        model: str = "",
        session: requests.Session | None = None,
    ):
        self._server_url = server_url or DEFAULT_SERVER_URL
        self._model = model or DEFAULT_MODEL
        self._session = session if session is not None else requests.Session()
        log.info("Ollama provider ready. Server URL: %s, Model: %s", self._server_url, self._model)

    @property
    def server_url(self) -> str:
        return self._server_url

    @property
    def model(self) -> str:
        return self._model

    def _url(self, endpoint: str) -> str:
        base = self._server_url
        if base.endswith("/"):
            base = base[:-1]
        return base + endpoint

    def _post(self, endpoint: str, body: dict[str, Any]) -> requests.Response | None:
        try:
            return self._session.post(self._url(endpoint), json=body)
        except requests.RequestException as exc:
            log.error("request to %s failed: %s", endpoint, exc)
            return None

    def generate_completion(self, prompt: str) -> str:
        """Send ``prompt`` to the configured model and return the generated text."""
        log.info("completion requested. Prompt: %s", prompt)
        if not self._server_url or not self._model:
            raise OllamaError(
                "Ollama Provider is not initialized. Please provide a server URL and a model."
            )

        adapter: ApiAdapter = select_adapter(self._model)
        body = adapter.create_request_body(self._model, prompt, False)
        log.info("requesting endpoint %s", adapter.endpoint)

        response = self._post(adapter.endpoint, body)
        if response is None:
            raise OllamaError(_NETWORK_FAILURE)

        code = response.status_code
        text = response.text
        log.debug("response code %d, body: %s", code, text)
        if not 200 <= code < 300:
            message = f"HTTP Error: {code} - {text}"
            log.error(message)
            raise OllamaError(message, status_code=code, body=text)

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            raise OllamaError("Failed to parse JSON response.", status_code=code, body=text)
        return adapter.parse_response_body(data)

    def generate_embedding(self, text: str) -> list[float]:
        """Return the embedding vector of ``text`` from the embedding model."""
        body = {"model": EMBEDDING_MODEL, "prompt": text}
        response = self._post(EMBEDDINGS_ENDPOINT, body)

        if response is not None and response.status_code == 200:
            try:
                data = response.json()
            except ValueError:
                data = None
            if isinstance(data, dict):
                values = data.get("embedding")
                if isinstance(values, list):
                    return [_as_number(value) for value in values]

        message = "Failed to generate embedding."
        if response is None:
            raise OllamaError(message)
        message += f" Response Code: {response.status_code}, Body: {response.text}"
        raise OllamaError(message, status_code=response.status_code, body=response.text)


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    return 0.0