"""Client for the vector-store REST API: collections, inserts and queries."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Iterable, Sequence

import requests

from .models import CollectionInfo, IndexedChunk

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"
NO_CHUNKS_MESSAGE = "No chunks to add."


class ChromaError(RuntimeError):
    """Raised when a request to the vector store fails or cannot be read."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ChromaClient:
    """Creates collections, stores embeddings and runs similarity queries."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, session: requests.Session | None = None):
        self._base_url = base_url or DEFAULT_BASE_URL
        self._session = session if session is not None else requests.Session()

    @property
    def base_url(self) -> str:
        return self._base_url

    def _post(self, path: str, body: dict[str, Any]) -> requests.Response | None:
        try:
            return self._session.post(f"{self._base_url}{path}", json=body)
        except requests.RequestException as exc:
            log.error("request to %s failed: %s", path, exc)
            return None

    @staticmethod
    def _failure(message: str, response: requests.Response | None) -> ChromaError:
        if response is None:
            return ChromaError(message)
        message += f" Response Code: {response.status_code}, Body: {response.text}"
        return ChromaError(message, status_code=response.status_code, body=response.text)

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    def create_collection(self, name: str) -> CollectionInfo:
        """Create the named collection, or fetch it if it already exists."""
        response = self._post("/api/v1/collections", {"name": name, "get_or_create": True})
        if response is not None and response.status_code == 200:
            data = self._json(response)
            if isinstance(data, dict):
                collection_id = data.get("id")
                collection_name = data.get("name")
                info = CollectionInfo(
                    name=collection_name if isinstance(collection_name, str) else "",
                    id=collection_id if isinstance(collection_id, str) else "",
                )
                if info.id:
                    return info
        raise self._failure("Failed to create or get ChromaDB collection.", response)

    def add_embeddings(self, collection_id: str, chunks: Sequence[IndexedChunk]) -> str:
        """Store the chunks with their vectors; return the server's reply body."""
        chunks = list(chunks)
        if not chunks:
            return NO_CHUNKS_MESSAGE

        body = {
            "embeddings": [[float(value) for value in chunk.embedding_vector] for chunk in chunks],
            "documents": [chunk.chunk_text for chunk in chunks],
            "ids": [f"chunk_{uuid.uuid4().hex.upper()}_{index}" for index in range(len(chunks))],
        }
        response = self._post(f"/api/v1/collections/{collection_id}/add", body)
        if response is not None and response.status_code in (200, 201):
            return response.text
        raise self._failure("Failed to add embeddings to ChromaDB.", response)

    def query_collection(
        self, collection_id: str, query_embedding: Iterable[float], num_results: int
    ) -> list[str]:
        """Return the documents nearest to ``query_embedding``, closest first."""
        vector = [float(value) for value in query_embedding]
        if not vector:
            raise ChromaError("Query embedding vector is empty.")

        body = {
            "query_embeddings": [vector],
            "n_results": num_results,
            "include": ["documents"],
        }
        response = self._post(f"/api/v1/collections/{collection_id}/query", body)
        if response is not None and response.status_code == 200:
            data = self._json(response)
            if isinstance(data, dict):
                outer = data.get("documents")
                if isinstance(outer, list) and outer and isinstance(outer[0], list):
                    return [doc if isinstance(doc, str) else "" for doc in outer[0]]
        raise self._failure("Failed to query or parse response from ChromaDB.", response)