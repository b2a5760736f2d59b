"""Retrieval-augmented pipeline: index a project, then answer questions about it."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional

from .chroma import ChromaClient, ChromaError
from .files import chunk_file_content, find_project_files
from .models import CollectionInfo, IndexedChunk
from .ollama import OllamaError, OllamaProvider

log = logging.getLogger(__name__)

COLLECTION_NAME = "ember_project"
SCAN_SUBDIRS = ("Source", "Plugins")
SCAN_EXTENSIONS = ("*.h", "*.cpp", "*.cs", "*.uproject", "*.uplugin")
CHUNK_SIZE_LINES = 40
CHUNK_OVERLAP_LINES = 5
QUERY_RESULTS = 5

NO_FILES_MESSAGE = "학습할 파일을 찾지 못했습니다."
NO_VECTORS_MESSAGE = "DB에 추가할 벡터가 없습니다."

_PROMPT_TEMPLATE = (
    "You are a helpful Unreal Engine C++ expert assistant. "
    "Answer the user's question based on the provided code context.\n\n"
    "=== CONTEXT ===\n{context}\n\n=== QUESTION ===\n{question}\n\n=== ANSWER ==="
)

Callback = Callable[[str], None]


class PipelineError(RuntimeError):
    """Raised when a step of the ingestion or query pipeline fails."""


def build_prompt(documents: list[str], question: str) -> str:
    """Combine retrieved documents and the user's question into the final prompt."""
    context = "".join(f"{doc}\n\n---\n\n" for doc in documents)
    return _PROMPT_TEMPLATE.format(context=context, question=question)


class RagEngine:
    """Drives project ingestion and question answering.

    Progress, answers and failures are reported through the callbacks. When no
    failure callback is given, failures are raised as :class:`PipelineError`.
    """

    def __init__(
        self,
        provider: Optional[OllamaProvider] = None,
        chroma: Optional[ChromaClient] = None,
        on_progress: Optional[Callback] = None,
        on_message: Optional[Callback] = None,
        on_failure: Optional[Callback] = None,
    ):
        self.provider = provider if provider is not None else OllamaProvider()
        self.chroma = chroma if chroma is not None else ChromaClient()
        self.on_progress = on_progress
        self.on_message = on_message
        self.on_failure = on_failure
        self.collection = CollectionInfo()
        self.last_question = ""
        self.vector_store: list[IndexedChunk] = []

    def _progress(self, message: str) -> None:
        if self.on_progress is not None:
            self.on_progress(message)

    def _report_failure(self, error: PipelineError) -> None:
        if self.on_failure is None:
            raise error
        self.on_failure(str(error))

    def ingest_project(self, project_dir: str | os.PathLike[str]) -> Optional[int]:
        """Scan, chunk, embed and store the project; return the number of stored vectors."""
        try:
            return self._ingest(Path(project_dir))
        except PipelineError as error:
            self._report_failure(error)
            return None

    def submit_query(self, query_text: str) -> Optional[str]:
        """Answer ``query_text`` using the stored project context."""
        try:
            answer = self._query(query_text)
        except PipelineError as error:
            self._report_failure(error)
            return None
        if self.on_message is not None:
            self.on_message(answer)
        return answer

    def _ingest(self, project_dir: Path) -> int:
        self._progress(f"[System] ChromaDB에서 '{COLLECTION_NAME}' 컬렉션을 초기화하는 중...")
        try:
            self.collection = self.chroma.create_collection(COLLECTION_NAME)
        except ChromaError as exc:
            raise PipelineError(str(exc)) from exc
        log.info("collection ready: %s (ID: %s)", self.collection.name, self.collection.id)
        self._progress("[System] 컬렉션 준비 완료. 파일 스캔 및 청킹을 시작합니다...")

        chunks = self._scan_and_chunk(project_dir)
        if not chunks:
            raise PipelineError(NO_FILES_MESSAGE)

        self.vector_store = []
        total = len(chunks)
        for number, chunk in enumerate(chunks, start=1):
            self._progress(f"[System] 임베딩 진행 중... ({number} / {total})")
            try:
                vector = self.provider.generate_embedding(chunk)
            except OllamaError as exc:
                raise PipelineError(str(exc)) from exc
            self.vector_store.append(IndexedChunk(chunk_text=chunk, embedding_vector=vector))
            log.debug("chunk %d embedded", number)

        if not self.vector_store:
            raise PipelineError(NO_VECTORS_MESSAGE)

        count = len(self.vector_store)
        self._progress(f"[System] {count}개의 벡터를 ChromaDB에 저장하는 중...")
        try:
            self.chroma.add_embeddings(self.collection.id, self.vector_store)
        except ChromaError as exc:
            raise PipelineError(str(exc)) from exc
        self._progress(f"[System] 학습 완료! {count}개의 벡터가 영구적으로 저장되었습니다.")
        return count

    @staticmethod
    def _scan_and_chunk(project_dir: Path) -> list[str]:
        paths: list[str] = []
        for subdir in SCAN_SUBDIRS:
            paths.extend(find_project_files(project_dir / subdir, SCAN_EXTENSIONS))

        chunks: list[str] = []
        for path in dict.fromkeys(paths):
            try:
                content = Path(path).read_text(encoding="utf-8-sig", errors="replace")
            except OSError as exc:
                log.warning("could not read %s: %s", path, exc)
                continue
            chunks.extend(chunk_file_content(content, CHUNK_SIZE_LINES, CHUNK_OVERLAP_LINES))
        return chunks

    def _query(self, query_text: str) -> str:
        self.last_question = query_text
        self._progress("[System] 질문을 이해하기 위해 벡터로 변환하는 중...")
        try:
            vector = self.provider.generate_embedding(query_text)
        except OllamaError as exc:
            raise PipelineError(str(exc)) from exc

        self._progress("[System] 관련된 코드 조각을 DB에서 찾는 중...")
        try:
            documents = self.chroma.query_collection(self.collection.id, vector, QUERY_RESULTS)
        except ChromaError as exc:
            raise PipelineError(f"DB 검색 실패: {exc}") from exc

        self._progress("[System] 관련 정보를 바탕으로 답변을 생성하는 중...")
        prompt = build_prompt(documents, self.last_question)
        try:
            return self.provider.generate_completion(prompt)
        except OllamaError as exc:
            raise PipelineError(str(exc)) from exc