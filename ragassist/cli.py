"""Interactive chat front end for the retrieval-augmented assistant."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from .chroma import DEFAULT_BASE_URL, ChromaClient
from .engine import RagEngine
from .ollama import DEFAULT_MODEL, DEFAULT_SERVER_URL, OllamaProvider

GREETING = "RAG 어시스턴트에게 무엇이든 물어보세요..."
USER_PREFIX = "\n\n[나]: "
AI_PREFIX = "\n\n[AI]: "
ERROR_PREFIX = "\n\n[시스템][오류]: "

SCAN_COMMAND = "/scan"
QUIT_COMMANDS = ("/quit", "/exit")


class ChatSession:
    """Chat history bound to a :class:`RagEngine`.

    Progress messages replace the shown history; answers and errors are
    appended to it. ``on_update``, when set, is called with the history after
    every change.
    """

    def __init__(
        self,
        engine: Optional[RagEngine] = None,
        project_dir: str | os.PathLike[str] | None = None,
    ):
        self.engine = engine if engine is not None else RagEngine()
        self.project_dir = Path(project_dir) if project_dir is not None else Path.cwd()
        self.history = GREETING
        self.on_update: Optional[Callable[[str], None]] = None
        self.engine.on_progress = self.handle_progress
        self.engine.on_message = self.handle_ai_message
        self.engine.on_failure = self.handle_failure

    def __enter__(self) -> ChatSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Detach this session's handlers from the engine."""
        self.engine.on_progress = None
        self.engine.on_message = None
        self.engine.on_failure = None

    def _set_history(self, text: str) -> None:
        self.history = text
        if self.on_update is not None:
            self.on_update(text)

    def scan_project(self) -> None:
        """Index the project directory into the vector store."""
        self.engine.ingest_project(self.project_dir)

    def send(self, prompt: str) -> None:
        """Show the user's question and ask the engine to answer it."""
        if not prompt:
            return
        self._set_history(self.history + USER_PREFIX + prompt)
        self.engine.submit_query(prompt)

    def handle_progress(self, message: str) -> None:
        self._set_history(message)

    def handle_ai_message(self, message: str) -> None:
        self._set_history(self.history + AI_PREFIX + message)

    def handle_failure(self, error_message: str) -> None:
        self._set_history(self.history + ERROR_PREFIX + error_message)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ragassist",
        description="Ask questions about a project's source code.",
    )
    parser.add_argument("--project-dir", default=None, help="project root to index")
    parser.add_argument("--ollama-url", default=DEFAULT_SERVER_URL, help="Ollama server URL")
    parser.add_argument("--model", default=DEFAULT_MODEL, help="completion model name")
    parser.add_argument("--chroma-url", default=DEFAULT_BASE_URL, help="vector store URL")
    parser.add_argument("--scan", action="store_true", help="index the project before chatting")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the chat loop on standard input; returns the exit status."""
    args = _build_parser().parse_args(argv)
    engine = RagEngine(
        provider=OllamaProvider(args.ollama_url, args.model),
        chroma=ChromaClient(args.chroma_url),
    )
    shown = ""

    def show(history: str) -> None:
        nonlocal shown
        if shown and history.startswith(shown):
            text = history[len(shown):].lstrip("\n")
        else:
            text = history
        if text:
            print(text, flush=True)
        shown = history

    interactive = sys.stdin.isatty()
    with ChatSession(engine, args.project_dir) as session:
        session.on_update = show
        show(session.history)
        if args.scan:
            session.scan_project()
        try:
            while True:
                if interactive:
                    print("> ", end="", flush=True)
                line = sys.stdin.readline()
                if not line:
                    break
                command = line.strip()
                if command in QUIT_COMMANDS:
                    break
                if command == SCAN_COMMAND:
                    session.scan_project()
                else:
                    session.send(command)
        except KeyboardInterrupt:
            print()
    return 0


if __name__ == "__main__":
    sys.exit(main())