# ragassist

A small retrieval-augmented assistant for source-code projects. It scans a
project for source files, splits them into overlapping line chunks, embeds
each chunk with a local Ollama server and stores the vectors in a ChromaDB
collection named `ember_project`. A question is then embedded, the five
nearest chunks are fetched from that collection, and an Ollama model answers
with the retrieved code as context.

## Requirements

- An Ollama server, by default at `http://localhost:11434`. It needs the
  `nomic-embed-text` embedding model and a generation model (default
  `deepseek-coder-v2:latest`).
- A ChromaDB server, by default at `http://localhost:8000`.

Models whose names contain `-instruct` or `-chat` are called through
`/api/chat`; all others through `/api/generate`.

## Installation

```
pip install .
```

## Command line

```
ragassist [--project-dir DIR] [--ollama-url URL] [--model NAME]
          [--chroma-url URL] [--scan]
```

- `--project-dir` – project root to index (default: the current directory).
- `--ollama-url` – Ollama server URL.
- `--model` – completion model name.
- `--chroma-url` – ChromaDB server URL.
- `--scan` – index the project before the chat starts.

The command reads lines from standard input (showing a `> ` prompt when run
in a terminal):

- `/scan` indexes the project: files under its `Source` and `Plugins`
  directories with the extensions `.h`, `.cpp`, `.cs`, `.uproject` and
  `.uplugin`, in chunks of 40 lines overlapping by 5.
- `/quit` or `/exit` ends the session, as does end of input.
- Any other non-empty line is sent as a question.

Progress messages, answers (`[AI]: ...`) and errors (`[시스템][오류]: ...`)
are printed as the chat history changes.

## Library use

```python
from ragassist.ollama import OllamaProvider
from ragassist.chroma import ChromaClient
from ragassist.engine import RagEngine

engine = RagEngine(
    OllamaProvider(),
    ChromaClient(),
    on_progress=print,
    on_message=lambda answer: print("[AI]:", answer),
    on_failure=lambda error: print("[error]:", error),
)
count = engine.ingest_project("/path/to/project")  # stored vectors, or None on failure
answer = engine.submit_query("Where is the main module started?")
```

When no `on_failure` callback is given, pipeline failures are raised as
`ragassist.engine.PipelineError`. `ragassist.engine.build_prompt(documents,
question)` builds the final prompt from retrieved documents.

`ragassist.cli.ChatSession(engine, project_dir)` keeps a chat history bound to
an engine: `send(prompt)` appends the question and queries the engine,
`scan_project()` indexes the project, and the `history` attribute holds the
current text. It can be used as a context manager, which detaches its
handlers on exit.

Lower-level pieces are available on their own:

- `ragassist.files.chunk_file_content(content, 40, 5)` drops empty lines and
  splits the rest into 40-line chunks overlapping by 5 lines; an overlap
  larger than the chunk size raises `ValueError`.
- `ragassist.files.find_project_files(root_dir, ["*.py"])` finds matching
  files recursively, pattern by pattern.
- `ragassist.adapters.select_adapter(model_name)` returns a
  `ChatApiAdapter` or `GenerateApiAdapter` for a model.
- `ragassist.models` holds the dataclasses `IndexedChunk`, `CollectionInfo`,
  `ChatMessage`, `OllamaRequest`, `ResponseMessage` and `OllamaResponse`.
- `ragassist.ollama.OllamaProvider` (`generate_completion`,
  `generate_embedding`) and `ragassist.chroma.ChromaClient`
  (`create_collection`, `add_embeddings`, `query_collection`) wrap the two
  HTTP services and raise `OllamaError` / `ChromaError` on failure.

## What it does not do

- The collection id is only known to the engine after indexing in the same
  session; questions asked before `/scan` (or `--scan`) do not reach the
  stored collection and end in an error.
- Replies are not streamed; each answer arrives whole.
- There is no graphical interface or editor integration, only the
  line-based command above.

## Running the tests

```
pip install .[test]
pytest
```