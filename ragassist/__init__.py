"""Retrieval-augmented code assistant backed by Ollama and ChromaDB."""

__version__ = "0.1.0"
__all__ = ["__version__"]