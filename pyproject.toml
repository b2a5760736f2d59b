[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ragassist"
version = "0.1.0"
description = "Retrieval-augmented code assistant that indexes a project into ChromaDB and answers questions with Ollama"
requires-python = ">=3.10"
dependencies = [
    "requests",
]
keywords = ["rag", "ollama", "chromadb", "embeddings", "llm", "code-assistant"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
ragassist = "ragassist.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ragassist"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
