[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oaiclient"
version = "0.1.0"
description = "A small client for assistants-style HTTP APIs: models, moderation, speech, completion streams, threads, messages, runs and vector stores."
requires-python = ">=3.10"
dependencies = []
keywords = ["api", "client", "assistants", "threads", "runs", "vector-store", "server-sent-events", "streaming", "moderation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["oaiclient"]

[tool.pytest.ini_options]
addopts = "-ra"
