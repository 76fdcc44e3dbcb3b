"""Client for an assistants-style HTTP API: models, moderation, speech, completion streams, threads, messages, runs and vector stores."""

__version__ = "0.1.0"