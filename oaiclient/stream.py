"""Streaming completions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .stream_reader import StreamReader
from .transport import Transport


class CompletionRequestPromptTypeError(TypeError):
    """The completion prompt is neither a string nor a list of strings."""

    def __init__(self) -> None:
        super().__init__("the type of CompletionRequest.Prompt only supports string and []string")


def _valid_prompt(prompt: Any) -> bool:
    if isinstance(prompt, str):
        return True
    return isinstance(prompt, list) and all(isinstance(p, str) for p in prompt)


class CompletionStreamAPI:
    """The ``/completions`` endpoint in streaming mode."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def create_completion_stream(self, request: Mapping[str, Any] | Any) -> StreamReader:
        """Start a completion stream; events come back as decoded dictionaries."""
        body = dict(request.to_dict() if hasattr(request, "to_dict") else request)
        if not _valid_prompt(body.get("prompt")):
            raise CompletionRequestPromptTypeError()
        body["stream"] = True
        return self.transport.stream("POST", "/completions", body)