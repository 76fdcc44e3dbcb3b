"""Parameter checks for o-series reasoning models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class ReasoningModelMaxTokensDeprecatedError(ValueError):
    def __init__(self) -> None:
        super().__init__("this model is not supported MaxTokens, please use MaxCompletionTokens")


class ReasoningModelLimitationsLogprobsError(ValueError):
    def __init__(self) -> None:
        super().__init__("this model has beta-limitations, logprobs not supported")


class ReasoningModelLimitationsOtherError(ValueError):
    def __init__(self) -> None:
        super().__init__(
            "this model has beta-limitations, temperature, top_p and n are fixed at 1, "
            "while presence_penalty and frequency_penalty are fixed at 0"
        )


def _field(request: Any, name: str, default: Any) -> Any:
    if isinstance(request, Mapping):
        value = request.get(name, default)
    else:
        value = getattr(request, name, default)
    return default if value is None else value


class ReasoningValidator:
    """Rejects chat requests that o1/o3 models cannot serve."""

    def validate(self, request: Any) -> None:
        """Raise a ValueError subclass if the request breaks a reasoning-model limit."""
        model = _field(request, "model", "")
        if not (model.startswith("o1") or model.startswith("o3")):
            return None
        if _field(request, "max_tokens", 0) > 0:
            raise ReasoningModelMaxTokensDeprecatedError()
        if _field(request, "logprobs", False):
            raise ReasoningModelLimitationsLogprobsError()
        for name in ("temperature", "top_p", "n"):
            value = _field(request, name, 0)
            if value > 0 and value != 1:
                raise ReasoningModelLimitationsOtherError()
        for name in ("presence_penalty", "frequency_penalty"):
            if _field(request, name, 0) > 0:
                raise ReasoningModelLimitationsOtherError()
        return None