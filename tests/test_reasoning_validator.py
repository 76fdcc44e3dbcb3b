from types import SimpleNamespace

import pytest

from oaiclient.reasoning_validator import (
    ReasoningModelLimitationsLogprobsError,
    ReasoningModelLimitationsOtherError,
    ReasoningModelMaxTokensDeprecatedError,
    ReasoningValidator,
)


def test_non_reasoning_model_is_unchecked():
    assert ReasoningValidator().validate({"model": "gpt-4", "max_tokens": 5, "logprobs": True}) is None


@pytest.mark.parametrize(
    "request_fields,error",
    [
        ({"model": "o1-mini", "max_tokens": 5}, ReasoningModelMaxTokensDeprecatedError),
        ({"model": "o3", "logprobs": True}, ReasoningModelLimitationsLogprobsError),
        ({"model": "o1", "temperature": 0.5}, ReasoningModelLimitationsOtherError),
        ({"model": "o1", "top_p": 0.2}, ReasoningModelLimitationsOtherError),
        ({"model": "o1", "n": 2}, ReasoningModelLimitationsOtherError),
        ({"model": "o1", "presence_penalty": 0.1}, ReasoningModelLimitationsOtherError),
        ({"model": "o3-mini", "frequency_penalty": 0.1}, ReasoningModelLimitationsOtherError),
    ],
)
def test_limits(request_fields, error):
    with pytest.raises(error):
        ReasoningValidator().validate(request_fields)


def test_allowed_values_and_attribute_requests():
    request = SimpleNamespace(model="o1", temperature=1, top_p=1, n=1, max_completion_tokens=9)
    assert ReasoningValidator().validate(request) is None


def test_error_message():
    with pytest.raises(ValueError, match="please use MaxCompletionTokens"):
        ReasoningValidator().validate({"model": "o1", "max_tokens": 1})