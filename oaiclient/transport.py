"""HTTP transport, configuration, errors and rate-limit headers."""

from __future__ import annotations

import json
import re
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Mapping

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_ASSISTANT_VERSION = "v2"
DEFAULT_EMPTY_MESSAGES_LIMIT = 300

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def _parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``1m30s`` or ``20ms``; raise ValueError if malformed."""
    body = text
    sign = 1
    if body[:1] in "+-" and body:
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise ValueError(f"invalid duration {text!r}")
    total = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(body):
        if match.start() != pos:
            raise ValueError(f"invalid duration {text!r}")
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    if pos != len(body):
        raise ValueError(f"invalid duration {text!r}")
    return timedelta(seconds=sign * total)


class ResetTime(str):
    """A rate-limit reset interval as sent by the server, e.g. ``6m0s``."""

    def time(self) -> datetime:
        """Moment at which the limit resets; an unparsable value means now."""
        try:
            delta = _parse_duration(str(self))
        except ValueError:
            delta = timedelta(0)
        return datetime.now() + delta


def _header(headers: Mapping[str, str], name: str) -> str:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return ""


def _atoi(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


@dataclass
class RateLimitHeaders:
    """Rate-limit information taken from response headers."""

    limit_requests: int = 0
    limit_tokens: int = 0
    remaining_requests: int = 0
    remaining_tokens: int = 0
    reset_requests: ResetTime = ResetTime("")
    reset_tokens: ResetTime = ResetTime("")

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitHeaders":
        return cls(
            limit_requests=_atoi(_header(headers, "x-ratelimit-limit-requests")),
            limit_tokens=_atoi(_header(headers, "x-ratelimit-limit-tokens")),
            remaining_requests=_atoi(_header(headers, "x-ratelimit-remaining-requests")),
            remaining_tokens=_atoi(_header(headers, "x-ratelimit-remaining-tokens")),
            reset_requests=ResetTime(_header(headers, "x-ratelimit-reset-requests")),
            reset_tokens=ResetTime(_header(headers, "x-ratelimit-reset-tokens")),
        )


class APIError(Exception):
    """An error reported by the API."""

    def __init__(
        self,
        message: str,
        *,
        type: str | None = None,
        param: Any = None,
        code: Any = None,
        status_code: int = 0,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.type = type
        self.param = param
        self.code = code
        self.status_code = status_code

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], status_code: int = 0) -> "APIError":
        message = payload.get("message", "")
        if isinstance(message, list):
            message = ", ".join(str(m) for m in message)
        return cls(
            str(message),
            type=payload.get("type"),
            param=payload.get("param"),
            code=payload.get("code"),
            status_code=status_code,
        )

    def __str__(self) -> str:
        if self.status_code:
            return f"error, status code: {self.status_code}, message: {self.message}"
        return self.message


@dataclass
class ClientConfig:
    """Settings shared by every request."""

    auth_token: str
    base_url: str = DEFAULT_BASE_URL
    org_id: str = ""
    assistant_version: str = DEFAULT_ASSISTANT_VERSION
    empty_messages_limit: int = DEFAULT_EMPTY_MESSAGES_LIMIT
    timeout: float | None = None


@dataclass
class Pagination:
    """Cursor options for list endpoints."""

    limit: int | None = None
    order: str | None = None
    after: str | None = None
    before: str | None = None

    def query(self) -> str:
        """Encoded query string with a leading ``?``, or empty when nothing is set."""
        values = {
            key: str(value)
            for key, value in (
                ("limit", self.limit),
                ("order", self.order),
                ("after", self.after),
                ("before", self.before),
            )
            if value is not None
        }
        return encode_query(values)


def encode_query(values: Mapping[str, str]) -> str:
    """Encode parameters sorted by key; empty string if there are none."""
    if not values:
        return ""
    return "?" + urllib.parse.urlencode(sorted(values.items()))


@dataclass
class Reply:
    """A decoded-on-demand response body with its headers."""

    body: bytes
    headers: dict[str, str] = field(default_factory=dict)

    def json(self) -> Any:
        return json.loads(self.body)


def _encode_body(body: Any) -> bytes:
    if hasattr(body, "to_dict"):
        body = body.to_dict()
    return json.dumps(body).encode("utf-8")


def _error_from_body(raw: bytes, status: int) -> APIError:
    try:
        payload = json.loads(raw)
    except ValueError:
        payload = None
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        return APIError.from_payload(payload["error"], status)
    text = raw.decode("utf-8", "replace").strip() or f"HTTP {status}"
    return APIError(text, status_code=status)


class Transport:
    """Builds, sends and checks HTTP requests for a configured endpoint."""

    def __init__(self, config: ClientConfig) -> None:
        self.config = config

    def full_url(self, suffix: str) -> str:
        return self.config.base_url.rstrip("/") + suffix

    def _headers(self, has_body: bool, beta: bool) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self.config.auth_token}"}
        if self.config.org_id:
            headers["OpenAI-Organization"] = self.config.org_id
        if has_body:
            headers["Content-Type"] = "application/json"
        headers["Accept"] = "application/json"
        if beta:
            headers["OpenAI-Beta"] = f"assistants={self.config.assistant_version}"
        return headers

    def _open(self, method: str, suffix: str, body: Any, beta: bool, extra: Mapping[str, str] = ()):
        data = None if body is None else _encode_body(body)
        headers = self._headers(data is not None, beta)
        headers.update(dict(extra))
        req = urllib.request.Request(self.full_url(suffix), data=data, headers=headers, method=method)
        try:
            return urllib.request.urlopen(req, timeout=self.config.timeout)
        except urllib.error.HTTPError as exc:
            with exc:
                raise _error_from_body(exc.read(), exc.code) from None
        except urllib.error.URLError as exc:
            if isinstance(exc.reason, TimeoutError):
                raise exc.reason from exc
            raise

    def request(self, method: str, suffix: str, body: Any = None, beta: bool = False) -> Reply:
        """Send a request and return its body and headers."""
        with self._open(method, suffix, body, beta) as response:
            return Reply(response.read(), dict(response.headers.items()))

    def request_raw(self, method: str, suffix: str, body: Any = None):
        """Send a request and return the open response for reading bytes."""
        return self._open(method, suffix, body, False)

    def stream(self, method: str, suffix: str, body: Any = None):
        """Send a request and return a reader over its server-sent events."""
        from .stream_reader import StreamReader

        response = self._open(
            method,
            suffix,
            body,
            False,
            {"Accept": "text/event-stream", "Cache-Control": "no-cache", "Connection": "keep-alive"},
        )
        return StreamReader(
            response,
            response=response,
            empty_messages_limit=self.config.empty_messages_limit,
            headers=dict(response.headers.items()),
        )