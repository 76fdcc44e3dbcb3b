"""Reader for server-sent event streams."""

from __future__ import annotations

import json
from typing import Any, Callable, Iterator

from .transport import APIError

_HEADER_DATA = b"data: "
_ERROR_PREFIX = b'data: {"error":'
_DONE = b"[DONE]"


class TooManyEmptyStreamMessagesError(Exception):
    """The stream sent more non-data lines than allowed."""

    def __init__(self) -> None:
        super().__init__("stream has sent too many empty messages")


class StreamReader:
    """Reads ``data:`` events from a line-oriented byte source.

    ``recv`` and ``recv_raw`` raise ``EOFError`` when the stream ends.
    """

    def __init__(
        self,
        source: Any,
        *,
        response: Any = None,
        empty_messages_limit: int = 300,
        decoder: Callable[[bytes], Any] = json.loads,
        factory: Callable[[Any], Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._source = source
        self._response = response
        self.empty_messages_limit = empty_messages_limit
        self._decoder = decoder
        self._factory = factory
        self.headers = headers or {}
        self._errors = bytearray()
        self.finished = False

    def recv_raw(self) -> bytes:
        """Return the payload of the next data event."""
        if self.finished:
            raise EOFError("stream finished")
        empty_count = 0
        has_error_prefix = False
        while True:
            raw = self._source.readline()
            if not raw.endswith(b"\n") or has_error_prefix:
                error = self._decode_error()
                if error is not None:
                    raise error
                raise EOFError("stream ended")
            line = raw.strip()
            if line.startswith(_ERROR_PREFIX):
                has_error_prefix = True
            if not line.startswith(_HEADER_DATA) or has_error_prefix:
                if has_error_prefix:
                    line = line[len(_HEADER_DATA):]
                self._errors += line
                empty_count += 1
                if empty_count > self.empty_messages_limit:
                    raise TooManyEmptyStreamMessagesError()
                continue
            payload = line[len(_HEADER_DATA):]
            if payload == _DONE:
                self.finished = True
                raise EOFError("stream finished")
            return payload

    def recv(self) -> Any:
        """Return the next event decoded, and built by the factory if one was given."""
        value = self._decoder(self.recv_raw())
        return self._factory(value) if self._factory else value

    def _decode_error(self) -> APIError | None:
        if not self._errors:
            return None
        try:
            payload = self._decoder(bytes(self._errors))
        except Exception:
            return None
        if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
            return APIError.from_payload(payload["error"])
        return None

    def close(self) -> None:
        if self._response is not None:
            self._response.close()

    def __iter__(self) -> Iterator[Any]:
        while True:
            try:
                yield self.recv()
            except EOFError:
                return

    def __enter__(self) -> "StreamReader":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()