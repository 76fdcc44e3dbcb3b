"""Thread message endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .models import _fetch, _headers, _list_of, _Wire
from .transport import Transport, encode_query

_MESSAGES = "messages"


@dataclass
class MessageText(_Wire):
    value: str = ""
    annotations: list[Any] = field(default_factory=list)


@dataclass
class ImageFile(_Wire):
    file_id: str = ""


@dataclass
class ImageURL(_Wire):
    url: str = ""
    detail: str = ""


@dataclass
class MessageContent(_Wire):
    type: str = ""
    text: MessageText | None = None
    image_file: ImageFile | None = None
    image_url: ImageURL | None = None

    _nested = {
        "text": MessageText.from_dict,
        "image_file": ImageFile.from_dict,
        "image_url": ImageURL.from_dict,
    }


@dataclass
class Message(_Wire):
    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    role: str = ""
    content: list[MessageContent] = field(default_factory=list)
    file_ids: list[str] = field(default_factory=list)
    assistant_id: str | None = None
    run_id: str | None = None
    metadata: dict[str, Any] | None = None
    headers: dict[str, str] = _headers()

    _nested = {"content": _list_of(MessageContent)}


@dataclass
class MessagesList(_Wire):
    messages: list[Message] = field(default_factory=list)
    object: str = ""
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False
    headers: dict[str, str] = _headers()

    _keys = {"messages": "data"}
    _nested = {"messages": _list_of(Message)}


def _plain(item: Any) -> Any:
    return item.to_dict() if hasattr(item, "to_dict") else item


@dataclass
class MessageRequest:
    role: str
    content: str
    file_ids: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    attachments: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.file_ids:
            body["file_ids"] = list(self.file_ids)
        if self.metadata:
            body["metadata"] = dict(self.metadata)
        if self.attachments:
            body["attachments"] = [_plain(a) for a in self.attachments]
        return body


@dataclass
class MessageFile(_Wire):
    id: str = ""
    object: str = ""
    created_at: int = 0
    message_id: str = ""
    headers: dict[str, str] = _headers()


@dataclass
class MessageFilesList(_Wire):
    message_files: list[MessageFile] = field(default_factory=list)
    headers: dict[str, str] = _headers()

    _keys = {"message_files": "data"}
    _nested = {"message_files": _list_of(MessageFile)}


@dataclass
class MessageDeletionStatus(_Wire):
    id: str = ""
    object: str = ""
    deleted: bool = False
    headers: dict[str, str] = _headers()


class MessagesAPI:
    """Endpoints under ``/threads/{thread_id}/messages``."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def _call(self, cls: type[_Wire], method: str, suffix: str, body: Any = None) -> Any:
        return _fetch(self.transport, cls, method, suffix, body, beta=True)

    @staticmethod
    def _path(thread_id: str, *parts: str) -> str:
        return "/".join((f"/threads/{thread_id}/{_MESSAGES}", *parts))

    def create_message(self, thread_id: str, request: MessageRequest) -> Message:
        return self._call(Message, "POST", self._path(thread_id), request)

    def list_messages(
        self,
        thread_id: str,
        limit: int | None = None,
        order: str | None = None,
        after: str | None = None,
        before: str | None = None,
        run_id: str | None = None,
    ) -> MessagesList:
        """Fetch messages in a thread, with optional cursor options."""
        options = {
            "limit": limit,
            "order": order,
            "after": after,
            "before": before,
            "run_id": run_id,
        }
        query = encode_query({k: str(v) for k, v in options.items() if v is not None})
        return self._call(MessagesList, "GET", self._path(thread_id) + query)

    def retrieve_message(self, thread_id: str, message_id: str) -> Message:
        return self._call(Message, "GET", self._path(thread_id, message_id))

    def modify_message(
        self, thread_id: str, message_id: str, metadata: dict[str, str] | None
    ) -> Message:
        return self._call(
            Message, "POST", self._path(thread_id, message_id), {"metadata": metadata}
        )

    def retrieve_message_file(self, thread_id: str, message_id: str, file_id: str) -> MessageFile:
        return self._call(
            MessageFile, "GET", self._path(thread_id, message_id, "files", file_id)
        )

    def list_message_files(self, thread_id: str, message_id: str) -> MessageFilesList:
        return self._call(MessageFilesList, "GET", self._path(thread_id, message_id, "files"))

    def delete_message(self, thread_id: str, message_id: str) -> MessageDeletionStatus:
        return self._call(MessageDeletionStatus, "DELETE", self._path(thread_id, message_id))