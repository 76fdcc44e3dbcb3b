"""Assistant thread endpoints and the request shapes they share."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .transport import Transport

_THREADS = "/threads"


def _value(item: Any) -> Any:
    return item.value if isinstance(item, Enum) else item


class ChunkingStrategyType(str, Enum):
    AUTO = "auto"
    STATIC = "static"


@dataclass
class StaticChunkingStrategy:
    max_chunk_size_tokens: int = 0
    chunk_overlap_tokens: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_chunk_size_tokens": self.max_chunk_size_tokens,
            "chunk_overlap_tokens": self.chunk_overlap_tokens,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StaticChunkingStrategy":
        return cls(
            max_chunk_size_tokens=data.get("max_chunk_size_tokens") or 0,
            chunk_overlap_tokens=data.get("chunk_overlap_tokens") or 0,
        )


@dataclass
class ChunkingStrategy:
    type: ChunkingStrategyType | str
    static: StaticChunkingStrategy | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"type": _value(self.type)}
        if self.static is not None:
            body["static"] = self.static.to_dict()
        return body

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChunkingStrategy":
        static = data.get("static")
        return cls(
            type=data.get("type") or "",
            static=StaticChunkingStrategy.from_dict(static) if static is not None else None,
        )


@dataclass
class VectorStoreToolResources:
    file_ids: list[str] = field(default_factory=list)
    chunking_strategy: ChunkingStrategy | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.file_ids:
            body["file_ids"] = list(self.file_ids)
        if self.chunking_strategy is not None:
            body["chunking_strategy"] = self.chunking_strategy.to_dict()
        if self.metadata:
            body["metadata"] = dict(self.metadata)
        return body

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VectorStoreToolResources":
        strategy = data.get("chunking_strategy")
        return cls(
            file_ids=list(data.get("file_ids") or []),
            chunking_strategy=ChunkingStrategy.from_dict(strategy) if strategy is not None else None,
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass
class CodeInterpreterToolResources:
    file_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"file_ids": list(self.file_ids)} if self.file_ids else {}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CodeInterpreterToolResources":
        return cls(file_ids=list(data.get("file_ids") or []))


@dataclass
class FileSearchToolResources:
    vector_store_ids: list[str] = field(default_factory=list)
    vector_stores: list[VectorStoreToolResources] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.vector_store_ids:
            body["vector_store_ids"] = list(self.vector_store_ids)
        if self.vector_stores:
            body["vector_stores"] = [store.to_dict() for store in self.vector_stores]
        return body

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileSearchToolResources":
        return cls(
            vector_store_ids=list(data.get("vector_store_ids") or []),
            vector_stores=[
                VectorStoreToolResources.from_dict(s) for s in data.get("vector_stores") or []
            ],
        )


@dataclass
class ToolResources:
    code_interpreter: CodeInterpreterToolResources | None = None
    file_search: FileSearchToolResources | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.code_interpreter is not None:
            body["code_interpreter"] = self.code_interpreter.to_dict()
        if self.file_search is not None:
            body["file_search"] = self.file_search.to_dict()
        return body

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ToolResources":
        code = data.get("code_interpreter")
        search = data.get("file_search")
        return cls(
            code_interpreter=CodeInterpreterToolResources.from_dict(code) if code is not None else None,
            file_search=FileSearchToolResources.from_dict(search) if search is not None else None,
        )


class ThreadMessageRole(str, Enum):
    ASSISTANT = "assistant"
    USER = "user"


@dataclass
class ThreadAttachmentTool:
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


@dataclass
class ThreadAttachment:
    file_id: str
    tools: list[ThreadAttachmentTool] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"file_id": self.file_id, "tools": [tool.to_dict() for tool in self.tools]}


@dataclass
class ThreadMessage:
    role: ThreadMessageRole | str
    content: str
    file_ids: list[str] = field(default_factory=list)
    attachments: list[ThreadAttachment] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"role": _value(self.role), "content": self.content}
        if self.file_ids:
            body["file_ids"] = list(self.file_ids)
        if self.attachments:
            body["attachments"] = [a.to_dict() for a in self.attachments]
        if self.metadata:
            body["metadata"] = dict(self.metadata)
        return body


@dataclass
class ThreadRequest:
    messages: list[ThreadMessage] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    tool_resources: ToolResources | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.messages:
            body["messages"] = [m.to_dict() for m in self.messages]
        if self.metadata:
            body["metadata"] = dict(self.metadata)
        if self.tool_resources is not None:
            body["tool_resources"] = self.tool_resources.to_dict()
        return body


@dataclass
class ModifyThreadRequest:
    metadata: dict[str, Any] | None = None
    tool_resources: ToolResources | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"metadata": self.metadata}
        if self.tool_resources is not None:
            body["tool_resources"] = self.tool_resources.to_dict()
        return body


@dataclass
class Thread:
    id: str = ""
    object: str = ""
    created_at: int = 0
    metadata: dict[str, Any] | None = None
    tool_resources: ToolResources = field(default_factory=ToolResources)
    headers: dict[str, str] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], headers: dict[str, str] | None = None) -> "Thread":
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            metadata=data.get("metadata"),
            tool_resources=ToolResources.from_dict(data.get("tool_resources") or {}),
            headers=headers or {},
        )


@dataclass
class ThreadDeleteResponse:
    id: str = ""
    object: str = ""
    deleted: bool = False
    headers: dict[str, str] = field(default_factory=dict, repr=False, compare=False)


class ThreadsAPI:
    """Endpoints under ``/threads``."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def _thread(self, method: str, suffix: str, body: Any = None) -> Thread:
        reply = self.transport.request(method, suffix, body, beta=True)
        return Thread.from_dict(reply.json() or {}, reply.headers)

    def create_thread(self, request: ThreadRequest) -> Thread:
        return self._thread("POST", _THREADS, request)

    def retrieve_thread(self, thread_id: str) -> Thread:
        return self._thread("GET", f"{_THREADS}/{thread_id}")

    def modify_thread(self, thread_id: str, request: ModifyThreadRequest) -> Thread:
        return self._thread("POST", f"{_THREADS}/{thread_id}", request)

    def delete_thread(self, thread_id: str) -> ThreadDeleteResponse:
        reply = self.transport.request("DELETE", f"{_THREADS}/{thread_id}", beta=True)
        data = reply.json() or {}
        return ThreadDeleteResponse(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
            headers=reply.headers,
        )