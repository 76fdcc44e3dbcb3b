"""Vector store, vector store file and file batch endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .transport import Pagination, Transport

_VECTOR_STORES = "/vector_stores"
_FILES = "/files"
_FILE_BATCHES = "/file_batches"


@dataclass
class VectorStoreFileCount:
    in_progress: int = 0
    completed: int = 0
    failed: int = 0
    cancelled: int = 0
    total: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VectorStoreFileCount":
        return cls(
            in_progress=data.get("in_progress") or 0,
            completed=data.get("completed") or 0,
            failed=data.get("failed") or 0,
            cancelled=data.get("cancelled") or 0,
            total=data.get("total") or 0,
        )


@dataclass
class VectorStoreExpires:
    anchor: str = ""
    days: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"anchor": self.anchor, "days": self.days}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VectorStoreExpires":
        return cls(anchor=data.get("anchor") or "", days=data.get("days") or 0)


@dataclass
class VectorStore:
    id: str = ""
    object: str = ""
    created_at: int = 0
    name: str = ""
    usage_bytes: int = 0
    file_counts: VectorStoreFileCount = field(default_factory=VectorStoreFileCount)
    status: str = ""
    expires_after: VectorStoreExpires | None = None
    expires_at: int | None = None
    metadata: dict[str, Any] | None = None
    headers: dict[str, str] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], headers: dict[str, str] | None = None) -> "VectorStore":
        expires = data.get("expires_after")
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            name=data.get("name") or "",
            usage_bytes=data.get("usage_bytes") or 0,
            file_counts=VectorStoreFileCount.from_dict(data.get("file_counts") or {}),
            status=data.get("status") or "",
            expires_after=VectorStoreExpires.from_dict(expires) if expires is not None else None,
            expires_at=data.get("expires_at"),
            metadata=data.get("metadata"),
            headers=headers or {},
        )


@dataclass
class VectorStoreRequest:
    name: str = ""
    file_ids: list[str] = field(default_factory=list)
    expires_after: VectorStoreExpires | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.name:
            body["name"] = self.name
        if self.file_ids:
            body["file_ids"] = list(self.file_ids)
        if self.expires_after is not None:
            body["expires_after"] = self.expires_after.to_dict()
        if self.metadata:
            body["metadata"] = dict(self.metadata)
        return body


@dataclass
class VectorStoresList:
    vector_stores: list[VectorStore] = field(default_factory=list)
    last_id: str | None = None
    first_id: str | None = None
    has_more: bool = False
    headers: dict[str, str] = field(default_factory=dict, repr=False, compare=False)


@dataclass
class VectorStoreDeleteResponse:
    id: str = ""
    object: str = ""
    deleted: bool = False
    headers: dict[str, str] = field(default_factory=dict, repr=False, compare=False)


@dataclass
class VectorStoreFile:
    id: str = ""
    object: str = ""
    created_at: int = 0
    vector_store_id: str = ""
    usage_bytes: int = 0
    status: str = ""
    headers: dict[str, str] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], headers: dict[str, str] | None = None) -> "VectorStoreFile":
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            vector_store_id=data.get("vector_store_id") or "",
            usage_bytes=data.get("usage_bytes") or 0,
            status=data.get("status") or "",
            headers=headers or {},
        )


@dataclass
class VectorStoreFilesList:
    vector_store_files: list[VectorStoreFile] = field(default_factory=list)
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False
    headers: dict[str, str] = field(default_factory=dict, repr=False, compare=False)


@dataclass
class VectorStoreFileBatch:
    id: str = ""
    object: str = ""
    created_at: int = 0
    vector_store_id: str = ""
    status: str = ""
    file_counts: VectorStoreFileCount = field(default_factory=VectorStoreFileCount)
    headers: dict[str, str] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], headers: dict[str, str] | None = None
    ) -> "VectorStoreFileBatch":
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            vector_store_id=data.get("vector_store_id") or "",
            status=data.get("status") or "",
            file_counts=VectorStoreFileCount.from_dict(data.get("file_counts") or {}),
            headers=headers or {},
        )


class VectorStoresAPI:
    """Endpoints under ``/vector_stores``."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def _call(self, method: str, suffix: str, body: Any = None):
        reply = self.transport.request(method, suffix, body, beta=True)
        return reply.json() or {}, reply.headers

    def _store(self, method: str, suffix: str, body: Any = None) -> VectorStore:
        return VectorStore.from_dict(*self._call(method, suffix, body))

    def _file(self, method: str, suffix: str, body: Any = None) -> VectorStoreFile:
        return VectorStoreFile.from_dict(*self._call(method, suffix, body))

    def _batch(self, method: str, suffix: str, body: Any = None) -> VectorStoreFileBatch:
        return VectorStoreFileBatch.from_dict(*self._call(method, suffix, body))

    def _files_list(self, suffix: str) -> VectorStoreFilesList:
        data, headers = self._call("GET", suffix)
        return VectorStoreFilesList(
            vector_store_files=[VectorStoreFile.from_dict(f) for f in data.get("data") or []],
            first_id=data.get("first_id"),
            last_id=data.get("last_id"),
            has_more=bool(data.get("has_more")),
            headers=headers,
        )

    def create_vector_store(self, request: VectorStoreRequest) -> VectorStore:
        return self._store("POST", _VECTOR_STORES, request)

    def retrieve_vector_store(self, vector_store_id: str) -> VectorStore:
        return self._store("GET", f"{_VECTOR_STORES}/{vector_store_id}")

    def modify_vector_store(self, vector_store_id: str, request: VectorStoreRequest) -> VectorStore:
        return self._store("POST", f"{_VECTOR_STORES}/{vector_store_id}", request)

    def delete_vector_store(self, vector_store_id: str) -> VectorStoreDeleteResponse:
        data, headers = self._call("DELETE", f"{_VECTOR_STORES}/{vector_store_id}")
        return VectorStoreDeleteResponse(
            id=data.get("id") or "",
            object=data.get("object") or "",
            deleted=bool(data.get("deleted")),
            headers=headers,
        )

    def list_vector_stores(self, pagination: Pagination | None = None) -> VectorStoresList:
        query = (pagination or Pagination()).query()
        data, headers = self._call("GET", _VECTOR_STORES + query)
        return VectorStoresList(
            vector_stores=[VectorStore.from_dict(s) for s in data.get("data") or []],
            last_id=data.get("last_id"),
            first_id=data.get("first_id"),
            has_more=bool(data.get("has_more")),
            headers=headers,
        )

    def create_vector_store_file(self, vector_store_id: str, file_id: str) -> VectorStoreFile:
        suffix = f"{_VECTOR_STORES}/{vector_store_id}{_FILES}"
        return self._file("POST", suffix, {"file_id": file_id})

    def retrieve_vector_store_file(self, vector_store_id: str, file_id: str) -> VectorStoreFile:
        return self._file("GET", f"{_VECTOR_STORES}/{vector_store_id}{_FILES}/{file_id}")

    def delete_vector_store_file(self, vector_store_id: str, file_id: str) -> None:
        """Remove a file from a vector store; the response body is not read."""
        suffix = f"{_VECTOR_STORES}/{vector_store_id}{_FILES}/{file_id}"
        self.transport.request("DELETE", suffix, beta=True)

    def list_vector_store_files(
        self, vector_store_id: str, pagination: Pagination | None = None
    ) -> VectorStoreFilesList:
        query = (pagination or Pagination()).query()
        return self._files_list(f"{_VECTOR_STORES}/{vector_store_id}{_FILES}{query}")

    def create_vector_store_file_batch(
        self, vector_store_id: str, file_ids: list[str]
    ) -> VectorStoreFileBatch:
        suffix = f"{_VECTOR_STORES}/{vector_store_id}{_FILE_BATCHES}"
        return self._batch("POST", suffix, {"file_ids": list(file_ids)})

    def retrieve_vector_store_file_batch(
        self, vector_store_id: str, batch_id: str
    ) -> VectorStoreFileBatch:
        return self._batch("GET", f"{_VECTOR_STORES}/{vector_store_id}{_FILE_BATCHES}/{batch_id}")

    def cancel_vector_store_file_batch(
        self, vector_store_id: str, batch_id: str
    ) -> VectorStoreFileBatch:
        suffix = f"{_VECTOR_STORES}/{vector_store_id}{_FILE_BATCHES}/{batch_id}/cancel"
        return self._batch("POST", suffix)

    def list_vector_store_files_in_batch(
        self, vector_store_id: str, batch_id: str, pagination: Pagination | None = None
    ) -> VectorStoreFilesList:
        query = (pagination or Pagination()).query()
        return self._files_list(
            f"{_VECTOR_STORES}/{vector_store_id}{_FILE_BATCHES}/{batch_id}/files{query}"
        )