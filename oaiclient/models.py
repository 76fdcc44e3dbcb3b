"""Model listing, lookup and deletion, and the decoding of API replies."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, ClassVar
from urllib.parse import quote

from .transport import Transport


def _headers() -> Any:
    """Field holding the HTTP headers of the reply that produced an object."""
    return field(default_factory=dict, repr=False, compare=False)


class _Wire:
    """Decodes a dataclass from its JSON object; a missing or null key keeps the default."""

    _keys: ClassVar[dict[str, str]] = {}
    _nested: ClassVar[dict[str, Callable[[Any], Any]]] = {}

    @classmethod
    def from_dict(cls, data: dict[str, Any], headers: dict[str, str] | None = None) -> Any:
        values: dict[str, Any] = {}
        for spec in fields(cls):  # type: ignore[arg-type]
            if spec.name == "headers":
                if headers is not None:
                    values["headers"] = headers
                continue
            raw = data.get(cls._keys.get(spec.name, spec.name))
            if raw is None:
                continue
            convert = cls._nested.get(spec.name)
            values[spec.name] = convert(raw) if convert else raw
        return cls(**values)


def _list_of(cls: type[_Wire]) -> Callable[[list[Any]], list[Any]]:
    return lambda items: [cls.from_dict(item) for item in items]


def _fetch(
    transport: Transport,
    cls: type[_Wire],
    method: str,
    suffix: str,
    body: Any = None,
    *,
    beta: bool = False,
) -> Any:
    """Send one request and decode its JSON reply into ``cls``."""
    reply = transport.request(method, suffix, body, beta=beta)
    return cls.from_dict(reply.json() or {}, reply.headers)


@dataclass
class Permission(_Wire):
    created_at: int = 0
    id: str = ""
    object: str = ""
    allow_create_engine: bool = False
    allow_sampling: bool = False
    allow_logprobs: bool = False
    allow_search_indices: bool = False
    allow_view: bool = False
    allow_fine_tuning: bool = False
    organization: str = ""
    group: Any = None
    is_blocking: bool = False

    _keys = {"created_at": "created"}


@dataclass
class Model(_Wire):
    created_at: int = 0
    id: str = ""
    object: str = ""
    owned_by: str = ""
    permission: list[Permission] = field(default_factory=list)
    root: str = ""
    parent: str = ""
    headers: dict[str, str] = _headers()

    _keys = {"created_at": "created"}
    _nested = {"permission": _list_of(Permission)}


@dataclass
class ModelsList(_Wire):
    models: list[Model] = field(default_factory=list)
    headers: dict[str, str] = _headers()

    _keys = {"models": "data"}
    _nested = {"models": _list_of(Model)}


@dataclass
class FineTuneModelDeleteResponse(_Wire):
    id: str = ""
    object: str = ""
    deleted: bool = False
    headers: dict[str, str] = _headers()


class ModelsAPI:
    """Endpoints under ``/models``."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def list_models(self) -> ModelsList:
        return _fetch(self.transport, ModelsList, "GET", "/models")

    def get_model(self, model_id: str) -> Model:
        return _fetch(self.transport, Model, "GET", f"/models/{quote(model_id, safe='')}")

    def delete_fine_tune_model(self, model_id: str) -> FineTuneModelDeleteResponse:
        return _fetch(
            self.transport,
            FineTuneModelDeleteResponse,
            "DELETE",
            f"/models/{quote(model_id, safe='')}",
        )