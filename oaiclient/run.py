"""Assistant run and run step endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from .thread import ThreadMessage, ThreadRequest
from .transport import Pagination, Transport

_E = TypeVar("_E", bound=Enum)


def _value(item: Any) -> Any:
    return item.value if isinstance(item, Enum) else item


def _enum(cls: type[_E], raw: Any) -> _E | str:
    """Convert a wire value to an enum member, keeping unknown values as strings."""
    try:
        return cls(raw)
    except ValueError:
        return raw or ""


def _plain(item: Any) -> Any:
    return item.to_dict() if hasattr(item, "to_dict") else item


class RunStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    FAILED = "failed"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class RequiredActionType(str, Enum):
    SUBMIT_TOOL_OUTPUTS = "submit_tool_outputs"


class RunError(str, Enum):
    SERVER_ERROR = "server_error"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"


class TruncationStrategy(str, Enum):
    """How a thread is cut down to fit the model's context."""

    AUTO = "auto"
    LAST_MESSAGES = "last_messages"


@dataclass
class ThreadTruncationStrategy:
    type: TruncationStrategy | str = ""
    last_messages: int | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.type:
            body["type"] = _value(self.type)
        if self.last_messages is not None:
            body["last_messages"] = self.last_messages
        return body

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ThreadTruncationStrategy":
        return cls(
            type=_enum(TruncationStrategy, data.get("type")),
            last_messages=data.get("last_messages"),
        )


@dataclass
class RunRequiredAction:
    type: RequiredActionType | str = ""
    tool_calls: list[Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RunRequiredAction":
        submit = data.get("submit_tool_outputs")
        return cls(
            type=_enum(RequiredActionType, data.get("type")),
            tool_calls=list(submit.get("tool_calls") or []) if submit is not None else None,
        )


@dataclass
class RunLastError:
    code: RunError | str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RunLastError":
        return cls(code=_enum(RunError, data.get("code")), message=data.get("message") or "")


def _optional(data: dict[str, Any], key: str, build: Any) -> Any:
    raw = data.get(key)
    return build(raw) if raw is not None else None


@dataclass
class Run:
    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    assistant_id: str = ""
    status: RunStatus | str = ""
    required_action: RunRequiredAction | None = None
    last_error: RunLastError | None = None
    expires_at: int = 0
    started_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    model: str = ""
    instructions: str = ""
    tools: list[Any] = field(default_factory=list)
    file_ids: list[str] = field(default_factory=list)
    metadata: dict[str, Any] | None = None
    usage: dict[str, Any] = field(default_factory=dict)
    temperature: float | None = None
    max_prompt_tokens: int = 0
    max_completion_tokens: int = 0
    truncation_strategy: ThreadTruncationStrategy | None = None
    headers: dict[str, str] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], headers: dict[str, str] | None = None) -> "Run":
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            thread_id=data.get("thread_id") or "",
            assistant_id=data.get("assistant_id") or "",
            status=_enum(RunStatus, data.get("status")),
            required_action=_optional(data, "required_action", RunRequiredAction.from_dict),
            last_error=_optional(data, "last_error", RunLastError.from_dict),
            expires_at=data.get("expires_at") or 0,
            started_at=data.get("started_at"),
            cancelled_at=data.get("cancelled_at"),
            failed_at=data.get("failed_at"),
            completed_at=data.get("completed_at"),
            model=data.get("model") or "",
            instructions=data.get("instructions") or "",
            tools=list(data.get("tools") or []),
            file_ids=list(data.get("file_ids") or []),
            metadata=data.get("metadata"),
            usage=dict(data.get("usage") or {}),
            temperature=data.get("temperature"),
            max_prompt_tokens=data.get("max_prompt_tokens") or 0,
            max_completion_tokens=data.get("max_completion_tokens") or 0,
            truncation_strategy=_optional(
                data, "truncation_strategy", ThreadTruncationStrategy.from_dict
            ),
            headers=headers or {},
        )


@dataclass
class RunRequest:
    assistant_id: str
    model: str = ""
    instructions: str = ""
    additional_instructions: str = ""
    additional_messages: list[ThreadMessage] = field(default_factory=list)
    tools: list[Any] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    temperature: float | None = None
    top_p: float | None = None
    max_prompt_tokens: int = 0
    max_completion_tokens: int = 0
    truncation_strategy: ThreadTruncationStrategy | None = None
    tool_choice: Any = None
    response_format: Any = None
    parallel_tool_calls: Any = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"assistant_id": self.assistant_id}
        for key in ("model", "instructions", "additional_instructions"):
            if getattr(self, key):
                body[key] = getattr(self, key)
        if self.additional_messages:
            body["additional_messages"] = [m.to_dict() for m in self.additional_messages]
        if self.tools:
            body["tools"] = [_plain(t) for t in self.tools]
        if self.metadata:
            body["metadata"] = dict(self.metadata)
        if self.temperature is not None:
            body["temperature"] = self.temperature
        if self.top_p is not None:
            body["top_p"] = self.top_p
        if self.max_prompt_tokens:
            body["max_prompt_tokens"] = self.max_prompt_tokens
        if self.max_completion_tokens:
            body["max_completion_tokens"] = self.max_completion_tokens
        if self.truncation_strategy is not None:
            body["truncation_strategy"] = self.truncation_strategy.to_dict()
        for key in ("tool_choice", "response_format", "parallel_tool_calls"):
            value = getattr(self, key)
            if value is not None:
                body[key] = _plain(value)
        return body


@dataclass
class RunModifyRequest:
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"metadata": dict(self.metadata)} if self.metadata else {}


@dataclass
class RunList:
    runs: list[Run] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict, repr=False, compare=False)


@dataclass
class ToolOutput:
    tool_call_id: str
    output: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"tool_call_id": self.tool_call_id, "output": self.output}


@dataclass
class SubmitToolOutputsRequest:
    tool_outputs: list[ToolOutput] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"tool_outputs": [o.to_dict() for o in self.tool_outputs]}


@dataclass
class CreateThreadAndRunRequest(RunRequest):
    thread: ThreadRequest = field(default_factory=ThreadRequest)

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["thread"] = self.thread.to_dict()
        return body


class RunStepStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class RunStepType(str, Enum):
    MESSAGE_CREATION = "message_creation"
    TOOL_CALLS = "tool_calls"


@dataclass
class StepDetails:
    type: RunStepType | str = ""
    message_id: str | None = None
    tool_calls: list[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StepDetails":
        creation = data.get("message_creation")
        return cls(
            type=_enum(RunStepType, data.get("type")),
            message_id=(creation.get("message_id") or "") if creation is not None else None,
            tool_calls=list(data.get("tool_calls") or []),
        )


@dataclass
class RunStep:
    id: str = ""
    object: str = ""
    created_at: int = 0
    assistant_id: str = ""
    thread_id: str = ""
    run_id: str = ""
    type: RunStepType | str = ""
    status: RunStepStatus | str = ""
    step_details: StepDetails = field(default_factory=StepDetails)
    last_error: RunLastError | None = None
    expired_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    metadata: dict[str, Any] | None = None
    headers: dict[str, str] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any], headers: dict[str, str] | None = None) -> "RunStep":
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=data.get("created_at") or 0,
            assistant_id=data.get("assistant_id") or "",
            thread_id=data.get("thread_id") or "",
            run_id=data.get("run_id") or "",
            type=_enum(RunStepType, data.get("type")),
            status=_enum(RunStepStatus, data.get("status")),
            step_details=StepDetails.from_dict(data.get("step_details") or {}),
            last_error=_optional(data, "last_error", RunLastError.from_dict),
            expired_at=data.get("expired_at"),
            cancelled_at=data.get("cancelled_at"),
            failed_at=data.get("failed_at"),
            completed_at=data.get("completed_at"),
            metadata=data.get("metadata"),
            headers=headers or {},
        )


@dataclass
class RunStepList:
    run_steps: list[RunStep] = field(default_factory=list)
    first_id: str = ""
    last_id: str = ""
    has_more: bool = False
    headers: dict[str, str] = field(default_factory=dict, repr=False, compare=False)


class RunsAPI:
    """Endpoints under ``/threads/{thread_id}/runs`` and ``/threads/runs``."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def _run(self, method: str, suffix: str, body: Any = None) -> Run:
        reply = self.transport.request(method, suffix, body, beta=True)
        return Run.from_dict(reply.json() or {}, reply.headers)

    def create_run(self, thread_id: str, request: RunRequest) -> Run:
        return self._run("POST", f"/threads/{thread_id}/runs", request)

    def retrieve_run(self, thread_id: str, run_id: str) -> Run:
        return self._run("GET", f"/threads/{thread_id}/runs/{run_id}")

    def modify_run(self, thread_id: str, run_id: str, request: RunModifyRequest) -> Run:
        return self._run("POST", f"/threads/{thread_id}/runs/{run_id}", request)

    def list_runs(self, thread_id: str, pagination: Pagination | None = None) -> RunList:
        query = (pagination or Pagination()).query()
        reply = self.transport.request("GET", f"/threads/{thread_id}/runs{query}", beta=True)
        data = reply.json() or {}
        return RunList(
            runs=[Run.from_dict(r) for r in data.get("data") or []],
            headers=reply.headers,
        )

    def submit_tool_outputs(
        self, thread_id: str, run_id: str, request: SubmitToolOutputsRequest
    ) -> Run:
        return self._run(
            "POST", f"/threads/{thread_id}/runs/{run_id}/submit_tool_outputs", request
        )

    def cancel_run(self, thread_id: str, run_id: str) -> Run:
        return self._run("POST", f"/threads/{thread_id}/runs/{run_id}/cancel")

    def create_thread_and_run(self, request: CreateThreadAndRunRequest) -> Run:
        return self._run("POST", "/threads/runs", request)

    def retrieve_run_step(self, thread_id: str, run_id: str, step_id: str) -> RunStep:
        suffix = f"/threads/{thread_id}/runs/{run_id}/steps/{step_id}"
        reply = self.transport.request("GET", suffix, beta=True)
        return RunStep.from_dict(reply.json() or {}, reply.headers)

    def list_run_steps(
        self, thread_id: str, run_id: str, pagination: Pagination | None = None
    ) -> RunStepList:
        query = (pagination or Pagination()).query()
        suffix = f"/threads/{thread_id}/runs/{run_id}/steps{query}"
        reply = self.transport.request("GET", suffix, beta=True)
        data = reply.json() or {}
        return RunStepList(
            run_steps=[RunStep.from_dict(s) for s in data.get("data") or []],
            first_id=data.get("first_id") or "",
            last_id=data.get("last_id") or "",
            has_more=bool(data.get("has_more")),
            headers=reply.headers,
        )