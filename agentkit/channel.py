"""Events and transport abstraction shared by front-ends.

A run of the agent produces a stream of events; a channel carries user
input in and events out over some transport (terminal, chat, HTTP).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from .message import Message, StopReason, TokenUsage, ToolResult, ToolUse


@dataclass(frozen=True)
class UserInput:
    """User-side input for one agent turn."""

    text: str


@dataclass(frozen=True)
class TextDeltaEvent:
    """Incremental assistant text."""

    delta: str


@dataclass(frozen=True)
class ToolCallStart:
    """The model has decided to invoke a tool."""

    call: ToolUse


@dataclass(frozen=True)
class ToolCallResult:
    """A tool finished executing."""

    result: ToolResult


@dataclass(frozen=True)
class UsageReport:
    """Token usage for the round trip that just finished."""

    usage: TokenUsage
    model: str


@dataclass(frozen=True)
class Done:
    """Terminal event carrying every message the run appended."""

    reason: StopReason
    transcript_delta: list[Message] = field(default_factory=list)


@dataclass(frozen=True)
class WarningEvent:
    """A recoverable problem surfaced to the user; the stream continues."""

    message: str


AgentEvent = (
    TextDeltaEvent | ToolCallStart | ToolCallResult | UsageReport | Done | WarningEvent
)


def event_to_dict(event: AgentEvent) -> dict[str, Any]:
    """Serialise an event to its ``kind``-tagged wire form."""
    match event:
        case TextDeltaEvent(delta=delta):
            return {"kind": "text_delta", "delta": delta}
        case ToolCallStart(call=call):
            return {
                "kind": "tool_call_start",
                "call": {"id": call.id, "name": call.name, "input": call.input},
            }
        case ToolCallResult(result=result):
            return {
                "kind": "tool_call_result",
                "result": {
                    "tool_use_id": result.tool_use_id,
                    "output": result.output,
                    "is_error": result.is_error,
                },
            }
        case UsageReport(usage=usage, model=model):
            return {"kind": "usage_report", "usage": usage.to_dict(), "model": model}
        case Done(reason=reason, transcript_delta=delta):
            return {
                "kind": "done",
                "reason": reason.value,
                "transcript_delta": [m.to_dict() for m in delta],
            }
        case WarningEvent(message=message):
            return {"kind": "warning", "message": message}
    raise TypeError(f"not an agent event: {event!r}")


def event_from_dict(data: dict[str, Any]) -> AgentEvent:
    """Parse an event from its ``kind``-tagged wire form."""
    try:
        kind = data["kind"]
        if kind == "text_delta":
            return TextDeltaEvent(data["delta"])
        if kind == "tool_call_start":
            call = data["call"]
            return ToolCallStart(ToolUse(call["id"], call["name"], call["input"]))
        if kind == "tool_call_result":
            result = data["result"]
            return ToolCallResult(
                ToolResult(
                    result["tool_use_id"],
                    result["output"],
                    bool(result.get("is_error", False)),
                )
            )
        if kind == "usage_report":
            return UsageReport(TokenUsage.from_dict(data["usage"]), data["model"])
        if kind == "done":
            return Done(
                StopReason(data["reason"]),
                [Message.from_dict(m) for m in data["transcript_delta"]],
            )
        if kind == "warning":
            return WarningEvent(data["message"])
    except KeyError as exc:
        raise ValueError(f"event is missing field {exc}") from exc
    raise ValueError(f"unknown event kind: {kind!r}")


class Channel(ABC):
    """Bidirectional adapter between a transport and the agent runtime."""

    @abstractmethod
    async def recv(self) -> UserInput | None:
        """Next user input, or None once the channel has closed."""

    @abstractmethod
    async def send(self, event: AgentEvent) -> None:
        """Deliver an event to the user side without blocking the run loop."""