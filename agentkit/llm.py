"""Language-model provider abstraction.

Providers translate their native streaming protocol into the neutral
events defined here. Stream failures are raised as ``LlmError`` from the
event iterator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass, field, replace
from typing import Any

from .message import Message, StopReason, TokenUsage


class LlmError(Exception):
    """Base class for provider failures."""


class NetworkError(LlmError):
    def __str__(self) -> str:
        return f"network: {self.args[0] if self.args else ''}"


class AuthError(LlmError):
    def __str__(self) -> str:
        return f"auth: {self.args[0] if self.args else ''}"


class RateLimitedError(LlmError):
    def __init__(self, retry_after_secs: int | None = None) -> None:
        super().__init__(retry_after_secs)
        self.retry_after_secs = retry_after_secs

    def __str__(self) -> str:
        if self.retry_after_secs is None:
            return "rate limited"
        return f"rate limited (retry after {self.retry_after_secs}s)"


class InvalidResponseError(LlmError):
    def __str__(self) -> str:
        return f"invalid response: {self.args[0] if self.args else ''}"


class ProviderError(LlmError):
    def __init__(self, status: int, message: str) -> None:
        super().__init__(status, message)
        self.status = status
        self.message = message

    def __str__(self) -> str:
        return f"provider error ({self.status}): {self.message}"


class UnsupportedError(LlmError):
    def __str__(self) -> str:
        return f"unsupported: {self.args[0] if self.args else ''}"


@dataclass(frozen=True)
class ProviderCapabilities:
    streaming: bool = False
    tools: bool = False
    vision: bool = False
    thinking: bool = False


@dataclass
class ToolSchema:
    """JSON-schema description of a tool the model may call."""

    name: str
    description: str
    parameters: Any

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }


@dataclass
class ChatRequest:
    model: str
    messages: list[Message]
    tools: list[ToolSchema] = field(default_factory=list)
    temperature: float | None = None
    max_tokens: int | None = None
    stream: bool = True

    def with_tools(self, tools: list[ToolSchema]) -> ChatRequest:
        """Return a copy of this request carrying ``tools``."""
        return replace(self, tools=list(tools))

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "tools": [t.to_dict() for t in self.tools],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "stream": self.stream,
        }


@dataclass(frozen=True)
class TextDelta:
    """Incremental assistant text."""

    delta: str


@dataclass(frozen=True)
class ToolCallDelta:
    """An incremental fragment of a tool call's arguments."""

    index: int
    id: str | None = None
    name: str | None = None
    arguments_delta: str | None = None


@dataclass(frozen=True)
class ToolCallReady:
    """A fully assembled tool call, ready to dispatch."""

    index: int
    id: str
    name: str
    arguments: Any


@dataclass(frozen=True)
class Usage:
    """Token usage for the round trip, emitted before ``End``."""

    usage: TokenUsage


@dataclass(frozen=True)
class End:
    """Stream terminator."""

    reason: StopReason


LlmEvent = TextDelta | ToolCallDelta | ToolCallReady | Usage | End


class LlmProvider(ABC):
    """A model client able to stream a chat completion."""

    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def capabilities(self) -> ProviderCapabilities: ...

    @abstractmethod
    async def chat_stream(self, request: ChatRequest) -> AsyncIterator[LlmEvent]:
        """Start a request and return an async iterator of events.

        Raises ``LlmError`` if the request cannot be started; the iterator
        raises ``LlmError`` on mid-stream failures.
        """