"""Conversation message model.

A conversation is a list of ``Message`` objects, each carrying content
blocks: text, tool invocations requested by the assistant, and tool results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class StopReason(str, Enum):
    END_TURN = "end_turn"
    TOOL_USE = "tool_use"
    MAX_TOKENS = "max_tokens"
    MAX_STEPS = "max_steps"
    CANCELLED = "cancelled"
    ERROR = "error"


@dataclass
class TextBlock:
    text: str


@dataclass
class ToolUse:
    """A tool invocation requested by the assistant."""

    id: str
    name: str
    input: Any


@dataclass
class ToolResult:
    """The result of executing a tool call."""

    tool_use_id: str
    output: str
    is_error: bool = False


ContentBlock = TextBlock | ToolUse | ToolResult


def block_to_dict(block: ContentBlock) -> dict[str, Any]:
    """Serialise a content block to its tagged wire form."""
    match block:
        case TextBlock(text=text):
            return {"type": "text", "text": text}
        case ToolUse(id=id_, name=name, input=input_):
            return {"type": "tool_use", "id": id_, "name": name, "input": input_}
        case ToolResult(tool_use_id=tid, output=output, is_error=is_error):
            return {
                "type": "tool_result",
                "tool_use_id": tid,
                "output": output,
                "is_error": is_error,
            }
    raise TypeError(f"not a content block: {block!r}")


def block_from_dict(data: dict[str, Any]) -> ContentBlock:
    """Parse a content block from its tagged wire form."""
    try:
        kind = data["type"]
        if kind == "text":
            return TextBlock(data["text"])
        if kind == "tool_use":
            return ToolUse(data["id"], data["name"], data["input"])
        if kind == "tool_result":
            return ToolResult(
                data["tool_use_id"], data["output"], bool(data.get("is_error", False))
            )
    except KeyError as exc:
        raise ValueError(f"content block is missing field {exc}") from exc
    raise ValueError(f"unknown content block type: {kind!r}")


@dataclass
class Message:
    """A single message in the transcript."""

    role: Role
    content: list[ContentBlock] = field(default_factory=list)

    @classmethod
    def system(cls, text: str) -> Message:
        return cls(Role.SYSTEM, [TextBlock(text)])

    @classmethod
    def user(cls, text: str) -> Message:
        return cls(Role.USER, [TextBlock(text)])

    @classmethod
    def assistant(cls, text: str) -> Message:
        return cls(Role.ASSISTANT, [TextBlock(text)])

    def text(self) -> str:
        """Concatenate all text blocks, ignoring tool blocks."""
        return "".join(b.text for b in self.content if isinstance(b, TextBlock))

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role.value,
            "content": [block_to_dict(b) for b in self.content],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Message:
        try:
            role = Role(data["role"])
            blocks = data["content"]
        except KeyError as exc:
            raise ValueError(f"message is missing field {exc}") from exc
        return cls(role, [block_from_dict(b) for b in blocks])


@dataclass(frozen=True)
class TokenUsage:
    """Token accounting for one model response."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    cached_tokens: int = 0

    def total(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    def to_dict(self) -> dict[str, int]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "cached_tokens": self.cached_tokens,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenUsage:
        try:
            return cls(
                int(data["prompt_tokens"]),
                int(data["completion_tokens"]),
                int(data.get("cached_tokens", 0)),
            )
        except KeyError as exc:
            raise ValueError(f"token usage is missing field {exc}") from exc