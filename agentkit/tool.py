"""Tool abstraction and registry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .evolution import CandidateQueue
from .llm import ToolSchema
from .memory import FactStore


class ToolError(Exception):
    """A tool could not be run."""


class UnknownToolError(ToolError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown tool: {self.name}"


class InvalidArgumentsError(ToolError):
    def __init__(self, tool: str, detail: str) -> None:
        super().__init__(tool, detail)
        self.tool = tool
        self.detail = detail

    def __str__(self) -> str:
        return f"invalid arguments for {self.tool}: {self.detail}"


class PermissionDeniedError(ToolError):
    def __str__(self) -> str:
        return f"permission denied: {self.args[0] if self.args else ''}"


class ExecutionFailedError(ToolError):
    def __str__(self) -> str:
        return f"execution failed: {self.args[0] if self.args else ''}"


@dataclass
class Permissions:
    """Gates bounding what tools may do at runtime."""

    allow_read: bool = True
    allow_write: bool = True
    allow_shell: bool = True
    allow_network: bool = True
    max_runtime_secs: int = 120


@dataclass
class ToolContext:
    """Per-invocation context handed to a tool."""

    workspace: Path
    permissions: Permissions = field(default_factory=Permissions)
    session_id: str = ""
    fact_store: FactStore | None = None
    candidate_queue: CandidateQueue | None = None


@dataclass
class ToolOutcome:
    """Result of a tool run; ``is_error`` marks a semantic failure."""

    text: str
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> ToolOutcome:
        return cls(text, False)

    @classmethod
    def error(cls, text: str) -> ToolOutcome:
        return cls(text, True)


class Tool(ABC):
    """A capability the model may invoke."""

    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def description(self) -> str: ...

    @abstractmethod
    def parameters(self) -> Any:
        """JSON Schema for the argument object."""

    @abstractmethod
    async def invoke(self, args: Any, ctx: ToolContext) -> ToolOutcome:
        """Run the tool; raise ``ToolError`` on runtime or permission failure."""

    def schema(self) -> ToolSchema:
        return ToolSchema(self.name(), self.description(), self.parameters())


class ToolRegistry:
    """Tools keyed by name."""

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """Add a tool, replacing any with the same name."""
        self._tools[tool.name()] = tool

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def schemas(self) -> list[ToolSchema]:
        """Schemas of all tools, sorted by name for a stable prompt prefix."""
        return [self._tools[name].schema() for name in sorted(self._tools)]

    async def invoke(self, name: str, args: Any, ctx: ToolContext) -> ToolOutcome:
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        return await tool.invoke(args, ctx)