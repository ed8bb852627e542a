"""Session persistence abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .message import Message, TokenUsage
from .session import SessionId


class SessionStoreError(Exception):
    """A session backend failed."""


class SessionNotFoundError(SessionStoreError):
    """The requested session does not exist."""

    def __init__(self, session_id: str) -> None:
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"session not found: {self.session_id}"


@dataclass
class SessionSummary:
    id: SessionId
    title: str | None
    created_at: int
    updated_at: int
    message_count: int


@dataclass
class UsageSummary:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    cached_tokens: int = 0
    cost_estimate_usd: float = 0.0

    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


@dataclass
class TranscriptSummary:
    """A compressed snapshot of the early part of a transcript."""

    id: int
    body: str
    cutoff_message_id: int | None
    created_at: int


class SessionStore(ABC):
    """Storage for session transcripts and usage accounting."""

    @abstractmethod
    async def create_session(self, title: str | None = None) -> SessionId:
        """Create a session and return its id."""

    @abstractmethod
    async def append_messages(self, sid: SessionId, messages: list[Message]) -> None:
        """Append messages in order."""

    @abstractmethod
    async def load_messages(self, sid: SessionId) -> list[Message]:
        """The full transcript in insertion order."""

    @abstractmethod
    async def list_sessions(self, limit: int) -> list[SessionSummary]:
        """Most recent sessions first."""

    @abstractmethod
    async def rename_session(self, sid: SessionId, title: str) -> None:
        """Update the human-readable title."""

    @abstractmethod
    async def record_usage(
        self, sid: SessionId, model: str, tokens: TokenUsage, cost_estimate_usd: float
    ) -> None:
        """Record one round trip's token use and estimated cost."""

    @abstractmethod
    async def session_usage(self, sid: SessionId) -> UsageSummary:
        """Aggregated usage for the session."""

    async def record_summary(
        self, sid: SessionId, body: str, cutoff_message_id: int | None = None
    ) -> int:
        """Persist a transcript summary and return its row id."""
        raise SessionStoreError("summarisation not supported by this store")

    async def list_summaries(self, sid: SessionId) -> list[TranscriptSummary]:
        """All summaries for the session, oldest first."""
        return []

    async def latest_summary(self, sid: SessionId) -> TranscriptSummary | None:
        summaries = await self.list_summaries(sid)
        return summaries[-1] if summaries else None