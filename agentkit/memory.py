"""Long-term memory abstractions: facts, vectors and embeddings."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .text import truncate_with_ellipsis


class MemoryStoreError(Exception):
    """A memory backend failed."""


class FactNotFoundError(MemoryStoreError):
    """The requested fact does not exist."""

    def __init__(self, fact_id: str) -> None:
        super().__init__(fact_id)
        self.fact_id = fact_id

    def __str__(self) -> str:
        return f"not found: {self.fact_id}"


class FactId(str):
    """Stable identifier for a fact, usually a slug of its name."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"FactId({str(self)!r})"


class FactKind(str, Enum):
    """What kind of memory a fact represents."""

    PREFERENCE = "preference"
    PROJECT = "project"
    REFLECTION = "reflection"
    NOTE = "note"


@dataclass
class Fact:
    """A persisted memory note."""

    id: FactId
    name: str
    kind: FactKind
    body: str
    created_at: int
    updated_at: int
    tags: list[str] = field(default_factory=list)

    def one_liner(self) -> str:
        """Short single-line form for prompts and list views."""
        first = self.body.split("\n", 1)[0].removesuffix("\r").strip() if self.body else ""
        if not first:
            return self.name
        return f"{self.name}: {truncate_with_ellipsis(first, 200)}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "kind": self.kind.value,
            "tags": list(self.tags),
            "body": self.body,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Fact:
        try:
            return cls(
                id=FactId(data["id"]),
                name=data["name"],
                kind=FactKind(data["kind"]),
                body=data["body"],
                created_at=int(data["created_at"]),
                updated_at=int(data["updated_at"]),
                tags=list(data.get("tags") or []),
            )
        except KeyError as exc:
            raise ValueError(f"fact is missing field {exc}") from exc


@dataclass(frozen=True)
class NewFact:
    """Payload for ``FactStore.save``; the store derives ``id`` when absent."""

    name: str
    body: str
    kind: FactKind = FactKind.NOTE
    tags: list[str] = field(default_factory=list)
    id: FactId | None = None

    def with_kind(self, kind: FactKind) -> NewFact:
        return replace(self, kind=kind)

    def with_tags(self, tags: list[str]) -> NewFact:
        return replace(self, tags=list(tags))


@dataclass
class MemoryHit:
    """A vector-search hit."""

    key: str
    text: str
    score: float
    metadata: Any = None


class FactStore(ABC):
    """Storage for long-term facts."""

    @abstractmethod
    async def save(self, fact: NewFact) -> FactId:
        """Insert or update a fact and return its id."""

    @abstractmethod
    async def get(self, fact_id: FactId) -> Fact:
        """Fetch one fact; raise ``FactNotFoundError`` if missing."""

    @abstractmethod
    async def list(self, kind: FactKind | None = None) -> list[Fact]:
        """All facts, most recently updated first."""

    @abstractmethod
    async def search(self, query: str, limit: int) -> list[Fact]:
        """Case-insensitive substring search over name and body."""

    @abstractmethod
    async def delete(self, fact_id: FactId) -> None:
        """Remove one fact."""


class VectorStore(ABC):
    """Storage for text embeddings with cosine-similarity search."""

    @abstractmethod
    async def upsert(
        self, key: str, text: str, embedding: list[float], metadata: Any
    ) -> None:
        """Store an entry, replacing any prior one with the same key."""

    @abstractmethod
    async def search(self, query_embedding: list[float], k: int) -> list[MemoryHit]:
        """Top-``k`` most similar entries."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove one entry."""

    @abstractmethod
    async def len(self) -> int:
        """Number of stored entries."""

    async def is_empty(self) -> bool:
        return await self.len() == 0


class EmbeddingProvider(ABC):
    """Turns text into embedding vectors."""

    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def model(self) -> str: ...

    @abstractmethod
    def dimension(self) -> int: ...

    @abstractmethod
    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed each text; raises ``LlmError`` on failure."""