"""Approval queue for proposed rules and skills, stored as one JSON file."""

from __future__ import annotations

import asyncio
import json
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class CandidateError(Exception):
    """The candidate queue could not be read or written."""


class CandidateKind(str, Enum):
    RULE = "rule"
    SKILL = "skill"


@dataclass
class Candidate:
    """A proposed rule or skill awaiting review."""

    id: str
    kind: CandidateKind
    name: str
    rationale: str
    body: str
    created_at: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "name": self.name,
            "rationale": self.rationale,
            "body": self.body,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Candidate:
        try:
            return cls(
                id=data["id"],
                kind=CandidateKind(data["kind"]),
                name=data["name"],
                rationale=data["rationale"],
                body=data["body"],
                created_at=int(data["created_at"]),
            )
        except KeyError as exc:
            raise ValueError(f"candidate is missing field {exc}") from exc


class CandidateQueue:
    """On-disk queue of candidates; a single writer is assumed."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    async def list(self) -> list[Candidate]:
        return await asyncio.to_thread(self._read)

    async def enqueue(self, candidate: Candidate) -> None:
        def work() -> None:
            items = self._read()
            items.append(candidate)
            self._write(items)

        await asyncio.to_thread(work)

    async def remove(self, candidate_id: str) -> Candidate | None:
        """Remove and return the candidate with this id, if any."""

        def work() -> Candidate | None:
            items = self._read()
            popped = next((c for c in items if c.id == candidate_id), None)
            if popped is not None:
                items.remove(popped)
            self._write(items)
            return popped

        return await asyncio.to_thread(work)

    def _read(self) -> list[Candidate]:
        try:
            if not self.path.exists():
                return []
            raw = self.path.read_bytes()
            if not raw:
                return []
            return [Candidate.from_dict(item) for item in json.loads(raw)]
        except OSError as exc:
            raise CandidateError(f"io: {exc}") from exc
        except (ValueError, TypeError) as exc:
            raise CandidateError(f"serde: {exc}") from exc

    def _write(self, items: list[Candidate]) -> None:
        tmp = self.path.with_suffix(".json.tmp")
        payload = json.dumps([c.to_dict() for c in items], indent=2, ensure_ascii=False)
        try:
            if str(self.path.parent) not in ("", "."):
                self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as exc:
            raise CandidateError(f"io: {exc}") from exc