"""Session identity."""

from __future__ import annotations

import uuid


class SessionId(str):
    """Stable identifier for a conversation session."""

    __slots__ = ()

    @classmethod
    def new(cls) -> SessionId:
        """Create a fresh random identifier."""
        return cls(str(uuid.uuid4()))

    def __repr__(self) -> str:
        return f"SessionId({str(self)!r})"