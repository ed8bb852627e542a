"""Dynamic system-prompt augmentation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable


class PromptProvider(ABC):
    """Supplies extra system-prompt content for a user turn."""

    @abstractmethod
    async def system_prompt_for(self, user_input: str) -> str:
        """Return content to inject; an empty string adds nothing."""


class ChainedPromptProvider(PromptProvider):
    """Concatenates providers' output, separating non-blank fragments by a blank line."""

    def __init__(self, providers: Iterable[PromptProvider] = ()) -> None:
        self._providers: list[PromptProvider] = list(providers)

    def push(self, provider: PromptProvider) -> None:
        self._providers.append(provider)

    def __len__(self) -> int:
        return len(self._providers)

    async def system_prompt_for(self, user_input: str) -> str:
        parts = []
        for provider in self._providers:
            fragment = await provider.system_prompt_for(user_input)
            if fragment.strip():
                parts.append(fragment)
        return "\n\n".join(parts)