"""Top-level error types for the agent runtime."""


class AgentError(Exception):
    """Base class for every failure raised by the agent runtime."""

    prefix = "agent"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.prefix}: {self.detail}"


class SkillError(AgentError):
    """A skill or rule could not be loaded or applied."""

    prefix = "skill"


class ConfigurationError(AgentError):
    """The runtime was configured inconsistently."""

    prefix = "config"