"""Layered configuration loading.

Resolution order, later layers winning:

1. Built-in defaults
2. the system-wide file (``/etc/agent/config.toml``)
3. ``config.toml`` in the user config directory
4. ``./agent.toml`` in the working directory
5. ``AGENT_*`` environment variables, where ``__`` separates sections,
   e.g. ``AGENT_AGENT__MAX_STEPS=20`` sets ``agent.max_steps``.

API keys are never read from configuration files.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .tool import Permissions

SYSTEM_CONFIG_PATH = Path("/etc/agent/config.toml")
LOCAL_CONFIG_NAME = "agent.toml"
ENV_PREFIX = "AGENT_"


class ConfigError(Exception):
    """The configuration could not be loaded or has invalid values."""

    def __str__(self) -> str:
        return f"config: {self.args[0] if self.args else ''}"


def _bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ConfigError(f"`{name}` expects a boolean, got {value!r}")


def _uint(value: Any, name: str) -> int:
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ConfigError(f"`{name}` expects an integer, got {value!r}") from None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"`{name}` expects an integer, got {value!r}")
    if value < 0:
        raise ConfigError(f"`{name}` must not be negative, got {value}")
    return value


def _float(value: Any, name: str) -> float:
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise ConfigError(f"`{name}` expects a number, got {value!r}") from None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"`{name}` expects a number, got {value!r}")
    return float(value)


def _str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"`{name}` expects a string, got {value!r}")
    return value


def _path(value: Any, name: str) -> Path:
    return Path(_str(value, name))


def _build(cls: type, spec: Mapping[str, Callable[[Any, str], Any]], data: Any, section: str) -> Any:
    if not isinstance(data, Mapping):
        raise ConfigError(f"`{section or 'config'}` expects a table, got {data!r}")
    unknown = sorted(set(data) - set(spec))
    if unknown:
        where = f" in `{section}`" if section else ""
        raise ConfigError(f"unknown field `{unknown[0]}`{where}")
    prefix = f"{section}." if section else ""
    return cls(**{key: spec[key](value, prefix + key) for key, value in data.items()})


@dataclass
class LoopConfig:
    """Tunables for the agent run loop."""

    max_steps: int = 12
    max_tokens: int | None = None
    temperature: float | None = None
    summary_threshold: int = 30
    summary_keep_tail: int = 8
    vector_recall: bool = False
    vector_recall_top_k: int = 5
    vector_recall_min_score: float = 0.2


_LOOP_SPEC: dict[str, Callable[[Any, str], Any]] = {
    "max_steps": _uint,
    "max_tokens": _uint,
    "temperature": _float,
    "summary_threshold": _uint,
    "summary_keep_tail": _uint,
    "vector_recall": _bool,
    "vector_recall_top_k": _uint,
    "vector_recall_min_score": _float,
}


@dataclass
class PermissionsConfig:
    """Permission gates for built-in tools."""

    allow_read: bool = True
    allow_write: bool = True
    allow_shell: bool = True
    allow_network: bool = True
    max_runtime_secs: int = 120

    def to_runtime(self) -> Permissions:
        return Permissions(
            allow_read=self.allow_read,
            allow_write=self.allow_write,
            allow_shell=self.allow_shell,
            allow_network=self.allow_network,
            max_runtime_secs=self.max_runtime_secs,
        )


_PERMISSIONS_SPEC: dict[str, Callable[[Any, str], Any]] = {
    "allow_read": _bool,
    "allow_write": _bool,
    "allow_shell": _bool,
    "allow_network": _bool,
    "max_runtime_secs": _uint,
}


@dataclass
class AgentConfig:
    """Top-level configuration."""

    provider: str = "openai"
    model: str | None = None
    no_tools: bool = False
    evolve: bool = False
    config_dir: Path | None = None
    agent: LoopConfig = field(default_factory=LoopConfig)
    permissions: PermissionsConfig = field(default_factory=PermissionsConfig)

    @classmethod
    def load(cls, cli_config_dir: str | os.PathLike[str] | None = None) -> AgentConfig:
        """Load the layered configuration.

        ``cli_config_dir`` overrides the user config directory lookup and
        becomes ``config_dir`` unless a layer sets it explicitly.
        """
        user_dir = Path(cli_config_dir) if cli_config_dir is not None else default_user_config_dir()

        merged: dict[str, Any] = {}
        files = [SYSTEM_CONFIG_PATH]
        if user_dir is not None:
            files.append(user_dir / "config.toml")
        files.append(Path(LOCAL_CONFIG_NAME))
        for path in files:
            if path.exists():
                _deep_merge(merged, _read_toml(path))
        _apply_env(merged, os.environ)

        cfg = _build(cls, _TOP_SPEC, merged, "")
        if cfg.config_dir is None:
            cfg.config_dir = user_dir
        return cfg

    def resolved_config_dir(self) -> Path:
        """Configured directory, else the user default, else ``.agent``."""
        if self.config_dir is not None:
            return Path(self.config_dir)
        return default_user_config_dir() or Path(".agent")


_TOP_SPEC: dict[str, Callable[[Any, str], Any]] = {
    "provider": _str,
    "model": _str,
    "no_tools": _bool,
    "evolve": _bool,
    "config_dir": _path,
    "agent": lambda value, name: _build(LoopConfig, _LOOP_SPEC, value, name),
    "permissions": lambda value, name: _build(PermissionsConfig, _PERMISSIONS_SPEC, value, name),
}


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"{path}: {exc}") from exc


def _deep_merge(dst: dict[str, Any], src: Mapping[str, Any]) -> None:
    for key, value in src.items():
        if isinstance(value, Mapping) and isinstance(dst.get(key), dict):
            _deep_merge(dst[key], value)
        elif isinstance(value, Mapping):
            dst[key] = {}
            _deep_merge(dst[key], value)
        else:
            dst[key] = value


def _apply_env(merged: dict[str, Any], environ: Mapping[str, str]) -> None:
    for name, value in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX):].lower().split("__")
        if any(not part for part in parts):
            continue
        target = merged
        for part in parts[:-1]:
            target = target.setdefault(part, {})
            if not isinstance(target, dict):
                raise ConfigError(f"environment variable {name} conflicts with a scalar value")
        target[parts[-1]] = value


def default_user_config_dir() -> Path | None:
    """``$XDG_CONFIG_HOME/agent``, else ``~/.config/agent``, else None."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "agent"
    home = os.environ.get("HOME")
    if home is not None:
        return Path(home) / ".config" / "agent"
    return None