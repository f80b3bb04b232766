"""Typed configuration loading and access.

relgit reads an optional ``relgit.toml`` at the repository root:

    [history]
    path = "."

    [stage]
    skip = false

    [tag]
    retries = 3

    [push]
    remote = "origin"
    branch = "main"
    no_verify = false

Every key is optional; CLI flags override whatever is loaded here.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_int, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_TAG_RETRIES",
    "Config",
    "ConfigError",
    "HistoryConfig",
    "PushConfig",
    "StageConfig",
    "TagConfig",
    "load_config",
]

CONFIG_FILENAME = "relgit.toml"

DEFAULT_TAG_RETRIES = 3


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class HistoryConfig:
    """Scope of history reads, relative to the repository root."""

    path: str = "."


@dataclass(frozen=True, slots=True)
class StageConfig:
    skip: bool = False


@dataclass(frozen=True, slots=True)
class TagConfig:
    """Retry budget for tag creation."""

    retries: int = DEFAULT_TAG_RETRIES


@dataclass(frozen=True, slots=True)
class PushConfig:
    """Push target. Remote and branch have no defaults on purpose: a push
    without them is a configuration error."""

    remote: str | None = None
    branch: str | None = None
    no_verify: bool = False


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    history: HistoryConfig = field(default_factory=HistoryConfig)
    stage: StageConfig = field(default_factory=StageConfig)
    tag: TagConfig = field(default_factory=TagConfig)
    push: PushConfig = field(default_factory=PushConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        history: StrDict = get_table(data, "history") or {}
        stage: StrDict = get_table(data, "stage") or {}
        tag: StrDict = get_table(data, "tag") or {}
        push: StrDict = get_table(data, "push") or {}

        retries = get_int(tag, "retries")
        if retries is not None and retries < 0:
            raise ValueError(f"tag.retries must be >= 0, got {retries}")

        return cls(
            history=HistoryConfig(path=get_str(history, "path") or "."),
            stage=StageConfig(skip=bool(get_bool(stage, "skip"))),
            tag=TagConfig(retries=DEFAULT_TAG_RETRIES if retries is None else retries),
            push=PushConfig(
                remote=get_str(push, "remote"),
                branch=get_str(push, "branch"),
                no_verify=bool(get_bool(push, "no_verify")),
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relgit.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))
