from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pathlib import Path

CONFIG_FILENAME = "architect.json"

DEFAULT_MAX_LINES = 40

ArchPattern = Literal["Hexagonal", "Clean", "MVC", "Ninguno"]


class ViolationPolicy(str, Enum):
    """How many violations a single file may report per run."""

    FIRST_ONLY = "first_only"
    EXHAUSTIVE = "exhaustive"


class ForbiddenRule(BaseModel):
    """A forbidden import relationship between two path patterns."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_pattern: str = Field(
        alias="from",
        description="Substring matched against the path of the checked file",
    )
    to: str = Field(description="Substring matched against the import source")

    def matches(self, file_path: str, import_source: str) -> bool:
        """Case-insensitive substring match on both sides."""
        return (
            self.from_pattern.lower() in file_path.lower()
            and self.to.lower() in import_source.lower()
        )


class ArchitectConfig(BaseModel):
    """Configuration stored in architect.json."""

    max_lines_per_function: int = Field(
        default=DEFAULT_MAX_LINES,
        ge=0,
        description="Maximum number of lines allowed per class method",
    )
    architecture_pattern: ArchPattern = Field(
        default="MVC",
        description="Architectural pattern of the project (informational)",
    )
    forbidden_imports: list[ForbiddenRule] = Field(
        default_factory=list,
        description="Forbidden import rules, checked in order",
    )


@dataclass(frozen=True)
class RuleContext:
    """Immutable run-wide rule settings shared by every file check."""

    max_lines: int
    forbidden_rules: tuple[ForbiddenRule, ...] = ()
    policy: ViolationPolicy = ViolationPolicy.FIRST_ONLY

    @classmethod
    def from_config(
        cls,
        config: ArchitectConfig,
        policy: ViolationPolicy = ViolationPolicy.FIRST_ONLY,
    ) -> RuleContext:
        return cls(
            max_lines=config.max_lines_per_function,
            forbidden_rules=tuple(config.forbidden_imports),
            policy=policy,
        )


class ConfigError(Exception):
    """Raised when the config file is missing or cannot be parsed."""


def config_path(root: Path) -> Path:
    return Path(root) / CONFIG_FILENAME


def load_config(root: Path) -> ArchitectConfig:
    """Load architect.json from the project root."""
    path = config_path(root)

    if not path.is_file():
        msg = f"Configuration file not found: {path}"
        raise ConfigError(msg)

    try:
        data = orjson.loads(path.read_bytes())
    except OSError as e:
        msg = f"Cannot read {path}: {e}"
        raise ConfigError(msg) from e
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise ConfigError(msg) from e

    if not isinstance(data, dict):
        msg = f"Invalid config in {path}: expected a JSON object"
        raise ConfigError(msg)

    try:
        return ArchitectConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {path}: {e}"
        raise ConfigError(msg) from e


def write_default_config(
    root: Path,
    *,
    max_lines: int = DEFAULT_MAX_LINES,
    pattern: ArchPattern = "MVC",
) -> ArchitectConfig:
    """Persist a fresh architect.json with no forbidden imports."""
    config = ArchitectConfig(
        max_lines_per_function=max_lines,
        architecture_pattern=pattern,
    )
    payload = config.model_dump(mode="json", by_alias=True)
    config_path(root).write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
    return config
