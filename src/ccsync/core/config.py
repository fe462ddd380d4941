"""
ccsync configuration management.

Provides layered TOML configuration with validation using Pydantic.
Files are discovered in four locations and merged lowest precedence
first: lists are additive, booleans are OR-merged, and scalar settings
come from the highest-precedence file that sets them.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ccsync.core.errors import ConfigError
from ccsync.core.models import ConflictStrategy, FileType, SyncDirection

PROJECT_CONFIG_NAME = ".ccsync"
LOCAL_CONFIG_NAME = ".ccsync.local"
GLOBAL_CONFIG_NAME = "config.toml"

_LIST_KEYS = ("ignore", "include", "rules")
_BOOL_KEYS = ("preserve_symlinks", "dry_run", "non_interactive")
_SCALAR_KEYS = ("conflict_strategy", "logging")


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file_enabled: bool = False
    console_enabled: bool = True
    json_format: bool = False
    log_directory: Path = Field(default_factory=lambda: Path.home() / ".ccsync" / "logs")

    @field_validator("log_directory", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()


class SyncRule(BaseModel):
    """Direction and type specific include/exclude rule."""

    patterns: list[str] = Field(default_factory=list)
    direction: SyncDirection | None = None
    file_type: FileType | None = None
    include: bool

    def applies_to(self, direction: SyncDirection) -> bool:
        return self.direction is None or self.direction == direction


class SyncConfig(BaseModel):
    """Final merged configuration consumed by the sync engine."""

    ignore: list[str] = Field(default_factory=list)
    include: list[str] = Field(default_factory=list)
    preserve_symlinks: bool = False
    dry_run: bool = False
    non_interactive: bool = False
    conflict_strategy: ConflictStrategy | None = None
    rules: list[SyncRule] = Field(default_factory=list)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("conflict_strategy", mode="before")
    @classmethod
    def parse_strategy(cls, v: Any) -> Any:
        if isinstance(v, str):
            return ConflictStrategy.from_string(v)
        return v

    @model_validator(mode="after")
    def check_patterns(self) -> SyncConfig:
        for pattern in self.ignore:
            if not pattern.strip():
                raise ValueError("Ignore pattern cannot be empty")
        for pattern in self.include:
            if not pattern.strip():
                raise ValueError("Include pattern cannot be empty")
        for idx, rule in enumerate(self.rules, 1):
            if not rule.patterns:
                raise ValueError(f"Rule #{idx} has no patterns")
            if any(not pattern.strip() for pattern in rule.patterns):
                raise ValueError(f"Rule #{idx} has empty pattern")
        return self

    @property
    def effective_strategy(self) -> ConflictStrategy:
        return self.conflict_strategy or ConflictStrategy.FAIL


@dataclass(frozen=True)
class ConfigFiles:
    """Discovered configuration files, highest precedence first."""

    cli: Path | None = None
    local: Path | None = None
    project: Path | None = None
    global_: Path | None = None

    def in_merge_order(self) -> list[Path]:
        """Files ordered lowest precedence first."""
        return [p for p in (self.global_, self.project, self.local, self.cli) if p is not None]


def _find_upwards(name: str, start_dir: Path) -> Path | None:
    current = start_dir.resolve()
    for directory in (current, *current.parents):
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def global_config_path() -> Path:
    """Location of the user-wide configuration file."""
    base = os.environ.get("XDG_CONFIG_HOME")
    config_dir = Path(base) if base else Path.home() / ".config"
    return config_dir / "ccsync" / GLOBAL_CONFIG_NAME


def discover_config_files(
    cli_path: Path | None = None,
    start_dir: Path | None = None,
) -> ConfigFiles:
    """Find every configuration file that applies to the current directory."""
    start_dir = start_dir or Path.cwd()
    global_path = global_config_path()
    return ConfigFiles(
        cli=cli_path if cli_path is not None and cli_path.is_file() else None,
        local=_find_upwards(LOCAL_CONFIG_NAME, start_dir),
        project=_find_upwards(PROJECT_CONFIG_NAME, start_dir),
        global_=global_path if global_path.is_file() else None,
    )


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse one TOML configuration file into a raw mapping."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except OSError as exc:
        raise ConfigError(f"Failed to read config file: {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse config file: {path}: {exc}") from exc


def merge_config_data(layers: list[dict[str, Any]]) -> dict[str, Any]:
    """Merge raw config mappings given lowest precedence first."""
    merged: dict[str, Any] = {key: [] for key in _LIST_KEYS}
    merged.update({key: False for key in _BOOL_KEYS})

    for layer in layers:
        for key in _LIST_KEYS:
            merged[key].extend(layer.get(key, []))
        for key in _BOOL_KEYS:
            merged[key] = merged[key] or bool(layer.get(key, False))
        for key in _SCALAR_KEYS:
            if key in layer:
                merged[key] = layer[key]

    return merged


def merge_config_files(files: ConfigFiles) -> SyncConfig:
    """Load, merge and validate the discovered configuration files."""
    layers = [read_config_file(path) for path in files.in_merge_order()]
    try:
        return SyncConfig.model_validate(merge_config_data(layers))
    except ValidationError as exc:
        sources = ", ".join(str(p) for p in files.in_merge_order()) or "defaults"
        raise ConfigError(f"Invalid configuration ({sources}): {exc}") from exc


def load_config(
    cli_path: Path | None = None,
    no_config: bool = False,
    start_dir: Path | None = None,
) -> SyncConfig:
    """Load the merged configuration, or defaults when config files are disabled."""
    if no_config:
        return SyncConfig()
    if cli_path is not None and not cli_path.is_file():
        raise ConfigError(f"Config file not found: {cli_path}")
    return merge_config_files(discover_config_files(cli_path, start_dir))
