# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for the deltalint orchestrator."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "deltalint"
CONFIG_FILENAME: Final[str] = "deltalint.toml"

DEFAULT_SOURCE_FOLDERS: Final[tuple[str, ...]] = ("components/", "libs/", "pages/", "services/")
DEFAULT_EXTENSIONS: Final[tuple[str, ...]] = (".tsx", ".js", ".ts", ".jsx")


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class TriggerFilesConfig(BaseModel):
    """Files whose modification invalidates previous lint results."""

    model_config = ConfigDict(validate_assignment=True)

    ignore_file: str = ".eslintignore"
    rule_config: str = ".eslintrc"
    manifest: str = "package.json"


class EslintConfig(BaseModel):
    """Settings used to invoke the ESLint command line."""

    model_config = ConfigDict(validate_assignment=True)

    command: list[str] = Field(default_factory=lambda: ["npx", "--no-install", "eslint"])
    linter_name: str = "eslint"
    use_ext_flag: bool = True

    @field_validator("command")
    @classmethod
    def _require_command(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("eslint command must contain at least one argument")
        return value


class ProcessConfig(BaseModel):
    """Subprocess policy applied to git queries."""

    model_config = ConfigDict(validate_assignment=True)

    timeout: float | None = Field(default=None, ge=0)
    fail_on_stderr: bool = True


class DeltaLintConfig(BaseModel):
    """Top-level configuration for a deltalint run."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    base_branch: str = "master"
    source_folders: list[str] = Field(default_factory=lambda: list(DEFAULT_SOURCE_FOLDERS))
    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    triggers: TriggerFilesConfig = Field(default_factory=TriggerFilesConfig)
    eslint: EslintConfig = Field(default_factory=EslintConfig)
    process: ProcessConfig = Field(default_factory=ProcessConfig)

    @field_validator("base_branch")
    @classmethod
    def _require_branch(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("base_branch must not be empty")
        return stripped


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` recursively updated with ``override``."""

    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _read_toml(path: Path) -> dict[str, Any]:
    """Parse the TOML document at ``path``.

    Args:
        path: TOML file to read.

    Returns:
        dict[str, Any]: Parsed document, empty when the file does not exist.

    Raises:
        ConfigError: If the document cannot be read or parsed.
    """

    if not path.exists():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration at {path}: {exc}") from exc
    if not isinstance(data, MutableMapping):
        raise ConfigError(f"Configuration at {path} must be a table")
    return dict(data)


def _pyproject_section(path: Path) -> dict[str, Any]:
    document = _read_toml(path)
    tool_section = document.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if not isinstance(section, Mapping):
        return {}
    return dict(section)


def load_config(
    root: Path,
    *,
    config_path: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> DeltaLintConfig:
    """Build the effective configuration for ``root``.

    Sources are merged from lowest to highest precedence: built-in defaults,
    ``[tool.deltalint]`` in ``pyproject.toml``, ``deltalint.toml`` (or the
    explicit ``config_path``), then ``overrides``.

    Args:
        root: Repository root used to locate configuration files.
        config_path: Explicit TOML file replacing ``deltalint.toml``.
        overrides: Values supplied on the command line.

    Returns:
        DeltaLintConfig: Validated configuration.

    Raises:
        ConfigError: If a source cannot be parsed or fails validation.
    """

    if config_path is not None and not config_path.exists():
        raise ConfigError(f"Configuration file {config_path} does not exist")
    payload: dict[str, Any] = {}
    payload = _deep_merge(payload, _pyproject_section(root / PYPROJECT_FILENAME))
    payload = _deep_merge(payload, _read_toml(config_path or root / CONFIG_FILENAME))
    payload = _deep_merge(payload, {key: value for key, value in (overrides or {}).items() if value is not None})
    try:
        return DeltaLintConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_SOURCE_FOLDERS",
    "DeltaLintConfig",
    "EslintConfig",
    "ProcessConfig",
    "TriggerFilesConfig",
    "load_config",
]
