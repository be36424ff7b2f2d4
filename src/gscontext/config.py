"""Configuration management for the script context utilities."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gscontext.common.exceptions import ConfigError

DEFAULT_ENV_PREFIX = "GSCONTEXT__"


def _merge_dicts(base: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base and return a copy."""

    result = dict(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


def _assign_path(root: dict[str, Any], path: Iterable[str], value: Any) -> None:
    current = root
    *parents, last = list(path)
    for segment in parents:
        current = current.setdefault(segment, {})
    current[last] = value


def _parse_scalar(value: str) -> Any:
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError:
        return value
    return parsed


class HTTPSettings(BaseModel):
    """Outbound HTTP fetch configuration."""

    model_config = ConfigDict(extra="ignore")

    # No timeout unless one is configured explicitly.
    timeout: float | None = Field(default=None, gt=0)
    follow_redirects: bool = True
    user_agent: str | None = Field(default="gscontext/1.0")
    headers: dict[str, str] = Field(default_factory=dict)


class XMLSettings(BaseModel):
    """Indentation of re-serialized documents. Output is always UTF-8."""

    model_config = ConfigDict(extra="ignore")

    indent: int = Field(default=2, ge=0, le=16)


class ResourceSettings(BaseModel):
    """Roots searched by the resource reader, in order."""

    model_config = ConfigDict(extra="ignore")

    search_paths: list[Path] = Field(default_factory=list)

    @field_validator("search_paths", mode="before")
    @classmethod
    def _split_path_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [item for item in value.split(os.pathsep) if item]
        return value


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    level: str = "INFO"
    format: Literal["text", "json"] = "text"
    file: Path | None = None

    @field_validator("level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value}")
        return level


class Settings(BaseModel):
    """Top-level settings object."""

    model_config = ConfigDict(extra="ignore")

    http: HTTPSettings = Field(default_factory=HTTPSettings)
    xml: XMLSettings = Field(default_factory=XMLSettings)
    resources: ResourceSettings = Field(default_factory=ResourceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(
        cls,
        path: Path | str | None = None,
        *,
        overrides: Mapping[str, Any] | None = None,
        env_prefix: str = DEFAULT_ENV_PREFIX,
    ) -> Settings:
        """Load settings from a YAML file applying environment and explicit overrides."""

        base_data: dict[str, Any] = {}
        if path is not None:
            config_path = Path(path)
            if not config_path.exists():
                raise ConfigError(f"Config file not found: {config_path}", config_file=str(config_path))
            try:
                with config_path.open("r", encoding="utf-8") as file:
                    base_data = yaml.safe_load(file) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {config_path}: {exc}", config_file=str(config_path), cause=exc) from exc
            if not isinstance(base_data, Mapping):
                raise ConfigError(f"Config root must be a mapping: {config_path}", config_file=str(config_path))

        env_overrides = cls._load_env_overrides(env_prefix)
        cli_overrides = cls._normalize_overrides(overrides or {})

        merged = _merge_dicts(dict(base_data), env_overrides)
        merged = _merge_dicts(merged, cli_overrides)

        try:
            return cls.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(f"Configuration validation failed: {exc}", config_file=str(path) if path else None, cause=exc) from exc

    @staticmethod
    def _load_env_overrides(prefix: str) -> dict[str, Any]:
        if not prefix:
            return {}
        result: dict[str, Any] = {}
        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :]
            if not stripped:
                continue
            path = [segment.lower() for segment in stripped.split("__") if segment]
            if not path:
                continue
            _assign_path(result, path, _parse_scalar(value))
        return result

    @staticmethod
    def _normalize_overrides(overrides: Mapping[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in overrides.items():
            if isinstance(value, Mapping):
                result[key] = Settings._normalize_overrides(value)
                continue
            if isinstance(key, str) and "." in key:
                path = [segment.strip().lower() for segment in key.split(".") if segment.strip()]
                if not path:
                    continue
                _assign_path(result, path, value if not isinstance(value, str) else _parse_scalar(value))
            else:
                result[key] = value if not isinstance(value, str) else _parse_scalar(value)
        return result

    @staticmethod
    def parse_cli_overrides(values: list[str]) -> dict[str, str]:
        """Parse ``KEY=VALUE`` arguments into a dictionary."""
        assignments: dict[str, str] = {}
        for item in values:
            if "=" not in item:
                raise ConfigError("Overrides must be in KEY=VALUE format")
            key, value = item.split("=", 1)
            key = key.strip()
            if not key:
                raise ConfigError("Override key must not be empty")
            assignments[key] = value
        return assignments


__all__ = [
    "DEFAULT_ENV_PREFIX",
    "HTTPSettings",
    "LoggingSettings",
    "ResourceSettings",
    "Settings",
    "XMLSettings",
]
