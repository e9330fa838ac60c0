"""
Generator configuration.

Resolution order (later wins):
  1) GeneratorConfig defaults
  2) config file: explicit path, else ARGUMENTER_CONFIG_FILE, else ./argumenter.yaml
  3) environment overrides:
       ARGUMENTER_TAG_KEY, ARGUMENTER_METHOD_NAME, ARGUMENTER_FORMATTER,
       ARGUMENTER_GOFMT, ARGUMENTER_LOG_LEVEL

Config file format (YAML or JSON):
    tag_key: arg
    method_name: Valid
    formatter: builtin
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from argumenter.core.errors import ConfigError

_log = logging.getLogger("argumenter.config")

DEFAULT_CONFIG_FILE = "argumenter.yaml"

_ENV_OVERRIDES = {
    "ARGUMENTER_TAG_KEY": "tag_key",
    "ARGUMENTER_METHOD_NAME": "method_name",
    "ARGUMENTER_FORMATTER": "formatter",
    "ARGUMENTER_GOFMT": "gofmt_path",
    "ARGUMENTER_LOG_LEVEL": "log_level",
}

FormatterMode = Literal["auto", "builtin", "gofmt"]


class GeneratorConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    tag_key: str = "arg"
    method_name: str = "Valid"
    tool_name: str = "argumenter"
    output_suffix: str = "_argumenter.go"

    formatter: FormatterMode = "auto"
    gofmt_path: Optional[str] = None

    # Directory holding replacement *.go.j2 templates
    templates_dir: Optional[str] = None

    log_level: str = "INFO"

    @field_validator("tag_key", "method_name", "tool_name")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def _upper(cls, v: str) -> str:
        return (v or "INFO").strip().upper()


def _resolve_path(path: Optional[Path]) -> Optional[Path]:
    if path is not None:
        return Path(path)
    env_path = os.getenv("ARGUMENTER_CONFIG_FILE", "").strip()
    if env_path:
        return Path(env_path)
    return Path.cwd() / DEFAULT_CONFIG_FILE


def _read_config_file(resolved: Path) -> Dict[str, Any]:
    try:
        raw_text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        _log.warning("Cannot read config file %s: %s", resolved, exc)
        return {}

    # JSON first, YAML otherwise
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            _log.warning("Failed to parse config file %s as JSON or YAML: %s", resolved, exc)
            return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        _log.warning("Config file %s must be a mapping, got %s", resolved, type(data).__name__)
        return {}
    _log.debug("Loaded %d config keys from %s", len(data), resolved)
    return data


def _env_overrides() -> Dict[str, str]:
    out: Dict[str, str] = {}
    for env_key, field_name in _ENV_OVERRIDES.items():
        v = (os.getenv(env_key) or "").strip()
        if v:
            out[field_name] = v
    return out


def load_config(path: Optional[Path] = None, **overrides: Any) -> GeneratorConfig:
    """Build a GeneratorConfig from file, environment and keyword overrides."""
    values: Dict[str, Any] = {}

    resolved = _resolve_path(path)
    if resolved is not None and resolved.exists():
        values.update(_read_config_file(resolved))
    elif path is not None:
        _log.warning("Config file %s does not exist; using defaults", resolved)

    values.update(_env_overrides())
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return GeneratorConfig(**values)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc
