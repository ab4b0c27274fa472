"""Configuration for parsing linter reports and publishing reviews."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .problems import DEFAULT_MARKER

DEFAULT_MESSAGE = "lint-review"
DEFAULT_SUMMARY_TEMPLATE = "lint-review reported {count} problems"


class ConfigError(RuntimeError):
    """Invalid or unreadable review configuration."""


def _coerce_str(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{field_name} must be a string")
    normalized = value.strip()
    if not normalized:
        raise ConfigError(f"{field_name} cannot be empty")
    return normalized


def _coerce_optional_bool(value: Any, field_name: str) -> bool | None:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ConfigError(f"{field_name} must be a boolean")
    return value


def _coerce_template(value: Any, field_name: str, default: str) -> str:
    if value is None:
        return default
    template = _coerce_str(value, field_name)
    try:
        template.format(count=0)
    except (KeyError, IndexError, ValueError) as exc:
        raise ConfigError(f"{field_name} may only reference {{count}}") from exc
    return template


def _pick(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


@dataclass(frozen=True)
class ReviewConfig:
    """How reports are tokenized and how published reviews are labelled."""

    marker: str = DEFAULT_MARKER
    treat_empty_as_error: bool | None = None
    message: str = DEFAULT_MESSAGE
    summary_template: str = DEFAULT_SUMMARY_TEMPLATE

    def summary(self, count: int) -> str:
        return self.summary_template.format(count=count)

    def empty_is_error(self, default: bool) -> bool:
        """Empty-report policy; unset means the publisher's own default."""
        if self.treat_empty_as_error is None:
            return default
        return self.treat_empty_as_error

    @classmethod
    def from_dict(cls, raw: dict[str, Any] | None = None) -> "ReviewConfig":
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ConfigError("review config must be a mapping")

        marker = _pick(raw, "marker", "extensionMarker", "extension_marker")
        return cls(
            marker=DEFAULT_MARKER if marker is None else _coerce_str(marker, "marker"),
            treat_empty_as_error=_coerce_optional_bool(
                _pick(raw, "treatEmptyAsError", "treat_empty_as_error"),
                "treatEmptyAsError",
            ),
            message=DEFAULT_MESSAGE
            if _pick(raw, "message") is None
            else _coerce_str(raw["message"], "message"),
            summary_template=_coerce_template(
                _pick(raw, "summaryTemplate", "summary_template"),
                "summaryTemplate",
                DEFAULT_SUMMARY_TEMPLATE,
            ),
        )

    def with_overrides(self, **changes: Any) -> "ReviewConfig":
        """Return a copy with non-None `changes` applied."""
        merged = {
            "marker": self.marker,
            "treatEmptyAsError": self.treat_empty_as_error,
            "message": self.message,
            "summaryTemplate": self.summary_template,
        }
        aliases = {"treat_empty_as_error": "treatEmptyAsError", "summary_template": "summaryTemplate"}
        for key, value in changes.items():
            if value is not None:
                merged[aliases.get(key, key)] = value
        return ReviewConfig.from_dict(merged)


def _load_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text())
    except FileNotFoundError:
        raise ConfigError(f"missing config file: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e


def load_review_config(path: Path | None) -> ReviewConfig:
    """Load config from YAML; `None` or an empty file gives the defaults."""
    if path is None:
        return ReviewConfig()
    raw = _load_yaml(path)
    if raw is None:
        return ReviewConfig()
    return ReviewConfig.from_dict(raw)
