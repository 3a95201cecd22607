from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from envsender.errors import ConfigError
from shared.constants import DEFAULT_BACKEND_URL, DEFAULT_TIMEOUT_SECONDS, MAX_TIMEOUT_SECONDS

logger = logging.getLogger("envsender.config")

DEFAULT_CONFIG_DIR = Path.home() / ".envsender"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"


class SenderConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    backend_url: str = DEFAULT_BACKEND_URL
    auth_token: str | None = None
    timeout_seconds: int = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, le=MAX_TIMEOUT_SECONDS)
    tls_verify: bool = True

    @field_validator("backend_url")
    @classmethod
    def validate_backend_url(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("backend_url cannot be empty")
        if not cleaned.startswith(("http://", "https://")):
            raise ValueError("backend_url must be an http:// or https:// URL")
        return cleaned

    @field_validator("auth_token")
    @classmethod
    def normalize_token(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(f"invalid boolean: {raw}")


def _env_overrides() -> dict[str, Any]:
    mapping: dict[str, tuple[str, str]] = {
        "ENVSENDER_BACKEND_URL": ("backend_url", "str"),
        "ENVSENDER_AUTH_TOKEN": ("auth_token", "str"),
        "ENVSENDER_TIMEOUT": ("timeout_seconds", "int"),
        "ENVSENDER_TLS_VERIFY": ("tls_verify", "bool"),
    }
    out: dict[str, Any] = {}
    for env_name, (field_name, kind) in mapping.items():
        raw = os.getenv(env_name)
        if raw is None:
            continue
        if kind == "int":
            try:
                out[field_name] = int(raw)
            except ValueError as exc:
                raise ConfigError(f"{env_name} must be an integer, got {raw!r}") from exc
        elif kind == "bool":
            out[field_name] = _parse_bool(raw)
        else:
            out[field_name] = raw
    return out


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"cannot read config {path}: {exc}") from exc


def load_config(config_path: Path | None = None) -> SenderConfig:
    """Build the delivery configuration from an optional TOML file and the environment.

    An explicit ``config_path`` must exist. The default path is optional and
    falls back to built-in defaults when absent. ``ENVSENDER_*`` variables
    override file values.
    """
    if config_path is not None:
        path = config_path.expanduser().resolve(strict=False)
        if not path.exists():
            raise ConfigError(f"config file not found: {path}")
    else:
        path = DEFAULT_CONFIG_PATH

    raw: dict[str, Any] = _read_toml(path) if path.exists() else {}
    raw.update(_env_overrides())
    try:
        config = SenderConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"invalid config at {path}: {exc}") from exc
    _warn_on_plaintext_token(config)
    return config


def apply_overrides(config: SenderConfig, **updates: Any) -> SenderConfig:
    given = {key: value for key, value in updates.items() if value is not None}
    if not given:
        return config
    merged = config.model_dump()
    merged.update(given)
    try:
        updated = SenderConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"invalid option: {exc}") from exc
    _warn_on_plaintext_token(updated)
    return updated


def _warn_on_plaintext_token(config: SenderConfig) -> None:
    if config.auth_token and config.backend_url.startswith("http://"):
        logger.warning("auth token will be sent over plain HTTP to %s", config.backend_url)
