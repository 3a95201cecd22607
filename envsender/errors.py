from __future__ import annotations


class EnvSenderError(Exception):
    """Base class for failures the CLI shell turns into exit codes."""


class ReadError(EnvSenderError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class DeliveryError(EnvSenderError):
    """The network exchange did not complete (connect, timeout, TLS, reset)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"delivery to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class ClientConstructionError(EnvSenderError):
    pass


class ConfigError(EnvSenderError, ValueError):
    pass
