from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Record(BaseModel):
    """One unit of collected key/value data, serialized verbatim to the wire."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    source: str
    variables: dict[str, str] = Field(default_factory=dict)
    captured_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    metadata: dict[str, str] | None = None

    @field_validator("captured_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class DeliveryResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    status_code: int = Field(ge=100, le=999)
    accepted: bool
