from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from shared.schemas import Record


def canonical_json_bytes(value: BaseModel | dict[str, Any] | list[Any]) -> bytes:
    if isinstance(value, BaseModel):
        payload: Any = value.model_dump(mode="json")
    else:
        payload = value
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=True)
    return encoded.encode("utf-8")


def record_from_wire(raw: bytes | str) -> Record:
    return Record.model_validate_json(raw)
