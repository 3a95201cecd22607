"""Wire schemas and constants shared by the envsender pipeline."""

from shared.enums import RecordOrigin
from shared.schemas import DeliveryResult, Record

__all__ = [
    "Record",
    "DeliveryResult",
    "RecordOrigin",
]
