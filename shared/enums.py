from __future__ import annotations

from enum import Enum


class RecordOrigin(str, Enum):
    ENV_FILE = "env_file"
    PROCESS_ENVIRONMENT = "process_environment"
