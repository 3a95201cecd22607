from __future__ import annotations

CLIENT_NAME = "envsender"
CLIENT_VERSION = "0.1.0"
USER_AGENT = f"{CLIENT_NAME}/{CLIENT_VERSION}"

DEFAULT_BACKEND_URL = "http://127.0.0.1:8000/api/env"
DEFAULT_TIMEOUT_SECONDS = 30
MAX_TIMEOUT_SECONDS = 3600

PROCESS_ENV_SOURCE = "process_environment"
CONNECTIVITY_TEST_SOURCE = "test"

WELL_KNOWN_FILES = (".env", ".env.local")

MAX_LOGGED_BODY_CHARS = 2048
