from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from pathlib import Path

from envsender.parser import read_env_file
from shared.constants import CONNECTIVITY_TEST_SOURCE, PROCESS_ENV_SOURCE, USER_AGENT
from shared.enums import RecordOrigin
from shared.schemas import Record

logger = logging.getLogger("envsender.records")

EnvironmentProvider = Callable[[], Mapping[str, str]]


def current_environment() -> dict[str, str]:
    return dict(os.environ)


def record_from_file(path: str | Path, *, tagged: bool = True) -> Record:
    logger.info("reading env file: %s", path)
    variables = read_env_file(path)
    metadata = None
    if tagged:
        metadata = {"file_type": RecordOrigin.ENV_FILE.value, "user_agent": USER_AGENT}
    return Record(
        source=str(path),
        variables=variables,
        captured_at=datetime.now(UTC),
        metadata=metadata,
    )


def record_from_environment(provider: EnvironmentProvider | None = None, *, tagged: bool = True) -> Record:
    variables = dict((provider or current_environment)())
    metadata = {"source": RecordOrigin.PROCESS_ENVIRONMENT.value} if tagged else None
    return Record(
        source=PROCESS_ENV_SOURCE,
        variables=variables,
        captured_at=datetime.now(UTC),
        metadata=metadata,
    )


def connectivity_probe() -> Record:
    return Record(source=CONNECTIVITY_TEST_SOURCE, variables={}, captured_at=datetime.now(UTC))
