from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from envsender.client import DeliveryClient
from envsender.errors import EnvSenderError
from envsender.records import EnvironmentProvider, connectivity_probe, record_from_environment, record_from_file
from shared.constants import WELL_KNOWN_FILES
from shared.schemas import DeliveryResult

logger = logging.getLogger("envsender.runtime")


def deliver_file(client: DeliveryClient, path: str | Path) -> DeliveryResult:
    record = record_from_file(path)
    return client.send(record)


def deliver_files(client: DeliveryClient, paths: Iterable[str | Path]) -> dict[str, int]:
    """Deliver each file in order; a failing path is logged and skipped.

    Returns a summary of the pass. Finishing the iteration is success no
    matter how individual paths fared.
    """
    attempted = 0
    sent = 0
    rejected = 0
    failed = 0
    for path in paths:
        attempted += 1
        try:
            result = deliver_file(client, path)
        except EnvSenderError as exc:
            failed += 1
            logger.error("failed to process %s: %s", path, exc, extra={"path": str(path)})
            continue
        sent += 1
        if not result.accepted:
            rejected += 1
        logger.info("processed %s", path)
    return {"attempted": attempted, "sent": sent, "rejected": rejected, "failed": failed}


def deliver_environment(client: DeliveryClient, provider: EnvironmentProvider | None = None) -> DeliveryResult:
    record = record_from_environment(provider)
    logger.debug("collected %s environment variable(s)", len(record.variables))
    return client.send(record)


def deliver_well_known(
    client: DeliveryClient,
    names: Sequence[str] = WELL_KNOWN_FILES,
    base_dir: Path | None = None,
) -> Path | None:
    for name in names:
        path = (base_dir / name) if base_dir is not None else Path(name)
        try:
            deliver_file(client, path)
        except EnvSenderError as exc:
            logger.debug("could not process %s: %s", path, exc)
            continue
        logger.info("processed %s", path)
        return path
    return None


def check_connectivity(client: DeliveryClient) -> DeliveryResult:
    return client.send(connectivity_probe())
