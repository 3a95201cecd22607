from __future__ import annotations

import logging
from types import TracebackType

import httpx

from envsender.config import SenderConfig
from envsender.errors import ClientConstructionError, DeliveryError
from shared.constants import MAX_LOGGED_BODY_CHARS, USER_AGENT
from shared.schemas import DeliveryResult, Record
from shared.serialization import canonical_json_bytes

logger = logging.getLogger("envsender.client")


class DeliveryClient:
    """Posts Records to one configured endpoint over a pooled ``httpx.Client``.

    The configuration is read-only after construction and no per-record state
    is kept, so one instance may be reused for any number of sends and shared
    between threads.
    """

    def __init__(self, config: SenderConfig, *, transport: httpx.BaseTransport | None = None) -> None:
        self.config = config
        if config.timeout_seconds <= 0:
            raise ClientConstructionError(f"timeout must be positive, got {config.timeout_seconds}")
        if not config.tls_verify:
            logger.warning("tls_verify is disabled; certificates will not be checked")
        try:
            self._client = httpx.Client(
                timeout=httpx.Timeout(float(config.timeout_seconds)),
                verify=config.tls_verify,
                transport=transport,
                headers={"User-Agent": USER_AGENT},
            )
        except (ValueError, TypeError, OSError) as exc:
            raise ClientConstructionError(f"failed to create HTTP client: {exc}") from exc

    def __enter__(self) -> DeliveryClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.auth_token:
            headers["Authorization"] = f"Bearer {self.config.auth_token}"
        return headers

    def send(self, record: Record) -> DeliveryResult:
        """POST one Record, once.

        A non-2xx answer is *not* raised: the server's rejection is logged as a
        warning with its status and body, and the call returns a result with
        ``accepted=False``. Only a failed network exchange (connect error,
        timeout, TLS failure, reset) raises :class:`DeliveryError`.
        """
        url = self.config.backend_url
        context = {"record_source": record.source, "url": url}
        logger.info("sending record source=%s to %s", record.source, url, extra=context)
        body = canonical_json_bytes(record)
        try:
            response = self._client.post(url, content=body, headers=self._headers())
        except httpx.TransportError as exc:
            raise DeliveryError(url, f"{exc.__class__.__name__}: {exc}") from exc

        if response.is_success:
            logger.info(
                "backend accepted record source=%s status=%s",
                record.source,
                response.status_code,
                extra={**context, "status_code": response.status_code},
            )
            return DeliveryResult(status_code=response.status_code, accepted=True)

        logger.warning(
            "backend rejected record source=%s status=%s body=%s",
            record.source,
            response.status_code,
            response.text[:MAX_LOGGED_BODY_CHARS],
            extra={**context, "status_code": response.status_code},
        )
        return DeliveryResult(status_code=response.status_code, accepted=False)
