"""Request executor: admission, encoding, retry and error classification.

Every public client operation funnels through ``RequestExecutor.execute``:

    AwaitingAdmission -> Dispatched -> Success
                                    -> AppError (non-2xx, never retried)
                                    -> TransientFailure -> backoff -> Dispatched
                                    -> RetriesExhausted

Only connection-level failures (no HTTP response at all) are retried.
The admission slot is held across retries because a retrying call is still
one outstanding logical request.
"""

import asyncio
import json
from typing import Any

import httpx

from translateplus.config.models import ClientConfig
from translateplus.errors import TranslatePlusError
from translateplus.logging.audit import (
    RequestTimer,
    audit_extra,
    get_request_logger,
    mask_api_key,
    request_scope,
)
from translateplus.transport.gate import AdmissionGate
from translateplus.transport.request import RequestSpec, encode_request

# Failures where no HTTP response was obtained: connect/read errors, DNS, TLS,
# timeouts, and a peer that drops the connection before sending a status line
TRANSIENT_ERRORS = (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)


def backoff_delay(attempt: int) -> float:
    """Seconds to wait after a transient failure on ``attempt`` (0-based)."""
    return float(2 ** attempt)


def parse_body(response: httpx.Response) -> Any:
    """Parsed JSON body, or None when empty or not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


class RequestExecutor:
    """Executes API calls for one client instance."""

    def __init__(self, config: ClientConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._gate = AdmissionGate(config.max_concurrent)

    @property
    def gate(self) -> AdmissionGate:
        return self._gate

    @property
    def in_flight(self) -> int:
        return self._gate.in_flight

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=httpx.Timeout(self.config.timeout),
                transport=self._transport,
            )
        return self._client

    async def execute(self, spec: RequestSpec) -> Any:
        """Run one logical API call and return the parsed JSON result.

        Raises:
            TranslatePlusError: VALIDATION for a missing upload file, a
                status-specific kind for non-2xx responses, API for transport
                failures and exhausted retries.
        """
        with request_scope():
            async with self._gate.slot():
                encoded = await encode_request(spec, self.config.api_key)
                return await self._dispatch_with_retries(spec, encoded.as_kwargs())

    async def _dispatch_with_retries(self, spec: RequestSpec, kwargs: dict) -> Any:
        logger = get_request_logger()
        client = await self._get_client()
        max_retries = self.config.max_retries
        last_error: Exception | None = None

        for attempt in range(max_retries + 1):
            try:
                with RequestTimer() as timer:
                    response = await client.request(spec.method, spec.path, **kwargs)
            except TRANSIENT_ERRORS as e:
                last_error = e
                if attempt < max_retries:
                    delay = backoff_delay(attempt)
                    logger.warning(
                        "Transient failure, retrying",
                        extra=audit_extra(
                            spec.method, spec.path,
                            attempt=attempt, retry_in_seconds=delay, error=str(e),
                        ),
                    )
                    await asyncio.sleep(delay)
                    continue
                break
            except httpx.HTTPStatusError as e:
                # Raised from response hooks before the body has been read
                await e.response.aread()
                raise self._classify(spec, e.response, default_message=str(e)) from e
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                logger.warning("Request failed", extra=audit_extra(spec.method, spec.path, error=str(e)))
                raise TranslatePlusError(f"Request failed: {e}") from e

            if 200 <= response.status_code < 300:
                body = parse_body(response)
                logger.info(
                    "Request completed",
                    extra=audit_extra(
                        spec.method, spec.path,
                        status=response.status_code,
                        attempt=attempt,
                        latency_ms=timer.elapsed_ms,
                        api_key=mask_api_key(self.config.api_key),
                    ),
                )
                return body if body is not None else {}

            raise self._classify(
                spec,
                response,
                default_message=f"API request failed with status {response.status_code}",
            )

        logger.error(
            "Retries exhausted",
            extra=audit_extra(spec.method, spec.path, max_retries=max_retries, error=str(last_error)),
        )
        raise TranslatePlusError(
            f"Request failed after {max_retries} retries: {last_error or 'Unknown error'}"
        ) from last_error

    def _classify(
        self, spec: RequestSpec, response: httpx.Response, default_message: str
    ) -> TranslatePlusError:
        error = TranslatePlusError.from_status(
            response.status_code, parse_body(response), default_message
        )
        get_request_logger().warning(
            "API error",
            extra=audit_extra(
                spec.method, spec.path,
                status=error.status_code, kind=error.kind.value, detail=error.message,
            ),
        )
        return error

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
