"""Master Data Client — httpx wrapper for the oracle REST API with error mapping.

Invariants:
    - Connection/timeout failures map to UpstreamUnavailableError(NETWORK | TIMEOUT)
    - Non-2xx responses map to UpstreamUnavailableError(HTTP_STATUS, status_code)
    - Undecodable payloads map to DecodeFailureError
    - No retry loop here: only the transport's connect retries apply

Design Decisions:
    - One AsyncClient per process (connection pooling), created in the lifespan
      and closed with aclose()
    - transport may be injected (httpx.MockTransport in tests)
    - The path segment is URL-quoted; the query string is built by httpx
"""

import logging
from urllib.parse import quote

import httpx

from payroll_sync.core.errors import (
    DecodeFailureError,
    ErrorContext,
    UpstreamErrorKind,
    UpstreamUnavailableError,
)
from payroll_sync.core.records import (
    ContributionRecord,
    EmployeeRecord,
    contributions_from_wire,
    employee_from_wire,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class MasterDataClient:
    """Reads employees and contributions from the oracle service."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 5.0,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout_seconds,
            transport=transport or httpx.AsyncHTTPTransport(retries=max_retries),
            headers={"Accept": "application/json"},
        )

    async def get_employee(self, rssb_number: str) -> EmployeeRecord:
        """GET /api/v1/employees/{rssb_number}."""
        context = ErrorContext(rssb_number=rssb_number, operation="get_employee")
        payload = await self._get_json(
            f"{API_PREFIX}/employees/{quote(rssb_number, safe='')}",
            context=context,
        )
        return self._decode(employee_from_wire, payload, context)

    async def get_contributions(self, rssb_number: str) -> list[ContributionRecord]:
        """GET /api/v1/contributions?rssbNumber={rssb_number}, order preserved."""
        context = ErrorContext(rssb_number=rssb_number, operation="get_contributions")
        payload = await self._get_json(
            f"{API_PREFIX}/contributions",
            params={"rssbNumber": rssb_number},
            context=context,
        )
        return self._decode(contributions_from_wire, payload, context)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(
        self, path: str, *, context: ErrorContext, params: dict | None = None,
    ):
        try:
            response = await self._client.get(path, params=params)
        except httpx.TimeoutException as e:
            raise UpstreamUnavailableError(
                f"timeout calling {path}: {e}", UpstreamErrorKind.TIMEOUT,
                context=context,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(
                f"network error calling {path}: {e}", UpstreamErrorKind.NETWORK,
                context=context,
            ) from e

        if not response.is_success:
            raise UpstreamUnavailableError(
                f"{path} answered {response.status_code}",
                UpstreamErrorKind.HTTP_STATUS,
                status_code=response.status_code,
                context=context,
            )
        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeFailureError(
                f"{path} returned invalid JSON", context=context,
            ) from e
        logger.debug(
            f"Oracle call succeeded: {path}",
            extra={"status_code": response.status_code, **_log_fields(context)},
        )
        return payload

    @staticmethod
    def _decode(decoder, payload, context: ErrorContext):
        try:
            return decoder(payload)
        except DecodeFailureError as e:
            e.context = context
            raise


def _log_fields(context: ErrorContext) -> dict:
    return {"rssb_number": context.rssb_number, "operation": context.operation}
