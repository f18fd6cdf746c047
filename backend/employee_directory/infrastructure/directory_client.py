"""Directory API Client — async httpx wrapper around the employee record endpoints.

Invariants:
    - Every failure (transport, non-2xx status, malformed body) raises DirectoryAPIError
    - The service's error code (e.g. DUPLICATE_IDENTIFIER) is preserved on the error
    - No retries: one request per call
    - Business ids are percent-encoded as a single path segment

Design Decisions:
    - Wrapper over raw httpx.AsyncClient: the dashboard controller never sees httpx types
    - Injectable transport: tests drive the real ASGI app in-process
"""

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

from employee_directory.core.errors import DirectoryAPIError

logger = logging.getLogger(__name__)


class DirectoryClient:
    """Talks to /api/employees. Use as an async context manager or call aclose()."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "DirectoryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def list_employees(
        self, params: Mapping[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        """GET the (optionally filtered) record list."""
        data = await self._request("GET", "/", params=dict(params or {}))
        if not isinstance(data, list):
            raise DirectoryAPIError(
                "Data received from API is not an array", "malformed_payload",
            )
        logger.debug("Fetched employees", extra={"record_count": len(data)})
        return data

    async def add_employee(self, payload: Mapping[str, Any]) -> str:
        data = await self._request("POST", "/add", json=dict(payload))
        return self._message(data)

    async def update_employee(
        self, employee_id: str, payload: Mapping[str, Any],
    ) -> str:
        data = await self._request(
            "POST", f"/update/{_segment(employee_id)}", json=dict(payload),
        )
        return self._message(data)

    async def delete_employee(self, employee_id: str) -> str:
        data = await self._request("DELETE", f"/{_segment(employee_id)}")
        return self._message(data)

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise DirectoryAPIError(f"{method} {path} timed out: {e}", "timeout")
        except httpx.HTTPError as e:
            raise DirectoryAPIError(
                f"{method} {path} failed: {e}", "connection_error",
            )

        if response.is_error:
            raise self._error_from_response(response)

        try:
            return response.json()
        except ValueError:
            raise DirectoryAPIError(
                f"{method} {path} returned a non-JSON body",
                "malformed_payload",
                status_code=response.status_code,
            )

    def _error_from_response(self, response: httpx.Response) -> DirectoryAPIError:
        """Map a non-2xx response, keeping the service's error code and message."""
        error_code = None
        message = response.reason_phrase or f"HTTP {response.status_code}"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            error_code = body["error"].get("code")
            message = body["error"].get("message", message)
        return DirectoryAPIError(
            message,
            "client_error" if response.status_code < 500 else "server_error",
            status_code=response.status_code,
            error_code=error_code,
        )

    @staticmethod
    def _message(data: Any) -> str:
        if isinstance(data, dict):
            return str(data.get("message", ""))
        return ""


def _segment(employee_id: str) -> str:
    return quote(employee_id, safe="")
