"""Folio API Client - typed async access to the query/mutation API over httpx.

Invariants:
    - One method per operation (list/get/create/update/delete), per kind
    - Error envelopes are turned back into the same typed FolioError subclasses
    - Transport failures and timeouts surface as StoreUnavailableError
    - Requests use the configured timeout; no automatic retry

Design Decisions:
    - Records are encoded through the API input schemas, so the wire format
      (camelCase, ISO dates) has one definition shared with the server
    - transport is injectable: tests use httpx.ASGITransport against the app
"""

import logging
from dataclasses import asdict
from typing import Any
from uuid import UUID

import httpx
from pydantic import BaseModel

from folio.config import get_settings
from folio.core.domain_types import (
    ExperienceRecord, PortfolioRecord, ResourceKind, operation_name,
)
from folio.core.errors import ErrorContext, StoreUnavailableError, error_from_response
from folio.schemas.experience import ExperienceInput, ExperienceResponse
from folio.schemas.portfolio import PortfolioInput, PortfolioResponse

logger = logging.getLogger(__name__)

_PATHS = {
    ResourceKind.PORTFOLIO: "/api/v1/portfolios",
    ResourceKind.EXPERIENCE: "/api/v1/experiences",
}

_SCHEMAS: dict[ResourceKind, tuple[type[BaseModel], type[BaseModel]]] = {
    ResourceKind.PORTFOLIO: (PortfolioInput, PortfolioResponse),
    ResourceKind.EXPERIENCE: (ExperienceInput, ExperienceResponse),
}

Record = PortfolioRecord | ExperienceRecord


class FolioClient:
    """Async client for the Folio API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.client_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "FolioClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self, method: str, path: str, operation: str, json: Any = None,
    ) -> Any:
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.TimeoutException as e:
            logger.warning(f"{operation} timed out: {e}", extra={"operation": operation})
            raise StoreUnavailableError(operation, ErrorContext(operation=operation)) from e
        except httpx.TransportError as e:
            logger.warning(f"{operation} transport error: {e}", extra={"operation": operation})
            raise StoreUnavailableError(operation, ErrorContext(operation=operation)) from e

        if response.is_error:
            try:
                payload = response.json()
            except ValueError:
                payload = {}
            error = error_from_response(response.status_code, payload)
            error.with_context(operation=operation)
            raise error
        try:
            return response.json()
        except ValueError as e:
            logger.warning(
                f"{operation} returned a non-JSON body", extra={"operation": operation},
            )
            raise StoreUnavailableError(operation, ErrorContext(operation=operation)) from e

    def _encode(self, kind: ResourceKind, record: Record) -> dict:
        input_schema, _ = _SCHEMAS[kind]
        return input_schema.model_validate(asdict(record)).model_dump(
            mode="json", by_alias=True,
        )

    def _decode(self, kind: ResourceKind, payload: Any) -> BaseModel:
        _, output_schema = _SCHEMAS[kind]
        return output_schema.model_validate(payload)

    async def list_all(self, kind: ResourceKind) -> list[BaseModel]:
        payload = await self._request("GET", _PATHS[kind], operation_name(kind, "list"))
        return [self._decode(kind, item) for item in payload]

    async def get(self, kind: ResourceKind, resource_id: UUID) -> BaseModel:
        payload = await self._request(
            "GET", f"{_PATHS[kind]}/{resource_id}", operation_name(kind, "get"),
        )
        return self._decode(kind, payload)

    async def create(self, kind: ResourceKind, record: Record) -> BaseModel:
        payload = await self._request(
            "POST", _PATHS[kind], operation_name(kind, "create"),
            json=self._encode(kind, record),
        )
        return self._decode(kind, payload)

    async def update(
        self, kind: ResourceKind, resource_id: UUID, record: Record,
    ) -> BaseModel:
        payload = await self._request(
            "PUT", f"{_PATHS[kind]}/{resource_id}", operation_name(kind, "update"),
            json=self._encode(kind, record),
        )
        return self._decode(kind, payload)

    async def delete(self, kind: ResourceKind, resource_id: UUID) -> bool:
        payload = await self._request(
            "DELETE", f"{_PATHS[kind]}/{resource_id}", operation_name(kind, "delete"),
        )
        return bool(payload.get("deleted"))

    async def dashboard_stats(self) -> dict:
        return await self._request("GET", "/api/v1/dashboard/stats", "dashboardStats")

