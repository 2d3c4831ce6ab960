"""HTTP record service — implements the RecordService port over a REST-like API.

Talks to any server exposing the ``/records/{entity}`` surface (including
another instance of this service) using httpx.
"""

import logging
from typing import Any

import httpx

from wms.application.interfaces import RecordService
from wms.application.schemas.records import BulkOperationResponse, RecordResponse
from wms.domain.entities import BulkOperationResult, Record
from wms.domain.entities.entity_profile import PROFILES
from wms.domain.exceptions import EntityNotFoundError, RemoteServiceError

logger = logging.getLogger(__name__)

_SUCCESS = (200, 201, 204)


class HttpRecordService(RecordService):
    """Infrastructure adapter — connects to a remote record store.

    An injected ``http_client`` is reused and left open; otherwise a client
    is created and closed per call.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    @property
    def service_name(self) -> str:
        return "records-api"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    def _url(self, entity_type: str, *parts: str) -> str:
        return "/".join([f"{self._base_url}/records/{entity_type}", *parts])

    async def _request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        entity: tuple[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request; ``entity`` turns a 404 into EntityNotFoundError."""
        client = await self._get_client()
        should_close = self._http_client is None
        try:
            logger.debug("%s %s", method, url)
            response = await client.request(method, url, json=json)
        finally:
            if should_close:
                await client.aclose()

        if response.status_code == 404 and entity is not None:
            entity_type, record_id = entity
            profile = PROFILES.get(entity_type)
            raise EntityNotFoundError(profile.label if profile else entity_type, record_id)
        if response.status_code not in _SUCCESS:
            self._raise_service_error(response)
        return response

    def _raise_service_error(self, response: httpx.Response) -> None:
        """Raise RemoteServiceError from a non-2xx httpx Response."""
        try:
            data = response.json()
            detail = data.get("detail", response.text)
            message = detail if isinstance(detail, str) else str(detail)
        except Exception:
            message = response.text

        raise RemoteServiceError(
            service=self.service_name,
            status_code=response.status_code,
            message=message,
        )

    @staticmethod
    def _to_entity(payload: dict[str, Any]) -> Record:
        dto = RecordResponse.model_validate(payload)
        return Record(
            id=dto.id,
            entity_type=dto.entity_type,
            data=dict(dto.data),
            archived=dto.archived,
            archived_at=dto.archived_at,
            created_by=dto.created_by,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
        )

    @staticmethod
    def _to_bulk_result(payload: dict[str, Any]) -> BulkOperationResult:
        return BulkOperationResponse.model_validate(payload).to_result()

    # ── Single-record operations ─────────────────────────────────────

    async def list_records(self, entity_type: str) -> list[Record]:
        response = await self._request("GET", self._url(entity_type))
        return [self._to_entity(item) for item in response.json()]

    async def get(self, entity_type: str, record_id: str) -> Record | None:
        try:
            response = await self._request(
                "GET", self._url(entity_type, record_id), entity=(entity_type, record_id)
            )
        except EntityNotFoundError:
            return None
        return self._to_entity(response.json())

    async def create(
        self,
        entity_type: str,
        data: dict[str, Any],
        *,
        record_id: str | None = None,
        created_by: str | None = None,
    ) -> Record:
        payload = {"id": record_id, "data": data, "created_by": created_by}
        response = await self._request("POST", self._url(entity_type), json=payload)
        return self._to_entity(response.json())

    async def update(self, entity_type: str, record_id: str, data: dict[str, Any]) -> Record:
        response = await self._request(
            "PUT",
            self._url(entity_type, record_id),
            json={"data": data},
            entity=(entity_type, record_id),
        )
        return self._to_entity(response.json())

    async def archive(self, entity_type: str, record_id: str) -> Record:
        response = await self._request(
            "POST", self._url(entity_type, record_id, "archive"), entity=(entity_type, record_id)
        )
        return self._to_entity(response.json())

    async def restore(self, entity_type: str, record_id: str) -> Record:
        response = await self._request(
            "POST", self._url(entity_type, record_id, "restore"), entity=(entity_type, record_id)
        )
        return self._to_entity(response.json())

    async def permanently_delete(self, entity_type: str, record_id: str) -> None:
        await self._request(
            "DELETE", self._url(entity_type, record_id), entity=(entity_type, record_id)
        )

    # ── Bulk operations ──────────────────────────────────────────────

    async def _bulk(self, entity_type: str, action: str, payload: dict[str, Any]) -> BulkOperationResult:
        response = await self._request("POST", self._url(entity_type, "bulk", action), json=payload)
        return self._to_bulk_result(response.json())

    async def bulk_archive(self, entity_type: str, ids: list[str]) -> BulkOperationResult:
        return await self._bulk(entity_type, "archive", {"ids": ids})

    async def bulk_restore(self, entity_type: str, ids: list[str]) -> BulkOperationResult:
        return await self._bulk(entity_type, "restore", {"ids": ids})

    async def bulk_permanently_delete(self, entity_type: str, ids: list[str]) -> BulkOperationResult:
        return await self._bulk(entity_type, "delete", {"ids": ids})

    async def bulk_update(
        self, entity_type: str, ids: list[str], data: dict[str, Any]
    ) -> BulkOperationResult:
        return await self._bulk(entity_type, "update", {"ids": ids, "data": data})
