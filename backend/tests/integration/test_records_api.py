"""Integration tests for the raw /records API and the top-level error boundary."""

import pytest

from wms.domain.entities import Record
from wms.infrastructure.dependencies import get_error_reporter
from tests.integration.services.api_test_client import (
    OWNER_HEADERS,
    VIEWER_HEADERS,
    client,
    overridden_store,
)
from tests.unit.services.fake_record_service import FakeRecordService


@pytest.fixture
def store():
    service = FakeRecordService()
    service.seed([
        Record(id="SHP-001", entity_type="shipments", data={"orderId": "SO-001", "status": "In Transit"}),
        Record(id="SHP-002", entity_type="shipments", data={"orderId": "SO-002", "status": "Pending"}),
    ])
    with overridden_store(service):
        yield service


@pytest.mark.asyncio
async def test_crud_round_trip(store):
    async with client() as c:
        created = await c.post(
            "/api/v1/records/shipments",
            json={"data": {"orderId": "SO-003", "destination": "Berlin"}, "created_by": "ops"},
        )
        record_id = created.json()["id"]
        fetched = await c.get(f"/api/v1/records/shipments/{record_id}")
        updated = await c.put(
            f"/api/v1/records/shipments/{record_id}", json={"data": {"status": "Delivered"}}
        )
        deleted = await c.delete(f"/api/v1/records/shipments/{record_id}")
        gone = await c.get(f"/api/v1/records/shipments/{record_id}")

    assert created.status_code == 201
    assert record_id == "SHP-003"
    assert fetched.json()["data"]["destination"] == "Berlin"
    assert updated.json()["data"] == {
        "orderId": "SO-003", "destination": "Berlin", "status": "Delivered",
    }
    assert deleted.status_code == 204
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_list_includes_archived_records(store):
    async with client() as c:
        await c.post("/api/v1/records/shipments/SHP-001/archive")
        response = await c.get("/api/v1/records/shipments")

    flags = {r["id"]: r["archived"] for r in response.json()}
    assert flags == {"SHP-001": True, "SHP-002": False}


@pytest.mark.asyncio
async def test_bulk_route_is_not_taken_for_a_record_id(store):
    async with client() as c:
        response = await c.post(
            "/api/v1/records/shipments/bulk/archive", json={"ids": ["SHP-001", "SHP-404"]}
        )

    assert response.status_code == 200
    body = response.json()
    assert body["succeeded_ids"] == ["SHP-001"]
    assert body["failed_ids"] == ["SHP-404"]
    assert body["success"] is False


@pytest.mark.asyncio
async def test_unknown_collection_and_missing_record(store):
    async with client() as c:
        unknown = await c.get("/api/v1/records/widgets")
        missing = await c.post("/api/v1/records/shipments/SHP-404/restore")

    assert unknown.status_code == 404
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_unhandled_errors_get_a_generic_answer_and_are_reported(store):
    get_error_reporter().clear()
    store.broken.add("list_records")

    async with client(raise_app_exceptions=False) as c:
        failed = await c.get("/api/v1/records/shipments")
        errors = await c.get("/api/v1/monitoring/errors", headers=OWNER_HEADERS)
        hidden = await c.get("/api/v1/monitoring/errors", headers=VIEWER_HEADERS)

    assert failed.status_code == 500
    assert failed.json() == {"detail": "Something went wrong"}
    assert errors.status_code == 200
    assert errors.json()[0]["error_type"] == "RemoteServiceError"
    assert errors.json()[0]["context"]["path"] == "/api/v1/records/shipments"
    assert hidden.status_code == 403
