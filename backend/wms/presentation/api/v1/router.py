"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from wms.presentation.api.v1.endpoints.health import router as health_router
from wms.presentation.api.v1.endpoints.records import router as records_router
from wms.presentation.api.v1.endpoints.lists import router as lists_router
from wms.presentation.api.v1.endpoints.notifications import router as notifications_router
from wms.presentation.api.v1.endpoints.monitoring import router as monitoring_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(records_router)
router.include_router(lists_router)
router.include_router(notifications_router)
router.include_router(monitoring_router)
