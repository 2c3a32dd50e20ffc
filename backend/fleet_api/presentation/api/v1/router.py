"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from fleet_api.presentation.api.v1.endpoints.health import router as health_router
from fleet_api.presentation.api.v1.endpoints.boats import router as boats_router
from fleet_api.presentation.api.v1.endpoints.loads import router as loads_router
from fleet_api.presentation.api.v1.endpoints.users import router as users_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(boats_router)
router.include_router(loads_router)
router.include_router(users_router)
