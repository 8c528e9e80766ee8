from fastapi import APIRouter

from leadflow.features.admin.routes.capture_pages import router as capture_pages_router
from leadflow.features.admin.routes.clients import router as clients_router
from leadflow.features.admin.routes.dashboard import router as dashboard_router
from leadflow.features.admin.routes.listings import router as listings_router
from leadflow.features.admin.routes.trials import router as trials_router

router = APIRouter(prefix="/admin", tags=["Admin"])

router.include_router(dashboard_router)
router.include_router(listings_router)
router.include_router(clients_router)
router.include_router(trials_router)
router.include_router(capture_pages_router)
