from fastapi import APIRouter

from leadflow.features.webhooks.routes.facebook import router as facebook_router
from leadflow.features.webhooks.routes.whop import router as whop_router
from leadflow.features.webhooks.routes.zapier import router as zapier_router

router = APIRouter(prefix="/webhooks")

router.include_router(facebook_router)
router.include_router(zapier_router)
router.include_router(whop_router)
