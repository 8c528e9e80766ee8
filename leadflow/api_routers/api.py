from fastapi import APIRouter

from leadflow.features.admin.routes import router as admin_router
from leadflow.features.capture_pages.routes.capture_page import router as capture_page_router
from leadflow.features.clients.routes.dashboard import router as dashboard_router
from leadflow.features.health.routes.health import router as health_router
from leadflow.features.leads.routes.lead import router as leads_router
from leadflow.features.subscribers.routes.subscribe import router as subscribe_router
from leadflow.features.trials.routes.trial_signup import router as trial_signup_router
from leadflow.features.webhooks.routes import router as webhooks_router

api_router = APIRouter()

# Register all feature routes
api_router.include_router(health_router)
api_router.include_router(subscribe_router)
api_router.include_router(trial_signup_router)
api_router.include_router(leads_router)
api_router.include_router(dashboard_router)
api_router.include_router(capture_page_router)
api_router.include_router(webhooks_router)
api_router.include_router(admin_router)
