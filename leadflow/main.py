from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from leadflow.api_routers.api import api_router
from leadflow.features.pages.routes.pages import router as pages_router
from leadflow.platform.config import settings
from leadflow.platform.db.session import init_models
from leadflow.platform.exceptions import add_exception_handlers
from leadflow.platform.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info(
        f"{settings.APP_NAME} v{settings.APP_VERSION} running on port {settings.PORT} "
        f"({settings.ENVIRONMENT}), dashboard at {settings.BASE_URL}/dashboard"
    )
    for route in app.routes:
        if isinstance(route, APIRoute) and route.path.startswith("/api"):
            logger.info(f"  {','.join(sorted(route.methods))} {route.path}")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Lead capture, trial signups and client dashboards for LeadFlow24",
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    app.include_router(api_router, prefix="/api")
    # Site pages and the catch-all go last so they never shadow an API route
    app.include_router(pages_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("leadflow.main:app", host="0.0.0.0", port=settings.PORT)
