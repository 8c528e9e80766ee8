from pathlib import Path

from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.capture_pages.services.capture_page import CapturePageService
from leadflow.platform.config import settings
from leadflow.platform.db.session import get_db
from leadflow.platform.response import error_response

router = APIRouter(include_in_schema=False)


def _public_file(*parts: str) -> Path | None:
    """Resolve a file under the public dir; anything escaping it or missing is None."""
    root = Path(settings.PUBLIC_DIR).resolve()
    path = root.joinpath(*parts).resolve()
    if not path.is_relative_to(root) or not path.is_file():
        return None
    return path


def _serve(name: str, status_code: int = status.HTTP_200_OK):
    path = _public_file(name)
    if path is None:
        return PlainTextResponse("Not found", status_code=status.HTTP_404_NOT_FOUND)
    return FileResponse(path, status_code=status_code)


@router.get("/quote/{slug}")
async def capture_page(slug: str, db: AsyncSession = Depends(get_db)):
    service = CapturePageService(db)
    if await service.get_active(slug) is None:
        return PlainTextResponse("Page not found", status_code=status.HTTP_404_NOT_FOUND)
    await service.record_view(slug)
    return _serve("capture-page.html")


@router.get("/quote/{industry}/{city}")
async def static_quote_page(industry: str, city: str):
    path = _public_file("quote", industry, f"{city}.html")
    if path is None:
        return _serve("index.html", status_code=status.HTTP_404_NOT_FOUND)
    return FileResponse(path)


@router.get("/")
async def index():
    return _serve("index.html")


@router.get("/free-trial")
async def free_trial():
    return _serve("free-trial.html")


@router.get("/trial")
async def trial():
    return _serve("trial.html")


@router.get("/dashboard")
async def dashboard():
    return _serve("dashboard.html")


@router.get("/{path:path}")
async def catch_all(path: str):
    if path == "api" or path.startswith("api/"):
        return error_response("Not found", status.HTTP_404_NOT_FOUND)
    static = _public_file(path)
    if static is not None:
        return FileResponse(static)
    return _serve("index.html")
