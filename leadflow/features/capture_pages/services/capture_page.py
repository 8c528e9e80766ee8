from fastapi import HTTPException, status
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.capture_pages.models.capture_page import CapturePage
from leadflow.features.capture_pages.schemas.capture_page import CapturePageCreate
from leadflow.features.clients.models.client import Client
from leadflow.platform.logger import get_logger

logger = get_logger(__name__)

SLUG_TAKEN = "Slug already in use"


class CapturePageService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_page(self, payload: CapturePageCreate) -> CapturePage:
        """A slug collision is a 409; the existing page and its client binding are left alone."""
        if await self.db.get(Client, payload.client_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")

        if await self.get_by_slug(payload.slug) is not None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=SLUG_TAKEN)

        page = CapturePage(
            client_id=payload.client_id,
            slug=payload.slug,
            title=payload.title,
            industry=payload.industry,
            city=payload.city,
        )
        self.db.add(page)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=SLUG_TAKEN)
        await self.db.refresh(page)

        logger.info(f"Capture page '{page.slug}' created for client {page.client_id}")
        return page

    async def get_by_slug(self, slug: str) -> CapturePage | None:
        result = await self.db.execute(select(CapturePage).where(CapturePage.slug == slug))
        return result.scalar_one_or_none()

    async def get_active(self, slug: str) -> CapturePage | None:
        result = await self.db.execute(
            select(CapturePage).where(CapturePage.slug == slug, CapturePage.status == "active")
        )
        return result.scalar_one_or_none()

    async def record_view(self, slug: str) -> None:
        """Unknown slugs are ignored."""
        await self.db.execute(
            update(CapturePage).where(CapturePage.slug == slug).values(views=CapturePage.views + 1)
        )
        await self.db.commit()
