from sqlalchemy import Column, ForeignKey, Integer, String

from leadflow.platform.db.base import BaseModel


class CapturePage(BaseModel):
    __tablename__ = "capture_pages"

    client_id = Column(String, ForeignKey("clients.id", ondelete="CASCADE"), nullable=True, index=True)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    industry = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True)
    status = Column(String(50), nullable=False, default="active", server_default="active")

    # Only ever incremented in SQL (views = views + 1)
    views = Column(Integer, nullable=False, default=0, server_default="0")
    submissions = Column(Integer, nullable=False, default=0, server_default="0")

    def __repr__(self) -> str:
        return f"<CapturePage(slug='{self.slug}', client_id='{self.client_id}')>"
