from sqlalchemy import Column, String

from leadflow.platform.db.base import BaseModel


class Subscriber(BaseModel):
    __tablename__ = "subscribers"

    email = Column(String(255), unique=True, nullable=False)
    source = Column(String(100), nullable=False, default="website", server_default="website")
    status = Column(String(50), nullable=False, default="active", server_default="active")

    def __repr__(self) -> str:
        return f"<Subscriber(email='{self.email}', source='{self.source}')>"
