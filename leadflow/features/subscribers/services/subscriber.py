from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from leadflow.features.subscribers.models.subscriber import Subscriber


def normalize_email(email: str) -> str:
    return email.strip().lower()


class SubscriberService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> Subscriber | None:
        result = await self.db.execute(select(Subscriber).where(Subscriber.email == normalize_email(email)))
        return result.scalars().first()

    async def subscribe(self, email: str, source: str | None = None, commit: bool = True) -> bool:
        """
        Insert-or-ignore. Returns True when a new row was added, False when the
        email was already subscribed. A repeat is never an error.
        """
        email = normalize_email(email)
        if await self.get_by_email(email):
            return False

        self.db.add(Subscriber(email=email, source=source or "website"))
        if not commit:
            return True
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent subscribe for the same address
            await self.db.rollback()
            return False
        return True

    async def list_all(self) -> list[Subscriber]:
        result = await self.db.execute(select(Subscriber).order_by(Subscriber.created_at.desc()))
        return list(result.scalars().all())
