"""
Test configuration and fixtures for the LeadFlow24 API.

Every test gets an empty sqlite database, a stubbed email notifier and an
httpx client bound to the ASGI app.
"""

import os
import tempfile
from dotenv import load_dotenv

load_dotenv()

test_db_path = tempfile.mktemp(suffix=".db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{test_db_path}"
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "leadflow-test-logs"))

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from leadflow.platform.config import Settings, get_settings
from leadflow.platform.db.base import Base
from leadflow.platform.db.session import SessionLocal, engine
import leadflow.platform.db.models  # noqa: F401
from leadflow.features.notifications.services.notifier import get_notifier
from leadflow.features.notifications.services.templates import EmailTemplate

FB_VERIFY_TOKEN = "fb-verify-token"


class FakeNotifier:
    """Records every email instead of sending it."""

    def __init__(self):
        self.sent = []

    async def send(self, recipient, subject, html, text=None, template="custom"):
        self.sent.append({"recipient": recipient, "subject": subject, "template": template})
        return True

    async def send_template(self, recipient, template, data, subject=None):
        self.sent.append(
            {
                "recipient": recipient,
                "template": EmailTemplate(template).value,
                "data": dict(data),
                "subject": subject,
            }
        )
        return True

    async def notify_operator(self, type_, summary, details, subject=None):
        self.sent.append(
            {
                "recipient": "operator",
                "template": EmailTemplate.INTERNAL_NOTIFICATION.value,
                "type": type_,
                "summary": summary,
                "details": dict(details),
                "subject": subject,
            }
        )
        return True

    def templates(self):
        return [entry["template"] for entry in self.sent]


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        BASE_URL="https://leadflow24.test",
        NOTIFICATION_EMAIL="ops@leadflow24.test",
        WEBHOOK_SECRET=FB_VERIFY_TOKEN,
        WHOP_WEBHOOK_SECRET=None,
        EMAIL_RELAY_URL="",
        EMAIL_RELAY_API_KEY="",
    )


@pytest_asyncio.fixture(autouse=True)
async def reset_database():
    """Drop and recreate every table so each test starts from an empty database."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest_asyncio.fixture
async def db():
    async with SessionLocal() as session:
        yield session


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from leadflow.main import app

    return app


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest_asyncio.fixture
async def client(test_app, test_settings, notifier):
    """
    httpx client for the app with settings and the notifier overridden.
    Background tasks finish before each request returns, so notifier.sent is complete.
    """
    test_app.dependency_overrides[get_settings] = lambda: test_settings
    test_app.dependency_overrides[get_notifier] = lambda: notifier

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac

    test_app.dependency_overrides.clear()
