"""
Pytest Configuration and Shared Fixtures

This module contains shared test fixtures and configuration for all test modules.
"""

import os
from datetime import UTC, datetime, timedelta

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ["ENVIRONMENT"] = "test"
os.environ.pop("TELEGRAM_BOT_TOKEN", None)
os.environ.pop("TELEGRAM_SUPPORT_CHAT_ID", None)

from grant_intake.core.config import Settings
from grant_intake.core.logging import get_logger
from grant_intake.db.database import Base, DatabaseConnectionManager, get_connection_manager
from grant_intake.infrastructure.messaging import TelegramNotifier, get_notifier
from grant_intake.main import app
from grant_intake.models import Application

logger = get_logger(__name__)

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

TELEGRAM_TOKEN = "123456:TEST-TOKEN"
TELEGRAM_CHAT_ID = "-1001234567890"


class RecordingTelegramAPI:
    """Stand-in for the Telegram Bot API, used through httpx.MockTransport."""

    def __init__(self, status_code: int = 200, error: Exception | None = None):
        self.status_code = status_code
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json={"ok": self.status_code == 200})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def telegram_settings(**overrides) -> Settings:
    """Settings with Telegram credentials configured."""
    values = {
        "ENVIRONMENT": "test",
        "TELEGRAM_BOT_TOKEN": TELEGRAM_TOKEN,
        "TELEGRAM_SUPPORT_CHAT_ID": TELEGRAM_CHAT_ID,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def application_payload():
    """Valid grant application submission (camelCase, as sent by the form)."""
    return {
        "firstName": "Ana",
        "lastName": "Silva",
        "email": "ana.silva@example.com",
        "phone": "+351912345678",
        "dateOfBirth": "1990-04-12",
        "country": "Portugal",
        "city": "Porto",
        "projectTitle": "Community Solar Workshop",
        "projectDescription": "Hands-on workshops teaching residents to install small solar kits.",
        "projectField": "Environment",
        "targetAudience": "Low-income households in the city centre",
        "requestedAmount": "12000",
        "projectDuration": "12 months",
        "fundingUse": "Equipment, venue rental and trainer fees",
        "expectedImpact": "200 households with lower energy bills",
        "previousExperience": "Ran two pilot workshops in 2023",
        "whyDeserving": "Proven demand and a volunteer team ready to scale"
    }


@pytest.fixture()
def database_url(tmp_path):
    """Store URL for the test: TEST_DATABASE_URL, else a fresh SQLite file."""
    if TEST_DATABASE_URL:
        return TEST_DATABASE_URL
    return f"sqlite+aiosqlite:///{tmp_path / 'grants.db'}"


@pytest_asyncio.fixture()
async def db_manager(database_url):
    """
    Connection manager bound to the test store.

    Tables are created on first connection and dropped afterwards so every
    test starts from an empty store.
    """
    manager = DatabaseConnectionManager(database_url, create_schema=True)
    await manager.ensure_connected()

    yield manager

    try:
        async with manager.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
    except Exception as e:
        logger.warning(f"Error during database cleanup: {e}")
    finally:
        await manager.close()


@pytest.fixture()
def telegram_api():
    """Recording Telegram API that answers 200."""
    return RecordingTelegramAPI()


@pytest.fixture()
def notifier(telegram_api):
    """Configured notifier that talks to the recording Telegram API."""
    return TelegramNotifier(telegram_settings(), transport=telegram_api.transport)


@pytest.fixture()
def unconfigured_notifier(telegram_api):
    """Notifier without credentials; must never reach the Telegram API."""
    config = Settings(ENVIRONMENT="test", TELEGRAM_BOT_TOKEN=None, TELEGRAM_SUPPORT_CHAT_ID=None)
    return TelegramNotifier(config, transport=telegram_api.transport)


@pytest_asyncio.fixture()
async def client(db_manager, notifier):
    """Create test client wired to the test store and recording notifier"""
    app.dependency_overrides[get_connection_manager] = lambda: db_manager
    app.dependency_overrides[get_notifier] = lambda: notifier

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def insert_application(db_manager, application_payload):
    """
    Insert an application directly, bypassing the API.

    Lets tests set status and submission time, which the API never does.
    """
    counter = {"n": 0}
    base_time = datetime(2024, 1, 1, tzinfo=UTC)

    async def _insert(status: str = "pending", minutes: int | None = None, **overrides) -> Application:
        counter["n"] += 1
        n = counter["n"]
        submitted_at = base_time + timedelta(minutes=minutes if minutes is not None else n)

        values = {
            "first_name": application_payload["firstName"],
            "last_name": application_payload["lastName"],
            "email": application_payload["email"],
            "phone": application_payload["phone"],
            "date_of_birth": application_payload["dateOfBirth"],
            "country": application_payload["country"],
            "city": application_payload["city"],
            "project_title": f"Project {n}",
            "project_description": application_payload["projectDescription"],
            "project_field": application_payload["projectField"],
            "target_audience": application_payload["targetAudience"],
            "requested_amount": application_payload["requestedAmount"],
            "project_duration": application_payload["projectDuration"],
            "funding_use": application_payload["fundingUse"],
            "expected_impact": application_payload["expectedImpact"],
            "previous_experience": application_payload["previousExperience"],
            "why_deserving": application_payload["whyDeserving"],
            "application_id": f"APP-{1700000000000 + n}-TEST{n:02d}",
            "status": status,
            "submitted_at": submitted_at,
            "updated_at": submitted_at,
        }
        values.update(overrides)

        application = Application(**values)
        async with db_manager.session() as session:
            session.add(application)
            await session.commit()
        return application

    return _insert
