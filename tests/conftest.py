"""
Shared test fixtures and configuration for the SMTP settings test suite.
"""

# noqa: E402 (environment must be set before the package is imported)
import os
import shutil
import tempfile
import uuid
from typing import AsyncGenerator
from unittest.mock import AsyncMock

TEST_DB_DIR = tempfile.mkdtemp(prefix="smtp_settings_tests_")
TEST_DB_PATH = os.path.join(TEST_DB_DIR, "app.db")

os.environ["APP_SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["APP_ENV"] = "development"
os.environ["APP_DEBUG"] = "false"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["EMAIL_FROM_ADDRESS"] = "noreply@example.com"
os.environ["SMTP_VERIFY_CERTIFICATES"] = "false"
os.environ["DEFAULT_LANGUAGE"] = "pl"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from smtp_settings.models.base import Base
from smtp_settings.utils.permissions import Principal, Role
from smtp_settings.utils.security import create_access_token

ADMIN_ID = uuid.UUID("0190f0a8-0000-7000-8000-000000000001")
EDITOR_ID = uuid.UUID("0190f0a8-0000-7000-8000-000000000002")

# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_session(tmp_path) -> AsyncGenerator[AsyncSession, None]:
    """Provide a throwaway SQLite database for a single test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


# ============================================================================
# Principal Fixtures
# ============================================================================


@pytest.fixture
def admin() -> Principal:
    return Principal(user_id=ADMIN_ID, role=Role.ADMINISTRATOR.value)


@pytest.fixture
def editor() -> Principal:
    return Principal(user_id=EDITOR_ID, role=Role.EDITOR.value)


# ============================================================================
# Mail Fixtures
# ============================================================================


@pytest.fixture
def smtp_send(mocker) -> AsyncMock:
    """Replace the network call made by the transport."""
    return mocker.patch(
        "smtp_settings.services.mail_transport.aiosmtplib.send",
        new_callable=AsyncMock,
    )


# ============================================================================
# API Client Fixtures
# ============================================================================


@pytest.fixture
def api_client() -> TestClient:
    """Provide a FastAPI test client backed by a fresh database file."""
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)

    from smtp_settings.main import app

    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_headers() -> dict[str, str]:
    token = create_access_token(ADMIN_ID, role=Role.ADMINISTRATOR.value, name="Admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def editor_headers() -> dict[str, str]:
    token = create_access_token(EDITOR_ID, role=Role.EDITOR.value, name="Editor")
    return {"Authorization": f"Bearer {token}"}


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def test_env():
    """Cleanup test directories after session."""
    yield
    shutil.rmtree(TEST_DB_DIR, ignore_errors=True)
