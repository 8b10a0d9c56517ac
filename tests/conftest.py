"""
Shared fixtures: fast bcrypt settings, a SQLite-backed session factory and
an in-process API client.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from auth.credentials import CredentialManager
from auth.jwt import TokenService
from auth.password import PasswordHasher
from config.settings import Settings
from database.helpers import create_tables
from database.session import build_engine, build_session_factory
from main import create_app

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        jwt_secret=TEST_SECRET,
        jwt_issuer="test-issuer",
        jwt_audience="test-audience",
        jwt_expiry_minutes=30,
        bcrypt_rounds=4,
        database_url="sqlite+aiosqlite:///:memory:",
    )


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def credential_manager(hasher) -> CredentialManager:
    return CredentialManager(hasher)


@pytest.fixture
def token_service(settings) -> TokenService:
    return TokenService.from_settings(settings)


@pytest_asyncio.fixture
async def session_factory(settings, tmp_path):
    """File-backed SQLite so separate sessions really are separate connections."""
    file_settings = settings.model_copy(
        update={"database_url": f"sqlite+aiosqlite:///{tmp_path / 'auth.db'}"}
    )
    engine = build_engine(file_settings)
    await create_tables(engine)
    yield build_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
