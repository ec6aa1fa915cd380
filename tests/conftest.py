import os

# Required secrets must exist before app.main builds its default app
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret")
os.environ.setdefault("CLERK_WEBHOOK_SECRET", "whsec_MfKQ9r8GKYqrTwjUPD8ILPZIo2LaLaSw")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.database import Base, create_db_engine, create_session_factory
from app.main import create_app
import app.models  # noqa: F401
from tests.helpers import FakeCache, auth_headers_for, create_user


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET_KEY": "test-jwt-secret",
        "CLERK_WEBHOOK_SECRET": os.environ["CLERK_WEBHOOK_SECRET"],
        "ENVIRONMENT": "test",
        "RATE_LIMIT_MAX_REQUESTS": 1000,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def make_app():
    """Build an app wired to a fresh in-memory database and fake cache."""
    engines = []

    def _make(**overrides):
        settings = make_settings(**overrides)
        application = create_app(settings)
        engine = create_db_engine(settings.DATABASE_URL, poolclass=StaticPool)
        Base.metadata.create_all(engine)
        application.state.engine = engine
        application.state.session_factory = create_session_factory(engine)
        application.state.cache = FakeCache()
        engines.append(engine)
        return application

    yield _make
    for engine in engines:
        engine.dispose()


@pytest.fixture
def test_app(make_app):
    return make_app()


@pytest.fixture
def db_session(test_app):
    db = test_app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest_asyncio.fixture
async def client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def user(db_session):
    return create_user(db_session)


@pytest.fixture
def other_user(db_session):
    return create_user(db_session, email="u2@example.com", name="Other User")


@pytest.fixture
def auth_headers(test_app, user):
    return auth_headers_for(test_app, user.id)


@pytest.fixture
def other_headers(test_app, other_user):
    return auth_headers_for(test_app, other_user.id)
