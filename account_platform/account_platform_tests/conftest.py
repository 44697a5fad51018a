"""
Shared fixtures: every test gets its own SQLite file and application instance.
"""
import pytest
from fastapi.testclient import TestClient

from account_platform.account_platform.account_service.config import Settings
from account_platform.account_platform.account_service.main import create_app

TEST_SECRET = "test-signing-secret-0123456789-abcdefghij"
# Low work factor keeps the suite fast; production uses the Settings default
TEST_HASH_ROUNDS = 1000


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        JWT_SECRET=TEST_SECRET,
        PASSWORD_HASH_ROUNDS=TEST_HASH_ROUNDS,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session(client, app):
    """Session on the running app's engine, for inspecting or corrupting rows."""
    session = app.state.session_factory()
    yield session
    session.close()
