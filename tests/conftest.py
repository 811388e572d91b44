# tests/conftest.py
import os

# Settings are read at import time, so the test environment has to be in
# place before anything from eventops is imported.
os.environ["ENV"] = "local"
os.environ["DATABASE_URL_LOCAL"] = "sqlite://"
os.environ["ENABLE_SCHEDULER"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ.pop("ANTHROPIC_API_KEY", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from eventops import models  # noqa: E402,F401
from eventops.db.base_class import Base  # noqa: E402
from eventops.db.session import get_db  # noqa: E402
from eventops.main import app  # noqa: E402

from tests.utils.auth import create_user, get_user_authentication_headers  # noqa: E402


# --- Test Database Setup ---
# One in-memory SQLite database per test; StaticPool keeps every session
# (including the ones FastAPI opens in its threadpool) on the same connection.
@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


# --- Test Client Fixtures ---
@pytest.fixture(scope="function")
def client(db_session):
    """
    Provides a TestClient wired to the per-test database.
    Authentication is real: use the header fixtures below.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def organizer(db_session):
    return create_user(db_session, email="organizer@example.com", name="Olivia Organizer")


@pytest.fixture
def organizer_headers(organizer):
    return get_user_authentication_headers(organizer)


@pytest.fixture
def other_organizer(db_session):
    return create_user(db_session, email="other@example.com", name="Oscar Other")


@pytest.fixture
def other_headers(other_organizer):
    return get_user_authentication_headers(other_organizer)


@pytest.fixture
def admin(db_session):
    return create_user(db_session, email="admin@example.com", name="Ada Admin", role="admin")


@pytest.fixture
def admin_headers(admin):
    return get_user_authentication_headers(admin)


@pytest.fixture
def superadmin(db_session):
    return create_user(
        db_session, email="root@example.com", name="Sam Super", role="superadmin"
    )


@pytest.fixture
def superadmin_headers(superadmin):
    return get_user_authentication_headers(superadmin)
