import os

# Settings are read at import time; pin test values before importing admin_auth.
os.environ.setdefault("JWT_SECRET", "test_jwt_secret")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "dev"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from admin_auth.core.base import Base
from admin_auth.core.database import get_db
from admin_auth.core.security import PasswordHasher, TokenService
from admin_auth.dependencies.auth import get_password_hasher, get_token_service, get_user_store
from admin_auth.services.users import InMemoryUserStore

# Import models so they register with SQLAlchemy metadata.
from admin_auth.models.user import User  # noqa: F401

TEST_SECRET = "test_jwt_secret"
TEST_PASSWORD = "correct horse battery staple"


@pytest.fixture(scope="session")
def db_engine():
    # In-memory SQLite for fast, isolated tests.
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture()
def db_session(db_engine):
    # The StaticPool in-memory DB outlives a single test; reset schema per test.
    Base.metadata.drop_all(bind=db_engine)
    Base.metadata.create_all(bind=db_engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session")
def hasher():
    # Minimum bcrypt cost; the production work factor makes the suite crawl.
    return PasswordHasher(rounds=4)


@pytest.fixture()
def token_service():
    return TokenService(TEST_SECRET)


@pytest.fixture()
def app(db_session, hasher, token_service):
    import admin_auth.main as main

    fastapi_app = main.app

    def override_get_db():
        yield db_session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_password_hasher] = lambda: hasher
    fastapi_app.dependency_overrides[get_token_service] = lambda: token_service
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def memory_store():
    return InMemoryUserStore()


@pytest.fixture()
def memory_client(app, memory_store):
    """
    Client whose routes talk to an InMemoryUserStore instead of SQLAlchemy.
    """
    app.dependency_overrides[get_user_store] = lambda: memory_store
    with TestClient(app) as c:
        yield c


def register_payload(email: str = "a@example.com", password: str = TEST_PASSWORD, **overrides) -> dict:
    payload = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": email,
        "password": password,
        "password_confirm": password,
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def registered_user(client):
    res = client.post("/api/register", json=register_payload())
    assert res.status_code == 200
    return res.json()
