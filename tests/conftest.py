"""Root conftest: in-memory database, app client and user helpers."""

import os

# Settings are read at import time; keep tests off the real database
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOGIN_MAX_ATTEMPTS"] = "3"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sponsor_hub.auth.jwt import create_access_token, get_password_hash
from sponsor_hub.crud import users as user_store
from sponsor_hub.db.base import Base
from sponsor_hub.db.session import get_db, make_engine
from sponsor_hub.main import app
from sponsor_hub.models.user import User, UserPermissions

PASSWORD = "1234"


@pytest.fixture
def engine():
    eng = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Insert a user straight into the store."""

    def _make_user(
        email: str,
        name: str = "",
        permissions: UserPermissions = UserPermissions.USER,
        confirmed: bool = True,
        password: str = PASSWORD,
    ) -> User:
        user = User(
            email=email,
            name=name,
            permissions=int(permissions),
            confirmed=confirmed,
            password=get_password_hash(password),
        )
        user_store.insert_user(db, user)
        return user

    return _make_user


@pytest.fixture
def auth_headers():
    """Bearer header for a user, skipping the login round trip."""

    def _auth_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _auth_headers
