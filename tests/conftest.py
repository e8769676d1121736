import os

# must be in place before app.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["CSRF_ENABLED"] = "true"
os.environ.pop("ADMIN_USERNAME", None)

import pytest
from fastapi.testclient import TestClient

from app.auth.token import get_token_issuer
from app.db.init_db import create_tables
from app.db.session import SessionLocal, engine
from app.main import app
from app.model.base import Base
from app.model.store_schema import StoreCreate
from app.model.user_schema import UserCreate
from app.repository.role import ensure_roles
from app.service.store_service import StoreService
from app.service.user_service import UserService


@pytest.fixture
def db():
    create_tables(engine)
    session = SessionLocal()
    ensure_roles(session)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    # https so the Secure cookies are sent back by the client
    return TestClient(app, base_url="https://testserver")


@pytest.fixture
def user_service(db):
    return UserService(db)


@pytest.fixture
def store_service(db):
    return StoreService(db)


@pytest.fixture
def make_user(user_service):
    def _make_user(username, email=None, password="secret123", role="STAFF", store_id=None):
        return user_service.create_user(UserCreate(
            username=username,
            email=email or f"{username}@example.com",
            password=password,
            role=role,
            store_id=store_id,
        ))

    return _make_user


@pytest.fixture
def make_store(store_service):
    def _make_store(name="Downtown", latitude=40.7128, longitude=-74.006):
        return store_service.create_store(StoreCreate(name=name, latitude=latitude, longitude=longitude))

    return _make_store


def bearer(username, roles):
    token = get_token_issuer().generate_token(username, roles)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(make_user):
    make_user("admin", role="ADMIN", password="adminpass")
    return bearer("admin", ["ADMIN"])


@pytest.fixture
def staff_headers(make_user):
    make_user("staff", role="STAFF")
    return bearer("staff", ["STAFF"])
