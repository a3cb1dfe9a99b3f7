import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("APP_ENV", "test")
os.environ["JWT_AUDIENCE"] = ""
os.environ["JWT_ISSUER"] = ""

import pytest
from fastapi.testclient import TestClient

from workflow_sync.core.security import create_access_token
from workflow_sync.database import SessionLocal, engine, init_db
from workflow_sync.main import app
from workflow_sync.models import Base


@pytest.fixture(autouse=True)
def workflows_table():
    """Fresh, empty workflows table for every test."""
    init_db(engine)
    yield
    Base.metadata.drop_all(bind=engine)
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def token() -> str:
    return create_access_token("tester@example.com", {"name": "Tester"})


@pytest.fixture
def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)
