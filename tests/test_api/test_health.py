from __future__ import annotations

from unittest.mock import MagicMock

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError

from workflow_sync.api.routes import health
from workflow_sync.database import database_health, get_db
from workflow_sync.main import app


def test_root_reports_running(client):
    body = client.get("/").json()
    assert body["status"] == "Server is running"
    assert body["environment"] == "test"
    assert "timestamp" in body


def test_health_reports_database(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["database"]["ok"] is True
    assert body["database"]["dialect"] == "sqlite"


def test_test_db_returns_server_time(client):
    body = client.get("/api/test-db").json()
    assert body["success"] is True
    assert body["serverTime"]


def test_test_db_hides_failure_detail(client):
    session = MagicMock()
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("host unreachable"))

    def broken_db():
        yield session

    app.dependency_overrides[get_db] = broken_db

    resp = client.get("/api/test-db")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Database error"}


def test_health_is_degraded_when_database_is_unreachable(client, monkeypatch):
    unreachable = create_engine("sqlite:////nonexistent-dir/workflows.db")
    monkeypatch.setattr(health, "database_health", lambda: database_health(unreachable))

    resp = client.get("/api/health")
    assert resp.status_code == 503
    assert resp.json() == {
        "status": "degraded",
        "database": {"ok": False, "dialect": "sqlite", "error": "Database unreachable"},
    }
