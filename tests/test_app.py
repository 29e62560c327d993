from conftest import API, WORKER_PASSWORD
from fastapi.testclient import TestClient

from main import app


def test_root_points_at_gateway():
    body = TestClient(app).get("/").json()
    assert body["gateway_base"] == "/api/v1/gateway"


def test_health_reports_database_and_storage():
    body = TestClient(app).get("/health").json()
    assert body["database"] == "connected"
    assert body["cloudinary"] == "not configured"
    assert body["status"] == "healthy"


def test_session_cookie_is_http_only(make_client, worker):
    c = make_client()
    response = c.post(f"{API}/auth/worker-login", json={"username": "worker1", "password": WORKER_PASSWORD})
    cookie = response.headers["set-cookie"].lower()
    assert "session=" in cookie
    assert "httponly" in cookie
