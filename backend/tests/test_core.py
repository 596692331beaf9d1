# backend/tests/test_core.py
from fastapi.testclient import TestClient

def test_health(client: TestClient):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

def test_health_is_json(client: TestClient):
    r = client.get("/api/health")
    assert r.headers["content-type"] == "application/json"

def test_openapi_lists_alert_routes(client: TestClient):
    r = client.get("/openapi.json")
    assert r.status_code == 200
    paths = r.json()["paths"]
    for p in ("/api/alerts", "/api/alerts/merge", "/api/alerts/levels", "/api/alerts/levels/{name}"):
        assert p in paths
