# backend/tests/conftest.py
import sys, pathlib, pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

BACKEND_DIR = pathlib.Path(__file__).resolve().parents[1]   # .../backend

# Make `from tc_alerts.*` importable
sys.path.insert(0, str(BACKEND_DIR))


def _make_request(client=("10.0.0.7", 51234)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/api/anything",
        "query_string": b"",
        "headers": [],
        "client": client,
    }
    return Request(scope)


@pytest.fixture()
def make_request():
    return _make_request


@pytest.fixture()
def client():
    from tc_alerts.main import app
    return TestClient(app)
