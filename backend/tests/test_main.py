# tests/test_main.py
from fastapi.testclient import TestClient
from mathnotes.main import app

def test_root():
    with TestClient(app) as client:
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "MathNotes API is running"}


def test_cors_headers_only_for_cross_origin_requests():
    with TestClient(app) as client:
        plain = client.get("/")
        assert "access-control-allow-origin" not in plain.headers

        cross = client.get("/", headers={"Origin": "http://localhost:5173"})
        assert cross.headers["access-control-allow-origin"] == "*"
