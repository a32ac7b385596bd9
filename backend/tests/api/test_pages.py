# backend/tests/api/test_pages.py
import httpx
import pytest
from fastapi import status

from mathnotes.main import app
from mathnotes.services.recognition import RecognitionService


@pytest.fixture
def document_id(client):
    math = client.get("/api/collections").json()[0]
    return client.post(f"/api/collections/{math['id']}/documents", json={"name": "Integrals"}).json()["id"]


def test_drawing_on_last_page_appends(client, document_id):
    response = client.put(f"/api/documents/{document_id}/pages/0", content=b"stroke data")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["appended"] is True
    assert data["page_count"] == 2

    page = client.get(f"/api/documents/{document_id}/pages/0")
    assert page.status_code == status.HTTP_200_OK
    assert page.content == b"stroke data"
    assert page.headers["content-type"] == "application/octet-stream"


def test_editing_earlier_page_keeps_count(client, document_id):
    client.put(f"/api/documents/{document_id}/pages/0", content=b"first")

    response = client.put(f"/api/documents/{document_id}/pages/0", content=b"first, revised")

    assert response.json()["appended"] is False
    assert response.json()["page_count"] == 2


def test_append_page(client, document_id):
    response = client.post(f"/api/documents/{document_id}/pages")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["index"] == 1
    assert response.json()["page_count"] == 2


def test_page_not_found(client, document_id):
    assert client.get(f"/api/documents/{document_id}/pages/4").status_code == status.HTTP_404_NOT_FOUND
    assert client.put(f"/api/documents/{document_id}/pages/4", content=b"x").status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/api/documents/unknown/pages/0").status_code == status.HTTP_404_NOT_FOUND
    assert client.post("/api/documents/unknown/pages").status_code == status.HTTP_404_NOT_FOUND


def test_recognize_latest_page(client, document_id):
    def handler(request: httpx.Request) -> httpx.Response:
        assert b"x^2" in request.content
        return httpx.Response(200, json={"text": "x^2 + 1"})

    app.state.recognition = RecognitionService(
        url="http://recognizer.test/recognize",
        transport=httpx.MockTransport(handler)
    )
    client.put(f"/api/documents/{document_id}/pages/0", content=b"x^2")

    response = client.post(f"/api/documents/{document_id}/pages/recognize")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"document_id": document_id, "page_index": 0, "text": "x^2 + 1"}


def test_recognize_failure_returns_bad_gateway(client, document_id):
    app.state.recognition = RecognitionService(
        url="http://recognizer.test/recognize",
        transport=httpx.MockTransport(lambda request: httpx.Response(503))
    )
    client.put(f"/api/documents/{document_id}/pages/0", content=b"y = mx + b")

    response = client.post(f"/api/documents/{document_id}/pages/recognize", params={"page_index": 0})

    assert response.status_code == status.HTTP_502_BAD_GATEWAY
