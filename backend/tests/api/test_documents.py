# backend/tests/api/test_documents.py
import pytest
from fastapi import status


@pytest.fixture
def sample_document(client):
    math = client.get("/api/collections").json()[0]
    response = client.post(f"/api/collections/{math['id']}/documents", json={"name": "Derivatives"})
    return {**response.json(), "collection_id": math["id"]}


def test_get_document(client, sample_document):
    response = client.get(f"/api/documents/{sample_document['id']}")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "Derivatives"
    assert data["collection_id"] == sample_document["collection_id"]
    assert data["pages"] == [{"index": 0, "size": 0, "is_empty": True}]


def test_rename_document_keeps_storage_key(client, sample_document):
    response = client.put(f"/api/documents/{sample_document['id']}", json={"name": "Chain Rule"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "Chain Rule"
    assert data["storage_key"] == sample_document["storage_key"]


def test_delete_document(client, sample_document):
    response = client.delete(f"/api/documents/{sample_document['id']}")
    assert response.status_code == status.HTTP_200_OK

    get_response = client.get(f"/api/documents/{sample_document['id']}")
    assert get_response.status_code == status.HTTP_404_NOT_FOUND


def test_missing_document(client):
    assert client.get("/api/documents/unknown").status_code == status.HTTP_404_NOT_FOUND
    assert client.put("/api/documents/unknown", json={"name": "x"}).status_code == status.HTTP_404_NOT_FOUND
    assert client.delete("/api/documents/unknown").status_code == status.HTTP_404_NOT_FOUND
