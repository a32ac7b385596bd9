# backend/mathnotes/api/collections.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..exceptions import NotFoundError
from ..schemas.collection import CollectionCreate, CollectionUpdate, Collection as CollectionSchema, CollectionDetail
from ..schemas.document import DocumentCreate, Document as DocumentSchema
from ..services.notebook import NotebookService
from ..utils.logging import api_logger
from .deps import get_notebook

router = APIRouter(prefix="/api/collections", tags=["collections"])


@router.get("", response_model=List[CollectionDetail])
async def list_collections(notebook: NotebookService = Depends(get_notebook)):
    """List all collections with their documents, in display order"""
    collections = notebook.list_collections()
    api_logger.info(f"Found {len(collections)} collections")
    return [CollectionDetail.model_validate(collection) for collection in collections]


@router.post("", response_model=CollectionSchema)
async def create_collection(collection: CollectionCreate, notebook: NotebookService = Depends(get_notebook)):
    api_logger.info("Creating new collection", extra={"collection_name": collection.name})

    created = notebook.add_collection(collection.name)

    api_logger.info("Collection created successfully", extra={
        "collection_id": created.id,
        "collection_name": created.name
    })
    return CollectionSchema.model_validate(created)


@router.get("/{collection_id}", response_model=CollectionDetail)
async def get_collection(collection_id: str, notebook: NotebookService = Depends(get_notebook)):
    api_logger.info("Fetching collection", extra={"collection_id": collection_id})

    try:
        collection = notebook.get_collection(collection_id)
    except NotFoundError:
        api_logger.warning("Collection not found", extra={"collection_id": collection_id})
        raise HTTPException(status_code=404, detail="Collection not found")

    return CollectionDetail.model_validate(collection)


@router.put("/{collection_id}", response_model=CollectionSchema)
async def update_collection(
        collection_id: str,
        collection: CollectionUpdate,
        notebook: NotebookService = Depends(get_notebook)
):
    api_logger.info("Renaming collection", extra={"collection_id": collection_id})

    try:
        updated = notebook.rename_collection(collection_id, collection.name)
    except NotFoundError:
        api_logger.warning("Collection not found for update", extra={"collection_id": collection_id})
        raise HTTPException(status_code=404, detail="Collection not found")

    api_logger.info("Collection renamed successfully", extra={"collection_id": collection_id})
    return CollectionSchema.model_validate(updated)


@router.delete("/{collection_id}")
async def delete_collection(collection_id: str, notebook: NotebookService = Depends(get_notebook)):
    api_logger.info("Deleting collection", extra={"collection_id": collection_id})

    try:
        removed = notebook.remove_collection(collection_id)
    except NotFoundError:
        api_logger.warning("Collection not found for deletion", extra={"collection_id": collection_id})
        raise HTTPException(status_code=404, detail="Collection not found")

    api_logger.info(f"Successfully deleted collection {collection_id}", extra={
        "document_count": removed.document_count
    })
    return {"success": True}


@router.post("/{collection_id}/documents", response_model=DocumentSchema)
async def create_document(
        collection_id: str,
        document: DocumentCreate,
        notebook: NotebookService = Depends(get_notebook)
):
    api_logger.info("Creating new document", extra={
        "collection_id": collection_id,
        "document_name": document.name
    })

    try:
        created = notebook.add_document(collection_id, document.name)
    except NotFoundError:
        api_logger.warning("Collection not found for new document", extra={"collection_id": collection_id})
        raise HTTPException(status_code=404, detail="Collection not found")

    api_logger.info("Successfully created document", extra={
        "document_id": created.id,
        "collection_id": collection_id,
        "storage_key": created.storage_key
    })
    return DocumentSchema.model_validate(created)
