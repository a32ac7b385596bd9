# backend/mathnotes/api/documents.py
from fastapi import APIRouter, Depends, HTTPException

from ..exceptions import NotFoundError
from ..models.document import DocumentRecord
from ..schemas.document import DocumentUpdate, Document as DocumentSchema, DocumentDetail
from ..schemas.page import PageInfo
from ..services.notebook import NotebookService
from ..utils.logging import api_logger
from .deps import get_notebook

router = APIRouter(prefix="/api/documents", tags=["documents"])


def build_document_detail(document: DocumentRecord, collection_id: str) -> DocumentDetail:
    return DocumentDetail(
        id=document.id,
        name=document.name,
        storage_key=document.storage_key,
        page_count=document.page_count,
        collection_id=collection_id,
        pages=[
            PageInfo(index=idx, size=len(page), is_empty=page.is_empty)
            for idx, page in enumerate(document.pages)
        ]
    )


@router.get("/{document_id}", response_model=DocumentDetail)
async def get_document(document_id: str, notebook: NotebookService = Depends(get_notebook)):
    api_logger.info("Retrieving document details", extra={"document_id": document_id})

    try:
        document = notebook.get_document(document_id)
        collection = notebook.index.find_collection_of(document_id)
    except NotFoundError:
        api_logger.warning("Document not found", extra={"document_id": document_id})
        raise HTTPException(status_code=404, detail="Document not found")

    return build_document_detail(document, collection.id)


@router.put("/{document_id}", response_model=DocumentSchema)
async def update_document(
        document_id: str,
        document: DocumentUpdate,
        notebook: NotebookService = Depends(get_notebook)
):
    api_logger.info("Renaming document", extra={"document_id": document_id})

    try:
        updated = notebook.rename_document(document_id, document.name)
    except NotFoundError:
        api_logger.warning("Document not found for update", extra={"document_id": document_id})
        raise HTTPException(status_code=404, detail="Document not found")

    return DocumentSchema.model_validate(updated)


@router.delete("/{document_id}")
async def delete_document(document_id: str, notebook: NotebookService = Depends(get_notebook)):
    api_logger.info("Deleting document", extra={"document_id": document_id})

    try:
        removed = notebook.remove_document(document_id)
    except NotFoundError:
        api_logger.warning("Document not found for deletion", extra={"document_id": document_id})
        raise HTTPException(status_code=404, detail="Document not found")

    api_logger.info(f"Successfully deleted document {document_id}", extra={
        "storage_key": removed.storage_key
    })
    return {"success": True}
