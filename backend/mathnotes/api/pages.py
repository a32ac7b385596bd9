# backend/mathnotes/api/pages.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from ..exceptions import NotFoundError, RecognitionError
from ..schemas.page import PageMutationResult, RecognitionResult
from ..services.notebook import NotebookService
from ..services.recognition import RecognitionService
from ..utils.logging import api_logger
from .deps import get_notebook, get_recognition_service

router = APIRouter(prefix="/api/documents/{document_id}/pages", tags=["pages"])


@router.get("/{page_index}")
async def get_page(page_index: int, document_id: str, notebook: NotebookService = Depends(get_notebook)):
    """Return the raw page payload as produced by the drawing surface"""
    try:
        page = notebook.get_page(document_id, page_index)
    except NotFoundError as e:
        api_logger.warning("Page not found", extra={
            "document_id": document_id,
            "page_index": page_index,
            "error": str(e)
        })
        raise HTTPException(status_code=404, detail="Page not found")

    return Response(content=page.data, media_type="application/octet-stream")


@router.put("/{page_index}", response_model=PageMutationResult)
async def update_page(
        page_index: int,
        document_id: str,
        request: Request,
        notebook: NotebookService = Depends(get_notebook)
):
    """Replace page content with the request body. Drawing on the last page adds a new blank page"""
    data = await request.body()
    api_logger.debug("Updating page", extra={
        "document_id": document_id,
        "page_index": page_index,
        "payload_size": len(data)
    })

    try:
        appended = notebook.update_page(document_id, page_index, data)
        document = notebook.get_document(document_id)
    except NotFoundError as e:
        api_logger.warning("Page not found for update", extra={
            "document_id": document_id,
            "page_index": page_index,
            "error": str(e)
        })
        raise HTTPException(status_code=404, detail="Page not found")

    return PageMutationResult(
        document_id=document_id,
        index=page_index,
        page_count=document.page_count,
        appended=appended
    )


@router.post("", response_model=PageMutationResult)
async def append_page(document_id: str, notebook: NotebookService = Depends(get_notebook)):
    try:
        index = notebook.append_page(document_id)
        document = notebook.get_document(document_id)
    except NotFoundError:
        api_logger.warning("Document not found for new page", extra={"document_id": document_id})
        raise HTTPException(status_code=404, detail="Document not found")

    api_logger.info("Page appended", extra={"document_id": document_id, "page_index": index})
    return PageMutationResult(
        document_id=document_id,
        index=index,
        page_count=document.page_count,
        appended=True
    )


@router.post("/recognize", response_model=RecognitionResult)
async def recognize_page(
        document_id: str,
        page_index: Optional[int] = None,
        notebook: NotebookService = Depends(get_notebook),
        recognition: RecognitionService = Depends(get_recognition_service)
):
    """Send a page to the recognition service. Defaults to the most recently drawn page"""
    try:
        document = notebook.get_document(document_id)
        index = document.last_drawn_index if page_index is None else page_index
        page = document.get_page(index)
    except NotFoundError:
        api_logger.warning("Page not found for recognition", extra={
            "document_id": document_id,
            "page_index": page_index
        })
        raise HTTPException(status_code=404, detail="Page not found")

    try:
        text = await recognition.recognize(page)
    except RecognitionError as e:
        api_logger.error("Recognition failed", extra={
            "document_id": document_id,
            "page_index": index,
            "error": str(e)
        })
        raise HTTPException(status_code=502, detail=f"Recognition failed: {e}")

    return RecognitionResult(document_id=document_id, page_index=index, text=text)
