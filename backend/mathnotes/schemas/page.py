# backend/mathnotes/schemas/page.py
from typing import Dict, List, Optional

from pydantic import BaseModel

from .base import BaseSchema


class PageInfo(BaseModel):
    index: int
    size: int
    is_empty: bool


class PageMutationResult(BaseModel):
    document_id: str
    index: int
    page_count: int
    appended: bool


class DocumentFlushResult(BaseSchema):
    storage_key: str
    page_count: int
    written: List[int] = []
    failures: Dict[int, str] = {}
    ok: bool


class FlushResult(BaseSchema):
    reason: str
    index_written: bool
    index_error: Optional[str] = None
    documents: List[DocumentFlushResult] = []
    removed: List[DocumentFlushResult] = []
    ok: bool


class RecognitionResult(BaseModel):
    document_id: str
    page_index: int
    text: str
