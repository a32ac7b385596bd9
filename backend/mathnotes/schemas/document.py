# backend/mathnotes/schemas/document.py
from typing import List

from pydantic import Field

from .base import BaseSchema, NameMixin
from .page import PageInfo


class DocumentCreate(NameMixin):
    name: str = Field(min_length=1)


class DocumentUpdate(NameMixin):
    name: str = Field(min_length=1)


class Document(BaseSchema):
    id: str
    name: str
    storage_key: str
    page_count: int = 1


class DocumentDetail(Document):
    collection_id: str
    pages: List[PageInfo] = []
