# backend/mathnotes/schemas/collection.py
from typing import List

from pydantic import Field

from .base import BaseSchema, NameMixin
from .document import Document


class CollectionCreate(NameMixin):
    name: str = Field(min_length=1)


class CollectionUpdate(NameMixin):
    name: str = Field(min_length=1)


class Collection(BaseSchema):
    id: str
    name: str
    document_count: int = 0


class CollectionDetail(Collection):
    documents: List[Document] = []
