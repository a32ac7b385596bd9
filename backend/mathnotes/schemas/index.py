# backend/mathnotes/schemas/index.py
from typing import List

from pydantic import BaseModel, Field

INDEX_FORMAT_VERSION = 1


class DocumentMeta(BaseModel):
    id: str = Field(min_length=1)
    name: str
    storage_key: str = Field(min_length=1)


class CollectionMeta(BaseModel):
    id: str = Field(min_length=1)
    name: str
    documents: List[DocumentMeta] = []


class IndexSnapshot(BaseModel):
    """Serialized form of the collection tree. Page bytes are never part of it"""
    version: int = INDEX_FORMAT_VERSION
    collections: List[CollectionMeta] = []
