# backend/mathnotes/models/__init__.py
from ..database import Base
from .blob import StoredBlob
from .page import PagePayload
from .document import DocumentRecord
from .collection import Collection, CollectionIndex

__all__ = [
    "Base",
    "StoredBlob",
    "PagePayload",
    "DocumentRecord",
    "Collection",
    "CollectionIndex"
]
