# backend/mathnotes/schemas/__init__.py
from .collection import Collection, CollectionCreate, CollectionUpdate, CollectionDetail
from .document import Document, DocumentCreate, DocumentUpdate, DocumentDetail
from .page import PageInfo, PageMutationResult, FlushResult, DocumentFlushResult, RecognitionResult
from .index import IndexSnapshot, CollectionMeta, DocumentMeta

__all__ = [
    "Collection", "CollectionCreate", "CollectionUpdate", "CollectionDetail",
    "Document", "DocumentCreate", "DocumentUpdate", "DocumentDetail",
    "PageInfo", "PageMutationResult", "FlushResult", "DocumentFlushResult", "RecognitionResult",
    "IndexSnapshot", "CollectionMeta", "DocumentMeta"
]
