# backend/mathnotes/models/collection.py
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Union
from uuid import uuid4

from pydantic import ValidationError

from ..config import settings
from ..exceptions import CollectionNotFoundError, DocumentNotFoundError, CorruptIndexError
from ..schemas.index import IndexSnapshot, CollectionMeta, DocumentMeta, INDEX_FORMAT_VERSION
from ..utils.logging import service_logger
from .document import DocumentRecord

# Called after every change to the tree. The argument is the document whose
# pages changed, or None for a metadata-only change.
IndexListener = Callable[[Optional[DocumentRecord]], None]


class Collection:
    """A named, ordered group of documents (a folder)"""

    def __init__(self, name: str, id: Optional[str] = None):
        self._id = id or uuid4().hex
        self.name = name
        self._documents: Dict[str, DocumentRecord] = {}

    @property
    def id(self) -> str:
        return self._id

    @property
    def documents(self) -> List[DocumentRecord]:
        return list(self._documents.values())

    @property
    def document_count(self) -> int:
        return len(self._documents)

    def __contains__(self, document_id: str) -> bool:
        return document_id in self._documents

    def __repr__(self) -> str:
        return f"Collection(id={self.id!r}, name={self.name!r}, documents={len(self._documents)})"


class CollectionIndex:
    """In-memory tree of collections and their documents.

    Lookups go through dicts keyed by id. The index serializes its own
    metadata only; loading page content is left to the owner.
    """

    def __init__(self):
        self._collections: Dict[str, Collection] = {}
        self._document_owner: Dict[str, str] = {}
        self._listeners: List[IndexListener] = []

    # -- change notification --

    def subscribe(self, listener: IndexListener) -> None:
        self._listeners.append(listener)

    def _notify(self, document: Optional[DocumentRecord] = None) -> None:
        for listener in self._listeners:
            listener(document)

    def _on_document_changed(self, document: DocumentRecord) -> None:
        self._notify(document)

    # -- queries --

    @property
    def collections(self) -> List[Collection]:
        return list(self._collections.values())

    def get_collection(self, collection_id: str) -> Collection:
        collection = self._collections.get(collection_id)
        if collection is None:
            raise CollectionNotFoundError(collection_id)
        return collection

    def get_document(self, document_id: str) -> DocumentRecord:
        collection_id = self._document_owner.get(document_id)
        if collection_id is None:
            raise DocumentNotFoundError(document_id)
        return self._collections[collection_id]._documents[document_id]

    def find_collection_of(self, document_id: str) -> Collection:
        collection_id = self._document_owner.get(document_id)
        if collection_id is None:
            raise DocumentNotFoundError(document_id)
        return self._collections[collection_id]

    def has_document(self, document_id: str) -> bool:
        return document_id in self._document_owner

    def documents(self) -> Iterator[DocumentRecord]:
        for collection in self._collections.values():
            yield from collection._documents.values()

    def __len__(self) -> int:
        return len(self._collections)

    # -- mutations --

    def add_collection(self, name: str) -> Collection:
        collection = Collection(name)
        self._attach_collection(collection)
        service_logger.info("Collection added", extra={
            "collection_id": collection.id,
            "collection_name": name
        })
        self._notify()
        return collection

    def add_document(self, collection: Union[Collection, str], name: str) -> DocumentRecord:
        collection_id = collection.id if isinstance(collection, Collection) else collection
        target = self.get_collection(collection_id)

        document = DocumentRecord(name=name)
        self._attach_document(target, document)
        service_logger.info("Document added", extra={
            "collection_id": collection_id,
            "document_id": document.id,
            "storage_key": document.storage_key
        })
        self._notify(document)
        return document

    def rename_collection(self, collection_id: str, name: str) -> Collection:
        collection = self.get_collection(collection_id)
        collection.name = name
        self._notify()
        return collection

    def rename_document(self, document_id: str, name: str) -> DocumentRecord:
        document = self.get_document(document_id)
        # rename notifies through the bound listener
        document.rename(name)
        return document

    def remove_document(self, document_id: str) -> DocumentRecord:
        collection = self.find_collection_of(document_id)
        document = collection._documents.pop(document_id)
        del self._document_owner[document_id]
        document.bind(None)
        self._notify()
        return document

    def remove_collection(self, collection_id: str) -> Collection:
        collection = self._collections.pop(collection_id, None)
        if collection is None:
            raise CollectionNotFoundError(collection_id)
        for document in collection._documents.values():
            self._document_owner.pop(document.id, None)
            document.bind(None)
        self._notify()
        return collection

    def _attach_collection(self, collection: Collection) -> None:
        if collection.id in self._collections:
            raise CorruptIndexError(f"Duplicate collection id {collection.id}")
        self._collections[collection.id] = collection

    def _attach_document(self, collection: Collection, document: DocumentRecord) -> None:
        if document.id in self._document_owner:
            raise CorruptIndexError(f"Duplicate document id {document.id}")
        collection._documents[document.id] = document
        self._document_owner[document.id] = collection.id
        document.bind(self._on_document_changed)

    # -- serialization --

    def to_snapshot(self) -> IndexSnapshot:
        return IndexSnapshot(
            version=INDEX_FORMAT_VERSION,
            collections=[
                CollectionMeta(
                    id=collection.id,
                    name=collection.name,
                    documents=[
                        DocumentMeta(id=doc.id, name=doc.name, storage_key=doc.storage_key)
                        for doc in collection.documents
                    ]
                )
                for collection in self._collections.values()
            ]
        )

    def serialize(self) -> bytes:
        return self.to_snapshot().model_dump_json(indent=2).encode("utf-8")

    @classmethod
    def from_snapshot(cls, snapshot: IndexSnapshot) -> "CollectionIndex":
        """Build an index from a snapshot. Raises CorruptIndexError on duplicate ids or keys"""
        if snapshot.version != INDEX_FORMAT_VERSION:
            raise CorruptIndexError(f"Unsupported index version {snapshot.version}")

        index = cls()
        storage_keys = set()
        for collection_meta in snapshot.collections:
            collection = Collection(collection_meta.name, id=collection_meta.id)
            index._attach_collection(collection)
            for doc_meta in collection_meta.documents:
                if doc_meta.storage_key in storage_keys:
                    raise CorruptIndexError(f"Duplicate storage key {doc_meta.storage_key}")
                storage_keys.add(doc_meta.storage_key)
                index._attach_document(collection, DocumentRecord(
                    name=doc_meta.name,
                    storage_key=doc_meta.storage_key,
                    id=doc_meta.id
                ))
        return index

    @classmethod
    def default(cls, names: Optional[Sequence[str]] = None) -> "CollectionIndex":
        index = cls()
        for name in (settings.DEFAULT_COLLECTIONS if names is None else names):
            index._attach_collection(Collection(name))
        return index

    @classmethod
    def deserialize(cls, raw: Optional[bytes], default_names: Optional[Sequence[str]] = None) -> "CollectionIndex":
        """Inverse of serialize. Malformed or missing input yields the default tree instead of an error"""
        if not raw:
            service_logger.info("No stored index, starting with default collections")
            return cls.default(default_names)

        try:
            snapshot = IndexSnapshot.model_validate_json(raw)
            return cls.from_snapshot(snapshot)
        except (ValidationError, ValueError, CorruptIndexError) as e:
            service_logger.warning("Stored index is corrupt, falling back to default collections", extra={
                "error_type": type(e).__name__,
                "error": str(e),
                "index_size": len(raw)
            })
            return cls.default(default_names)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CollectionIndex):
            return NotImplemented
        return self.to_snapshot() == other.to_snapshot()

    __hash__ = None
