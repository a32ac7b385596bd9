# backend/mathnotes/services/notebook.py
import time
from typing import List, Optional

from ..config import settings
from ..exceptions import StorageIOError
from ..models.collection import Collection, CollectionIndex
from ..models.document import DocumentRecord
from ..models.page import PagePayload
from ..storage.backends import BlobBackend
from ..storage.page_store import PageBlobStore
from ..utils.logging import service_logger
from .lifecycle import LifecyclePersistenceHook
from .persistence import DebouncedPersistenceCoordinator, FlushReport, Scheduler


def load_index(backend: BlobBackend, index_key: str, default_names: Optional[List[str]] = None) -> CollectionIndex:
    """Read the stored index. A missing index is a first run; a failed read raises StorageIOError"""
    return CollectionIndex.deserialize(backend.get(index_key), default_names)


class NotebookService:
    """Owns the collection tree and its persistence for one application instance.

    Created once by the application at startup and handed to whoever needs
    it. All mutations go through here so that each one reaches the
    persistence coordinator.
    """

    def __init__(
            self,
            index: CollectionIndex,
            backend: BlobBackend,
            scheduler: Scheduler,
            delay: Optional[float] = None,
            index_key: Optional[str] = None,
            index_writable: bool = True
    ):
        self.index = index
        self.backend = backend
        self.store = PageBlobStore(backend)
        self.coordinator = DebouncedPersistenceCoordinator(
            index, self.store, backend, scheduler,
            delay=delay,
            index_key=index_key,
            index_writable=index_writable
        )
        self.coordinator.attach()
        self.lifecycle = LifecyclePersistenceHook(self.coordinator)

    @classmethod
    def open(
            cls,
            backend: BlobBackend,
            scheduler: Scheduler,
            delay: Optional[float] = None,
            index_key: Optional[str] = None,
            default_collections: Optional[List[str]] = None
    ) -> "NotebookService":
        """Load the index, then the pages of every document in a second pass"""
        start_time = time.perf_counter()
        index_key = index_key or settings.INDEX_KEY
        try:
            index = load_index(backend, index_key, default_collections)
            index_writable = True
        except StorageIOError as e:
            # Stored tree is unknown here; this process never overwrites it
            service_logger.error("Could not read collection index, index writes disabled", extra={
                "index_key": index_key,
                "error": str(e)
            })
            index = CollectionIndex.default(default_collections)
            index_writable = False

        notebook = cls(
            index, backend, scheduler,
            delay=delay,
            index_key=index_key,
            index_writable=index_writable
        )
        notebook.load_all_pages()

        service_logger.info("Notebook opened", extra={
            "collection_count": len(index),
            "document_count": sum(1 for _ in index.documents()),
            "execution_time_ms": round((time.perf_counter() - start_time) * 1000, 2)
        })
        return notebook

    def load_all_pages(self) -> None:
        for document in self.index.documents():
            try:
                document.load_pages(self.store)
            except StorageIOError as e:
                service_logger.error("Could not load document pages", extra={
                    "document_id": document.id,
                    "storage_key": document.storage_key,
                    "error": str(e)
                })

    # -- collections --

    def list_collections(self) -> List[Collection]:
        return self.index.collections

    def get_collection(self, collection_id: str) -> Collection:
        return self.index.get_collection(collection_id)

    def add_collection(self, name: str) -> Collection:
        return self.index.add_collection(name)

    def rename_collection(self, collection_id: str, name: str) -> Collection:
        return self.index.rename_collection(collection_id, name)

    def remove_collection(self, collection_id: str) -> Collection:
        collection = self.index.remove_collection(collection_id)
        for document in collection.documents:
            self.coordinator.discard_document(document.storage_key)
        return collection

    # -- documents --

    def add_document(self, collection_id: str, name: str) -> DocumentRecord:
        return self.index.add_document(collection_id, name)

    def get_document(self, document_id: str) -> DocumentRecord:
        return self.index.get_document(document_id)

    def rename_document(self, document_id: str, name: str) -> DocumentRecord:
        return self.index.rename_document(document_id, name)

    def remove_document(self, document_id: str) -> DocumentRecord:
        document = self.index.remove_document(document_id)
        self.coordinator.discard_document(document.storage_key)
        return document

    # -- pages --

    def get_page(self, document_id: str, index: int) -> PagePayload:
        return self.get_document(document_id).get_page(index)

    def update_page(self, document_id: str, index: int, data: bytes) -> bool:
        """Store new content for a page. Returns True if a trailing page was appended"""
        return self.get_document(document_id).on_page_mutated(index, PagePayload(data))

    def append_page(self, document_id: str) -> int:
        return self.get_document(document_id).append_page()

    # -- persistence --

    def flush_now(self) -> Optional[FlushReport]:
        return self.coordinator.force_flush_now()

    def close(self) -> Optional[FlushReport]:
        return self.lifecycle.on_shutdown()
