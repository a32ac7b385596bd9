# backend/mathnotes/storage/page_store.py
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ..exceptions import CorruptPageError, PageNotFoundError, StorageIOError
from ..models.page import PagePayload
from ..utils.logging import storage_logger
from .backends import BlobBackend


def page_prefix(storage_key: str) -> str:
    return f"{storage_key}_page_"


def page_blob_name(storage_key: str, index: int) -> str:
    return f"{page_prefix(storage_key)}{index}"


@dataclass
class PageWriteReport:
    """Outcome of one replace_all_pages call"""
    storage_key: str
    page_count: int = 0
    written: List[int] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    failures: Dict[int, str] = field(default_factory=dict)
    delete_failures: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True only when every page was written. Stale blobs left behind also count as failure"""
        return not self.failures and not self.delete_failures and len(self.written) == self.page_count


class PageBlobStore:
    """Reads and writes the page payloads of a document, keyed by storage key and page index"""

    def __init__(self, backend: BlobBackend):
        self.backend = backend

    def list_pages(self, storage_key: str) -> List[int]:
        """Probe page_0, page_1, ... and stop at the first missing index"""
        indices = []
        index = 0
        while self.backend.exists(page_blob_name(storage_key, index)):
            indices.append(index)
            index += 1
        return indices

    def load_page(self, storage_key: str, index: int) -> PagePayload:
        raw = self.backend.get(page_blob_name(storage_key, index))
        if raw is None:
            raise PageNotFoundError(storage_key, index)
        try:
            return PagePayload.deserialize(raw)
        except CorruptPageError as e:
            raise CorruptPageError(e.reason, storage_key, index) from e

    def load_all(self, storage_key: str) -> List[PagePayload]:
        """Load pages in order. A missing or corrupt page ends the sequence"""
        pages = []
        for index in self.list_pages(storage_key):
            try:
                pages.append(self.load_page(storage_key, index))
            except (PageNotFoundError, CorruptPageError) as e:
                storage_logger.warning("Truncating page sequence at unreadable page", extra={
                    "storage_key": storage_key,
                    "page_index": index,
                    "error": str(e)
                })
                break
        return pages

    def replace_all_pages(self, storage_key: str, pages: Sequence[PagePayload]) -> PageWriteReport:
        """Delete every stored page of the document, then write pages 0..n-1.

        Individual failures are recorded in the report and the remaining
        pages are still written. Nothing is retried.
        """
        report = PageWriteReport(storage_key=storage_key, page_count=len(pages))

        try:
            existing = self.backend.list_prefix(page_prefix(storage_key))
        except StorageIOError as e:
            report.delete_failures[page_prefix(storage_key)] = str(e)
            storage_logger.error("Could not list existing pages", extra={
                "storage_key": storage_key,
                "error": str(e)
            })
            existing = []

        for name in existing:
            try:
                self.backend.delete(name)
                report.deleted.append(name)
            except StorageIOError as e:
                report.delete_failures[name] = str(e)
                storage_logger.error("Failed to remove existing page", extra={
                    "storage_key": storage_key,
                    "blob_name": name,
                    "error": str(e)
                })

        for index, page in enumerate(pages):
            try:
                self.backend.put(page_blob_name(storage_key, index), page.serialize())
                report.written.append(index)
            except StorageIOError as e:
                report.failures[index] = str(e)
                storage_logger.error("Failed to save page", extra={
                    "storage_key": storage_key,
                    "page_index": index,
                    "error": str(e)
                })

        storage_logger.debug("Replaced document pages", extra={
            "storage_key": storage_key,
            "page_count": len(pages),
            "deleted_count": len(report.deleted),
            "failed_count": len(report.failures)
        })
        return report
