# backend/mathnotes/services/persistence.py
import asyncio
import enum
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol

from ..config import settings
from ..exceptions import StorageIOError
from ..models.collection import CollectionIndex
from ..models.document import DocumentRecord
from ..storage.backends import BlobBackend
from ..storage.page_store import PageBlobStore, PageWriteReport
from ..utils.logging import service_logger


class FlushState(str, enum.Enum):
    IDLE = "idle"
    PENDING = "pending"


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class AsyncioScheduler:
    """Schedules deferred callbacks on one asyncio event loop"""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self.loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


@dataclass
class FlushReport:
    reason: str
    index_written: bool = False
    index_error: Optional[str] = None
    documents: List[PageWriteReport] = field(default_factory=list)
    removed: List[PageWriteReport] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return (
            self.index_written
            and all(doc.ok for doc in self.documents)
            and all(doc.ok for doc in self.removed)
        )


class DebouncedPersistenceCoordinator:
    """Decides when in-memory state is written to storage.

    Two states: IDLE and PENDING. Every mutation (re)arms a timer, so a
    flush only happens once the notebook has been quiet for `delay`
    seconds. force_flush_now() flushes immediately and disarms the timer.

    With index_writable=False the stored index is never overwritten; pages
    are still flushed.
    """

    def __init__(
            self,
            index: CollectionIndex,
            store: PageBlobStore,
            backend: BlobBackend,
            scheduler: Scheduler,
            delay: Optional[float] = None,
            index_key: Optional[str] = None,
            index_writable: bool = True
    ):
        self.index = index
        self.store = store
        self.backend = backend
        self.scheduler = scheduler
        self.delay = settings.SAVE_DEBOUNCE_SECONDS if delay is None else delay
        self.index_key = index_key or settings.INDEX_KEY
        self.index_writable = index_writable

        self._timer: Optional[TimerHandle] = None
        self._dirty: Dict[str, DocumentRecord] = {}
        self._removed_keys: List[str] = []
        self._flushing = False
        self.flush_count = 0
        self.last_report: Optional[FlushReport] = None

    @property
    def state(self) -> FlushState:
        return FlushState.PENDING if self._timer is not None else FlushState.IDLE

    def attach(self) -> None:
        """Start receiving mutation events from the index"""
        self.index.subscribe(self.notify)

    def notify(self, document: Optional[DocumentRecord] = None) -> None:
        """Mutation event. Cancels any pending timer and arms a new one"""
        if document is not None:
            self._dirty[document.id] = document
        self._cancel_timer()
        self._timer = self.scheduler.call_later(self.delay, self._on_timer)

    def discard_document(self, storage_key: str) -> None:
        """Remove a deleted document's pages on the next flush"""
        self._removed_keys.append(storage_key)
        self.notify()

    def force_flush_now(self, reason: str = "forced") -> Optional[FlushReport]:
        """Flush synchronously, bypassing the debounce delay"""
        self._cancel_timer()
        return self._flush(reason)

    def cancel(self) -> None:
        """Drop the pending timer without flushing"""
        self._cancel_timer()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self) -> None:
        self._timer = None
        self._flush("debounce")

    def _flush(self, reason: str) -> Optional[FlushReport]:
        if self._flushing:
            service_logger.debug("Flush already running, skipping", extra={"reason": reason})
            return None

        self._flushing = True
        start_time = time.perf_counter()
        report = FlushReport(reason=reason)
        dirty = list(self._dirty.values())
        self._dirty.clear()
        removed = list(self._removed_keys)
        self._removed_keys.clear()

        try:
            if not self.index_writable:
                report.index_error = "stored index was never read, refusing to overwrite it"
                service_logger.warning("Skipping collection index write", extra={
                    "index_key": self.index_key
                })
            else:
                try:
                    self.backend.put(self.index_key, self.index.serialize())
                    report.index_written = True
                except StorageIOError as e:
                    report.index_error = str(e)
                    service_logger.error("Failed to save collection index", extra={
                        "index_key": self.index_key,
                        "error": str(e)
                    })

            for storage_key in removed:
                removal = self.store.replace_all_pages(storage_key, [])
                report.removed.append(removal)
                if not removal.ok:
                    # Retried on the next cycle
                    self._removed_keys.append(storage_key)

            # Mutated documents first, then every other document as a safety net
            flushed = set()
            for document in dirty:
                if document.id in flushed or not self.index.has_document(document.id):
                    continue
                report.documents.append(document.flush(self.store))
                flushed.add(document.id)
            for document in self.index.documents():
                if document.id in flushed:
                    continue
                report.documents.append(document.flush(self.store))
                flushed.add(document.id)
        finally:
            self._flushing = False

        report.duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        self.flush_count += 1
        self.last_report = report

        log = service_logger.info if report.ok else service_logger.warning
        log("Flush completed", extra={
            "reason": reason,
            "document_count": len(report.documents),
            "dirty_count": len(dirty),
            "removed_count": len(report.removed),
            "index_written": report.index_written,
            "ok": report.ok,
            "execution_time_ms": report.duration_ms
        })
        return report
