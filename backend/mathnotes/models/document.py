# backend/mathnotes/models/document.py
from typing import Callable, List, Optional, Sequence, TYPE_CHECKING
from uuid import uuid4

from ..exceptions import PageNotFoundError
from .page import PagePayload

if TYPE_CHECKING:
    from ..storage.page_store import PageBlobStore, PageWriteReport

DocumentListener = Callable[["DocumentRecord"], None]


def new_storage_key() -> str:
    """Fresh storage key for a new document. Never derived from the document id"""
    return f"{uuid4().hex.upper()}.drawing"


class DocumentRecord:
    """A named, ordered list of pages.

    The record always holds at least one page, and whenever the last page
    receives content a new empty page is appended after it, so there is
    exactly one blank page at the end ready for input.
    """

    def __init__(
            self,
            name: str,
            storage_key: Optional[str] = None,
            id: Optional[str] = None,
            pages: Optional[Sequence[PagePayload]] = None
    ):
        self._id = id or uuid4().hex
        self._storage_key = storage_key or new_storage_key()
        self.name = name
        self.pages: List[PagePayload] = list(pages) if pages else [PagePayload.empty()]
        self._listener: Optional[DocumentListener] = None

    @property
    def id(self) -> str:
        return self._id

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def last_index(self) -> int:
        return len(self.pages) - 1

    @property
    def last_drawn_index(self) -> int:
        """The page before the trailing blank one, i.e. the one most recently written on"""
        return max(0, len(self.pages) - 2)

    def bind(self, listener: Optional[DocumentListener]) -> None:
        """Attach the callback invoked after every mutation"""
        self._listener = listener

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener(self)

    def get_page(self, index: int) -> PagePayload:
        if index < 0 or index >= len(self.pages):
            raise PageNotFoundError(self.storage_key, index)
        return self.pages[index]

    def append_page(self) -> int:
        """Append one empty page and return its index"""
        self.pages.append(PagePayload.empty())
        self._notify()
        return self.last_index

    def on_page_mutated(self, index: int, payload: PagePayload) -> bool:
        """Replace page content. Returns True if a trailing empty page was appended"""
        if index < 0 or index >= len(self.pages):
            raise PageNotFoundError(self.storage_key, index)

        self.pages[index] = payload
        appended = False
        if index == self.last_index and not payload.is_empty:
            self.pages.append(PagePayload.empty())
            appended = True

        self._notify()
        return appended

    def rename(self, name: str) -> None:
        self.name = name
        self._notify()

    def load_pages(self, store: "PageBlobStore") -> None:
        """Replace in-memory pages with what the store holds. Does not count as a mutation"""
        pages = store.load_all(self.storage_key)
        self.pages = pages if pages else [PagePayload.empty()]

    @classmethod
    def load(
            cls,
            store: "PageBlobStore",
            storage_key: str,
            name: str = "",
            id: Optional[str] = None
    ) -> "DocumentRecord":
        record = cls(name=name, storage_key=storage_key, id=id)
        record.load_pages(store)
        return record

    def flush(self, store: "PageBlobStore") -> "PageWriteReport":
        return store.replace_all_pages(self.storage_key, list(self.pages))

    def __eq__(self, other) -> bool:
        return isinstance(other, DocumentRecord) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"DocumentRecord(id={self.id!r}, name={self.name!r}, pages={len(self.pages)})"
