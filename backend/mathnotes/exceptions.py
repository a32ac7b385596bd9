# backend/mathnotes/exceptions.py


class NotebookError(Exception):
    """Base class for all persistence errors raised by mathnotes"""


class NotFoundError(NotebookError):
    """A blob, collection, document or page does not exist"""


class CollectionNotFoundError(NotFoundError):
    def __init__(self, collection_id: str):
        self.collection_id = collection_id
        super().__init__(f"Collection {collection_id} not found")


class DocumentNotFoundError(NotFoundError):
    def __init__(self, document_id: str):
        self.document_id = document_id
        super().__init__(f"Document {document_id} not found")


class PageNotFoundError(NotFoundError):
    def __init__(self, storage_key: str, index: int):
        self.storage_key = storage_key
        self.index = index
        super().__init__(f"Page {index} of {storage_key} not found")


class CorruptError(NotebookError):
    """Stored bytes could not be decoded"""


class CorruptPageError(CorruptError):
    def __init__(self, reason: str, storage_key: str | None = None, index: int | None = None):
        self.reason = reason
        self.storage_key = storage_key
        self.index = index
        location = f" ({storage_key} page {index})" if storage_key is not None else ""
        super().__init__(f"Corrupt page payload{location}: {reason}")


class CorruptIndexError(CorruptError):
    """The serialized collection index is malformed"""


class StorageIOError(NotebookError):
    """A read, write or delete failed at the blob backend"""

    def __init__(self, operation: str, key: str, cause: Exception | None = None):
        self.operation = operation
        self.key = key
        self.cause = cause
        super().__init__(f"Storage {operation} failed for {key}: {cause}")


class RecognitionError(NotebookError):
    """The recognition endpoint failed or returned an unusable response"""
