from .backends import BlobBackend, FileSystemBackend, DatabaseBackend, BackendFactory
from .page_store import PageBlobStore, PageWriteReport, page_blob_name

__all__ = [
    "BlobBackend", "FileSystemBackend", "DatabaseBackend", "BackendFactory",
    "PageBlobStore", "PageWriteReport", "page_blob_name"
]
