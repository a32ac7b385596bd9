# backend/mathnotes/storage/backends.py
import abc
from pathlib import Path
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..exceptions import StorageIOError
from ..models.blob import StoredBlob
from ..utils.files import write_file_atomic, delete_file, list_files_with_prefix
from ..utils.logging import storage_logger


class BlobBackend(abc.ABC):
    """Flat keyspace of named binary blobs"""

    @abc.abstractmethod
    def get(self, name: str) -> Optional[bytes]:
        """Return the blob bytes, or None when no blob has this name"""
        pass

    @abc.abstractmethod
    def put(self, name: str, data: bytes) -> None:
        """Create or overwrite a blob"""
        pass

    @abc.abstractmethod
    def delete(self, name: str) -> bool:
        """Remove a blob. Returns False when it did not exist"""
        pass

    @abc.abstractmethod
    def list_prefix(self, prefix: str) -> List[str]:
        """Names of all blobs starting with prefix"""
        pass

    def exists(self, name: str) -> bool:
        return self.get(name) is not None


class FileSystemBackend(BlobBackend):
    """One file per blob inside a single directory"""

    def __init__(self, root: Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, name: str) -> Path:
        if not name or "/" in name or "\\" in name or name.startswith("."):
            raise ValueError(f"Invalid blob name: {name!r}")
        return self.root / name

    def get(self, name: str) -> Optional[bytes]:
        path = self._path(name)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageIOError("read", name, e) from e

    def put(self, name: str, data: bytes) -> None:
        try:
            write_file_atomic(self._path(name), data)
        except OSError as e:
            raise StorageIOError("write", name, e) from e

    def delete(self, name: str) -> bool:
        try:
            return delete_file(self._path(name))
        except OSError as e:
            raise StorageIOError("delete", name, e) from e

    def list_prefix(self, prefix: str) -> List[str]:
        try:
            return [path.name for path in list_files_with_prefix(self.root, prefix)]
        except OSError as e:
            raise StorageIOError("list", prefix, e) from e

    def exists(self, name: str) -> bool:
        return self._path(name).is_file()


class DatabaseBackend(BlobBackend):
    """Blobs stored as rows of the stored_blobs table"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def get(self, name: str) -> Optional[bytes]:
        try:
            with self.session_factory() as session:
                blob = session.get(StoredBlob, name)
                return bytes(blob.data) if blob is not None else None
        except SQLAlchemyError as e:
            raise StorageIOError("read", name, e) from e

    def put(self, name: str, data: bytes) -> None:
        try:
            with self.session_factory() as session:
                blob = session.get(StoredBlob, name)
                if blob is None:
                    session.add(StoredBlob(name=name, data=data, size=len(data)))
                else:
                    blob.data = data
                    blob.size = len(data)
                session.commit()
        except SQLAlchemyError as e:
            raise StorageIOError("write", name, e) from e

    def delete(self, name: str) -> bool:
        try:
            with self.session_factory() as session:
                blob = session.get(StoredBlob, name)
                if blob is None:
                    return False
                session.delete(blob)
                session.commit()
                return True
        except SQLAlchemyError as e:
            raise StorageIOError("delete", name, e) from e

    def list_prefix(self, prefix: str) -> List[str]:
        try:
            with self.session_factory() as session:
                query = select(StoredBlob.name) \
                    .where(StoredBlob.name.startswith(prefix, autoescape=True)) \
                    .order_by(StoredBlob.name)
                return list(session.scalars(query))
        except SQLAlchemyError as e:
            raise StorageIOError("list", prefix, e) from e

    def exists(self, name: str) -> bool:
        try:
            with self.session_factory() as session:
                query = select(StoredBlob.name).where(StoredBlob.name == name)
                return session.scalar(query) is not None
        except SQLAlchemyError as e:
            raise StorageIOError("read", name, e) from e


class BackendFactory:
    """Build the blob backend selected in settings"""

    @classmethod
    def create(cls, config) -> BlobBackend:
        if config.STORAGE_BACKEND == "database":
            from ..database import create_db_engine, create_session_factory

            engine = create_db_engine(config.DATABASE_URL)
            backend = DatabaseBackend(create_session_factory(engine))
        else:
            backend = FileSystemBackend(config.PAGES_PATH)

        storage_logger.info("Blob backend initialized", extra={
            "backend": type(backend).__name__
        })
        return backend
