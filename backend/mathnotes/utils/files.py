# backend/mathnotes/utils/files.py
import os
import tempfile
from pathlib import Path
from typing import List

from .logging import storage_logger


def write_file_atomic(file_path: Path, data: bytes) -> Path:
    """Write bytes to a temp file beside the target, then rename it into place"""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as buffer:
            buffer.write(data)
            buffer.flush()
            os.fsync(buffer.fileno())
        os.replace(tmp_name, file_path)
    except Exception:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    return file_path


def delete_file(file_path: Path) -> bool:
    """Delete a file if it exists. Returns True when something was removed"""
    if not file_path.exists():
        return False
    file_path.unlink()
    storage_logger.debug(f"Deleted file: {file_path.name}")
    return True


def list_files_with_prefix(directory: Path, prefix: str) -> List[Path]:
    """List regular files in a directory whose name starts with prefix, skipping temp files"""
    if not directory.exists():
        return []
    return sorted(
        path for path in directory.iterdir()
        if path.is_file() and path.name.startswith(prefix)
    )

