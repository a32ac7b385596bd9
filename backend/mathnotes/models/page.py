# backend/mathnotes/models/page.py
import struct
import zlib
from dataclasses import dataclass

from ..exceptions import CorruptPageError

# magic, format version, payload length
_HEADER = struct.Struct(">4sBI")
_TRAILER = struct.Struct(">I")
PAGE_MAGIC = b"MNPG"
PAGE_FORMAT_VERSION = 1


@dataclass(frozen=True)
class PagePayload:
    """One hand-drawn page as produced by the drawing surface.

    The bytes are opaque here. The only questions asked of a payload are
    whether it is empty and how to frame it for storage.
    """
    data: bytes = b""

    @classmethod
    def empty(cls) -> "PagePayload":
        return cls(b"")

    @property
    def is_empty(self) -> bool:
        return len(self.data) == 0

    def __len__(self) -> int:
        return len(self.data)

    def serialize(self) -> bytes:
        """Frame the payload with a header and CRC32 trailer"""
        header = _HEADER.pack(PAGE_MAGIC, PAGE_FORMAT_VERSION, len(self.data))
        return header + self.data + _TRAILER.pack(zlib.crc32(self.data))

    @classmethod
    def deserialize(cls, raw: bytes) -> "PagePayload":
        """Inverse of serialize. Raises CorruptPageError on any framing mismatch"""
        if len(raw) < _HEADER.size + _TRAILER.size:
            raise CorruptPageError(f"blob too short ({len(raw)} bytes)")

        magic, version, length = _HEADER.unpack_from(raw)
        if magic != PAGE_MAGIC:
            raise CorruptPageError("bad magic")
        if version != PAGE_FORMAT_VERSION:
            raise CorruptPageError(f"unsupported format version {version}")

        expected_size = _HEADER.size + length + _TRAILER.size
        if len(raw) != expected_size:
            raise CorruptPageError(f"length mismatch: expected {expected_size}, got {len(raw)}")

        data = raw[_HEADER.size:_HEADER.size + length]
        (checksum,) = _TRAILER.unpack_from(raw, _HEADER.size + length)
        if zlib.crc32(data) != checksum:
            raise CorruptPageError("checksum mismatch")

        return cls(data)
