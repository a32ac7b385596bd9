# tests/models/test_page.py
import struct

import pytest

from mathnotes.exceptions import CorruptPageError
from mathnotes.models.page import PagePayload, PAGE_MAGIC


def test_empty_page():
    """An empty payload reports itself as empty"""
    assert PagePayload.empty().is_empty
    assert PagePayload().is_empty
    assert not PagePayload(b"x").is_empty


def test_serialize_frames_payload(drawn_page):
    raw = drawn_page.serialize()

    assert raw.startswith(PAGE_MAGIC)
    assert drawn_page.data in raw
    assert PagePayload.deserialize(raw) == drawn_page


def test_empty_payload_survives_framing():
    assert PagePayload.deserialize(PagePayload.empty().serialize()).is_empty


@pytest.mark.parametrize("raw", [
    b"",
    b"MNPG",
    b"not a page at all, just some bytes",
])
def test_deserialize_rejects_garbage(raw):
    with pytest.raises(CorruptPageError):
        PagePayload.deserialize(raw)


def test_deserialize_detects_truncation(drawn_page):
    raw = drawn_page.serialize()

    with pytest.raises(CorruptPageError, match="length mismatch"):
        PagePayload.deserialize(raw[:-3])


def test_deserialize_detects_bit_flip(drawn_page):
    raw = bytearray(drawn_page.serialize())
    raw[12] ^= 0xFF

    with pytest.raises(CorruptPageError, match="checksum"):
        PagePayload.deserialize(bytes(raw))


def test_deserialize_rejects_unknown_version(drawn_page):
    raw = bytearray(drawn_page.serialize())
    struct.pack_into(">B", raw, 4, 99)

    with pytest.raises(CorruptPageError, match="version"):
        PagePayload.deserialize(bytes(raw))
