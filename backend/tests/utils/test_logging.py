# tests/utils/test_logging.py
import logging

from mathnotes.utils.logging import MathNotesLogger


def test_records_carry_layer_and_extra(caplog):
    logger = MathNotesLogger("storage")

    with caplog.at_level(logging.INFO, logger="mathnotes.storage"):
        logger.warning("Page skipped", extra={"storage_key": "K.drawing", "page_index": 2})

    record = caplog.records[-1]
    assert record.name == "mathnotes.storage"
    assert record.layer == "storage"
    assert record.storage_key == "K.drawing"
    assert record.page_index == 2


def test_reserved_extra_keys_are_prefixed(caplog):
    logger = MathNotesLogger("service")

    with caplog.at_level(logging.INFO, logger="mathnotes.service"):
        logger.info("Renamed", extra={"name": "Limits", "module": "calc"})

    record = caplog.records[-1]
    assert record.name == "mathnotes.service"
    assert record.extra_name == "Limits"
    assert record.extra_module == "calc"
