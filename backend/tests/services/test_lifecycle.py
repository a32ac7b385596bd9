# tests/services/test_lifecycle.py
import pytest

from mathnotes.services.lifecycle import AppPhase
from mathnotes.services.persistence import FlushState
from mathnotes.storage import PageBlobStore


@pytest.mark.parametrize("phase", [AppPhase.INACTIVE, AppPhase.BACKGROUND, "background"])
def test_suspending_flushes_synchronously(notebook, scheduler, drawn_page, fs_backend, phase):
    document = notebook.add_document(notebook.list_collections()[0].id, "Limits")
    notebook.update_page(document.id, 0, drawn_page.data)
    assert notebook.coordinator.state == FlushState.PENDING

    report = notebook.lifecycle.on_phase_change(phase)

    assert report is not None and report.ok
    assert report.reason == f"lifecycle:{AppPhase(phase).value}"
    assert notebook.coordinator.state == FlushState.IDLE
    assert PageBlobStore(fs_backend).list_pages(document.storage_key) == [0, 1]

    # the cancelled timer must not produce a second flush
    scheduler.advance(1)
    assert notebook.coordinator.flush_count == 1


def test_becoming_active_does_not_flush(notebook):
    notebook.add_collection("Chemistry")

    report = notebook.lifecycle.on_phase_change(AppPhase.ACTIVE)

    assert report is None
    assert notebook.coordinator.flush_count == 0
    assert notebook.coordinator.state == FlushState.PENDING


def test_phase_is_tracked(notebook):
    notebook.lifecycle.on_phase_change(AppPhase.INACTIVE)
    assert notebook.lifecycle.phase == AppPhase.INACTIVE

    notebook.lifecycle.on_phase_change(AppPhase.ACTIVE)
    assert notebook.lifecycle.phase == AppPhase.ACTIVE


def test_unknown_phase_rejected(notebook):
    with pytest.raises(ValueError):
        notebook.lifecycle.on_phase_change("hibernating")


def test_shutdown_flushes_and_disarms(notebook, scheduler, fs_backend):
    notebook.add_collection("Chemistry")

    report = notebook.close()

    assert report.ok
    assert fs_backend.exists("folders.json")
    assert scheduler.pending == []
