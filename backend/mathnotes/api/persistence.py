# backend/mathnotes/api/persistence.py
from fastapi import APIRouter, Depends, HTTPException

from ..schemas.page import FlushResult
from ..services.lifecycle import AppPhase
from ..services.notebook import NotebookService
from ..utils.logging import api_logger
from .deps import get_notebook

router = APIRouter(prefix="/api/persistence", tags=["persistence"])


@router.get("/status")
async def persistence_status(notebook: NotebookService = Depends(get_notebook)):
    coordinator = notebook.coordinator
    return {
        "state": coordinator.state.value,
        "phase": notebook.lifecycle.phase.value,
        "flush_count": coordinator.flush_count,
        "index_writable": coordinator.index_writable,
        "last_flush_ok": coordinator.last_report.ok if coordinator.last_report else None
    }


@router.post("/flush", response_model=FlushResult)
async def flush_now(notebook: NotebookService = Depends(get_notebook)):
    """Write everything to storage immediately"""
    report = notebook.flush_now()
    if report is None:
        raise HTTPException(status_code=409, detail="Flush already in progress")

    api_logger.info("Forced flush requested", extra={"ok": report.ok})
    return FlushResult.model_validate(report)


@router.post("/lifecycle/{phase}")
async def lifecycle_transition(phase: AppPhase, notebook: NotebookService = Depends(get_notebook)):
    """Host lifecycle signal. Going inactive or to the background flushes before responding"""
    report = notebook.lifecycle.on_phase_change(phase)
    return {
        "phase": phase.value,
        "flushed": report is not None,
        "ok": report.ok if report is not None else None
    }
