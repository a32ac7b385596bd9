# backend/mathnotes/services/__init__.py
from .persistence import DebouncedPersistenceCoordinator, AsyncioScheduler, FlushReport, FlushState
from .lifecycle import LifecyclePersistenceHook, AppPhase
from .notebook import NotebookService
from .recognition import RecognitionService

__all__ = [
    "DebouncedPersistenceCoordinator", "AsyncioScheduler", "FlushReport", "FlushState",
    "LifecyclePersistenceHook", "AppPhase",
    "NotebookService", "RecognitionService"
]
