# backend/mathnotes/services/lifecycle.py
import enum
from typing import Optional

from ..utils.logging import service_logger
from .persistence import DebouncedPersistenceCoordinator, FlushReport


class AppPhase(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    BACKGROUND = "background"


SUSPENDING_PHASES = {AppPhase.INACTIVE, AppPhase.BACKGROUND}


class LifecyclePersistenceHook:
    """Flushes synchronously when the host is about to suspend or stop the process.

    Anything still waiting on the debounce timer is lost on an unexpected
    kill, so this is the only durability point before suspension.
    """

    def __init__(self, coordinator: DebouncedPersistenceCoordinator):
        self.coordinator = coordinator
        self.phase = AppPhase.ACTIVE

    def on_phase_change(self, phase: AppPhase) -> Optional[FlushReport]:
        phase = AppPhase(phase)
        previous, self.phase = self.phase, phase
        service_logger.info("Lifecycle transition", extra={
            "from_phase": previous.value,
            "to_phase": phase.value
        })

        if phase in SUSPENDING_PHASES:
            return self.coordinator.force_flush_now(reason=f"lifecycle:{phase.value}")
        return None

    def on_shutdown(self) -> Optional[FlushReport]:
        """Final flush when the application stops"""
        report = self.on_phase_change(AppPhase.BACKGROUND)
        self.coordinator.cancel()
        return report
