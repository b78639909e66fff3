from libs.core.application.admission import AdmissionGate
from libs.core.application.dispatch_service import DispatchService
from libs.core.application.orchestrator import AssignmentOrchestrator
from services.api_gateway.infrastructure.memory_store import (
    InMemoryDatabase,
    InMemoryDispatchCycleRepository,
)
from services.api_gateway.settings import get_settings

settings = get_settings()

db = InMemoryDatabase()
cycle_repository = InMemoryDispatchCycleRepository(db)
orchestrator = AssignmentOrchestrator(
    gate=AdmissionGate(
        waiting_ratio=settings.waiting_ratio,
        low_priority_ceiling=settings.low_priority_ceiling,
    ),
    max_workers=settings.scoring_workers,
    timeout_sec=settings.cycle_timeout_sec,
)
dispatch_service = DispatchService(
    cycle_repository=cycle_repository,
    orchestrator=orchestrator,
)


def get_dispatch_service() -> DispatchService:
    return dispatch_service


def reset_state() -> None:
    with db.lock:
        db.cycles.clear()
