"""In-memory storage for dispatch cycles (MVP)."""

import threading

from libs.core.application.contracts import DispatchCycleRepository
from libs.core.domain.entities import DispatchCycle


class InMemoryDatabase:
    """Process-local tables shared by the in-memory repositories."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.cycles: dict[str, DispatchCycle] = {}


class InMemoryDispatchCycleRepository(DispatchCycleRepository):
    """In-memory implementation of dispatch cycle repository."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def add(self, cycle: DispatchCycle) -> None:
        with self._db.lock:
            self._db.cycles[cycle.cycle_id] = cycle

    def get(self, cycle_id: str) -> DispatchCycle | None:
        with self._db.lock:
            return self._db.cycles.get(cycle_id)

    def list(self) -> list[DispatchCycle]:
        with self._db.lock:
            cycles = list(self._db.cycles.values())
        return sorted(cycles, key=lambda item: item.created_at)
