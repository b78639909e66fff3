from typing import Protocol, TypedDict

from libs.core.domain.entities import DispatchCycle


class CycleSummary(TypedDict):
    """Short view of a stored dispatch cycle."""

    cycle_id: str
    created_at: str
    incidents_total: int
    assigned: int
    unassigned: int


class DispatchCycleRepository(Protocol):
    """Dispatch cycle persistence contract."""

    def add(self, cycle: DispatchCycle) -> None: ...

    def get(self, cycle_id: str) -> DispatchCycle | None: ...

    def list(self) -> list[DispatchCycle]: ...
