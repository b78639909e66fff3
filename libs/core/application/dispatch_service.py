from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from libs.core.application.contracts import CycleSummary, DispatchCycleRepository
from libs.core.application.orchestrator import AssignmentOrchestrator
from libs.core.application.scoring import CompatibilityScorer
from libs.core.domain.entities import (
    STATUS_ASSIGNED,
    CandidateMatch,
    DispatchCycle,
    DispatchSnapshot,
    Incident,
    Mission,
    Responder,
)
from libs.core.domain.validation import responder_rejection_reason


class DispatchService:
    """Application service for dispatch cycle API."""

    def __init__(
        self,
        cycle_repository: DispatchCycleRepository,
        orchestrator: AssignmentOrchestrator,
        scorer: CompatibilityScorer | None = None,
    ) -> None:
        self._cycles = cycle_repository
        self._orchestrator = orchestrator
        self._scorer = scorer or CompatibilityScorer()

    def run_cycle(self, snapshot: DispatchSnapshot) -> DispatchCycle:
        missions = self._orchestrator.run(
            incidents=snapshot.incidents,
            responders=snapshot.responders,
            destinations=snapshot.destinations,
            priority_stats=snapshot.priority_stats,
        )
        cycle = DispatchCycle(
            cycle_id=str(uuid4()),
            created_at=_utc_now_iso(),
            missions=missions,
            responders_total=len(snapshot.responders),
            destinations_total=len(snapshot.destinations),
            responders_rejected=sum(
                1
                for responder in snapshot.responders
                if responder_rejection_reason(responder) is not None
            ),
        )
        self._cycles.add(cycle)
        return cycle

    def get_cycle(self, cycle_id: str) -> DispatchCycle | None:
        return self._cycles.get(cycle_id)

    def list_cycles(self) -> list[CycleSummary]:
        return [summarize_cycle(cycle) for cycle in self._cycles.list()]

    def score_pair(self, incident: Incident, responder: Responder) -> CandidateMatch | None:
        return self._scorer.score(incident, responder)

    def get_cycle_report(self, cycle_id: str) -> dict[str, object]:
        cycle = self._cycles.get(cycle_id)
        if cycle is None:
            raise ValueError("Dispatch cycle not found")

        assigned = _assigned_missions(cycle.missions)
        incidents_total = len(cycle.missions)
        distances = [
            mission.distance_meters
            for mission in assigned
            if mission.distance_meters is not None
        ]
        destinations_used = {
            mission.destination_name
            for mission in assigned
            if mission.destination_name is not None
        }

        assignment_rate = len(assigned) / incidents_total if incidents_total else 0.0
        mean_distance = sum(distances) / len(distances) if distances else None

        return {
            "cycle_id": cycle.cycle_id,
            "incidents_total": incidents_total,
            "assigned": len(assigned),
            "unassigned": incidents_total - len(assigned),
            "assignment_rate": round(assignment_rate, 4),
            "responders_total": cycle.responders_total,
            "responders_rejected": cycle.responders_rejected,
            "responders_idle": (
                cycle.responders_total - cycle.responders_rejected - len(assigned)
            ),
            "destinations_used": len(destinations_used),
            "mean_distance_meters": (
                round(mean_distance, 1) if mean_distance is not None else None
            ),
            "total_score": sum(mission.score or 0 for mission in assigned),
            "generated_at": _utc_now_iso(),
        }


def summarize_cycle(cycle: DispatchCycle) -> CycleSummary:
    assigned = len(_assigned_missions(cycle.missions))
    return {
        "cycle_id": cycle.cycle_id,
        "created_at": cycle.created_at,
        "incidents_total": len(cycle.missions),
        "assigned": assigned,
        "unassigned": len(cycle.missions) - assigned,
    }


def _assigned_missions(missions: list[Mission]) -> list[Mission]:
    return [mission for mission in missions if mission.status == STATUS_ASSIGNED]


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
