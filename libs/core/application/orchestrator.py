"""Single-pass, priority-ordered greedy assignment of responders to incidents."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor

from libs.core.application.admission import AdmissionGate, usable_stats
from libs.core.application.destinations import DestinationSelector
from libs.core.application.scoring import CompatibilityScorer
from libs.core.domain.entities import (
    STATUS_ASSIGNED,
    CandidateMatch,
    Destination,
    Incident,
    IncidentPriorityStats,
    Mission,
    Responder,
)
from libs.core.domain.validation import (
    incident_rejection_reason,
    responder_rejection_reason,
)

logger = logging.getLogger(__name__)

_ESCALATED_GROUP = 0
_RANKED_GROUP = 1
_UNRANKED_GROUP = 2


class DispatchCycleAborted(RuntimeError):
    """Raised when a cycle cannot finish; no partial missions are returned."""


class AssignmentOrchestrator:
    """Runs one dispatch cycle over a closed snapshot."""

    def __init__(
        self,
        scorer: CompatibilityScorer | None = None,
        gate: AdmissionGate | None = None,
        selector: DestinationSelector | None = None,
        max_workers: int = 1,
        timeout_sec: float | None = None,
    ) -> None:
        self._scorer = scorer or CompatibilityScorer()
        self._gate = gate or AdmissionGate()
        self._selector = selector or DestinationSelector()
        self._max_workers = max(1, max_workers)
        self._timeout_sec = timeout_sec

    def run(
        self,
        incidents: Sequence[Incident],
        responders: Sequence[Responder],
        destinations: Sequence[Destination] | None = None,
        priority_stats: Mapping[str, IncidentPriorityStats] | None = None,
    ) -> list[Mission]:
        deadline = (
            time.monotonic() + self._timeout_sec
            if self._timeout_sec is not None
            else None
        )
        destinations = list(destinations or [])
        stats_by_incident = {
            incident.incident_id: usable_stats(
                incident.incident_id,
                (priority_stats or {}).get(incident.incident_id),
            )
            for incident in incidents
        }

        missions = [
            Mission(incident_id=incident.incident_id, incident_location=incident.location)
            for incident in incidents
        ]

        eligible_responders = _accepted_responders(responders)
        accepted_positions = _accepted_incident_positions(incidents)
        score_table = self._score_table(
            incidents=incidents,
            positions=accepted_positions,
            responders=eligible_responders,
            deadline=deadline,
        )

        available = set(range(len(eligible_responders)))
        for position in _dispatch_order(incidents, accepted_positions, stats_by_incident):
            _check_deadline(deadline)
            incident = incidents[position]
            stats = stats_by_incident[incident.incident_id]

            if not self._gate.is_eligible(incident, stats, len(available)):
                logger.debug("Incident %s held back by admission gate", incident.incident_id)
                continue

            best = _best_candidate(score_table[position], available)
            if best is None:
                logger.debug("No compatible responder for incident %s", incident.incident_id)
                continue

            responder_index, match = best
            available.discard(responder_index)
            self._assign(missions[position], match, destinations)

        assigned = sum(1 for mission in missions if mission.status == STATUS_ASSIGNED)
        logger.info(
            "Dispatch cycle finished: %d/%d incidents assigned, %d responders idle",
            assigned,
            len(missions),
            len(available),
        )
        return missions

    def _score_table(
        self,
        incidents: Sequence[Incident],
        positions: list[int],
        responders: list[Responder],
        deadline: float | None = None,
    ) -> dict[int, list[CandidateMatch | None]]:
        def score_row(position: int) -> list[CandidateMatch | None]:
            _check_deadline(deadline)
            incident = incidents[position]
            return [self._scorer.score(incident, responder) for responder in responders]

        if self._max_workers == 1 or len(positions) < 2:
            rows = [score_row(position) for position in positions]
        else:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                rows = list(executor.map(score_row, positions))
        return dict(zip(positions, rows))

    def _assign(
        self,
        mission: Mission,
        match: CandidateMatch,
        destinations: list[Destination],
    ) -> None:
        mission.status = STATUS_ASSIGNED
        mission.responder_id = match.responder.responder_id
        mission.responder_location = match.responder.location
        mission.distance_meters = match.distance_meters
        mission.score = match.score

        destination = self._selector.nearest(match.incident.location, destinations)
        if destination is not None:
            mission.destination_name = destination.name
            mission.destination_location = destination.location

        logger.debug(
            "Assigned responder %s to incident %s (score=%d, distance=%.1fm)",
            match.responder.responder_id,
            match.incident.incident_id,
            match.score,
            match.distance_meters,
        )


def _accepted_responders(responders: Sequence[Responder]) -> list[Responder]:
    accepted = []
    for responder in responders:
        reason = responder_rejection_reason(responder)
        if reason is not None:
            logger.warning("Rejected responder %s: %s", responder.responder_id, reason)
            continue
        accepted.append(responder)
    return accepted


def _accepted_incident_positions(incidents: Sequence[Incident]) -> list[int]:
    positions = []
    for position, incident in enumerate(incidents):
        reason = incident_rejection_reason(incident)
        if reason is not None:
            logger.warning("Rejected incident %s: %s", incident.incident_id, reason)
            continue
        positions.append(position)
    return positions


def _dispatch_order(
    incidents: Sequence[Incident],
    positions: list[int],
    stats_by_incident: Mapping[str, IncidentPriorityStats | None],
) -> list[int]:
    def sort_key(position: int) -> tuple[int, float, int]:
        stats = stats_by_incident[incidents[position].incident_id]
        if stats is None:
            return (_UNRANKED_GROUP, 0.0, position)
        group = (
            _ESCALATED_GROUP
            if stats.escalated and stats.priority != 0
            else _RANKED_GROUP
        )
        return (group, -stats.priority, position)

    return sorted(positions, key=sort_key)


def _best_candidate(
    row: list[CandidateMatch | None],
    available: set[int],
) -> tuple[int, CandidateMatch] | None:
    best: tuple[int, CandidateMatch] | None = None
    for index, match in enumerate(row):
        if match is None or index not in available:
            continue
        if best is None:
            best = (index, match)
            continue
        current = best[1]
        # higher score, then shorter distance; earlier responders win full ties
        if match.score > current.score or (
            match.score == current.score
            and match.distance_meters < current.distance_meters
        ):
            best = (index, match)
    return best


def _check_deadline(deadline: float | None) -> None:
    if deadline is not None and time.monotonic() > deadline:
        raise DispatchCycleAborted("Dispatch cycle ran past its deadline")
