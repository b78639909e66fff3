"""Priority-based admission of incidents into a dispatch pass."""

import logging

from libs.core.domain.entities import Incident, IncidentPriorityStats
from libs.core.domain.validation import is_malformed_stats

logger = logging.getLogger(__name__)

DEFAULT_WAITING_RATIO = 1.5
DEFAULT_LOW_PRIORITY_CEILING = 5.0


def usable_stats(
    incident_id: str,
    stats: IncidentPriorityStats | None,
) -> IncidentPriorityStats | None:
    """Drop malformed stats so the incident is handled as ungated."""
    if stats is None:
        return None
    if is_malformed_stats(stats):
        logger.warning("Ignoring malformed priority stats for incident %s", incident_id)
        return None
    return stats


class AdmissionGate:
    """Decides whether an incident may compete for a responder this cycle."""

    def __init__(
        self,
        waiting_ratio: float = DEFAULT_WAITING_RATIO,
        low_priority_ceiling: float = DEFAULT_LOW_PRIORITY_CEILING,
    ) -> None:
        self._waiting_ratio = waiting_ratio
        self._low_priority_ceiling = low_priority_ceiling

    def is_eligible(
        self,
        incident: Incident,
        stats: IncidentPriorityStats | None,
        available_responder_count: int,
    ) -> bool:
        stats = usable_stats(incident.incident_id, stats)
        if stats is None:
            return True
        if stats.priority == 0:
            return False
        if stats.escalated:
            return True
        if stats.priority >= stats.average_priority:
            return True

        if stats.priority <= self._low_priority_ceiling:
            if available_responder_count <= 0:
                return False
            return stats.incidents_waiting <= available_responder_count / self._waiting_ratio

        return stats.priority > stats.average_priority / 2
