"""Record checks applied before a record may take part in matching."""

import math

from libs.core.domain.entities import Incident, IncidentPriorityStats, Responder
from libs.core.domain.geo import is_valid_coordinate


def incident_rejection_reason(incident: Incident) -> str | None:
    if not is_valid_coordinate(incident.location):
        return "invalid coordinate"
    if incident.num_people <= 0:
        return "non-positive people count"
    return None


def responder_rejection_reason(responder: Responder) -> str | None:
    if not is_valid_coordinate(responder.location):
        return "invalid coordinate"
    if responder.boat_capacity <= 0:
        return "non-positive capacity"
    return None


def is_malformed_stats(stats: IncidentPriorityStats) -> bool:
    if not (math.isfinite(stats.priority) and math.isfinite(stats.average_priority)):
        return True
    return stats.priority < 0 or stats.incidents_waiting < 0
