"""Pairwise incident/responder compatibility scoring."""

import math

from libs.core.domain.entities import CandidateMatch, Incident, Responder
from libs.core.domain.geo import distance_meters

NEAR_DISTANCE_M = 5000.0
MID_DISTANCE_M = 10000.0
FAR_DISTANCE_M = 15000.0

EXACT_CAPACITY_BONUS = 100
NEAR_CAPACITY_BONUS = 50
LOOSE_CAPACITY_BONUS = 25
MEDICAL_BONUS = 100
PERSON_BONUS = 100


def distance_points(distance: float) -> int:
    if distance < NEAR_DISTANCE_M:
        return 100
    if distance <= MID_DISTANCE_M:
        return 75
    if distance <= FAR_DISTANCE_M:
        return 50
    return 25


def capacity_points(num_people: int, capacity: int) -> int:
    if capacity == num_people:
        return EXACT_CAPACITY_BONUS
    if capacity <= num_people + 2:
        return NEAR_CAPACITY_BONUS
    if capacity <= num_people + 4:
        return LOOSE_CAPACITY_BONUS
    return 0


class CompatibilityScorer:
    """Scores one incident against one responder.

    Returns ``None`` when the responder cannot carry everyone or when the
    distance between the two cannot be measured.
    """

    def score(self, incident: Incident, responder: Responder) -> CandidateMatch | None:
        if responder.boat_capacity < incident.num_people:
            return None

        distance = distance_meters(incident.location, responder.location)
        if not math.isfinite(distance):
            return None

        total = distance_points(distance)
        total += capacity_points(incident.num_people, responder.boat_capacity)
        if incident.medical_needed and responder.has_medical:
            total += MEDICAL_BONUS
        if responder.is_person:
            total += PERSON_BONUS

        return CandidateMatch(
            incident=incident,
            responder=responder,
            distance_meters=distance,
            score=total,
        )
