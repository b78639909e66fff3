from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

STATUS_UNASSIGNED = "UNASSIGNED"
STATUS_ASSIGNED = "ASSIGNED"


@dataclass(frozen=True)
class Coordinate:
    """Latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float


@dataclass(frozen=True)
class Incident:
    """Reported location with people waiting for rescue."""

    incident_id: str
    num_people: int
    medical_needed: bool
    location: Coordinate
    reported_time: Optional[datetime] = None
    reporter_id: Optional[str] = None


@dataclass(frozen=True)
class Responder:
    """Boat or person able to carry out a rescue."""

    responder_id: str
    full_name: str
    boat_capacity: int
    has_medical: bool
    location: Coordinate
    phone_number: Optional[str] = None
    is_person: bool = False


@dataclass(frozen=True)
class Destination:
    """Drop-off point, reusable across missions."""

    name: str
    location: Coordinate


@dataclass(frozen=True)
class IncidentPriorityStats:
    """Pre-computed priority statistics for one incident."""

    priority: float
    average_priority: float
    incidents_waiting: int
    escalated: bool = False


@dataclass(frozen=True)
class CandidateMatch:
    """Scored incident/responder pair, alive for one dispatch pass."""

    incident: Incident
    responder: Responder
    distance_meters: float
    score: int


@dataclass
class Mission:
    """Outcome of a dispatch cycle for one incident."""

    incident_id: str
    incident_location: Coordinate
    status: str = STATUS_UNASSIGNED
    responder_id: Optional[str] = None
    responder_location: Optional[Coordinate] = None
    destination_name: Optional[str] = None
    destination_location: Optional[Coordinate] = None
    distance_meters: Optional[float] = None
    score: Optional[int] = None


@dataclass
class DispatchSnapshot:
    """Closed input set for one dispatch cycle."""

    incidents: list[Incident]
    responders: list[Responder]
    destinations: list[Destination] = field(default_factory=list)
    priority_stats: dict[str, IncidentPriorityStats] = field(default_factory=dict)


@dataclass
class DispatchCycle:
    """Stored result of one dispatch cycle."""

    cycle_id: str
    created_at: str
    missions: list[Mission]
    responders_total: int
    destinations_total: int
    responders_rejected: int = 0
