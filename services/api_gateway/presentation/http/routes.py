from datetime import datetime

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from libs.core.application.dispatch_service import summarize_cycle
from libs.core.application.orchestrator import DispatchCycleAborted
from libs.core.domain.entities import (
    Destination,
    DispatchCycle,
    DispatchSnapshot,
    Incident,
    IncidentPriorityStats,
    Mission,
    Responder,
)
from libs.core.domain.geo import coordinate
from services.api_gateway.dependencies import get_dispatch_service
from services.api_gateway.settings import get_settings

router = APIRouter()


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IncidentRequest(_CamelModel):
    id: str
    num_people: int
    medical_needed: bool = False
    lat: float
    lon: float
    reported_time: datetime | None = None
    reporter_id: str | None = None

    def to_entity(self) -> Incident:
        return Incident(
            incident_id=self.id,
            num_people=self.num_people,
            medical_needed=self.medical_needed,
            location=coordinate(self.lat, self.lon),
            reported_time=self.reported_time,
            reporter_id=self.reporter_id,
        )


class ResponderRequest(_CamelModel):
    id: str
    full_name: str = ""
    boat_capacity: int
    has_medical: bool = False
    lat: float
    lon: float
    phone_number: str | None = None
    is_person: bool = False

    def to_entity(self) -> Responder:
        return Responder(
            responder_id=self.id,
            full_name=self.full_name,
            boat_capacity=self.boat_capacity,
            has_medical=self.has_medical,
            location=coordinate(self.lat, self.lon),
            phone_number=self.phone_number,
            is_person=self.is_person,
        )


class DestinationRequest(_CamelModel):
    name: str
    lat: float
    lon: float

    def to_entity(self) -> Destination:
        return Destination(name=self.name, location=coordinate(self.lat, self.lon))


class PriorityStatsRequest(_CamelModel):
    priority: float
    average_priority: float
    incidents_waiting: int = 0
    escalated: bool = False

    def to_entity(self) -> IncidentPriorityStats:
        return IncidentPriorityStats(
            priority=self.priority,
            average_priority=self.average_priority,
            incidents_waiting=self.incidents_waiting,
            escalated=self.escalated,
        )


class DispatchCycleRequest(_CamelModel):
    incidents: list[IncidentRequest] = Field(default_factory=list)
    responders: list[ResponderRequest] = Field(default_factory=list)
    destinations: list[DestinationRequest] = Field(default_factory=list)
    priority_stats: dict[str, PriorityStatsRequest] = Field(default_factory=dict)


class ScorePairRequest(_CamelModel):
    incident: IncidentRequest
    responder: ResponderRequest


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/ready")
def ready() -> dict[str, str]:
    return {"status": "ready"}


@router.get("/version")
def version() -> dict[str, str]:
    return {"version": get_settings().app_version}


@router.post("/v1/dispatch/cycles")
def run_dispatch_cycle(payload: DispatchCycleRequest) -> dict[str, object]:
    service = get_dispatch_service()
    snapshot = DispatchSnapshot(
        incidents=[item.to_entity() for item in payload.incidents],
        responders=[item.to_entity() for item in payload.responders],
        destinations=[item.to_entity() for item in payload.destinations],
        priority_stats={
            incident_id: item.to_entity()
            for incident_id, item in payload.priority_stats.items()
        },
    )

    try:
        cycle = service.run_cycle(snapshot)
    except DispatchCycleAborted as error:
        raise HTTPException(status_code=503, detail=str(error)) from error

    return _cycle_to_dict(cycle)


@router.get("/v1/dispatch/cycles")
def list_dispatch_cycles() -> list[dict[str, object]]:
    service = get_dispatch_service()
    return [dict(item) for item in service.list_cycles()]


@router.get("/v1/dispatch/cycles/{cycle_id}")
def get_dispatch_cycle(cycle_id: str) -> dict[str, object]:
    service = get_dispatch_service()
    cycle = service.get_cycle(cycle_id)
    if cycle is None:
        raise HTTPException(status_code=404, detail="Dispatch cycle not found")
    return _cycle_to_dict(cycle)


@router.get("/v1/dispatch/cycles/{cycle_id}/report")
def get_dispatch_cycle_report(cycle_id: str) -> dict[str, object]:
    service = get_dispatch_service()
    try:
        return service.get_cycle_report(cycle_id)
    except ValueError as error:
        raise HTTPException(status_code=404, detail=str(error)) from error


@router.post("/v1/dispatch/score")
def score_pair(payload: ScorePairRequest) -> dict[str, object]:
    service = get_dispatch_service()
    match = service.score_pair(
        incident=payload.incident.to_entity(),
        responder=payload.responder.to_entity(),
    )
    if match is None:
        return {"compatible": False, "score": None, "distance_meters": None}
    return {
        "compatible": True,
        "score": match.score,
        "distance_meters": round(match.distance_meters, 1),
    }


def _cycle_to_dict(cycle: DispatchCycle) -> dict[str, object]:
    return {
        "cycle_id": cycle.cycle_id,
        "created_at": cycle.created_at,
        "missions": [_mission_to_dict(mission) for mission in cycle.missions],
        "summary": dict(summarize_cycle(cycle)),
    }


def _mission_to_dict(mission: Mission) -> dict[str, object]:
    responder = mission.responder_location
    destination = mission.destination_location
    return {
        "incident_id": mission.incident_id,
        "incident_lat": mission.incident_location.lat,
        "incident_lon": mission.incident_location.lon,
        "responder_id": mission.responder_id,
        "responder_start_lat": responder.lat if responder is not None else None,
        "responder_start_lon": responder.lon if responder is not None else None,
        "destination_name": mission.destination_name,
        "destination_lat": destination.lat if destination is not None else None,
        "destination_lon": destination.lon if destination is not None else None,
        "distance_meters": (
            round(mission.distance_meters, 1)
            if mission.distance_meters is not None
            else None
        ),
        "score": mission.score,
        "status": mission.status,
    }
