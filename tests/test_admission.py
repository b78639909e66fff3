"""Admission gate tests."""

import math

from libs.core.application.admission import AdmissionGate
from libs.core.domain.entities import Incident, IncidentPriorityStats
from libs.core.domain.geo import coordinate

gate = AdmissionGate()
incident = Incident(
    incident_id="I-1",
    num_people=2,
    medical_needed=False,
    location=coordinate(34.0, -77.0),
)


def _stats(
    priority: float,
    average_priority: float,
    incidents_waiting: int = 0,
    escalated: bool = False,
) -> IncidentPriorityStats:
    return IncidentPriorityStats(
        priority=priority,
        average_priority=average_priority,
        incidents_waiting=incidents_waiting,
        escalated=escalated,
    )


def test_missing_stats_are_eligible() -> None:
    assert gate.is_eligible(incident, None, available_responder_count=0)


def test_zero_priority_is_blocked() -> None:
    assert not gate.is_eligible(incident, _stats(0, 0), available_responder_count=10)
    assert not gate.is_eligible(incident, _stats(0, 5), available_responder_count=10)


def test_zero_priority_blocked_even_when_escalated() -> None:
    stats = _stats(0, 5, escalated=True)
    assert not gate.is_eligible(incident, stats, available_responder_count=10)


def test_above_average_priority_always_proceeds() -> None:
    stats = _stats(3, 2, incidents_waiting=100)
    assert gate.is_eligible(incident, stats, available_responder_count=0)


def test_average_priority_always_proceeds() -> None:
    stats = _stats(4, 4, incidents_waiting=100)
    assert gate.is_eligible(incident, stats, available_responder_count=0)


def test_low_priority_allowed_when_pool_is_large_enough() -> None:
    stats = _stats(3, 6, incidents_waiting=2)
    assert gate.is_eligible(incident, stats, available_responder_count=3)


def test_low_priority_blocked_when_too_many_waiting() -> None:
    stats = _stats(3, 6, incidents_waiting=3)
    assert not gate.is_eligible(incident, stats, available_responder_count=3)


def test_low_priority_blocked_without_available_responders() -> None:
    stats = _stats(1, 6, incidents_waiting=0)
    assert not gate.is_eligible(incident, stats, available_responder_count=0)


def test_low_priority_ceiling_is_inclusive() -> None:
    stats = _stats(5, 8, incidents_waiting=10)
    # 5 falls in the ratio bracket, not the half-average bracket
    assert not gate.is_eligible(incident, stats, available_responder_count=3)


def test_mid_priority_needs_more_than_half_the_average() -> None:
    assert gate.is_eligible(incident, _stats(7, 12), available_responder_count=0)
    assert not gate.is_eligible(incident, _stats(6, 12), available_responder_count=50)


def test_high_priority_needs_more_than_half_the_average() -> None:
    assert gate.is_eligible(incident, _stats(11, 20), available_responder_count=0)
    assert not gate.is_eligible(incident, _stats(11, 30), available_responder_count=50)


def test_malformed_stats_are_treated_as_missing() -> None:
    assert gate.is_eligible(incident, _stats(math.nan, 5), available_responder_count=0)
    assert gate.is_eligible(incident, _stats(-1, 5), available_responder_count=0)
    assert gate.is_eligible(
        incident, _stats(1, 5, incidents_waiting=-3), available_responder_count=0
    )


def test_custom_waiting_ratio() -> None:
    strict_gate = AdmissionGate(waiting_ratio=3.0)
    stats = _stats(2, 6, incidents_waiting=2)
    assert gate.is_eligible(incident, stats, available_responder_count=3)
    assert not strict_gate.is_eligible(incident, stats, available_responder_count=3)


def test_escalation_overrides_below_average_checks() -> None:
    ratio_bracket = _stats(3, 8, incidents_waiting=5, escalated=True)
    half_average_bracket = _stats(6, 20, escalated=True)

    assert gate.is_eligible(incident, ratio_bracket, available_responder_count=1)
    assert gate.is_eligible(incident, half_average_bracket, available_responder_count=0)
