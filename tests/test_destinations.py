"""Destination selector tests."""

from libs.core.application.destinations import DestinationSelector
from libs.core.domain.entities import Destination
from libs.core.domain.geo import coordinate

selector = DestinationSelector()
incident_location = coordinate(34.0, -77.0)


def test_empty_destination_list() -> None:
    assert selector.nearest(incident_location, []) is None


def test_picks_nearest_destination() -> None:
    far = Destination(name="Inland Shelter", location=coordinate(34.3, -77.0))
    near = Destination(name="Harbor", location=coordinate(34.02, -77.0))

    assert selector.nearest(incident_location, [far, near]) == near


def test_ties_keep_first_destination() -> None:
    pier = Destination(name="Pier 1", location=coordinate(34.01, -77.0))
    ramp = Destination(name="Boat Ramp", location=coordinate(34.01, -77.0))

    assert selector.nearest(incident_location, [pier, ramp]) == pier
    assert selector.nearest(incident_location, [ramp, pier]) == ramp


def test_unmeasurable_destinations_are_skipped() -> None:
    broken = Destination(name="Broken", location=coordinate(float("nan"), -77.0))
    valid = Destination(name="Valid", location=coordinate(34.5, -77.0))

    assert selector.nearest(incident_location, [broken, valid]) == valid
    assert selector.nearest(incident_location, [broken]) is None
