"""Geographic primitives shared by the dispatch engine."""

import math
from decimal import ROUND_HALF_UP, Decimal

from libs.core.domain.entities import Coordinate

EARTH_RADIUS_KM = 6371
COORDINATE_QUANTUM = Decimal("0.000001")
MAX_ABS_DEGREES = 180.0


def fixed_precision(value: float) -> float:
    """Round a coordinate component to six fractional digits, half-up."""
    # out-of-range values are left for validation to reject
    if not math.isfinite(value) or abs(value) > MAX_ABS_DEGREES:
        return value
    rounded = Decimal(str(value)).quantize(COORDINATE_QUANTUM, rounding=ROUND_HALF_UP)
    return float(rounded)


def coordinate(lat: float, lon: float) -> Coordinate:
    return Coordinate(lat=fixed_precision(lat), lon=fixed_precision(lon))


def is_finite_coordinate(point: Coordinate) -> bool:
    return math.isfinite(point.lat) and math.isfinite(point.lon)


def is_valid_coordinate(point: Coordinate) -> bool:
    if not is_finite_coordinate(point):
        return False
    return -90.0 <= point.lat <= 90.0 and -180.0 <= point.lon <= 180.0


def distance_meters(origin: Coordinate, target: Coordinate) -> float:
    """Haversine great-circle distance in meters.

    Non-finite input yields ``math.inf`` so callers can treat the pair as
    never matching instead of handling an exception.
    """
    if not (is_finite_coordinate(origin) and is_finite_coordinate(target)):
        return math.inf

    lat_distance = math.radians(target.lat - origin.lat)
    lon_distance = math.radians(target.lon - origin.lon)
    a = (
        math.sin(lat_distance / 2) ** 2
        + math.cos(math.radians(origin.lat))
        * math.cos(math.radians(target.lat))
        * math.sin(lon_distance / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c * 1000
