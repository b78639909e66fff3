import math
from collections.abc import Sequence

from libs.core.domain.entities import Coordinate, Destination
from libs.core.domain.geo import distance_meters


class DestinationSelector:
    """Picks the drop-off point closest to an incident."""

    def nearest(
        self,
        location: Coordinate,
        destinations: Sequence[Destination],
    ) -> Destination | None:
        best: Destination | None = None
        best_distance = math.inf
        for destination in destinations:
            distance = distance_meters(location, destination.location)
            # strict comparison keeps the first destination seen on ties
            if distance < best_distance:
                best = destination
                best_distance = distance
        return best
