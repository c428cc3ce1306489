from dataclasses import dataclass
from math import isfinite

from turnkit.domain.errors import InvalidCoordinateError


# Core geometry types used by guidance
@dataclass(frozen=True)
class Coordinate:
    lon: float  # degrees, WGS84
    lat: float

    def __post_init__(self):
        if not (isfinite(self.lon) and isfinite(self.lat)):
            raise InvalidCoordinateError(f"non-finite coordinate ({self.lon}, {self.lat})")
        if not (-180.0 <= self.lon <= 180.0 and -90.0 <= self.lat <= 90.0):
            raise InvalidCoordinateError(f"coordinate out of range ({self.lon}, {self.lat})")


@dataclass(frozen=True)
class QueryNode:
    node_id: int
    lon: float
    lat: float

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.lon, self.lat)
