# domain/geometry/coordinate_calculation.py
import math

import numpy as np

from turnkit.domain.entities.geography import Coordinate

EARTH_RADIUS_M = 6_372_797.560856


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in meters."""
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def haversine_distances(lons: np.ndarray, lats: np.ndarray) -> np.ndarray:
    """Distances between consecutive points of a polyline, length n-1."""
    lon_r = np.radians(np.asarray(lons, dtype=np.float64))
    lat_r = np.radians(np.asarray(lats, dtype=np.float64))
    d_lat = np.diff(lat_r)
    d_lon = np.diff(lon_r)
    h = np.sin(d_lat / 2) ** 2 + np.cos(lat_r[:-1]) * np.cos(lat_r[1:]) * np.sin(d_lon / 2) ** 2
    h = np.clip(h, 0.0, 1.0)
    return EARTH_RADIUS_M * 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))


def interpolate_linear(factor: float, a: Coordinate, b: Coordinate) -> Coordinate:
    # short segments only: plain lon/lat lerp is close enough to the great circle
    return Coordinate(a.lon + factor * (b.lon - a.lon), a.lat + factor * (b.lat - a.lat))


def bearing(a: Coordinate, b: Coordinate) -> float:
    """Forward azimuth from a to b, degrees clockwise from north in [0, 360)."""
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    d_lon = math.radians(b.lon - a.lon)
    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def _lat_to_y(lat: float) -> float:
    # web mercator; keeps angles locally true
    clamped = max(-85.0511, min(85.0511, lat))
    return math.degrees(math.log(math.tan(math.pi / 4 + math.radians(clamped) / 2)))


def turn_angle(first: Coordinate, second: Coordinate, third: Coordinate) -> float:
    """Angle turned at `second` when driving first -> second -> third.

    180 is straight on, below 180 turns right, above 180 turns left, 0 is a u-turn.
    """
    v1x, v1y = first.lon - second.lon, _lat_to_y(first.lat) - _lat_to_y(second.lat)
    v2x, v2y = third.lon - second.lon, _lat_to_y(third.lat) - _lat_to_y(second.lat)
    angle = math.degrees(math.atan2(v2y, v2x) - math.atan2(v1y, v1x))
    while angle < 0.0:
        angle += 360.0
    while angle >= 360.0:
        angle -= 360.0
    return angle
