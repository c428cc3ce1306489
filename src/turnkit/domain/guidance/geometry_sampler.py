# domain/guidance/geometry_sampler.py
from collections.abc import Iterable

import numpy as np

from turnkit.app.protocols import GeometryStore, GuidanceHooks, NodeStore, NoopHooks
from turnkit.domain.entities.geography import Coordinate
from turnkit.domain.errors import EmptyGeometryError
from turnkit.domain.geometry.coordinate_calculation import haversine_distances, interpolate_linear

DESIRED_SEGMENT_LENGTH_M = 10.0

_NOOP = NoopHooks()


def _factor(first_distance: float, second_distance: float, target_m: float) -> float:
    # fraction of [first, second] still missing to reach target_m
    segment_length = second_distance - first_distance
    return max(0.0, min((target_m - first_distance) / segment_length, 1.0))


def coordinate_from_compressed_range(
    current: Coordinate,
    node_ids: Iterable[int],
    final: Coordinate,
    nodes: NodeStore,
    *,
    target_length_m: float = DESIRED_SEGMENT_LENGTH_M,
    edge_id: int | None = None,
    hooks: GuidanceHooks | None = None,
) -> Coordinate:
    """
    Walk current -> node_ids... -> final and return the point target_length_m along it.
    Falls back to `final` when the whole polyline is shorter than the target.
    """
    hooks = hooks or _NOOP
    points = [current, *(nodes.coordinate(n) for n in node_ids), final]
    if len(points) == 2:
        raise EmptyGeometryError(f"edge {edge_id} has a geometry entry without shape points")

    lons = np.fromiter((p.lon for p in points), dtype=np.float64, count=len(points))
    lats = np.fromiter((p.lat for p in points), dtype=np.float64, count=len(points))
    seg = haversine_distances(lons, lats)
    cum = np.cumsum(seg)

    # first segment whose far end reaches the target
    idx = int(np.searchsorted(cum, target_length_m, side="left"))
    if idx == len(seg):
        hooks.short_edge(edge_id=edge_id, length_m=float(cum[-1]), target_m=target_length_m)
        return final

    if seg[idx] <= 0.0:
        hooks.degenerate_segment(edge_id=edge_id, index=idx)
        return points[idx]

    before = float(cum[idx - 1]) if idx > 0 else 0.0
    factor = _factor(before, float(cum[idx]), target_length_m)
    return interpolate_linear(factor, points[idx], points[idx + 1])


def representative_coordinate(
    from_node: int,
    to_node: int,
    edge_id: int,
    reversed_: bool,
    geometries: GeometryStore,
    nodes: NodeStore,
    *,
    target_length_m: float = DESIRED_SEGMENT_LENGTH_M,
    hooks: GuidanceHooks | None = None,
) -> Coordinate:
    """Point target_length_m away from the start of an edge, interpolated if needed."""
    # uncompressed roads are simple, return the coordinate at the far end
    if not geometries.has_geometry(edge_id):
        return nodes.coordinate(from_node if reversed_ else to_node)

    geometry = geometries.geometry(edge_id)
    base_node, final_node = (to_node, from_node) if reversed_ else (from_node, to_node)
    return coordinate_from_compressed_range(
        nodes.coordinate(base_node),
        reversed(geometry) if reversed_ else iter(geometry),
        nodes.coordinate(final_node),
        nodes,
        target_length_m=target_length_m,
        edge_id=edge_id,
        hooks=hooks,
    )


class GeometrySampler:
    """Binds the stores and target length so callers only pass edge context."""

    def __init__(
        self,
        *,
        nodes: NodeStore,
        geometries: GeometryStore,
        target_length_m: float = DESIRED_SEGMENT_LENGTH_M,
        hooks: GuidanceHooks | None = None,
    ):
        self.nodes, self.geometries = nodes, geometries
        self.target_length_m = target_length_m
        self.hooks = hooks or _NOOP

    def representative_coordinate(
        self, from_node: int, to_node: int, edge_id: int, reversed_: bool = False
    ) -> Coordinate:
        return representative_coordinate(
            from_node,
            to_node,
            edge_id,
            reversed_,
            self.geometries,
            self.nodes,
            target_length_m=self.target_length_m,
            hooks=self.hooks,
        )
