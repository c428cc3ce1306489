import numpy as np
import pytest

from turnkit.app.protocols import NoopHooks
from turnkit.domain.entities.geography import Coordinate
from turnkit.domain.errors import EmptyGeometryError
from turnkit.domain.geometry.coordinate_calculation import haversine_distance
from turnkit.domain.guidance.geometry_sampler import (
    GeometrySampler,
    coordinate_from_compressed_range,
    representative_coordinate,
)
from turnkit.runtime.stores import ArrayNodeStore, MemoryGeometryStore, MemoryNodeStore


class RecordingHooks(NoopHooks):
    def __init__(self):
        self.calls = []

    def short_edge(self, **kw):
        self.calls.append(("short_edge", kw))

    def degenerate_segment(self, **kw):
        self.calls.append(("degenerate_segment", kw))


# ---------- Fixtures


@pytest.fixture
def equator_nodes() -> MemoryNodeStore:
    # all on the equator so distance grows linearly with longitude
    return MemoryNodeStore(
        {
            0: (0.0, 0.0),
            1: (0.0, 1.0),
            2: (0.00001, 0.0),  # ~1.1 m east of 0
            3: (0.00002, 0.0),
            4: (0.0002, 0.0),  # ~22 m
            5: (0.0003, 0.0),
            6: (0.00005, 0.0),  # ~5.6 m
        }
    )


# ---------- Uncompressed edges


def test_uncompressed_edge_returns_far_endpoint(equator_nodes):
    geoms = MemoryGeometryStore({})
    c = representative_coordinate(0, 1, 42, False, geoms, equator_nodes)
    assert c == Coordinate(0.0, 1.0)


def test_uncompressed_edge_reversed_returns_from_node(equator_nodes):
    geoms = MemoryGeometryStore({})
    c = representative_coordinate(0, 1, 42, True, geoms, equator_nodes)
    assert c == Coordinate(0.0, 0.0)


# ---------- Compressed edges


def test_short_edge_returns_final_endpoint_unmodified(equator_nodes):
    hooks = RecordingHooks()
    geoms = MemoryGeometryStore({7: [2]})
    c = representative_coordinate(0, 3, 7, False, geoms, equator_nodes, hooks=hooks)
    assert c == equator_nodes.coordinate(3)
    assert [name for name, _ in hooks.calls] == ["short_edge"]
    assert hooks.calls[0][1]["length_m"] < 10.0


def test_interpolates_inside_first_segment(equator_nodes):
    geoms = MemoryGeometryStore({7: [4]})
    start = equator_nodes.coordinate(0)
    c = representative_coordinate(0, 5, 7, False, geoms, equator_nodes)
    assert c.lat == pytest.approx(0.0)
    assert 0.0 < c.lon < 0.0002
    assert haversine_distance(start, c) == pytest.approx(10.0, abs=1e-6)


def test_target_reached_only_on_final_segment(equator_nodes):
    geoms = MemoryGeometryStore({7: [6]})
    start = equator_nodes.coordinate(0)
    c = representative_coordinate(0, 4, 7, False, geoms, equator_nodes)
    assert 0.00005 < c.lon < 0.0002
    assert haversine_distance(start, c) == pytest.approx(10.0, abs=1e-6)


def test_reversed_walks_from_to_node(equator_nodes):
    # edge 0 -> 6 -> 4; walking backwards starts at 4 and heads west
    geoms = MemoryGeometryStore({7: [6]})
    c = representative_coordinate(0, 4, 7, True, geoms, equator_nodes)
    base = equator_nodes.coordinate(4)
    assert c.lon < base.lon
    assert haversine_distance(base, c) == pytest.approx(10.0, abs=1e-6)


def test_multiple_shape_points_pick_bracketing_segment():
    nodes = MemoryNodeStore(
        {0: (0.0, 0.0), 1: (0.00003, 0.0), 2: (0.00006, 0.0), 3: (0.00012, 0.0), 4: (0.0005, 0.0)}
    )
    geoms = MemoryGeometryStore({1: [1, 2, 3]})
    c = representative_coordinate(0, 4, 1, False, geoms, nodes)
    # 0.00006 deg is ~6.7 m, 0.00012 deg ~13.3 m
    assert 0.00006 < c.lon < 0.00012
    assert haversine_distance(Coordinate(0.0, 0.0), c) == pytest.approx(10.0, abs=1e-6)


def test_empty_geometry_entry_is_a_precondition_violation(equator_nodes):
    geoms = MemoryGeometryStore({7: []})
    with pytest.raises(EmptyGeometryError):
        representative_coordinate(0, 1, 7, False, geoms, equator_nodes)


def test_degenerate_segment_returns_first_endpoint(equator_nodes):
    hooks = RecordingHooks()
    start = equator_nodes.coordinate(0)
    c = coordinate_from_compressed_range(
        start, [0], equator_nodes.coordinate(5), equator_nodes, target_length_m=0.0, hooks=hooks
    )
    assert c == start
    assert hooks.calls[0][0] == "degenerate_segment"


def test_sampler_class_with_array_store():
    lonlat = np.array([[0.0, 0.0], [0.0002, 0.0], [0.0003, 0.0]])
    sampler = GeometrySampler(
        nodes=ArrayNodeStore(lonlat),
        geometries=MemoryGeometryStore({3: [1]}),
        target_length_m=5.0,
    )
    c = sampler.representative_coordinate(0, 2, 3)
    assert haversine_distance(Coordinate(0.0, 0.0), c) == pytest.approx(5.0, abs=1e-6)
