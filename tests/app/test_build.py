import pickle

import numpy as np
import pytest

from turnkit.app.build import Toolkit, build
from turnkit.app.protocols import GeometryStore, NodeStore, NoopHooks
from turnkit.config.models import GuidanceModel, NodeStoreMemoryModel
from turnkit.domain.entities.geography import Coordinate
from turnkit.domain.entities.instruction import DirectionModifier as DM, TurnInstruction, TurnType
from turnkit.domain.guidance.conflict_resolver import Rotation
from turnkit.io.guidance_logging import GuidanceLogging
from turnkit.runtime.registries import make_node_store
from turnkit.runtime.resources import load_pickle
from turnkit.runtime.stores import ArrayNodeStore, MemoryGeometryStore, MemoryNodeStore

# a plus-shaped junction around node 1
JUNCTION = {
    "nodes": {
        "kind": "memory",
        "nodes": {
            0: (0.0, -0.001),  # south
            1: (0.0, 0.0),  # junction
            2: (0.001, 0.0),  # east
            3: (-0.001, 0.0),  # west
            4: (0.0, 0.001),  # north
            5: (0.00003, -0.0005),  # shape point on the south approach
            6: (0.0, 0.0008),  # north leg, far from the junction
            7: (0.0002, 0.0001),  # north leg, bends east right at the junction
            8: (0.0002, -0.0001),  # south leg, bends east right at the junction
        },
    },
    "geometry": {
        "kind": "memory",
        # 20 is stored 4 -> 6 -> 7 -> 1, 21 is stored 1 -> 8 -> 0
        "edges": {10: [5], 20: [6, 7], 21: [8]},
    },
}


@pytest.fixture
def toolkit() -> Toolkit:
    return build(JUNCTION, use_logging=False)


def test_build_from_mapping(toolkit: Toolkit):
    assert isinstance(toolkit.nodes, NodeStore)
    assert isinstance(toolkit.geometries, GeometryStore)
    assert isinstance(toolkit.hooks, NoopHooks)
    assert toolkit.sampler.target_length_m == 10.0


def test_build_with_logging_wires_hooks():
    tk = build(GuidanceModel.model_validate({**JUNCTION, "run_id": "t1"}))
    assert isinstance(tk.hooks, GuidanceLogging)
    assert tk.sampler.hooks is tk.hooks


def test_prebuilt_stores_win_over_config():
    nodes = ArrayNodeStore(np.array([[0.0, 0.0], [0.0, 1.0]]))
    geoms = MemoryGeometryStore({})
    tk = build(GuidanceModel(), nodes=nodes, geometries=geoms, use_logging=False)
    assert tk.nodes is nodes
    assert tk.representative_coordinate(0, 1, 99) == Coordinate(0.0, 1.0)


@pytest.mark.parametrize(
    "to_node,expected", [(2, DM.RIGHT), (3, DM.LEFT), (4, DM.STRAIGHT), (0, DM.UTURN)]
)
def test_turn_between_uncompressed(toolkit: Toolkit, to_node, expected):
    angle, instruction, confidence = toolkit.turn_between(0, 1, to_node, in_edge=11, out_edge=12)
    assert instruction == TurnInstruction(TurnType.TURN, expected)
    assert confidence == pytest.approx(1.0)


def test_turn_between_samples_compressed_approach(toolkit: Toolkit):
    # the approach bends slightly east near the junction, so north reads as a slight deviation
    angle, instruction, confidence = toolkit.turn_between(0, 1, 4, in_edge=10, out_edge=12)
    assert instruction.direction_modifier == DM.STRAIGHT
    assert angle != pytest.approx(180.0)
    assert 0.0 < confidence < 1.0


def test_turn_between_out_edge_stored_backwards(toolkit: Toolkit):
    # walked from the junction the leg heads east-north-east first, i.e. a right turn
    angle, instruction, _ = toolkit.turn_between(
        0, 1, 4, in_edge=11, out_edge=20, out_reversed=True
    )
    assert angle == pytest.approx(90.0 + 26.565, abs=0.05)
    assert instruction.direction_modifier == DM.RIGHT


def test_turn_between_in_edge_stored_backwards(toolkit: Toolkit):
    # the approach arrives from the east-south-east, so heading north is a right turn
    angle, instruction, _ = toolkit.turn_between(
        0, 1, 4, in_edge=21, out_edge=12, in_reversed=True
    )
    assert angle == pytest.approx(90.0 + 26.565, abs=0.05)
    assert instruction.direction_modifier == DM.RIGHT


def test_classify_honours_clamp():
    tk = build({"confidence": {"clamp": True}}, use_logging=False)
    instruction, confidence = tk.classify(165.0, TurnType.TURN)
    assert instruction.direction_modifier == DM.SLIGHT_RIGHT
    assert confidence == pytest.approx(1 - (30 / 30) ** 2)
    # 34 off the SLIGHT_RIGHT center is past its 30 degree tolerance
    instruction, confidence = tk.classify(169.0)
    assert instruction.direction_modifier == DM.SLIGHT_RIGHT
    assert confidence == 0.0


def test_toolkit_resolve_delegates(toolkit: Toolkit):
    a = TurnInstruction(TurnType.TURN, DM.SLIGHT_RIGHT)
    assert toolkit.resolve(a, TurnInstruction(TurnType.TURN, DM.STRAIGHT), Rotation.CW)
    assert a.direction_modifier == DM.RIGHT
    first = TurnInstruction(TurnType.TURN, DM.LEFT)
    second = TurnInstruction(TurnType.TURN, DM.SLIGHT_LEFT)
    third = TurnInstruction(TurnType.TURN, DM.STRAIGHT)
    assert toolkit.resolve_transitive(first, second, third, Rotation.CCW)
    assert (second.direction_modifier, first.direction_modifier) == (DM.LEFT, DM.SHARP_LEFT)


# ---------- Registries


def test_pickle_node_store_from_array(tmp_path):
    path = tmp_path / "nodes.pkl"
    with open(path, "wb") as f:
        pickle.dump(np.array([[1.0, 2.0], [3.0, 4.0]]), f)
    cfg = GuidanceModel.model_validate({"nodes": {"kind": "pickle", "file": str(path)}})
    store = make_node_store(cfg.nodes)
    assert isinstance(store, ArrayNodeStore)
    assert store.coordinate(1) == Coordinate(3.0, 4.0)


def test_pickle_geometry_store_from_mapping(tmp_path):
    path = tmp_path / "geoms.pkl"
    with open(path, "wb") as f:
        pickle.dump({7: [1, 2]}, f)
    tk = build(
        {"nodes": {"kind": "memory"}, "geometry": {"kind": "pickle", "file": str(path)}},
        use_logging=False,
    )
    assert tk.geometries.has_geometry(7)
    assert tuple(tk.geometries.geometry(7)) == (1, 2)


def test_missing_pickle_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        build({"nodes": {"kind": "pickle", "file": str(tmp_path / "nope.pkl")}}, use_logging=False)


def test_memory_store_from_config():
    store = make_node_store(NodeStoreMemoryModel(nodes={1: (5.0, 6.0)}))
    assert isinstance(store, MemoryNodeStore)
    assert store.coordinate(1) == Coordinate(5.0, 6.0)
    with pytest.raises(KeyError):
        store.coordinate(2)


@pytest.mark.parametrize("node_id", [-1, 2])
def test_array_store_rejects_out_of_range_ids(node_id):
    store = ArrayNodeStore(np.array([[0.0, 0.0], [1.0, 1.0]]))
    assert len(store) == 2
    with pytest.raises(IndexError):
        store.coordinate(node_id)


def test_optional_pickle_is_loaded_once_it_appears(tmp_path):
    path = tmp_path / "late.pkl"
    assert load_pickle(str(path), must_exist=False) is None
    with open(path, "wb") as f:
        pickle.dump({3: [4]}, f)
    assert load_pickle(str(path), must_exist=False) == {3: [4]}
