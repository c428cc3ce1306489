from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from turnkit.domain.entities.geography import Coordinate
from turnkit.domain.entities.instruction import TurnInstruction


# ------------- Graph collaborators --------------------
@runtime_checkable
class NodeStore(Protocol):
    """
    Read-only view of the graph's node coordinates.
    Must be total over every node ID handed to guidance.
    """

    def coordinate(self, node_id: int) -> Coordinate: ...


@runtime_checkable
class GeometryStore(Protocol):
    """
    Responsibilities:
      • Tell whether an edge carries compressed shape points.
      • Return the intermediate node IDs of an edge, endpoints excluded.
    The returned sequence must support reversed() for backward traversal.
    """

    def has_geometry(self, edge_id: int) -> bool: ...
    def geometry(self, edge_id: int) -> Sequence[int]: ...


# ------------- Observability --------------------
class GuidanceHooks(Protocol):
    def short_edge(self, *, edge_id: int, length_m: float, target_m: float): ...
    def degenerate_segment(self, *, edge_id: int, index: int): ...
    def resolved(
        self, *, before: TurnInstruction, after: TurnInstruction, neighbor: TurnInstruction, ok: bool
    ): ...
    def build_done(self, **extra): ...


class NoopHooks:
    def short_edge(self, **_):
        pass

    def degenerate_segment(self, **_):
        pass

    def resolved(self, **_):
        pass

    def build_done(self, **_):
        pass
