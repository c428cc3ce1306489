# runtime/stores.py
from collections.abc import Mapping, Sequence

import numpy as np

from turnkit.domain.entities.geography import Coordinate, QueryNode


class MemoryNodeStore:
    def __init__(self, nodes: Mapping[int, tuple[float, float]]):
        self._nodes = {int(k): Coordinate(float(v[0]), float(v[1])) for k, v in nodes.items()}

    @classmethod
    def from_query_nodes(cls, nodes: Sequence[QueryNode]) -> "MemoryNodeStore":
        return cls({n.node_id: (n.lon, n.lat) for n in nodes})

    def coordinate(self, node_id: int) -> Coordinate:
        return self._nodes[node_id]  # raises KeyError for unknown ids

    def __len__(self) -> int:
        return len(self._nodes)


class ArrayNodeStore:
    """Dense node table: row i holds (lon, lat) of node i."""

    def __init__(self, lonlat: np.ndarray):
        arr = np.asarray(lonlat, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise ValueError(f"expected an (n, 2) lon/lat array, got shape {arr.shape}")
        self._lonlat = arr

    def coordinate(self, node_id: int) -> Coordinate:
        # numpy would read negative ids from the end of the table
        if not 0 <= node_id < len(self._lonlat):
            raise IndexError(node_id)
        lon, lat = self._lonlat[node_id]
        return Coordinate(float(lon), float(lat))

    def __len__(self) -> int:
        return len(self._lonlat)


class MemoryGeometryStore:
    def __init__(self, edges: Mapping[int, Sequence[int]]):
        self._edges = {int(k): tuple(int(n) for n in v) for k, v in edges.items()}

    def has_geometry(self, edge_id: int) -> bool:
        return edge_id in self._edges

    def geometry(self, edge_id: int) -> tuple[int, ...]:
        return self._edges[edge_id]

    def __len__(self) -> int:
        return len(self._edges)
