# runtime/registries.py
from collections.abc import Callable, Mapping
from typing import Any

import numpy as np

from turnkit.app.protocols import GeometryStore, NodeStore
from turnkit.config.models import (
    GeometryStoreMemoryModel,
    GeometryStorePickleModel,
    GeometryStoreUnion,
    NodeStoreMemoryModel,
    NodeStorePickleModel,
    NodeStoreUnion,
)
from turnkit.runtime.resources import load_pickle
from turnkit.runtime.stores import ArrayNodeStore, MemoryGeometryStore, MemoryNodeStore

NodeStoreFactory = Callable[[NodeStoreUnion, dict], NodeStore]
GeometryStoreFactory = Callable[[GeometryStoreUnion, dict], GeometryStore]

_node_store_registry: dict[str, NodeStoreFactory] = {}
_geometry_store_registry: dict[str, GeometryStoreFactory] = {}


# ------------------- Node stores ---------------------------


def register_node_store(kind: str):
    def deco(fn: NodeStoreFactory):
        _node_store_registry[kind] = fn
        return fn

    return deco


def make_node_store(cfg: NodeStoreUnion, *, deps: dict | None = None) -> NodeStore:
    """
    deps can include:
      - 'nodes': NodeStore  # a prebuilt store, wins over the config
    """
    deps = deps or {}
    if "nodes" in deps:
        return deps["nodes"]
    try:
        factory = _node_store_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown node store kind {cfg.kind!r}")
    return factory(cfg, deps)


@register_node_store("memory")
def _make_memory_nodes(cfg: NodeStoreMemoryModel, deps):
    return MemoryNodeStore(cfg.nodes)


def _node_store_from_payload(payload: Any) -> NodeStore:
    if isinstance(payload, np.ndarray):
        return ArrayNodeStore(payload)
    if isinstance(payload, Mapping):
        return MemoryNodeStore(payload)
    raise TypeError(f"Unsupported node payload {type(payload).__name__}")


@register_node_store("pickle")
def _make_pickle_nodes(cfg: NodeStorePickleModel, deps):
    payload = load_pickle(cfg.file, cfg.must_exist)
    return _node_store_from_payload(payload if payload is not None else {})


# ------------------- Geometry stores ---------------------------


def register_geometry_store(kind: str):
    def deco(fn: GeometryStoreFactory):
        _geometry_store_registry[kind] = fn
        return fn

    return deco


def make_geometry_store(cfg: GeometryStoreUnion, *, deps: dict | None = None) -> GeometryStore:
    deps = deps or {}
    if "geometries" in deps:
        return deps["geometries"]
    try:
        factory = _geometry_store_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown geometry store kind {cfg.kind!r}")
    return factory(cfg, deps)


@register_geometry_store("memory")
def _make_memory_geometry(cfg: GeometryStoreMemoryModel, deps):
    return MemoryGeometryStore(cfg.edges)


@register_geometry_store("pickle")
def _make_pickle_geometry(cfg: GeometryStorePickleModel, deps):
    payload = load_pickle(cfg.file, cfg.must_exist)
    if payload is None:
        return MemoryGeometryStore({})
    if not isinstance(payload, Mapping):
        raise TypeError(f"Unsupported geometry payload {type(payload).__name__}")
    return MemoryGeometryStore(payload)
