# turnkit/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from turnkit.app.protocols import GeometryStore, GuidanceHooks, NodeStore, NoopHooks
from turnkit.config.models import GuidanceModel
from turnkit.domain.entities.geography import Coordinate
from turnkit.domain.entities.instruction import TurnInstruction, TurnType
from turnkit.domain.geometry.coordinate_calculation import turn_angle
from turnkit.domain.guidance.angle_classifier import turn_confidence, turn_direction
from turnkit.domain.guidance.conflict_resolver import Rotation, resolve, resolve_transitive
from turnkit.domain.guidance.geometry_sampler import GeometrySampler
from turnkit.io.guidance_logging import GuidanceLogging
from turnkit.runtime.registries import make_geometry_store, make_node_store


@dataclass
class Toolkit:
    nodes: NodeStore
    geometries: GeometryStore
    sampler: GeometrySampler
    hooks: GuidanceHooks
    clamp_confidence: bool = False

    def representative_coordinate(
        self, from_node: int, to_node: int, edge_id: int, reversed_: bool = False
    ) -> Coordinate:
        return self.sampler.representative_coordinate(from_node, to_node, edge_id, reversed_)

    def classify(
        self, angle: float, turn_type: TurnType = TurnType.TURN
    ) -> tuple[TurnInstruction, float]:
        instruction = TurnInstruction(turn_type, turn_direction(angle))
        return instruction, turn_confidence(angle, instruction, clamp=self.clamp_confidence)

    def turn_between(
        self,
        from_node: int,
        via_node: int,
        to_node: int,
        *,
        in_edge: int,
        out_edge: int,
        in_reversed: bool = False,
        out_reversed: bool = False,
        turn_type: TurnType = TurnType.TURN,
    ) -> tuple[float, TurnInstruction, float]:
        """
        Classify the turn from in_edge (from_node -> via_node) onto out_edge
        (via_node -> to_node). Both edges are sampled looking away from via_node.
        A reversed flag means the edge is stored the other way round, e.g.
        out_reversed: out_edge is stored as to_node -> via_node.
        """
        sample = self.sampler.representative_coordinate
        if in_reversed:
            behind = sample(via_node, from_node, in_edge, False)
        else:
            behind = sample(from_node, via_node, in_edge, True)
        if out_reversed:
            ahead = sample(to_node, via_node, out_edge, True)
        else:
            ahead = sample(via_node, to_node, out_edge, False)
        angle = turn_angle(behind, self.nodes.coordinate(via_node), ahead)
        instruction, confidence = self.classify(angle, turn_type)
        return angle, instruction, confidence

    def resolve(
        self, to_resolve: TurnInstruction, neighbor: TurnInstruction, rotation: Rotation
    ) -> bool:
        return resolve(to_resolve, neighbor, rotation, hooks=self.hooks)

    def resolve_transitive(
        self,
        first: TurnInstruction,
        second: TurnInstruction,
        third: TurnInstruction,
        rotation: Rotation,
    ) -> bool:
        return resolve_transitive(first, second, third, rotation, hooks=self.hooks)


def build(
    cfg: GuidanceModel | Mapping,
    *,
    nodes: NodeStore | None = None,
    geometries: GeometryStore | None = None,
    use_logging: bool = True,
) -> Toolkit:
    # 0) Validate config
    model = cfg if isinstance(cfg, GuidanceModel) else GuidanceModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        GuidanceLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Stores; prebuilt ones win over the config
    node_store = make_node_store(model.nodes, deps={"nodes": nodes} if nodes is not None else None)
    geometry_store = make_geometry_store(
        model.geometry, deps={"geometries": geometries} if geometries is not None else None
    )

    # 3) Sampler
    sampler = GeometrySampler(
        nodes=node_store,
        geometries=geometry_store,
        target_length_m=model.sampler.target_length_m,
        hooks=hooks,
    )

    hooks.build_done(
        target_length_m=model.sampler.target_length_m,
        clamp_confidence=model.confidence.clamp,
        node_store=type(node_store).__name__,
        geometry_store=type(geometry_store).__name__,
    )
    return Toolkit(
        nodes=node_store,
        geometries=geometry_store,
        sampler=sampler,
        hooks=hooks,
        clamp_confidence=model.confidence.clamp,
    )
