# domain/guidance/conflict_resolver.py
from dataclasses import replace
from enum import Enum

from turnkit.app.protocols import GuidanceHooks, NoopHooks
from turnkit.domain.entities.instruction import TurnInstruction
from turnkit.domain.guidance.direction_circle import (
    forced_shift_ccw,
    forced_shift_cw,
    shift_ccw,
    shift_cw,
)

_NOOP = NoopHooks()


class Rotation(Enum):
    CW = "cw"
    CCW = "ccw"


def resolve(
    to_resolve: TurnInstruction,
    neighbor: TurnInstruction,
    rotation: Rotation,
    *,
    hooks: GuidanceHooks | None = None,
) -> bool:
    """
    Move to_resolve one step around the circle, away from its current label.
    Leaves it untouched and returns False if the modifier cannot shift that way
    or if the shift would land on the neighbour.
    """
    hooks = hooks or _NOOP
    before = replace(to_resolve)
    current = to_resolve.direction_modifier
    shifted = shift_cw(current) if rotation is Rotation.CW else shift_ccw(current)
    ok = shifted != neighbor.direction_modifier and shifted != current
    if ok:
        to_resolve.direction_modifier = shifted
    hooks.resolved(before=before, after=replace(to_resolve), neighbor=neighbor, ok=ok)
    return ok


def resolve_transitive(
    first: TurnInstruction,
    second: TurnInstruction,
    third: TurnInstruction,
    rotation: Rotation,
    *,
    hooks: GuidanceHooks | None = None,
) -> bool:
    """Make room for second next to third, dragging first along to keep the order."""
    if not resolve(second, third, rotation, hooks=hooks):
        return False
    before = replace(first)
    # second already moved legally; first follows unconditionally
    first.direction_modifier = (
        forced_shift_cw(first.direction_modifier)
        if rotation is Rotation.CW
        else forced_shift_ccw(first.direction_modifier)
    )
    (hooks or _NOOP).resolved(before=before, after=replace(first), neighbor=second, ok=True)
    return True
