# domain/guidance/direction_circle.py
from turnkit.domain.entities.instruction import NUM_DIRECTION_MODIFIERS, DirectionModifier as DM

# Static per-modifier properties. UTURN and STRAIGHT never move.
SHIFTABLE_CCW: dict[DM, bool] = {
    DM.UTURN: False,
    DM.SHARP_RIGHT: True,
    DM.RIGHT: True,
    DM.SLIGHT_RIGHT: False,
    DM.STRAIGHT: False,
    DM.SLIGHT_LEFT: True,
    DM.LEFT: True,
    DM.SHARP_LEFT: False,
}

SHIFTABLE_CW: dict[DM, bool] = {
    DM.UTURN: False,
    DM.SHARP_RIGHT: False,
    DM.RIGHT: True,
    DM.SLIGHT_RIGHT: True,
    DM.STRAIGHT: False,
    DM.SLIGHT_LEFT: False,
    DM.LEFT: True,
    DM.SHARP_LEFT: True,
}

MIRRORED: dict[DM, DM] = {
    DM.UTURN: DM.UTURN,
    DM.SHARP_RIGHT: DM.SHARP_LEFT,
    DM.RIGHT: DM.LEFT,
    DM.SLIGHT_RIGHT: DM.SLIGHT_LEFT,
    DM.STRAIGHT: DM.STRAIGHT,
    DM.SLIGHT_LEFT: DM.SLIGHT_RIGHT,
    DM.LEFT: DM.RIGHT,
    DM.SHARP_LEFT: DM.SHARP_RIGHT,
}


def forced_shift_ccw(modifier: DM) -> DM:
    return DM((int(modifier) + 1) % NUM_DIRECTION_MODIFIERS)


def forced_shift_cw(modifier: DM) -> DM:
    return DM((int(modifier) + NUM_DIRECTION_MODIFIERS - 1) % NUM_DIRECTION_MODIFIERS)


def shift_ccw(modifier: DM) -> DM:
    return forced_shift_ccw(modifier) if SHIFTABLE_CCW[modifier] else modifier


def shift_cw(modifier: DM) -> DM:
    return forced_shift_cw(modifier) if SHIFTABLE_CW[modifier] else modifier


def mirror(modifier: DM) -> DM:
    """Swap left and right."""
    return MIRRORED[modifier]


def is_distinct(first: DM, second: DM) -> bool:
    """False only for neighbours on the circle."""
    if (int(first) + 1) % NUM_DIRECTION_MODIFIERS == int(second):
        return False
    if (int(second) + 1) % NUM_DIRECTION_MODIFIERS == int(first):
        return False
    return True
