# domain/guidance/predicates.py
from turnkit.domain.entities.instruction import DirectionModifier as DM, TurnInstruction, TurnType

SLIGHT_MODIFIERS = frozenset({DM.STRAIGHT, DM.SLIGHT_RIGHT, DM.SLIGHT_LEFT})
SHARP_MODIFIERS = frozenset({DM.SHARP_RIGHT, DM.SHARP_LEFT})


def is_basic(turn_type: TurnType) -> bool:
    return turn_type in (TurnType.TURN, TurnType.END_OF_ROAD)


def _basic_or_no_turn(turn_type: TurnType) -> bool:
    return is_basic(turn_type) or turn_type == TurnType.NO_TURN


def is_uturn(instruction: TurnInstruction) -> bool:
    return is_basic(instruction.type) and instruction.direction_modifier == DM.UTURN


def is_slight_modifier(modifier: DM) -> bool:
    return modifier in SLIGHT_MODIFIERS


def is_slight_turn(instruction: TurnInstruction) -> bool:
    return _basic_or_no_turn(instruction.type) and is_slight_modifier(instruction.direction_modifier)


def is_sharp_turn(instruction: TurnInstruction) -> bool:
    return is_basic(instruction.type) and instruction.direction_modifier in SHARP_MODIFIERS


def is_straight(instruction: TurnInstruction) -> bool:
    return _basic_or_no_turn(instruction.type) and instruction.direction_modifier == DM.STRAIGHT


def is_conflict(first: TurnInstruction, second: TurnInstruction) -> bool:
    same = first.type == second.type and first.direction_modifier == second.direction_modifier
    return same or (is_straight(first) and is_straight(second))


def can_be_suppressed(turn_type: TurnType) -> bool:
    return turn_type == TurnType.TURN
