from dataclasses import dataclass
from enum import IntEnum

NUM_DIRECTION_MODIFIERS = 8
NUM_DISCRETE_ANGLES = 256


class DirectionModifier(IntEnum):
    """Turn directions in circle order. +1 is one step CCW, -1 one step CW."""

    UTURN = 0
    SHARP_RIGHT = 1
    RIGHT = 2
    SLIGHT_RIGHT = 3
    STRAIGHT = 4
    SLIGHT_LEFT = 5
    LEFT = 6
    SHARP_LEFT = 7


class TurnType(IntEnum):
    INVALID = 0
    NO_TURN = 1
    NEW_NAME = 2
    CONTINUE = 3
    TURN = 4
    MERGE = 5
    ON_RAMP = 6
    OFF_RAMP = 7
    FORK = 8
    END_OF_ROAD = 9
    ENTER_ROUNDABOUT = 10
    ENTER_AND_EXIT_ROUNDABOUT = 11
    ENTER_ROTARY = 12
    ENTER_AND_EXIT_ROTARY = 13
    ENTER_ROUNDABOUT_AT_EXIT = 14
    EXIT_ROUNDABOUT = 15
    ENTER_ROTARY_AT_EXIT = 16
    EXIT_ROTARY = 17
    STAY_ON_ROUNDABOUT = 18
    RESTRICTION = 19
    NOTIFICATION = 20


@dataclass
class TurnInstruction:
    # mutable: the conflict resolver rewrites direction_modifier in place
    type: TurnType = TurnType.INVALID
    direction_modifier: DirectionModifier = DirectionModifier.UTURN

    @classmethod
    def invalid(cls) -> "TurnInstruction":
        return cls(TurnType.INVALID, DirectionModifier.UTURN)

    @classmethod
    def no_turn(cls) -> "TurnInstruction":
        return cls(TurnType.NO_TURN, DirectionModifier.UTURN)


@dataclass(frozen=True)
class DiscreteAngle:
    value: int  # 0..255, one step is 360/256 degrees

    def __post_init__(self):
        if not 0 <= self.value < NUM_DISCRETE_ANGLES:
            raise ValueError(f"discrete angle must be in [0, 255], got {self.value}")

    def __int__(self) -> int:
        return self.value
