# domain/guidance/angle_classifier.py
import math

from turnkit.domain.entities.instruction import (
    NUM_DISCRETE_ANGLES,
    DirectionModifier as DM,
    DiscreteAngle,
    TurnInstruction,
)
from turnkit.domain.errors import AngleOutOfRangeError
from turnkit.domain.guidance.predicates import is_basic

DISCRETE_ANGLE_STEP_SIZE = 360.0 / NUM_DISCRETE_ANGLES

# Ideal centers; not aligned with the turn_direction buckets on purpose.
MODIFIER_CENTERS: dict[DM, float] = {
    DM.UTURN: 0.0,
    DM.SHARP_RIGHT: 45.0,
    DM.RIGHT: 90.0,
    DM.SLIGHT_RIGHT: 135.0,
    DM.STRAIGHT: 180.0,
    DM.SLIGHT_LEFT: 225.0,
    DM.LEFT: 270.0,
    DM.SHARP_LEFT: 315.0,
}

MAX_DEVIATIONS: dict[DM, float] = {
    DM.UTURN: 0.0,
    DM.SHARP_RIGHT: 45.0,
    DM.RIGHT: 50.0,
    DM.SLIGHT_RIGHT: 30.0,
    DM.STRAIGHT: 20.0,
    DM.SLIGHT_LEFT: 30.0,
    DM.LEFT: 50.0,
    DM.SHARP_LEFT: 45.0,
}


def discretize_angle(angle: float) -> DiscreteAngle:
    if not 0.0 <= angle <= 360.0:
        raise AngleOutOfRangeError(f"angle must be in [0, 360], got {angle}")
    # round to nearest step; 360 wraps onto 0
    return DiscreteAngle(math.floor(angle / DISCRETE_ANGLE_STEP_SIZE + 0.5) % NUM_DISCRETE_ANGLES)


def angle_from_discrete_angle(angle: DiscreteAngle) -> float:
    return int(angle) * DISCRETE_ANGLE_STEP_SIZE


def angular_deviation(angle: float, other: float) -> float:
    deviation = abs(angle - other)
    return min(360.0 - deviation, deviation)


def turn_direction(angle: float) -> DM:
    """
    0 is a u-turn, 180 goes perfectly straight,
    0-180 are right turns and 180-360 are left turns.
    Buckets overlap around straight; the first match wins.
    """
    if 0 < angle < 60:
        return DM.SHARP_RIGHT
    if 60 <= angle < 140:
        return DM.RIGHT
    if 140 <= angle < 170:
        return DM.SLIGHT_RIGHT
    if 165 <= angle <= 195:
        return DM.STRAIGHT
    if 190 < angle <= 220:
        return DM.SLIGHT_LEFT
    if 220 < angle <= 300:
        return DM.LEFT
    if 300 < angle < 360:
        return DM.SHARP_LEFT
    return DM.UTURN


def angular_penalty(angle: float, modifier: DM) -> float:
    return angular_deviation(MODIFIER_CENTERS[modifier], angle)


def turn_confidence(angle: float, instruction: TurnInstruction, *, clamp: bool = False) -> float:
    # u-turns and roundabout-style instructions are always certain
    if not is_basic(instruction.type) or instruction.direction_modifier == DM.UTURN:
        return 1.0

    difference = angular_penalty(angle, instruction.direction_modifier)
    max_deviation = MAX_DEVIATIONS[instruction.direction_modifier]
    confidence = 1.0 - (difference / max_deviation) ** 2
    return max(0.0, confidence) if clamp else confidence
