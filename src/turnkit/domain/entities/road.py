from dataclasses import dataclass
from enum import IntEnum


class FunctionalRoadClass(IntEnum):
    UNKNOWN = 0
    MOTORWAY = 1
    MOTORWAY_LINK = 2
    TRUNK = 3
    TRUNK_LINK = 4
    PRIMARY = 5
    PRIMARY_LINK = 6
    SECONDARY = 7
    SECONDARY_LINK = 8
    TERTIARY = 9
    TERTIARY_LINK = 10
    UNCLASSIFIED = 11
    RESIDENTIAL = 12
    SERVICE = 13
    LIVING_STREET = 14
    LOW_PRIORITY_ROAD = 15  # only included for connectivity


@dataclass(frozen=True)
class StreetLabel:
    name: str = ""
    ref: str = ""

    @classmethod
    def parse(cls, text: str) -> "StreetLabel":
        """Split an upstream "{name} ({ref})" label into its parts.

        A label without a parenthesis is all name. An unclosed parenthesis
        takes the rest of the label as ref.
        """
        ref_begin = text.find("(")
        if ref_begin == -1:
            return cls(name=text, ref="")
        ref_end = text.find(")", ref_begin)
        ref = text[ref_begin + 1 :] if ref_end == -1 else text[ref_begin + 1 : ref_end]
        return cls(name=text[:ref_begin].rstrip(), ref=ref)
