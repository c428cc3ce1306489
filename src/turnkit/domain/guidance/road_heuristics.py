# domain/guidance/road_heuristics.py
from turnkit.domain.entities.road import FunctionalRoadClass as FRC, StreetLabel

# Roads within one priority of each other count as equal for fork discovery.
# Links and minor subtypes share 10; service and connectivity roads sit low.
ROAD_PRIORITY: dict[FRC, int] = {
    FRC.UNKNOWN: 10,
    FRC.MOTORWAY: 0,
    FRC.MOTORWAY_LINK: 10,
    FRC.TRUNK: 2,
    FRC.TRUNK_LINK: 10,
    FRC.PRIMARY: 4,
    FRC.PRIMARY_LINK: 10,
    FRC.SECONDARY: 6,
    FRC.SECONDARY_LINK: 10,
    FRC.TERTIARY: 8,
    FRC.TERTIARY_LINK: 10,
    FRC.UNCLASSIFIED: 11,
    FRC.RESIDENTIAL: 10,
    FRC.SERVICE: 12,
    FRC.LIVING_STREET: 10,
    FRC.LOW_PRIORITY_ROAD: 14,
}

LOW_PRIORITY_CLASSES = frozenset({FRC.LOW_PRIORITY_ROAD, FRC.SERVICE})


def priority(road_class: FRC) -> int:
    return ROAD_PRIORITY[road_class]


def can_be_seen_as_fork(first: FRC, second: FRC) -> bool:
    return abs(priority(first) - priority(second)) <= 1


def is_low_priority_road_class(road_class: FRC) -> bool:
    return road_class in LOW_PRIORITY_CLASSES


def _as_label(label: StreetLabel | str) -> StreetLabel:
    return label if isinstance(label, StreetLabel) else StreetLabel.parse(label)


def requires_name_announced(from_label: StreetLabel | str, to_label: StreetLabel | str) -> bool:
    """
    Whether moving from one street label to another deserves its own announcement.
    Dropping a name or a ref, or extending a ref list, is not announced.
    """
    src, dst = _as_label(from_label), _as_label(to_label)

    names_are_empty = not src.name and not dst.name
    names_are_equal = src.name == dst.name
    name_is_removed = bool(src.name) and not dst.name

    refs_are_empty = not src.ref and not dst.ref
    # "" is contained in anything, so a missing ref on either side counts
    ref_is_contained = dst.ref in src.ref or src.ref in dst.ref
    ref_is_removed = bool(src.ref) and not dst.ref

    obvious_change = (
        (names_are_empty and refs_are_empty)
        or (names_are_equal and ref_is_contained)
        or (names_are_equal and refs_are_empty)
        or name_is_removed
        or ref_is_removed
    )
    return not obvious_change
