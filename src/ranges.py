"""Grouping generation numbers into ranges and finding the people between them."""

import logging

from errors import ConfigError
from models import (
    BoundaryPerson,
    CanvasNode,
    FamilyEdge,
    FamilyTree,
    GenerationAssignment,
    GenerationBounds,
    GenerationDirection,
    GenerationKind,
    GenerationRange,
    PersonNode,
    Point,
    RelatedCanvasDirection,
)
from navigation import NavigationNodeGenerator

logger = logging.getLogger(__name__)


def format_generation_label(start: int, end: int, kind: GenerationKind = "ancestors") -> str:
    """
    Human-readable label for a generation range.

    Signs are dropped, so -2..-1 and 1..2 both read "Gen 1-2"; `kind` is
    accepted for symmetry with callers but does not change the wording.
    """
    if start == 0 and end == 0:
        return "Root"

    if start == end:
        return f"Gen {abs(start)}"

    if start == 0:
        return f"Root to Gen {abs(end)}"

    return f"Gen {abs(start)}-{abs(end)}"


def create_generation_ranges(
    bounds: GenerationBounds, generations_per_canvas: int, direction: GenerationDirection = "up"
) -> list[GenerationRange]:
    """
    Split [bounds.min, bounds.max] into consecutive ranges of a fixed size.

    Ranges grow outward from generation 0: first [0, max], then the negative
    side counting down from -1. The result is sorted ascending by start.
    """
    if generations_per_canvas < 1:
        raise ConfigError(f"generations_per_canvas must be >= 1, got {generations_per_canvas}")
    if direction not in ("up", "down"):
        raise ConfigError(f"Unknown generation direction: {direction!r}")

    positive_kind: GenerationKind = "ancestors" if direction == "up" else "descendants"
    negative_kind: GenerationKind = "descendants" if direction == "up" else "ancestors"

    ranges: list[GenerationRange] = []

    for start in range(0, bounds.max + 1, generations_per_canvas):
        end = min(start + generations_per_canvas - 1, bounds.max)
        ranges.append(GenerationRange(start, end, format_generation_label(start, end, positive_kind)))

    negative: list[GenerationRange] = []
    for end in range(-1, bounds.min - 1, -generations_per_canvas):
        start = max(end - generations_per_canvas + 1, bounds.min)
        negative.append(GenerationRange(start, end, format_generation_label(start, end, negative_kind)))

    # Negative ranges were produced moving away from the root
    return list(reversed(negative)) + ranges


def find_range(generation: int, ranges: list[GenerationRange]) -> GenerationRange | None:
    """First range containing `generation`, or None."""
    for generation_range in ranges:
        if generation_range.contains(generation):
            return generation_range
    return None


def assign_people_to_ranges(
    tree: FamilyTree, assignment: GenerationAssignment, ranges: list[GenerationRange]
) -> dict[GenerationRange, list[PersonNode]]:
    """
    Populate `assignment.by_range` with the people in each range.

    Every range gets a bucket, empty or not. A person whose generation falls
    in no range (possible with caller-supplied ranges) is left out.
    """
    assignment.by_range = {generation_range: [] for generation_range in ranges}

    for cr_id, generation in assignment.generation_map.items():
        person = tree.get(cr_id)
        if person is None:
            continue
        generation_range = find_range(generation, ranges)
        if generation_range is not None:
            assignment.by_range[generation_range].append(person)

    return assignment.by_range


def get_people_in_range(
    tree: FamilyTree, assignment: GenerationAssignment, generation_range: GenerationRange
) -> list[PersonNode]:
    people = []
    for cr_id, generation in assignment.generation_map.items():
        if generation_range.contains(generation):
            person = tree.get(cr_id)
            if person is not None:
                people.append(person)
    return people


def _connected_generations(person: PersonNode, assignment: GenerationAssignment) -> list[int]:
    """Generations of parents and children. Spouses share a generation and are skipped."""
    related = [person.father_cr_id, person.mother_cr_id, *person.children_cr_ids]
    return [
        assignment.generation_map[cr_id]
        for cr_id in related
        if cr_id is not None and cr_id in assignment.generation_map
    ]


def find_boundary_people(
    tree: FamilyTree, assignment: GenerationAssignment, ranges: list[GenerationRange]
) -> dict[str, BoundaryPerson]:
    """
    Find people sitting at the edge of a range with a parent or child in another range.

    Returns:
        Mapping of cr_id to the person and the labels of every other range they reach
    """
    boundary: dict[str, BoundaryPerson] = {}

    for cr_id, generation in assignment.generation_map.items():
        person = tree.get(cr_id)
        if person is None:
            continue

        adjacent_ranges: list[str] = []

        for generation_range in ranges:
            if generation not in (generation_range.start, generation_range.end):
                continue

            for connected_gen in _connected_generations(person, assignment):
                connected_range = find_range(connected_gen, ranges)
                if connected_range is None or connected_range.same_bounds(generation_range):
                    continue
                if connected_range.label not in adjacent_ranges:
                    adjacent_ranges.append(connected_range.label)

        if adjacent_ranges:
            boundary[cr_id] = BoundaryPerson(person=person, adjacent_ranges=adjacent_ranges)

    return boundary


def get_crossing_edges(
    tree: FamilyTree,
    assignment: GenerationAssignment,
    range_a: GenerationRange,
    range_b: GenerationRange,
) -> list[FamilyEdge]:
    """Edges with one endpoint in `range_a` and the other in `range_b`, either way round."""
    crossing = []

    for edge in tree.edges:
        from_gen = assignment.generation_map.get(edge.from_cr_id)
        to_gen = assignment.generation_map.get(edge.to_cr_id)
        if from_gen is None or to_gen is None:
            continue

        if (range_a.contains(from_gen) and range_b.contains(to_gen)) or (
            range_b.contains(from_gen) and range_a.contains(to_gen)
        ):
            crossing.append(edge)

    return crossing


def get_relationship_direction(
    generation_range: GenerationRange,
    ranges: list[GenerationRange],
    direction: GenerationDirection = "up",
) -> RelatedCanvasDirection:
    """Where a range sits relative to the others: the lowest, the highest, or in between."""
    ordered = sorted(ranges, key=lambda r: r.start)
    index = next(
        (i for i, r in enumerate(ordered) if r.same_bounds(generation_range)),
        -1,
    )

    if index == 0:
        return "descendant" if direction == "up" else "ancestor"
    if index == len(ordered) - 1:
        return "ancestor" if direction == "up" else "descendant"
    return "sibling"


def generate_boundary_navigation_nodes(
    tree: FamilyTree,
    assignment: GenerationAssignment,
    source_range: GenerationRange,
    target_range: GenerationRange,
    target_canvas: str,
    generator: NavigationNodeGenerator,
) -> list[tuple[CanvasNode, PersonNode]]:
    """
    Build one portal node per boundary person of `source_range` facing `target_range`.

    Nodes are placed at the origin; callers move them next to the returned person.
    """
    nodes: list[tuple[CanvasNode, PersonNode]] = []
    boundary = find_boundary_people(tree, assignment, [source_range, target_range])
    direction = "up" if target_range.start > source_range.end else "down"
    count_in_target = len(get_people_in_range(tree, assignment, target_range))

    for cr_id, entry in boundary.items():
        if not source_range.contains(assignment.generation_map[cr_id]):
            continue
        if target_range.label not in entry.adjacent_ranges:
            continue

        node = generator.create_portal_node(
            target_canvas,
            target_range.label,
            Point(0, 0),
            direction,
            f"{count_in_target} people",
        )
        nodes.append((node, entry.person))

    logger.debug(
        "Generated %d navigation nodes from %s to %s",
        len(nodes),
        source_range.label,
        target_range.label,
    )
    return nodes
