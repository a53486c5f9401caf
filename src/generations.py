"""Relative generation numbering over a family tree."""

import logging
from collections import deque

from errors import ConfigError
from models import FamilyTree, GenerationAssignment, GenerationBounds, GenerationDirection


logger = logging.getLogger(__name__)


def assign_generations(
    tree: FamilyTree, direction: GenerationDirection = "up"
) -> GenerationAssignment:
    """
    Assign a generation number to every person reachable from the root.

    Breadth-first from the root at generation 0. With direction "up" parents
    sit one generation above (+1) and children one below (-1); "down" flips
    the signs. Spouses share a generation. The first generation assigned to a
    person wins, so relationship cycles terminate and the shortest path is
    normally the one kept.

    Args:
        tree: The family tree
        direction: "up" for ancestors as positive generations, "down" for descendants

    Returns:
        A GenerationAssignment with an empty `by_range`; see ranges.assign_people_to_ranges
    """
    if direction not in ("up", "down"):
        raise ConfigError(f"Unknown generation direction: {direction!r}")

    # Offset applied when stepping to a parent; children get the negation
    parent_step = 1 if direction == "up" else -1

    generation_map: dict[str, int] = {}
    min_gen = 0
    max_gen = 0

    visited: set[str] = set()
    queue: deque[tuple[str, int]] = deque([(tree.root.cr_id, 0)])

    while queue:
        cr_id, generation = queue.popleft()

        if cr_id in visited:
            continue
        visited.add(cr_id)

        person = tree.get(cr_id)
        if person is None:
            continue

        generation_map[cr_id] = generation
        min_gen = min(min_gen, generation)
        max_gen = max(max_gen, generation)

        for parent_id in (person.father_cr_id, person.mother_cr_id):
            if parent_id and parent_id in tree.nodes:
                queue.append((parent_id, generation + parent_step))

        for child_id in person.children_cr_ids:
            if child_id in tree.nodes:
                queue.append((child_id, generation - parent_step))

        for spouse_id in person.spouse_cr_ids:
            if spouse_id in tree.nodes and spouse_id not in visited:
                queue.append((spouse_id, generation))

    logger.debug(
        "Assigned generations to %d people (direction=%s, min=%d, max=%d)",
        len(generation_map),
        direction,
        min_gen,
        max_gen,
    )

    return GenerationAssignment(
        generation_map=generation_map,
        bounds=GenerationBounds(min=min_gen, max=max_gen),
    )
