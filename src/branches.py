"""Lineage branch extraction: paternal, maternal, descendant, and custom lines."""

import logging
from collections import deque
from typing import Callable, Iterable

from errors import NotFoundError
from models import (
    BranchBoundary,
    BranchConnection,
    BranchDefinition,
    BranchExtractionResult,
    FamilyTree,
    PersonNode,
)

logger = logging.getLogger(__name__)


def _parents(person: PersonNode) -> list[str]:
    return [cr_id for cr_id in (person.father_cr_id, person.mother_cr_id) if cr_id]


def _children(person: PersonNode) -> list[str]:
    return list(person.children_cr_ids)


def _walk(
    tree: FamilyTree,
    seed: PersonNode,
    start_depth: int,
    neighbours: Callable[[PersonNode], Iterable[str]],
    max_generations: int | None,
) -> tuple[list[str], PersonNode | None, int]:
    """
    Breadth-first walk from `seed` following `neighbours`.

    Entries deeper than `max_generations` are dropped when dequeued, so the
    people at exactly the cutoff depth are still collected.

    Returns:
        (members in visit order, last person visited, deepest depth reached)
    """
    members: list[str] = []
    last_visited: PersonNode | None = None
    depth_reached = 0

    visited: set[str] = set()
    queue: deque[tuple[PersonNode, int]] = deque([(seed, start_depth)])

    while queue:
        person, depth = queue.popleft()

        if person.cr_id in visited:
            continue
        if max_generations is not None and depth > max_generations:
            continue

        visited.add(person.cr_id)
        members.append(person.cr_id)
        last_visited = person
        depth_reached = max(depth_reached, depth)

        for next_id in neighbours(person):
            next_person = tree.get(next_id)
            if next_person is not None:
                queue.append((next_person, depth + 1))

    return members, last_visited, depth_reached


def extract_branch(
    tree: FamilyTree, branch: BranchDefinition, include_spouses: bool = True
) -> BranchExtractionResult:
    """
    Collect everyone belonging to a branch.

    - paternal / maternal: the whole ancestry of the anchor's father / mother,
      starting at depth 1. The branch root is the last person visited, i.e.
      the most distant ancestor reached.
    - descendant: the given child (depth 0) and all of their descendants. The
      child is the branch root.
    - custom: the given ancestor (depth 0) and that ancestor's own ancestry.
      The ancestor is the branch root.

    Missing anchors, parents, children, or ancestors yield an empty result.
    """
    anchor = tree.get(branch.anchor_cr_id)
    if anchor is None:
        logger.debug("Branch '%s': anchor %s not in tree", branch.label, branch.anchor_cr_id)
        return BranchExtractionResult()

    members: list[str] = []
    branch_root: PersonNode | None = None
    depth = 0

    if branch.type in ("paternal", "maternal"):
        parent_id = anchor.father_cr_id if branch.type == "paternal" else anchor.mother_cr_id
        parent = tree.get(parent_id)
        if parent is not None:
            members, branch_root, depth = _walk(tree, parent, 1, _parents, branch.max_generations)

    elif branch.type == "descendant":
        child = tree.get(branch.child_cr_id)
        if child is not None:
            members, _, depth = _walk(tree, child, 0, _children, branch.max_generations)
            branch_root = child

    elif branch.type == "custom":
        ancestor = tree.get(branch.ancestor_cr_id)
        if ancestor is not None:
            members, _, depth = _walk(tree, ancestor, 0, _parents, branch.max_generations)
            branch_root = ancestor

    if not members:
        return BranchExtractionResult()

    cr_ids = set(members)
    if include_spouses:
        members.extend(add_spouses(tree, cr_ids, members))

    people = [tree.nodes[cr_id] for cr_id in members if cr_id in tree.nodes]
    boundary_people = find_branch_boundary_people(tree, cr_ids, members)

    logger.debug(
        "Branch '%s' (%s): %d people, %d boundary, depth %d",
        branch.label,
        branch.type,
        len(people),
        len(boundary_people),
        depth,
    )

    return BranchExtractionResult(
        people=people,
        cr_ids=cr_ids,
        branch_root=branch_root,
        boundary_people=boundary_people,
        generation_depth=depth,
    )


def add_spouses(
    tree: FamilyTree, cr_ids: set[str], order: Iterable[str] | None = None
) -> list[str]:
    """
    Add every spouse of the current members to `cr_ids` in a single pass.

    Spouses of the newly added spouses are not followed. `order` fixes the
    member iteration order; it defaults to sorted ids.

    Returns:
        The added ids, in the order they were found
    """
    to_add: list[str] = []

    for cr_id in list(order) if order is not None else sorted(cr_ids):
        person = tree.get(cr_id)
        if person is None:
            continue
        for spouse_id in person.spouse_cr_ids:
            if spouse_id in tree.nodes and spouse_id not in cr_ids and spouse_id not in to_add:
                to_add.append(spouse_id)

    cr_ids.update(to_add)
    return to_add


def find_branch_boundary_people(
    tree: FamilyTree, cr_ids: set[str], order: Iterable[str] | None = None
) -> dict[str, BranchBoundary]:
    """
    Members with a father, mother, child, or spouse outside the branch.

    Relatives missing from the tree are ignored.
    """
    boundary: dict[str, BranchBoundary] = {}

    def outside(cr_id: str | None) -> bool:
        return cr_id in tree.nodes and cr_id not in cr_ids

    for cr_id in order if order is not None else cr_ids:
        person = tree.get(cr_id)
        if person is None:
            continue

        connected: list[BranchConnection] = []

        if outside(person.father_cr_id):
            connected.append("paternal")
        if outside(person.mother_cr_id):
            connected.append("maternal")
        if any(outside(child_id) for child_id in person.children_cr_ids):
            connected.append("descendants")
        if any(outside(spouse_id) for spouse_id in person.spouse_cr_ids):
            connected.append("spouse-family")

        if connected:
            boundary[cr_id] = BranchBoundary(person=person, connected_branches=connected)

    return boundary


def generate_grandparent_branches(
    tree: FamilyTree, extraction: BranchExtractionResult, parent_branch: BranchDefinition
) -> list[BranchDefinition]:
    """
    Derive paternal/maternal sub-branches anchored at a branch's root.

    Depth bookkeeping belongs to the caller; this only produces the next level.
    """
    root = extraction.branch_root
    if root is None:
        return []

    sub_branches = []

    if tree.get(root.father_cr_id) is not None:
        sub_branches.append(
            BranchDefinition(
                type="paternal",
                anchor_cr_id=root.cr_id,
                label=f"{parent_branch.label} - Paternal",
                max_generations=parent_branch.max_generations,
            )
        )

    if tree.get(root.mother_cr_id) is not None:
        sub_branches.append(
            BranchDefinition(
                type="maternal",
                anchor_cr_id=root.cr_id,
                label=f"{parent_branch.label} - Maternal",
                max_generations=parent_branch.max_generations,
            )
        )

    return sub_branches


def create_standard_branches(
    tree: FamilyTree,
    anchor_cr_id: str,
    max_generations: int | None = None,
    include_descendants: bool = False,
) -> list[BranchDefinition]:
    """Paternal and maternal branches for a person, plus one descendant branch per child."""
    anchor = tree.get(anchor_cr_id)
    if anchor is None:
        return []

    branches = []

    father = tree.get(anchor.father_cr_id)
    if father is not None:
        branches.append(
            BranchDefinition(
                type="paternal",
                anchor_cr_id=anchor_cr_id,
                label=f"Paternal Line ({father.name or 'Father'})",
                max_generations=max_generations,
            )
        )

    mother = tree.get(anchor.mother_cr_id)
    if mother is not None:
        branches.append(
            BranchDefinition(
                type="maternal",
                anchor_cr_id=anchor_cr_id,
                label=f"Maternal Line ({mother.name or 'Mother'})",
                max_generations=max_generations,
            )
        )

    if include_descendants:
        for child_id in anchor.children_cr_ids:
            child = tree.get(child_id)
            if child is None:
                continue
            branches.append(
                BranchDefinition(
                    type="descendant",
                    anchor_cr_id=anchor_cr_id,
                    child_cr_id=child_id,
                    label=f"Descendants of {child.name or 'Child'}",
                    max_generations=max_generations,
                )
            )

    return branches


def validate_branch(tree: FamilyTree, branch: BranchDefinition) -> None:
    """Raise NotFoundError if the branch refers to people missing from the tree."""
    if branch.anchor_cr_id not in tree.nodes:
        raise NotFoundError(f"Anchor {branch.anchor_cr_id} of branch '{branch.label}' not found")
    if branch.type == "descendant" and branch.child_cr_id not in tree.nodes:
        raise NotFoundError(f"Child {branch.child_cr_id} of branch '{branch.label}' not found")
    if branch.type == "custom" and branch.ancestor_cr_id not in tree.nodes:
        raise NotFoundError(
            f"Ancestor {branch.ancestor_cr_id} of branch '{branch.label}' not found"
        )
