"""
Split orchestration: decompose a family tree into linked canvases.

Generation splits run the generation assigner and range partitioner; branch
splits run the branch extractor, optionally unfolding grandparent lines.
Nothing here writes files: results describe the canvases a persistence layer
should create.
"""

import dataclasses
import logging
from datetime import date
from typing import Protocol

from branches import extract_branch, generate_grandparent_branches
from config import (
    BranchSplitOptions,
    GenerationSplitOptions,
    MediaDetectionOptions,
    PruneOptions,
    SplitOptions,
)
from filenames import generate_canvas_path
from generations import assign_generations
from models import (
    BranchDefinition,
    BranchPreview,
    BranchSplitPreview,
    CanvasData,
    FamilyTree,
    GeneratedCanvas,
    GenerationAssignment,
    GenerationDirection,
    GenerationRange,
    GenerationSplitPreview,
    MediaAssociation,
    Point,
    PruneResult,
    RelatedCanvas,
    SplitResult,
)
from navigation import NavigationNodeGenerator
from pruning import CanvasPruneService
from ranges import (
    assign_people_to_ranges,
    create_generation_ranges,
    find_boundary_people,
    generate_boundary_navigation_nodes,
    get_people_in_range,
    get_relationship_direction,
)

logger = logging.getLogger(__name__)

OVERVIEW_GAP = 50


class MediaAssociationFinder(Protocol):
    """External collaborator that locates media nodes tied to people on a canvas."""

    def find_associated_media(
        self,
        canvas: CanvasData,
        person_cr_ids: set[str],
        options: MediaDetectionOptions,
    ) -> list[MediaAssociation]: ...


# ============================================================================
# Generation splits
# ============================================================================


def _ranges_for(tree: FamilyTree, options: GenerationSplitOptions):
    assignment = assign_generations(tree, options.generation_direction)
    ranges = options.custom_ranges or create_generation_ranges(
        assignment.bounds, options.generations_per_canvas, options.generation_direction
    )
    return assignment, ranges


def _range_side(generation_range: GenerationRange, direction: GenerationDirection) -> str:
    below_root = generation_range.end < 0
    return "descendants" if below_root == (direction == "up") else "ancestors"


def split_by_generation(
    tree: FamilyTree,
    options: GenerationSplitOptions | None = None,
    today: date | None = None,
    generator: NavigationNodeGenerator | None = None,
) -> SplitResult:
    """
    Split a family tree into one canvas per non-empty generation range.

    Args:
        tree: The family tree to split
        options: Split options; defaults to four generations per canvas, counting up
        today: Date substituted for {date} in the filename pattern
        generator: Node generator for navigation portals and the overview canvas

    Returns:
        SplitResult with generated and related canvas information
    """
    options = options or GenerationSplitOptions()
    assignment, ranges = _ranges_for(tree, options)

    assign_people_to_ranges(tree, assignment, ranges)
    assignment.boundary_people = find_boundary_people(tree, assignment, ranges)

    canvases: list[GeneratedCanvas] = []
    related: list[RelatedCanvas] = []
    used_paths: set[str] = set()
    non_empty: list[GenerationRange] = []

    for generation_range in ranges:
        people = assignment.by_range.get(generation_range, [])
        if not people:
            continue

        path = _generation_canvas_path(options, generation_range.label, today)
        if path in used_paths:
            # Labels repeat on both sides of the root
            side = _range_side(generation_range, options.generation_direction)
            path = _generation_canvas_path(options, f"{generation_range.label} {side}", today)
        used_paths.add(path)
        non_empty.append(generation_range)

        span = (generation_range.start, generation_range.end)
        canvases.append(
            GeneratedCanvas(
                path=path,
                label=generation_range.label,
                person_count=len(people),
                generation_range=span,
                pruned_from=_pruned_from(options),
            )
        )
        related.append(
            RelatedCanvas(
                path=path,
                label=generation_range.label,
                direction=get_relationship_direction(
                    generation_range, ranges, options.generation_direction
                ),
                person_count=len(people),
                generation_range=span,
            )
        )

    if options.include_navigation_nodes:
        generator = generator or NavigationNodeGenerator()
        _link_neighbouring_ranges(tree, assignment, non_empty, canvases, generator)

    result = SplitResult(
        canvases=canvases,
        total_people=sum(len(people) for people in assignment.by_range.values()),
        related_canvases=related,
    )
    if options.generate_overview and canvases:
        result.overview_canvas = build_overview_canvas(result, generator)

    logger.info(
        "Generation split: %d canvases, %d people, %d boundary people",
        len(canvases),
        result.total_people,
        len(assignment.boundary_people),
    )
    return result


def _link_neighbouring_ranges(
    tree: FamilyTree,
    assignment: GenerationAssignment,
    ranges: list[GenerationRange],
    canvases: list[GeneratedCanvas],
    generator: NavigationNodeGenerator,
) -> None:
    """Give each canvas portals toward the canvases just below and above it."""
    for i, (generation_range, canvas) in enumerate(zip(ranges, canvases)):
        for j in (i - 1, i + 1):
            if not 0 <= j < len(ranges):
                continue
            pairs = generate_boundary_navigation_nodes(
                tree, assignment, generation_range, ranges[j], canvases[j].path, generator
            )
            canvas.navigation_nodes.extend(node for node, _ in pairs)


def _pruned_from(options: SplitOptions) -> str | None:
    return options.source_canvas if options.remove_from_source else None


def _generation_canvas_path(options: SplitOptions, label: str, today: date | None) -> str:
    return generate_canvas_path(
        options.output_folder, options.filename_pattern, label, "generation", today
    )


def preview_generation_split(
    tree: FamilyTree, options: GenerationSplitOptions | None = None
) -> GenerationSplitPreview:
    """Count people per range without dropping empty ranges."""
    options = options or GenerationSplitOptions()
    assignment, ranges = _ranges_for(tree, options)

    people_counts = {r: len(get_people_in_range(tree, assignment, r)) for r in ranges}
    boundary = find_boundary_people(tree, assignment, ranges)

    return GenerationSplitPreview(
        ranges=ranges,
        people_counts=people_counts,
        boundary_count=len(boundary),
        total_people=sum(people_counts.values()),
    )


# ============================================================================
# Branch splits
# ============================================================================


def _with_default_depth(branch: BranchDefinition, options: SplitOptions) -> BranchDefinition:
    if branch.max_generations is None and options.max_generations is not None:
        return dataclasses.replace(branch, max_generations=options.max_generations)
    return branch


def split_by_branch(
    tree: FamilyTree,
    options: BranchSplitOptions | None = None,
    today: date | None = None,
    generator: NavigationNodeGenerator | None = None,
) -> SplitResult:
    """
    Split a family tree into one canvas per non-empty branch.

    With `split_grandparent_lines` each branch's root is further split into
    paternal and maternal sub-branches, `recursion_depth` levels deep.
    Sub-branch canvases follow their parent branch in the result.
    """
    options = options or BranchSplitOptions()
    canvases: list[GeneratedCanvas] = []
    total_people = 0

    # (branch, parent label, remaining depth); popped from the end
    stack: list[tuple[BranchDefinition, str | None, int]] = [
        (_with_default_depth(b, options), None, options.recursion_depth)
        for b in reversed(options.branches)
    ]

    while stack:
        branch, parent_label, depth = stack.pop()
        extraction = extract_branch(tree, branch, options.include_spouses)
        if not extraction.people:
            logger.debug("Skipping empty branch '%s'", branch.label)
            continue

        canvases.append(
            GeneratedCanvas(
                path=generate_canvas_path(
                    options.output_folder, options.filename_pattern, branch.label, branch.type, today
                ),
                label=branch.label,
                person_count=len(extraction.people),
                branch_type=branch.type,
                anchor_person=branch.anchor_cr_id,
                parent_branch=parent_label,
                pruned_from=_pruned_from(options),
            )
        )
        total_people += len(extraction.people)

        if options.split_grandparent_lines and depth > 0:
            sub_branches = generate_grandparent_branches(tree, extraction, branch)
            stack.extend((sub, branch.label, depth - 1) for sub in reversed(sub_branches))

    result = SplitResult(canvases=canvases, total_people=total_people)
    if options.generate_overview and canvases:
        result.overview_canvas = build_overview_canvas(result, generator)

    logger.info("Branch split: %d canvases, %d people", len(canvases), total_people)
    return result


def preview_branch_split(
    tree: FamilyTree, options: BranchSplitOptions | None = None
) -> BranchSplitPreview:
    """Per-branch counts plus how many people appear in more than one branch."""
    options = options or BranchSplitOptions()
    previews: list[BranchPreview] = []
    seen: set[str] = set()
    total_people = 0
    overlap = 0

    for branch in options.branches:
        branch = _with_default_depth(branch, options)
        extraction = extract_branch(tree, branch, options.include_spouses)

        for cr_id in extraction.cr_ids:
            if cr_id in seen:
                overlap += 1
            else:
                seen.add(cr_id)

        previews.append(
            BranchPreview(
                definition=branch,
                people_count=len(extraction.people),
                boundary_count=len(extraction.boundary_people),
                generation_depth=extraction.generation_depth,
            )
        )
        total_people += len(extraction.people)

    return BranchSplitPreview(branches=previews, total_people=total_people, overlap=overlap)


# ============================================================================
# Overview, source pruning, media
# ============================================================================


def build_overview_canvas(
    result: SplitResult, generator: NavigationNodeGenerator | None = None
) -> CanvasData:
    """An overview canvas with one file-link node per generated canvas, left to right."""
    generator = generator or NavigationNodeGenerator()
    nodes = []
    x = 0.0
    for canvas in result.canvases:
        node = generator.create_canvas_link_node(canvas.path, Point(x, 0))
        nodes.append(node)
        x += node.width + OVERVIEW_GAP
    return CanvasData(nodes=nodes, edges=[])


def prune_extracted_people(
    source: CanvasData,
    cr_ids: set[str],
    target_canvas: str,
    label: str,
    options: SplitOptions,
    service: CanvasPruneService | None = None,
) -> PruneResult | None:
    """
    Remove extracted people from their source canvas when destructive mode is on.

    Returns None (and leaves the source untouched) unless `remove_from_source` is set.
    """
    if not options.remove_from_source:
        return None

    service = service or CanvasPruneService()
    prune_options = PruneOptions(
        add_navigation_node=options.add_navigation_node_to_source,
        target_canvas=target_canvas,
        label=label,
        info=f"{len(cr_ids)} people",
    )
    return service.prune_nodes_by_cr_id(source, cr_ids, prune_options)


def find_associated_media(
    canvas: CanvasData,
    person_cr_ids: set[str],
    finder: MediaAssociationFinder,
    options: MediaDetectionOptions | None = None,
) -> list[MediaAssociation]:
    """Delegate media detection to the external finder."""
    return finder.find_associated_media(canvas, person_cr_ids, options or MediaDetectionOptions())
