"""Graphviz preview of a generation split, for checking ranges by eye."""

import logging
from pathlib import Path

import pydot

from models import FamilyTree, GenerationAssignment, GenerationRange
from ranges import find_boundary_people, find_range

logger = logging.getLogger(__name__)


def build_split_preview(
    tree: FamilyTree, assignment: GenerationAssignment, ranges: list[GenerationRange]
) -> pydot.Dot:
    """
    Build a pydot graph showing how people fall into generation ranges.

    - Each range is a cluster, highest generation at the top
    - People of one generation share a rank
    - Boundary people (with a parent or child in another range) are drawn bold
    - Parent->child edges point down; spouse edges have no arrow

    Args:
        tree: The family tree
        assignment: Generation numbers for the tree
        ranges: Ranges to draw

    Returns:
        A pydot.Dot ready to write
    """
    P = pydot.Dot(graph_type="digraph")
    P.set("rankdir", "BT")  # Higher generations drawn above lower ones
    P.set("nodesep", "0.4")
    P.set("ranksep", "0.6")
    P.set("compound", "true")

    boundary = find_boundary_people(tree, assignment, ranges)

    # Group people into ranges, then generations
    by_cluster: dict[GenerationRange, dict[int, list[str]]] = {}
    for cr_id, generation in assignment.generation_map.items():
        generation_range = find_range(generation, ranges)
        if generation_range is None:
            continue
        by_cluster.setdefault(generation_range, {}).setdefault(generation, []).append(cr_id)

    for i, generation_range in enumerate(ranges):
        cluster = pydot.Cluster(
            f"range_{i}",
            label=generation_range.label,
            style="rounded",
            color="darkgray",
        )
        generations = sorted(by_cluster.get(generation_range, {}).items())
        for j, (_, members) in enumerate(generations):
            rank = pydot.Subgraph(f"gen_{i}_{j}", rank="same")
            for cr_id in members:
                rank.add_node(_person_node(tree, cr_id, cr_id in boundary))
            cluster.add_subgraph(rank)
        P.add_subgraph(cluster)

    for edge in tree.edges:
        if edge.from_cr_id not in assignment.generation_map:
            continue
        if edge.to_cr_id not in assignment.generation_map:
            continue

        if edge.kind == "spouse":
            P.add_edge(_edge(edge.from_cr_id, edge.to_cr_id, dir="none", style="dashed"))
        elif edge.kind == "parent":
            # Child below parent: draw child -> parent with the arrow reversed
            P.add_edge(_edge(edge.to_cr_id, edge.from_cr_id, dir="back", color="darkgray"))
        else:
            P.add_edge(_edge(edge.from_cr_id, edge.to_cr_id, dir="back", color="darkgray"))

    return P


def _edge(u: str, v: str, **attrs) -> pydot.Edge:
    return pydot.Edge(str(u), str(v), **attrs)


def _person_node(tree: FamilyTree, cr_id: str, is_boundary: bool) -> pydot.Node:
    person = tree.nodes[cr_id]

    # Color by sex
    if person.sex == "M":
        fillcolor = "lightblue"
    elif person.sex == "F":
        fillcolor = "lightpink"
    else:
        fillcolor = "lightgray"

    return pydot.Node(
        str(cr_id),
        label=person.name,
        shape="box",
        style="rounded,filled,bold" if is_boundary else "rounded,filled",
        penwidth="2.5" if is_boundary else "1",
        fillcolor=fillcolor,
        fontsize="10",
    )


def write_split_preview(P: pydot.Dot, output_path: Path) -> Path:
    """Write the preview; format follows the file extension (png, svg, pdf, or dot)."""
    ext = output_path.suffix.lower().lstrip(".")

    if ext == "dot":
        output_path.write_text(P.to_string(), encoding="utf-8")
    else:
        if ext not in ("png", "svg", "pdf"):
            ext = "png"
        P.write(str(output_path), format=ext)

    logger.info("Split preview saved to %s", output_path)
    return output_path
