"""
1) Load people and relationships from a JSON export.
2) Build a networkx graph and the family tree around a root person.
3) Preview a generation split of the tree.
4) Preview the standard paternal/maternal/descendant branch split.
5) Optionally draw the generation split with Graphviz.
"""

import argparse
import json
import logging
from pathlib import Path

from branches import create_standard_branches
from config import BranchSplitOptions, GenerationSplitOptions
from generations import assign_generations
from graph import build_family_tree, build_graph
from models import Person, Relationship
from plotting import build_split_preview, write_split_preview
from ranges import create_generation_ranges
from splitting import preview_branch_split, preview_generation_split


def load_family_json(path: Path) -> tuple[list[Person], list[Relationship]]:
    """Read {"persons": [...], "relationships": [...]} records."""
    data = json.loads(path.read_text(encoding="utf-8"))
    persons = [
        Person(id=str(p["id"]), name=p.get("name") or str(p["id"]), sex=p.get("sex"))
        for p in data.get("persons", [])
    ]
    relationships = [
        Relationship(
            person1_id=str(r["person1_id"]),
            person2_id=str(r["person2_id"]),
            relationship_type=r["relationship_type"],
        )
        for r in data.get("relationships", [])
    ]
    return persons, relationships


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Preview how a family tree splits into canvases.")
    parser.add_argument("family_json", type=Path, help="JSON file with persons and relationships")
    parser.add_argument("root_id", help="Person the generations are counted from")
    parser.add_argument("--per-canvas", type=int, default=4, help="Generations per canvas")
    parser.add_argument("--direction", choices=("up", "down"), default="up")
    parser.add_argument("--anchor", help="Anchor person for branch split (defaults to root)")
    parser.add_argument("--max-generations", type=int, default=None)
    parser.add_argument("--plot", type=Path, help="Write a Graphviz preview (png, svg, pdf, dot)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    print(f"Loading family data: {args.family_json}")
    persons, relationships = load_family_json(args.family_json)
    print(f"  Found {len(persons)} persons and {len(relationships)} relationships")

    print("Building NetworkX graph...")
    G = build_graph(persons, relationships)
    tree = build_family_tree(G, args.root_id)
    print(f"  Tree rooted at {tree.root.name} has {len(tree.nodes)} people")

    print("Previewing generation split...")
    generation_options = GenerationSplitOptions(
        generations_per_canvas=args.per_canvas,
        generation_direction=args.direction,
    )
    preview = preview_generation_split(tree, generation_options)
    for generation_range in preview.ranges:
        count = preview.people_counts[generation_range]
        print(
            f"  {generation_range.label:<20} "
            f"[{generation_range.start}, {generation_range.end}]  {count} people"
        )
    print(f"  {preview.boundary_count} boundary people, {preview.total_people} total")

    print("Previewing branch split...")
    anchor_id = args.anchor or args.root_id
    branches = create_standard_branches(
        tree, anchor_id, max_generations=args.max_generations, include_descendants=True
    )
    if branches:
        branch_preview = preview_branch_split(tree, BranchSplitOptions(branches=branches))
        for entry in branch_preview.branches:
            print(
                f"  {entry.definition.label:<40} {entry.people_count} people, "
                f"depth {entry.generation_depth}, {entry.boundary_count} boundary"
            )
        print(f"  {branch_preview.total_people} total, {branch_preview.overlap} overlapping")
    else:
        print("  No parents or children to branch from")

    if args.plot:
        print(f"Plotting generation split to: {args.plot}")
        assignment = assign_generations(tree, args.direction)
        ranges = create_generation_ranges(assignment.bounds, args.per_canvas, args.direction)
        write_split_preview(build_split_preview(tree, assignment, ranges), args.plot)

    print("Done!")


if __name__ == "__main__":
    main()
