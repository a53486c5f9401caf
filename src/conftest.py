"""Shared fixtures: small hand-built family trees and canvases."""

import pytest

from ids import sequential_ids
from models import CanvasData, CanvasEdge, CanvasNode, FamilyEdge, FamilyTree, PersonNode


def make_tree(people: list[PersonNode], root_id: str) -> FamilyTree:
    """Build a FamilyTree, deriving parent and spouse edges from the person records."""
    nodes = {p.cr_id: p for p in people}
    edges: list[FamilyEdge] = []
    seen_couples: set[tuple[str, str]] = set()

    for person in people:
        for parent_id in (person.father_cr_id, person.mother_cr_id):
            if parent_id:
                edges.append(FamilyEdge(parent_id, person.cr_id, "parent"))
        for spouse_id in person.spouse_cr_ids:
            couple = tuple(sorted((person.cr_id, spouse_id)))
            if couple not in seen_couples:
                seen_couples.add(couple)
                edges.append(FamilyEdge(person.cr_id, spouse_id, "spouse"))

    return FamilyTree(root=nodes[root_id], nodes=nodes, edges=edges)


@pytest.fixture
def simple_tree():
    """Root R, father F, grandfather G, child C."""
    return make_tree(
        [
            PersonNode("R", "Root", father_cr_id="F", children_cr_ids=["C"], sex="M"),
            PersonNode("F", "Father", father_cr_id="G", children_cr_ids=["R"], sex="M"),
            PersonNode("G", "Grandfather", children_cr_ids=["F"], sex="M"),
            PersonNode("C", "Child", father_cr_id="R", sex="F"),
        ],
        "R",
    )


@pytest.fixture
def family_tree():
    """
    Three generations of ancestors, a spouse, and two generations of descendants.

        FFF
         |
      FF + FM      MF + MM
          |            |
          F     +      M
                |
                R + S
                |
          C1 + C1S    C2
             |
            GC1
    """
    return make_tree(
        [
            PersonNode("R", "Robert Root", "F", "M", ["S"], ["C1", "C2"], sex="M"),
            PersonNode("S", "Sarah Spouse", spouse_cr_ids=["R"], children_cr_ids=["C1", "C2"], sex="F"),
            PersonNode("F", "Frank Father", "FF", "FM", ["M"], ["R"], sex="M"),
            PersonNode("M", "Mary Mother", "MF", "MM", ["F"], ["R"], sex="F"),
            PersonNode("FF", "Fred Grandfather", "FFF", None, ["FM"], ["F"], sex="M"),
            PersonNode("FM", "Flora Grandmother", spouse_cr_ids=["FF"], children_cr_ids=["F"], sex="F"),
            PersonNode("MF", "Milo Grandfather", spouse_cr_ids=["MM"], children_cr_ids=["M"], sex="M"),
            PersonNode("MM", "Mabel Grandmother", spouse_cr_ids=["MF"], children_cr_ids=["M"], sex="F"),
            PersonNode("FFF", "Felix Great-Grandfather", children_cr_ids=["FF"], sex="M"),
            PersonNode("C1", "Carl Child", "R", "S", ["C1S"], ["GC1"], sex="M"),
            PersonNode("C1S", "Clara In-law", spouse_cr_ids=["C1"], children_cr_ids=["GC1"], sex="F"),
            PersonNode("C2", "Cora Child", "R", "S", sex="F"),
            PersonNode("GC1", "Gus Grandchild", "C1", "C1S", sex="M"),
        ],
        "R",
    )


@pytest.fixture
def ids():
    return sequential_ids("n")


@pytest.fixture
def two_node_canvas():
    """A(0,0,100,100) -> B(200,0,100,100)."""
    return CanvasData(
        nodes=[
            CanvasNode("A", "file", 0, 0, 100, 100, file="People/A.md"),
            CanvasNode("B", "file", 200, 0, 100, 100, file="People/B.md"),
        ],
        edges=[CanvasEdge("AB", "A", "B", from_side="right", to_side="left")],
    )
