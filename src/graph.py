"""NetworkX graph building and conversion to the family tree model."""

import logging

import networkx as nx

from errors import NotFoundError
from models import (
    PARENT_OF,
    SPOUSE_OF,
    FamilyEdge,
    FamilyTree,
    Person,
    PersonNode,
    Relationship,
)

logger = logging.getLogger(__name__)


def build_graph(persons: list[Person], relationships: list[Relationship]) -> nx.DiGraph:
    """Build a NetworkX directed graph from person and relationship records."""
    G = nx.DiGraph()

    # Note: use 'person_name' instead of 'name' to avoid conflict with pydot
    for p in persons:
        G.add_node(p.id, person_name=p.name, sex=p.sex)

    for r in relationships:
        # Relationships may point at people outside the export; keep them as bare nodes
        G.add_edge(r.person1_id, r.person2_id, relationship_type=r.relationship_type)

    return G


def build_family_tree(G: nx.DiGraph, root_id: str) -> FamilyTree:
    """
    Convert the connected component around `root_id` into a FamilyTree.

    PARENT_OF edges go from parent to child. A parent with sex "M" fills the
    father slot and "F" the mother slot; a parent of unknown sex takes the
    first free slot. Extra parents beyond two are ignored.

    Args:
        G: Graph with PARENT_OF and SPOUSE_OF edges
        root_id: The person ID to root the tree on

    Returns:
        A FamilyTree holding every person connected to the root
    """
    if root_id not in G:
        raise NotFoundError(f"Person ID {root_id} not found in graph")

    # Use undirected view to pick up parents, children, and spouses alike
    component = nx.node_connected_component(G.to_undirected(as_view=True), root_id)

    nodes: dict[str, PersonNode] = {}
    for n in G.nodes:
        if n not in component:
            continue
        data = G.nodes[n]
        nodes[n] = PersonNode(
            cr_id=n,
            name=data.get("person_name") or str(n),
            sex=data.get("sex"),
        )

    edges: list[FamilyEdge] = []
    seen_couples: set[tuple] = set()

    for u, v, edata in G.edges(data=True):
        if u not in nodes or v not in nodes:
            continue
        relationship_type = edata.get("relationship_type")

        if relationship_type == PARENT_OF:
            parent, child = nodes[u], nodes[v]
            if not _attach_parent(child, parent):
                logger.debug("Ignoring extra parent %s of %s", parent.cr_id, child.cr_id)
                continue
            if child.cr_id not in parent.children_cr_ids:
                parent.children_cr_ids.append(child.cr_id)
            edges.append(FamilyEdge(parent.cr_id, child.cr_id, "parent"))

        elif relationship_type == SPOUSE_OF:
            a, b = tuple(sorted([u, v], key=str))
            if (a, b) in seen_couples or a == b:
                continue
            seen_couples.add((a, b))
            if b not in nodes[a].spouse_cr_ids:
                nodes[a].spouse_cr_ids.append(b)
            if a not in nodes[b].spouse_cr_ids:
                nodes[b].spouse_cr_ids.append(a)
            edges.append(FamilyEdge(u, v, "spouse"))

    logger.debug(
        "Built family tree rooted at %s: %d people, %d edges", root_id, len(nodes), len(edges)
    )
    return FamilyTree(root=nodes[root_id], nodes=nodes, edges=edges)


def _attach_parent(child: PersonNode, parent: PersonNode) -> bool:
    """Record `parent` on `child`. Returns False when no parent slot is left."""
    if parent.cr_id in (child.father_cr_id, child.mother_cr_id):
        return True

    if parent.sex == "M" and child.father_cr_id is None:
        child.father_cr_id = parent.cr_id
    elif parent.sex == "F" and child.mother_cr_id is None:
        child.mother_cr_id = parent.cr_id
    elif parent.sex not in ("M", "F") and child.father_cr_id is None:
        child.father_cr_id = parent.cr_id
    elif parent.sex not in ("M", "F") and child.mother_cr_id is None:
        child.mother_cr_id = parent.cr_id
    else:
        return False
    return True


def family_tree_to_graph(tree: FamilyTree) -> nx.DiGraph:
    """Build a NetworkX directed graph back out of a FamilyTree."""
    G = nx.DiGraph()

    for person in tree.nodes.values():
        G.add_node(person.cr_id, person_name=person.name, sex=person.sex)

    for person in tree.nodes.values():
        for parent_id in (person.father_cr_id, person.mother_cr_id):
            if parent_id in tree.nodes:
                G.add_edge(parent_id, person.cr_id, relationship_type=PARENT_OF)
        for spouse_id in person.spouse_cr_ids:
            if spouse_id in tree.nodes and not G.has_edge(spouse_id, person.cr_id):
                G.add_edge(person.cr_id, spouse_id, relationship_type=SPOUSE_OF)

    return G
