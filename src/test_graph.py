"""Tests for the networkx graph provider."""

import networkx as nx
import pytest

from errors import NotFoundError
from graph import build_family_tree, build_graph, family_tree_to_graph
from models import PARENT_OF, SPOUSE_OF, Person, Relationship


@pytest.fixture
def records():
    persons = [
        Person("dad", "John Smith", "M"),
        Person("mom", "Jane Doe", "F"),
        Person("kid", "Jim Smith", "M"),
        Person("other", "Unrelated", None),
    ]
    relationships = [
        Relationship("mom", "kid", PARENT_OF),
        Relationship("dad", "kid", PARENT_OF),
        Relationship("dad", "mom", SPOUSE_OF),
    ]
    return persons, relationships


class TestBuildGraph:

    def test_nodes_and_edges(self, records):
        G = build_graph(*records)
        assert isinstance(G, nx.DiGraph)
        assert G.nodes["dad"]["person_name"] == "John Smith"
        assert G.nodes["other"]["sex"] is None
        assert G.edges["mom", "kid"]["relationship_type"] == PARENT_OF

    def test_dangling_relationship_adds_bare_node(self):
        G = build_graph([Person("a", "A")], [Relationship("a", "ghost", PARENT_OF)])
        assert "ghost" in G
        assert "person_name" not in G.nodes["ghost"]


class TestBuildFamilyTree:

    def test_parent_slots_follow_sex(self, records):
        tree = build_family_tree(build_graph(*records), "kid")
        kid = tree.nodes["kid"]
        # Slots follow sex, not relationship order
        assert (kid.father_cr_id, kid.mother_cr_id) == ("dad", "mom")
        assert tree.nodes["dad"].children_cr_ids == ["kid"]

    def test_spouses_are_mutual(self, records):
        tree = build_family_tree(build_graph(*records), "kid")
        assert tree.nodes["dad"].spouse_cr_ids == ["mom"]
        assert tree.nodes["mom"].spouse_cr_ids == ["dad"]
        assert sum(1 for e in tree.edges if e.kind == "spouse") == 1

    def test_only_connected_component(self, records):
        tree = build_family_tree(build_graph(*records), "kid")
        assert set(tree.nodes) == {"dad", "mom", "kid"}
        assert tree.root.cr_id == "kid"

    def test_unknown_sex_takes_first_free_slot(self):
        G = build_graph(
            [Person("p1", "P1"), Person("p2", "P2"), Person("c", "C")],
            [Relationship("p1", "c", PARENT_OF), Relationship("p2", "c", PARENT_OF)],
        )
        c = build_family_tree(G, "c").nodes["c"]
        assert (c.father_cr_id, c.mother_cr_id) == ("p1", "p2")

    def test_third_parent_ignored(self):
        G = build_graph(
            [Person("a", "A", "M"), Person("b", "B", "F"), Person("x", "X"), Person("c", "C")],
            [
                Relationship("a", "c", PARENT_OF),
                Relationship("b", "c", PARENT_OF),
                Relationship("x", "c", PARENT_OF),
            ],
        )
        tree = build_family_tree(G, "c")
        assert sum(1 for e in tree.edges if e.kind == "parent") == 2
        assert tree.nodes["x"].children_cr_ids == []

    def test_missing_root(self, records):
        with pytest.raises(NotFoundError):
            build_family_tree(build_graph(*records), "nobody")

    def test_missing_root_is_lookup_error(self, records):
        with pytest.raises(LookupError):
            build_family_tree(build_graph(*records), "nobody")


class TestFamilyTreeToGraph:

    def test_round_trip_edges(self, family_tree):
        G = family_tree_to_graph(family_tree)
        assert G.number_of_nodes() == len(family_tree.nodes)
        assert G.edges["F", "R"]["relationship_type"] == PARENT_OF
        # One directed edge per couple
        assert G.has_edge("R", "S") != G.has_edge("S", "R")

    def test_rebuilds_same_tree(self, family_tree):
        rebuilt = build_family_tree(family_tree_to_graph(family_tree), "R")
        assert set(rebuilt.nodes) == set(family_tree.nodes)
        for cr_id, person in family_tree.nodes.items():
            assert rebuilt.nodes[cr_id].father_cr_id == person.father_cr_id
            assert rebuilt.nodes[cr_id].mother_cr_id == person.mother_cr_id
            assert sorted(rebuilt.nodes[cr_id].spouse_cr_ids) == sorted(person.spouse_cr_ids)
