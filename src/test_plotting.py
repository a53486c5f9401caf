"""Tests for the Graphviz split preview. Only DOT text is produced; nothing is rendered."""

from generations import assign_generations
from plotting import build_split_preview, write_split_preview
from ranges import create_generation_ranges


def _preview(tree, per_canvas):
    assignment = assign_generations(tree)
    ranges = create_generation_ranges(assignment.bounds, per_canvas)
    return build_split_preview(tree, assignment, ranges), ranges


class TestBuildSplitPreview:

    def test_one_cluster_per_range(self, family_tree):
        P, ranges = _preview(family_tree, 2)
        clusters = P.get_subgraph_list()
        assert len(clusters) == len(ranges)
        assert clusters[0].get_name() == "cluster_range_0"

    def test_generations_share_a_rank(self, family_tree):
        P, _ = _preview(family_tree, 2)
        # Range "Gen 2-3" holds generations 2 and 3
        top = P.get_subgraph_list()[-1]
        ranks = top.get_subgraph_list()
        assert len(ranks) == 2
        assert all(r.get("rank") == "same" for r in ranks)
        assert ranks[1].get_node("FFF")

    def test_boundary_people_drawn_bold(self, simple_tree):
        P, _ = _preview(simple_tree, 1)
        # Every person in a one-generation-per-range split is a boundary person
        for cluster in P.get_subgraph_list():
            for rank in cluster.get_subgraph_list():
                for node in rank.get_nodes():
                    assert node.get("penwidth") == "2.5"

    def test_interior_people_drawn_plain(self, simple_tree):
        P, _ = _preview(simple_tree, 4)
        top = P.get_subgraph_list()[-1]
        gen_2 = top.get_subgraph_list()[-1]
        assert gen_2.get_node("G")[0].get("penwidth") == "1"

    def test_edges(self, family_tree):
        P, _ = _preview(family_tree, 4)
        edges = P.get_edge_list()
        assert len(edges) == len(family_tree.edges)
        spouse = [e for e in edges if e.get("style") == "dashed"]
        assert len(spouse) == sum(1 for e in family_tree.edges if e.kind == "spouse")
        # Parent edges run child -> parent so the child ranks below
        assert any(e.get_source() == "R" and e.get_destination() == "F" for e in edges)

    def test_write_dot(self, simple_tree, tmp_path):
        P, _ = _preview(simple_tree, 2)
        out = write_split_preview(P, tmp_path / "preview.dot")
        text = out.read_text(encoding="utf-8")
        assert text.startswith("digraph")
        assert "cluster_range_0" in text
