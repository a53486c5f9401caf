"""Tests for navigation node construction."""

import pytest

from ids import sequential_ids
from models import PersonNode, Point
from navigation import (
    NAVIGATION_COLOR,
    PLACEHOLDER_COLOR,
    NavigationNodeGenerator,
    canvas_display_name,
    direction_arrow,
)


@pytest.fixture
def generator():
    return NavigationNodeGenerator(sequential_ids("nav"))


class TestDisplayName:

    def test_strips_folder_and_extension(self):
        assert canvas_display_name("Trees/Smith/smith-line.canvas") == "smith-line"

    def test_plain_name(self):
        assert canvas_display_name("overview.canvas") == "overview"
        assert canvas_display_name("notes") == "notes"

    @pytest.mark.parametrize(
        "direction,arrow", [("up", "↑"), ("down", "↓"), ("left", "←"), ("right", "→")]
    )
    def test_arrows(self, direction, arrow):
        assert direction_arrow(direction) == arrow


class TestNavigationNodeGenerator:

    def test_portal_node(self, generator):
        node = generator.create_portal_node(
            "Trees/ancestors.canvas", "Ancestors", Point(10, 20), "up", "4 more generations"
        )
        assert node.id == "nav-1"
        assert node.type == "text"
        assert node.text == "↑ **Ancestors**\n4 more generations\n[[Trees/ancestors.canvas|ancestors]]"
        assert (node.x, node.y, node.width, node.height) == (10, 20, 200, 100)
        assert node.color == NAVIGATION_COLOR

    def test_portal_without_info(self, generator):
        node = generator.create_portal_node("x.canvas", "Next", Point(0, 0), "right")
        assert node.text == "→ **Next**\n[[x.canvas|x]]"

    def test_placeholder_node(self, generator):
        person = PersonNode("abc-123-def-456", "Ada Lovelace")
        node = generator.create_placeholder_node(person, "Trees/byron.canvas", Point(5, 5))
        assert node.text == "**Ada Lovelace**\n───────────\nSee: [[Trees/byron.canvas|byron]]"
        assert node.color == PLACEHOLDER_COLOR

    def test_canvas_link_node(self, generator):
        node = generator.create_canvas_link_node("Trees/a.canvas", Point(1, 2))
        assert node.type == "file"
        assert node.file == "Trees/a.canvas"
        assert (node.width, node.height) == (200, 100)
        assert node.color is None

        sized = generator.create_canvas_link_node("Trees/a.canvas", Point(1, 2), (400, 300))
        assert (sized.width, sized.height) == (400, 300)

    def test_back_to_overview(self, generator):
        node = generator.create_back_to_overview_node("overview.canvas", Point(0, 0))
        assert node.text == "↑ **Overview**\nBack to overview\n[[overview.canvas|overview]]"

    def test_ids_are_fresh_per_call(self, generator):
        first = generator.create_canvas_link_node("a.canvas", Point(0, 0))
        second = generator.create_canvas_link_node("a.canvas", Point(0, 0))
        assert first.id != second.id

    def test_default_ids_are_uuid_hex(self):
        node = NavigationNodeGenerator().create_canvas_link_node("a.canvas", Point(0, 0))
        assert len(node.id) == 32
        int(node.id, 16)
