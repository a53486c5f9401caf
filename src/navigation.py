"""Synthetic canvas nodes that point a viewer at another canvas."""

import re

from ids import IdGenerator, new_canvas_id
from models import CanvasNode, NavigationDirection, PersonNode, Point

NAVIGATION_COLOR = "5"  # cyan
PLACEHOLDER_COLOR = "2"  # orange

DIRECTION_ARROWS: dict[str, str] = {
    "up": "↑",
    "down": "↓",
    "left": "←",
    "right": "→",
}


def direction_arrow(direction: NavigationDirection) -> str:
    return DIRECTION_ARROWS[direction]


def canvas_display_name(target_canvas: str) -> str:
    """'Trees/smith-line.canvas' -> 'smith-line'."""
    name = re.sub(r"\.canvas$", "", target_canvas).split("/")[-1]
    return name or target_canvas


def canvas_wikilink(target_canvas: str) -> str:
    return f"[[{target_canvas}|{canvas_display_name(target_canvas)}]]"


class NavigationNodeGenerator:
    """Builds portal, placeholder, and file-link nodes. No graph traversal."""

    def __init__(
        self,
        id_generator: IdGenerator | None = None,
        node_width: float = 200,
        node_height: float = 100,
    ):
        self.id_generator = id_generator or new_canvas_id
        self.node_width = node_width
        self.node_height = node_height

    def create_portal_node(
        self,
        target_canvas: str,
        label: str,
        position: Point,
        direction: NavigationDirection,
        info: str | None = None,
    ) -> CanvasNode:
        """
        Create a text node linking to another canvas.

        Args:
            target_canvas: Path to the target canvas
            label: Display label (e.g., "Ancestors", "Smith Line")
            position: Top-left position for the node
            direction: Arrow shown in front of the label
            info: Optional extra line (e.g., "4 more generations")
        """
        lines = [f"{direction_arrow(direction)} **{label}**"]
        if info:
            lines.append(info)
        lines.append(canvas_wikilink(target_canvas))

        return CanvasNode(
            id=self.id_generator(),
            type="text",
            text="\n".join(lines),
            x=position.x,
            y=position.y,
            width=self.node_width,
            height=self.node_height,
            color=NAVIGATION_COLOR,
        )

    def create_placeholder_node(
        self, person: PersonNode, target_canvas: str, position: Point
    ) -> CanvasNode:
        """Create a text node standing in for a person detailed on another canvas."""
        text = f"**{person.name}**\n───────────\nSee: {canvas_wikilink(target_canvas)}"

        return CanvasNode(
            id=self.id_generator(),
            type="text",
            text=text,
            x=position.x,
            y=position.y,
            width=self.node_width,
            height=self.node_height,
            color=PLACEHOLDER_COLOR,
        )

    def create_canvas_link_node(
        self,
        target_canvas: str,
        position: Point,
        size: tuple[float, float] | None = None,
    ) -> CanvasNode:
        width, height = size if size else (self.node_width, self.node_height)
        return CanvasNode(
            id=self.id_generator(),
            type="file",
            file=target_canvas,
            x=position.x,
            y=position.y,
            width=width,
            height=height,
        )

    def create_back_to_overview_node(self, overview_canvas: str, position: Point) -> CanvasNode:
        return self.create_portal_node(
            overview_canvas, "Overview", position, "up", "Back to overview"
        )
