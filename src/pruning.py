"""Removing a region of a canvas and leaving a portal where it used to be."""

import logging
import re
import time

from config import PruneOptions
from ids import IdGenerator, new_canvas_id
from models import (
    BoundingBox,
    CanvasData,
    CanvasEdge,
    CanvasNode,
    NavigationDirection,
    Point,
    PrunedSectionInfo,
    PruneResult,
)
from navigation import NAVIGATION_COLOR, NavigationNodeGenerator

logger = logging.getLogger(__name__)

# Person notes are stored as path/to/{cr_id}.md
CR_ID_FROM_PATH = re.compile(r"([^/]+)\.md$")


def calculate_centroid(nodes: list[CanvasNode]) -> Point:
    """Mean of the node centers; (0, 0) for no nodes."""
    if not nodes:
        return Point(0, 0)

    sum_x = sum(node.x + node.width / 2 for node in nodes)
    sum_y = sum(node.y + node.height / 2 for node in nodes)
    return Point(sum_x / len(nodes), sum_y / len(nodes))


def calculate_bounding_box(nodes: list[CanvasNode]) -> BoundingBox:
    if not nodes:
        return BoundingBox()

    return BoundingBox(
        min_x=min(node.x for node in nodes),
        min_y=min(node.y for node in nodes),
        max_x=max(node.x + node.width for node in nodes),
        max_y=max(node.y + node.height for node in nodes),
    )


def infer_direction(
    removed_nodes: list[CanvasNode], remaining_nodes: list[CanvasNode]
) -> NavigationDirection:
    """
    Direction from the remaining content toward the removed content.

    The axis with the larger centroid offset wins; ties go to the vertical
    axis. Defaults to "down" when either side is empty.
    """
    if not removed_nodes or not remaining_nodes:
        return "down"

    removed = calculate_centroid(removed_nodes)
    remaining = calculate_centroid(remaining_nodes)
    dx = removed.x - remaining.x
    dy = removed.y - remaining.y

    if abs(dx) > abs(dy):
        return "right" if dx > 0 else "left"
    return "down" if dy > 0 else "up"


def extract_cr_id_from_path(file_path: str) -> str | None:
    match = CR_ID_FROM_PATH.search(file_path)
    return match.group(1) if match else None


class CanvasPruneService:
    """Prunes nodes out of a canvas, rewiring boundary edges to a navigation node."""

    def __init__(
        self,
        id_generator: IdGenerator | None = None,
        navigation_generator: NavigationNodeGenerator | None = None,
    ):
        self.id_generator = id_generator or new_canvas_id
        self.navigation_generator = navigation_generator or NavigationNodeGenerator(
            self.id_generator
        )

    def prune_nodes(
        self,
        canvas: CanvasData,
        node_ids: set[str],
        options: PruneOptions | None = None,
    ) -> PruneResult:
        """
        Remove nodes from a canvas in place.

        Edges with both ends removed are dropped. Edges with one end removed
        are boundary edges: they are dropped too, and their surviving
        endpoints are reported as affected. When a navigation node is
        requested (and something was actually removed) a portal is placed at
        the centroid of the removed nodes and each affected node gets one
        edge to it.

        Args:
            canvas: Canvas data, modified in place
            node_ids: IDs of nodes to remove
            options: Navigation node settings

        Returns:
            PruneResult describing what was removed and added
        """
        options = options or PruneOptions()

        removed_nodes: list[CanvasNode] = []
        remaining_nodes: list[CanvasNode] = []
        for node in canvas.nodes:
            (removed_nodes if node.id in node_ids else remaining_nodes).append(node)

        removed_edges: list[CanvasEdge] = []
        remaining_edges: list[CanvasEdge] = []
        boundary_edges: list[CanvasEdge] = []
        for edge in canvas.edges:
            from_removed = edge.from_node in node_ids
            to_removed = edge.to_node in node_ids

            if from_removed and to_removed:
                removed_edges.append(edge)
            elif from_removed or to_removed:
                boundary_edges.append(edge)
                removed_edges.append(edge)
            else:
                remaining_edges.append(edge)

        centroid = calculate_centroid(removed_nodes)

        # Ordered set of surviving endpoints
        affected: dict[str, None] = {}
        for edge in boundary_edges:
            if edge.from_node not in node_ids:
                affected[edge.from_node] = None
            if edge.to_node not in node_ids:
                affected[edge.to_node] = None
        affected_nodes = list(affected)

        result = PruneResult(
            removed_nodes=removed_nodes,
            removed_edges=removed_edges,
            centroid=centroid,
            affected_nodes=affected_nodes,
        )

        if options.add_navigation_node and options.target_canvas and removed_nodes:
            direction = options.direction or infer_direction(removed_nodes, remaining_nodes)
            navigation_node = self.navigation_generator.create_portal_node(
                options.target_canvas,
                options.label or "Extracted Content",
                centroid,
                direction,
                options.info,
            )
            navigation_edges = self.create_navigation_edges(
                affected_nodes, navigation_node.id, boundary_edges
            )

            remaining_nodes.append(navigation_node)
            remaining_edges.extend(navigation_edges)
            result.navigation_node = navigation_node
            result.navigation_edges = navigation_edges

        canvas.nodes = remaining_nodes
        canvas.edges = remaining_edges

        logger.info(
            "Pruned %d nodes and %d edges (%d affected)%s",
            len(removed_nodes),
            len(removed_edges),
            len(affected_nodes),
            " with navigation node" if result.navigation_node else "",
        )
        return result

    def prune_nodes_by_cr_id(
        self,
        canvas: CanvasData,
        cr_ids: set[str],
        options: PruneOptions | None = None,
    ) -> PruneResult:
        """Prune the file nodes whose note path ends in "{cr_id}.md"."""
        node_ids = set()
        for node in canvas.nodes:
            if node.type != "file" or not node.file:
                continue
            cr_id = extract_cr_id_from_path(node.file)
            if cr_id and cr_id in cr_ids:
                node_ids.add(node.id)

        return self.prune_nodes(canvas, node_ids, options)

    def create_navigation_edges(
        self,
        affected_node_ids: list[str],
        navigation_node_id: str,
        boundary_edges: list[CanvasEdge],
    ) -> list[CanvasEdge]:
        """
        One edge per affected node to the navigation node.

        Orientation and side hints come from a boundary edge
        that starts at the affected node when there is one, otherwise from
        the first boundary edge that ends there.
        """
        edges = []

        for node_id in affected_node_ids:
            touching = [e for e in boundary_edges if node_id in (e.from_node, e.to_node)]
            template = next((e for e in touching if e.from_node == node_id), None)
            if template is None and touching:
                template = touching[0]

            was_from = template is not None and template.from_node == node_id

            edges.append(
                CanvasEdge(
                    id=self.id_generator(),
                    from_node=node_id if was_from else navigation_node_id,
                    to_node=navigation_node_id if was_from else node_id,
                    from_side=template.from_side if template else None,
                    to_side=template.to_side if template else None,
                    color=NAVIGATION_COLOR,
                )
            )

        return edges


def describe_pruned_section(
    result: PruneResult,
    removed_cr_ids: list[str],
    options: PruneOptions,
    timestamp: float | None = None,
) -> PrunedSectionInfo:
    """Bookkeeping record for a section pruned out of a source canvas."""
    return PrunedSectionInfo(
        extracted_to_canvas=options.target_canvas or "",
        removed_cr_ids=list(removed_cr_ids),
        label=options.label,
        timestamp=time.time() if timestamp is None else timestamp,
        navigation_node_id=result.navigation_node.id if result.navigation_node else None,
    )
