"""Conversion between canvas JSON structures and the canvas data classes."""

import json
from typing import Any

from models import CanvasData, CanvasEdge, CanvasNode

NODE_FIELDS = ("id", "type", "file", "text", "x", "y", "width", "height", "color", "label")
EDGE_FIELDS = (
    "id",
    "fromNode",
    "fromSide",
    "fromEnd",
    "toNode",
    "toSide",
    "toEnd",
    "color",
    "label",
)


def node_from_dict(data: dict[str, Any]) -> CanvasNode:
    return CanvasNode(
        id=data["id"],
        type=data["type"],
        x=data["x"],
        y=data["y"],
        width=data["width"],
        height=data["height"],
        file=data.get("file"),
        text=data.get("text"),
        color=data.get("color"),
        label=data.get("label"),
        extra={k: v for k, v in data.items() if k not in NODE_FIELDS},
    )


def node_to_dict(node: CanvasNode) -> dict[str, Any]:
    data: dict[str, Any] = {"id": node.id, "type": node.type}
    if node.file is not None:
        data["file"] = node.file
    if node.text is not None:
        data["text"] = node.text
    data.update(x=node.x, y=node.y, width=node.width, height=node.height)
    if node.color is not None:
        data["color"] = node.color
    if node.label is not None:
        data["label"] = node.label
    data.update(node.extra)
    return data


def edge_from_dict(data: dict[str, Any]) -> CanvasEdge:
    return CanvasEdge(
        id=data["id"],
        from_node=data["fromNode"],
        to_node=data["toNode"],
        from_side=data.get("fromSide"),
        to_side=data.get("toSide"),
        from_end=data.get("fromEnd"),
        to_end=data.get("toEnd"),
        color=data.get("color"),
        label=data.get("label"),
        extra={k: v for k, v in data.items() if k not in EDGE_FIELDS},
    )


def edge_to_dict(edge: CanvasEdge) -> dict[str, Any]:
    data: dict[str, Any] = {"id": edge.id, "fromNode": edge.from_node}
    if edge.from_side is not None:
        data["fromSide"] = edge.from_side
    if edge.from_end is not None:
        data["fromEnd"] = edge.from_end
    data["toNode"] = edge.to_node
    if edge.to_side is not None:
        data["toSide"] = edge.to_side
    if edge.to_end is not None:
        data["toEnd"] = edge.to_end
    if edge.color is not None:
        data["color"] = edge.color
    if edge.label is not None:
        data["label"] = edge.label
    data.update(edge.extra)
    return data


def canvas_from_dict(data: dict[str, Any]) -> CanvasData:
    """Build CanvasData from parsed canvas JSON. Missing required keys raise KeyError."""
    return CanvasData(
        nodes=[node_from_dict(n) for n in data.get("nodes", [])],
        edges=[edge_from_dict(e) for e in data.get("edges", [])],
        groups=data.get("groups"),
        metadata=dict(data.get("metadata") or {}),
    )


def canvas_to_dict(canvas: CanvasData) -> dict[str, Any]:
    data: dict[str, Any] = {
        "nodes": [node_to_dict(n) for n in canvas.nodes],
        "edges": [edge_to_dict(e) for e in canvas.edges],
    }
    if canvas.groups is not None:
        data["groups"] = canvas.groups
    if canvas.metadata:
        data["metadata"] = canvas.metadata
    return data


def _compact(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def format_canvas_json(canvas: CanvasData) -> str:
    """
    Serialize a canvas the way Obsidian writes canvas files.

    Each node and edge sits compactly on its own line; the top-level
    structure is tab indented, and metadata always carries a frontmatter
    object.
    """
    lines = ["{", '\t"nodes":[']

    nodes = [node_to_dict(n) for n in canvas.nodes]
    for i, node in enumerate(nodes):
        suffix = "," if i < len(nodes) - 1 else ""
        lines.append(f"\t\t{_compact(node)}{suffix}")
    lines.append("\t],")

    lines.append('\t"edges":[')
    edges = [edge_to_dict(e) for e in canvas.edges]
    for i, edge in enumerate(edges):
        suffix = "," if i < len(edges) - 1 else ""
        lines.append(f"\t\t{_compact(edge)}{suffix}")
    lines.append("\t],")

    lines.append('\t"metadata":{')
    version = canvas.metadata.get("version")
    if version:
        lines.append(f'\t\t"version":{_compact(version)},')
    lines.append(f'\t\t"frontmatter":{_compact(canvas.metadata.get("frontmatter") or {})}')
    lines.append("\t}")

    lines.append("}")
    return "\n".join(lines)
