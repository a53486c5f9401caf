"""Data classes for family tree entities, splits, and canvas elements."""

from dataclasses import dataclass, field
from typing import Any, Literal

from errors import ConfigError, NotFoundError

GenerationDirection = Literal["up", "down"]
GenerationKind = Literal["ancestors", "descendants"]
BranchType = Literal["paternal", "maternal", "descendant", "custom"]
BranchConnection = Literal["paternal", "maternal", "descendants", "spouse-family"]
EdgeKind = Literal["parent", "child", "spouse"]
NavigationDirection = Literal["up", "down", "left", "right"]
RelatedCanvasDirection = Literal["ancestor", "descendant", "sibling", "parent", "child"]

BRANCH_TYPES = ("paternal", "maternal", "descendant", "custom")

PARENT_OF = "PARENT_OF"
SPOUSE_OF = "SPOUSE_OF"


# ============================================================================
# Input records (graph provider)
# ============================================================================


@dataclass
class Person:
    id: str
    name: str
    sex: str | None = None


@dataclass
class Relationship:
    person1_id: str
    person2_id: str
    relationship_type: str  # PARENT_OF, SPOUSE_OF


# ============================================================================
# Family tree
# ============================================================================


@dataclass
class PersonNode:
    cr_id: str
    name: str
    father_cr_id: str | None = None
    mother_cr_id: str | None = None
    spouse_cr_ids: list[str] = field(default_factory=list)
    children_cr_ids: list[str] = field(default_factory=list)
    sex: str | None = None


@dataclass
class FamilyEdge:
    from_cr_id: str
    to_cr_id: str
    kind: EdgeKind


@dataclass
class FamilyTree:
    root: PersonNode
    nodes: dict[str, PersonNode]
    edges: list[FamilyEdge] = field(default_factory=list)

    def get(self, cr_id: str | None) -> PersonNode | None:
        """Look up a person, returning None for missing or dangling ids."""
        if cr_id is None:
            return None
        return self.nodes.get(cr_id)


# ============================================================================
# Generation splits
# ============================================================================


@dataclass
class GenerationBounds:
    min: int = 0
    max: int = 0


@dataclass(frozen=True)
class GenerationRange:
    start: int  # inclusive, 0 = root
    end: int  # inclusive
    label: str

    def contains(self, generation: int) -> bool:
        return self.start <= generation <= self.end

    def same_bounds(self, other: "GenerationRange") -> bool:
        return self.start == other.start and self.end == other.end


@dataclass
class BoundaryPerson:
    person: PersonNode
    adjacent_ranges: list[str] = field(default_factory=list)


@dataclass
class GenerationAssignment:
    generation_map: dict[str, int] = field(default_factory=dict)
    bounds: GenerationBounds = field(default_factory=GenerationBounds)
    # Keyed by range rather than label: "Gen 1" can name a range on both sides of the root.
    by_range: dict[GenerationRange, list[PersonNode]] = field(default_factory=dict)
    boundary_people: dict[str, BoundaryPerson] = field(default_factory=dict)

    def people_for_label(self, label: str) -> list[PersonNode]:
        """All people bucketed under ranges carrying the given label."""
        people: list[PersonNode] = []
        for generation_range, members in self.by_range.items():
            if generation_range.label == label:
                people.extend(members)
        return people


# ============================================================================
# Branch splits
# ============================================================================


@dataclass
class BranchDefinition:
    type: BranchType
    anchor_cr_id: str
    label: str
    child_cr_id: str | None = None  # descendant branches
    ancestor_cr_id: str | None = None  # custom branches
    max_generations: int | None = None

    def __post_init__(self):
        if self.type not in BRANCH_TYPES:
            raise ConfigError(f"Unknown branch type: {self.type!r}")
        if self.type == "descendant" and not self.child_cr_id:
            raise NotFoundError(f"Descendant branch '{self.label}' requires a child_cr_id")
        if self.type == "custom" and not self.ancestor_cr_id:
            raise NotFoundError(f"Custom branch '{self.label}' requires an ancestor_cr_id")
        if self.max_generations is not None and self.max_generations < 0:
            raise ConfigError(f"max_generations must be >= 0, got {self.max_generations}")


@dataclass
class BranchBoundary:
    person: PersonNode
    connected_branches: list[BranchConnection] = field(default_factory=list)


@dataclass
class BranchExtractionResult:
    people: list[PersonNode] = field(default_factory=list)
    cr_ids: set[str] = field(default_factory=set)
    branch_root: PersonNode | None = None
    boundary_people: dict[str, BranchBoundary] = field(default_factory=dict)
    generation_depth: int = 0


# ============================================================================
# Canvas elements
# ============================================================================


@dataclass
class Point:
    x: float = 0
    y: float = 0


@dataclass
class BoundingBox:
    min_x: float = 0
    min_y: float = 0
    max_x: float = 0
    max_y: float = 0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass
class CanvasNode:
    id: str
    type: str  # file, text, link, group
    x: float
    y: float
    width: float
    height: float
    file: str | None = None
    text: str | None = None
    color: str | None = None
    label: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)


@dataclass
class CanvasEdge:
    id: str
    from_node: str
    to_node: str
    from_side: str | None = None  # top, right, bottom, left
    to_side: str | None = None
    from_end: str | None = None  # none, arrow
    to_end: str | None = None
    color: str | None = None
    label: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class CanvasData:
    nodes: list[CanvasNode] = field(default_factory=list)
    edges: list[CanvasEdge] = field(default_factory=list)
    groups: list[dict[str, Any]] | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class PruneResult:
    removed_nodes: list[CanvasNode]
    removed_edges: list[CanvasEdge]
    centroid: Point
    affected_nodes: list[str]
    navigation_node: CanvasNode | None = None
    navigation_edges: list[CanvasEdge] = field(default_factory=list)


@dataclass
class PrunedSectionInfo:
    extracted_to_canvas: str
    removed_cr_ids: list[str]
    label: str
    timestamp: float
    navigation_node_id: str | None = None


@dataclass
class MediaAssociation:
    media_node_id: str
    person_cr_id: str
    association_type: Literal["edge", "proximity", "group", "naming"]
    distance: float | None = None


# ============================================================================
# Split results
# ============================================================================


@dataclass
class GeneratedCanvas:
    path: str
    label: str
    person_count: int
    generation_range: tuple[int, int] | None = None
    branch_type: BranchType | None = None
    anchor_person: str | None = None
    parent_branch: str | None = None
    # Portals to neighbouring canvases, placed at the origin
    navigation_nodes: list[CanvasNode] = field(default_factory=list)
    # Source canvas the people were pruned from, in destructive mode
    pruned_from: str | None = None


@dataclass
class RelatedCanvas:
    path: str
    label: str
    direction: RelatedCanvasDirection
    person_count: int
    generation_range: tuple[int, int] | None = None


@dataclass
class SplitResult:
    canvases: list[GeneratedCanvas] = field(default_factory=list)
    total_people: int = 0
    related_canvases: list[RelatedCanvas] = field(default_factory=list)
    overview_canvas: CanvasData | None = None
    media_associations: list[MediaAssociation] | None = None


@dataclass
class GenerationSplitPreview:
    ranges: list[GenerationRange]
    people_counts: dict[GenerationRange, int]
    boundary_count: int
    total_people: int


@dataclass
class BranchPreview:
    definition: BranchDefinition
    people_count: int
    boundary_count: int
    generation_depth: int


@dataclass
class BranchSplitPreview:
    branches: list[BranchPreview]
    total_people: int
    overlap: int
