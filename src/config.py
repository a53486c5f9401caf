"""Option structs for split, prune, and media detection operations."""

from dataclasses import dataclass, field
from typing import get_args

from errors import ConfigError
from models import BranchDefinition, GenerationDirection, GenerationRange, NavigationDirection

NAVIGATION_DIRECTIONS = ("up", "down", "left", "right")


@dataclass
class SplitOptions:
    output_folder: str = ""
    filename_pattern: str = "{name}"  # supports {name}, {type}, {date}
    generate_overview: bool = True
    include_navigation_nodes: bool = True
    max_generations: int | None = None

    # Destructive mode
    source_canvas: str | None = None
    remove_from_source: bool = False
    add_navigation_node_to_source: bool = True

    # Associated media
    include_connected_media: bool = True
    include_nearby_media: bool = False
    include_grouped_media: bool = True
    proximity_threshold: float = 200

    def __post_init__(self):
        if self.max_generations is not None and self.max_generations < 0:
            raise ConfigError(f"max_generations must be >= 0, got {self.max_generations}")
        if self.proximity_threshold < 0:
            raise ConfigError(f"proximity_threshold must be >= 0, got {self.proximity_threshold}")


@dataclass
class GenerationSplitOptions(SplitOptions):
    generations_per_canvas: int = 4
    custom_ranges: list[GenerationRange] | None = None  # overrides generations_per_canvas
    generation_direction: GenerationDirection = "up"  # "up" counts ancestors, "down" counts descendants

    def __post_init__(self):
        super().__post_init__()
        if self.generations_per_canvas < 1:
            raise ConfigError(
                f"generations_per_canvas must be >= 1, got {self.generations_per_canvas}"
            )
        if self.generation_direction not in get_args(GenerationDirection):
            raise ConfigError(f"Unknown generation direction: {self.generation_direction!r}")


@dataclass
class BranchSplitOptions(SplitOptions):
    branches: list[BranchDefinition] = field(default_factory=list)
    include_spouses: bool = True
    recursion_depth: int = 0  # 0 = no recursion
    split_grandparent_lines: bool = False

    def __post_init__(self):
        super().__post_init__()
        if self.recursion_depth < 0:
            raise ConfigError(f"recursion_depth must be >= 0, got {self.recursion_depth}")


@dataclass
class PruneOptions:
    add_navigation_node: bool = False
    target_canvas: str | None = None
    label: str = "Extracted Content"
    direction: NavigationDirection | None = None  # inferred from positions when None
    info: str | None = None

    def __post_init__(self):
        if self.direction is not None and self.direction not in NAVIGATION_DIRECTIONS:
            raise ConfigError(f"Unknown navigation direction: {self.direction!r}")


@dataclass
class MediaDetectionOptions:
    include_connected: bool = True
    include_nearby: bool = False
    include_grouped: bool = True
    proximity_threshold: float = 200

    @classmethod
    def from_split_options(cls, options: SplitOptions) -> "MediaDetectionOptions":
        return cls(
            include_connected=options.include_connected_media,
            include_nearby=options.include_nearby_media,
            include_grouped=options.include_grouped_media,
            proximity_threshold=options.proximity_threshold,
        )
