"""Input description of a placement problem: nodes, pins, nets, rows and routing."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from placeflat.geometry import Rect
from placeflat.region import Region

Number = Union[int, float]

# Obstruction layer used by Bookshelf benchmarks for cell shapes; it carries no routing demand.
BOOKSHELF_SHAPE_LAYER = "Bookshelf.Shape"


class PlaceStatus(enum.Enum):
    """Placement status of a node."""

    UNPLACED = "UNPLACED"
    PLACED = "PLACED"
    FIXED = "FIXED"
    DUMMY_FIXED = "DUMMY_FIXED"
    UNKNOWN = "UNKNOWN"


@dataclass
class Node:
    """A cell, macro, IO pin or placement blockage.

    ``obstructions`` maps a layer name to boxes relative to the node's lower-left corner.
    """

    name: str
    xl: Number
    yl: Number
    width: Number
    height: Number
    status: PlaceStatus = PlaceStatus.UNPLACED
    orient: str = "N"
    pins: list[int] = field(default_factory=list)
    obstructions: dict[str, list[Rect]] = field(default_factory=dict)
    place_blockage: bool = False

    def rect(self) -> Rect:
        """Bounding rectangle of the node at its current position."""
        return Rect(self.xl, self.yl, self.xl + self.width, self.yl + self.height)


@dataclass
class Pin:
    """A pin on a node, with its offset from the node's lower-left corner."""

    name: str
    node: int
    net: int
    offset_x: Number = 0
    offset_y: Number = 0
    direct: str = "INPUT"


@dataclass
class Net:
    """A net connecting a list of pins."""

    name: str
    pins: list[int] = field(default_factory=list)
    weight: float = 1.0


@dataclass
class Group:
    """A set of nodes bound to a region."""

    name: str
    nodes: list[int] = field(default_factory=list)
    region: int = 0


@dataclass
class RoutingInfo:
    """Global routing grid and per-layer track counts."""

    num_grids_x: int
    num_grids_y: int
    origin_x: int
    origin_y: int
    tile_size_x: int
    tile_size_y: int
    horizontal_tracks: list[int] = field(default_factory=list)
    vertical_tracks: list[int] = field(default_factory=list)
    layers: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.horizontal_tracks) != len(self.vertical_tracks):
            raise ValueError("horizontal and vertical track lists must have one entry per layer")


@dataclass
class Design:
    """A placement problem; IO pin nodes occupy the last ``num_io_pins`` slots of ``nodes``."""

    nodes: list[Node] = field(default_factory=list)
    pins: list[Pin] = field(default_factory=list)
    nets: list[Net] = field(default_factory=list)
    rows: list[Rect] = field(default_factory=list)
    regions: list[Region] = field(default_factory=list)
    groups: list[Group] = field(default_factory=list)
    num_io_pins: int = 0
    row_height: int = 0
    site_width: int = 0
    routing: Optional[RoutingInfo] = None

    def __post_init__(self) -> None:
        if not 0 <= self.num_io_pins <= len(self.nodes):
            raise ValueError(
                f"num_io_pins {self.num_io_pins} out of range for {len(self.nodes)} nodes"
            )

    def _is_io(self, index: int) -> bool:
        return index >= len(self.nodes) - self.num_io_pins

    def fixed_nodes(self) -> Iterator[Node]:
        """Fixed nodes that are neither IO pins nor placement blockages."""
        for index, node in enumerate(self.nodes):
            if node.status is PlaceStatus.FIXED and not node.place_blockage and not self._is_io(index):
                yield node

    def num_fixed(self) -> int:
        return sum(1 for _ in self.fixed_nodes())

    def num_movable(self) -> int:
        return sum(
            1
            for index, node in enumerate(self.nodes)
            if node.status is not PlaceStatus.FIXED and not self._is_io(index)
        )

    def row_bbox(self) -> Rect:
        """Bounding box of all rows; raise ValueError when there are none."""
        if not self.rows:
            raise ValueError("design has no rows")
        bbox = self.rows[0]
        for row in self.rows[1:]:
            bbox = bbox.encompass(row)
        return bbox

    def pin_position(self, pin: Pin) -> tuple[Number, Number]:
        """Absolute position of a pin."""
        node = self.nodes[pin.node]
        return node.xl + pin.offset_x, node.yl + pin.offset_y