"""Placement regions such as fences and guides."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from placeflat.geometry import Rect


class RegionType(enum.Enum):
    """Kind of a placement region."""

    FENCE = "FENCE"
    GUIDE = "GUIDE"
    UNKNOWN = "UNKNOWN"


@dataclass
class Region:
    """A named region made of rectangles."""

    name: str = ""
    type: RegionType = RegionType.UNKNOWN
    boxes: list[Rect] = field(default_factory=list)
    id: int = 0

    def add_box(self, box: Rect) -> "Region":
        """Append a rectangle and return this region."""
        self.boxes.append(box)
        return self

    def set_box(self, index: int, box: Rect) -> "Region":
        """Replace the rectangle at ``index``; raise IndexError when it does not exist."""
        if not 0 <= index < len(self.boxes):
            raise IndexError(f"region {self.name!r} has no box {index}")
        self.boxes[index] = box
        return self