"""Cell orientation conversions: rotation degrees, flips and pin offsets."""

from __future__ import annotations

import logging
from typing import Union

Number = Union[int, float]

_log = logging.getLogger(__name__)

# Each orientation is a clockwise rotation followed by an optional flip about Y.
_ORIENT_DEGREE_FLIP: dict[str, tuple[int, int]] = {
    "N": (0, 0),
    "S": (180, 0),
    "W": (90, 0),
    "E": (270, 0),
    "FN": (0, 1),
    "FS": (180, 1),
    "FW": (90, 1),
    "FE": (270, 1),
}


def orient_degree_flip(orient: str) -> tuple[int, int]:
    """Return (rotation degree, flip) for an orientation; unknown ones count as N."""
    return _ORIENT_DEGREE_FLIP.get(orient, (0, 0))


def _known_degree(rot_degree: int) -> int:
    if rot_degree in (0, 90, 180, 270):
        return rot_degree
    _log.warning("Unknown rotation degree %d, regarded as 0", rot_degree)
    return 0


def rotated_sizes(rot_degree: int, width: Number, height: Number) -> tuple[Number, Number]:
    """Width and height of a cell after rotating it by ``rot_degree``."""
    if _known_degree(rot_degree) in (90, 270):
        return height, width
    return width, height


def rotated_pin_offsets(
    rot_degree: int, width: Number, height: Number, offset_x: Number, offset_y: Number
) -> tuple[Number, Number]:
    """Pin offset after a clockwise rotation of a ``width`` x ``height`` cell."""
    degree = _known_degree(rot_degree)
    if degree == 180:
        return width - offset_x, height - offset_y
    if degree == 270:
        return height - offset_y, offset_x
    if degree == 90:
        return offset_y, width - offset_x
    return offset_x, offset_y


def flip_y_pin_offsets(
    width: Number, height: Number, offset_x: Number, offset_y: Number
) -> tuple[Number, Number]:
    """Pin offset after flipping a cell about its Y axis."""
    return width - offset_x, offset_y