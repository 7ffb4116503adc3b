"""Routing capacities and initial demand from fixed-cell obstructions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from placeflat.design import BOOKSHELF_SHAPE_LAYER, Design
from placeflat.geometry import Rect, intersect_area


@dataclass
class RoutingMaps:
    """Routing grid and demand maps indexed by (layer, grid x, grid y), flattened."""

    num_grids_x: int
    num_grids_y: int
    grid_xl: int
    grid_yl: int
    grid_xh: int
    grid_yh: int
    unit_horizontal_capacities: list[float] = field(default_factory=list)
    unit_vertical_capacities: list[float] = field(default_factory=list)
    initial_horizontal_demand: list[int] = field(default_factory=list)
    initial_vertical_demand: list[int] = field(default_factory=list)


def build_routing_maps(design: Design) -> RoutingMaps:
    """Compute routing grid bounds, unit capacities and blockage demand.

    Without routing capacity the grid is empty and spans the row area.
    """
    routing = design.routing
    if routing is None or not routing.horizontal_tracks:
        bbox = design.row_bbox()
        return RoutingMaps(0, 0, bbox.xl, bbox.yl, bbox.xh, bbox.yh)

    nx, ny = routing.num_grids_x, routing.num_grids_y
    size_x, size_y = routing.tile_size_x, routing.tile_size_y
    h_tracks, v_tracks = routing.horizontal_tracks, routing.vertical_tracks
    num_layers = len(h_tracks)
    maps = RoutingMaps(
        nx,
        ny,
        routing.origin_x,
        routing.origin_y,
        routing.origin_x + nx * size_x,
        routing.origin_y + ny * size_y,
        unit_horizontal_capacities=[tracks / size_y for tracks in h_tracks],
        unit_vertical_capacities=[tracks / size_x for tracks in v_tracks],
    )

    plane = nx * ny
    horizontal = [0] * (num_layers * plane)
    vertical = [0] * (num_layers * plane)
    grid_area = float(size_x) * float(size_y)

    for node in design.fixed_nodes():
        for layer_name, boxes in node.obstructions.items():
            if layer_name == BOOKSHELF_SHAPE_LAYER:
                continue
            try:
                layer = routing.layers.index(layer_name)
            except ValueError:
                raise KeyError(f"unknown routing layer {layer_name!r}") from None
            for obs in boxes:
                box = obs.translated(node.xl, node.yl)
                kx_low = max(int((box.xl - routing.origin_x) / size_x), 0)
                ky_low = max(int((box.yl - routing.origin_y) / size_y), 0)
                kx_high = min(int((box.xh - routing.origin_x) / size_x) + 1, nx)
                ky_high = min(int((box.yh - routing.origin_y) / size_y) + 1, ny)
                for k in range(kx_low, kx_high):
                    gxl = int(routing.origin_x + k * size_x)
                    for h in range(ky_low, ky_high):
                        gyl = int(routing.origin_y + h * size_y)
                        grid = Rect(gxl, gyl, gxl + size_x, gyl + size_y)
                        ratio = intersect_area(box, grid) / grid_area
                        index = layer * plane + k * ny + h
                        horizontal[index] += math.ceil(ratio * h_tracks[layer])
                        vertical[index] += math.ceil(ratio * v_tracks[layer])

    # overlapping fixed cells cannot demand more than the available tracks
    for layer in range(num_layers):
        for index in range(layer * plane, (layer + 1) * plane):
            horizontal[index] = min(horizontal[index], h_tracks[layer])
            vertical[index] = min(vertical[index], v_tracks[layer])

    maps.initial_horizontal_demand = horizontal
    maps.initial_vertical_demand = vertical
    return maps