"""Flat, list-based view of a placement design for numeric placement engines."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Union

from placeflat.design import BOOKSHELF_SHAPE_LAYER, Design, Node, PlaceStatus
from placeflat.geometry import Rect, union_area, union_rectangles
from placeflat.orient import (
    flip_y_pin_offsets,
    orient_degree_flip,
    rotated_pin_offsets,
    rotated_sizes,
)
from placeflat.region import RegionType
from placeflat.routing import build_routing_maps

Number = Union[int, float]

_log = logging.getLogger(__name__)

# Marks a node that belongs to no fence region.
NO_FENCE_REGION = 2**31 - 1

Box = tuple[Number, Number, Number, Number]


@dataclass
class PyPlaceDB:
    """Placement data flattened into parallel lists.

    Fixed cells with several obstruction shapes are split into one node per
    shape; ``node2orig_node_map`` maps every flat node back to its design node.
    """

    num_nodes: int = 0
    num_terminals: int = 0
    num_terminal_NIs: int = 0
    node_name2id_map: dict[str, int] = field(default_factory=dict)
    node_names: list[str] = field(default_factory=list)
    node_x: list[Number] = field(default_factory=list)
    node_y: list[Number] = field(default_factory=list)
    node_orient: list[str] = field(default_factory=list)
    node_size_x: list[Number] = field(default_factory=list)
    node_size_y: list[Number] = field(default_factory=list)
    node2orig_node_map: list[int] = field(default_factory=list)

    pin_direct: list[str] = field(default_factory=list)
    pin_offset_x: list[Number] = field(default_factory=list)
    pin_offset_y: list[Number] = field(default_factory=list)
    pin_names: list[str] = field(default_factory=list)

    net_name2id_map: dict[str, int] = field(default_factory=dict)
    pin_name2id_map: dict[str, int] = field(default_factory=dict)
    net_names: list[str] = field(default_factory=list)
    net2pin_map: list[list[int]] = field(default_factory=list)
    flat_net2pin_map: list[int] = field(default_factory=list)
    flat_net2pin_start_map: list[int] = field(default_factory=list)
    net_weights: list[float] = field(default_factory=list)
    net_weight_deltas: list[float] = field(default_factory=list)
    net_criticality: list[float] = field(default_factory=list)
    net_criticality_deltas: list[float] = field(default_factory=list)

    node2pin_map: list[list[int]] = field(default_factory=list)
    flat_node2pin_map: list[int] = field(default_factory=list)
    flat_node2pin_start_map: list[int] = field(default_factory=list)

    pin2node_map: list[int] = field(default_factory=list)
    pin2net_map: list[int] = field(default_factory=list)

    rows: list[Box] = field(default_factory=list)

    regions: list[list[Box]] = field(default_factory=list)
    flat_region_boxes: list[Box] = field(default_factory=list)
    flat_region_boxes_start: list[int] = field(default_factory=list)

    node2fence_region_map: list[int] = field(default_factory=list)

    num_routing_grids_x: int = 0
    num_routing_grids_y: int = 0
    routing_grid_xl: Number = 0
    routing_grid_yl: Number = 0
    routing_grid_xh: Number = 0
    routing_grid_yh: Number = 0
    unit_horizontal_capacities: list[float] = field(default_factory=list)
    unit_vertical_capacities: list[float] = field(default_factory=list)
    initial_horizontal_demand_map: list[int] = field(default_factory=list)
    initial_vertical_demand_map: list[int] = field(default_factory=list)

    xl: Number = 0
    yl: Number = 0
    xh: Number = 0
    yh: Number = 0

    row_height: Number = 0
    site_width: Number = 0
    total_space_area: float = 0.0

    num_movable_pins: int = 0

    @classmethod
    def from_design(cls, design: Design) -> "PyPlaceDB":
        """Flatten ``design``, normalise orientations to N and compute area statistics."""
        db = cls(num_terminal_NIs=design.num_io_pins)
        new_nodes: list[list[int]] = [[] for _ in design.nodes]

        def add_node(orig: int, node: Node, name: str, box: Rect) -> None:
            index = len(db.node_names)
            db.node_name2id_map[name] = index
            db.node_names.append(name)
            db.node_x.append(box.xl)
            db.node_y.append(box.yl)
            db.node_orient.append(node.orient)
            db.node_size_x.append(box.width())
            db.node_size_y.append(box.height())
            db.node2orig_node_map.append(orig)
            new_nodes[orig].append(index)

        first_io = len(design.nodes) - design.num_io_pins
        for orig, node in enumerate(design.nodes):
            if node.status is not PlaceStatus.FIXED or orig >= first_io:
                add_node(orig, node, node.name, node.rect())
            elif node.obstructions:
                shapes = node.obstructions.get(BOOKSHELF_SHAPE_LAYER)
                if shapes is not None:
                    rects = list(shapes)
                else:
                    rects = [box for boxes in node.obstructions.values() for box in boxes]
                    rects.append(Rect(0, 0, node.width, node.height))
                pieces = union_rectangles(rects)
                for k, piece in enumerate(pieces):
                    add_node(
                        orig,
                        node,
                        f"{node.name}.DREAMPlace.Shape{k}",
                        piece.translated(node.xl, node.yl),
                    )
                db.num_terminals += len(pieces)
            else:
                add_node(orig, node, node.name, node.rect())
                db.num_terminals += 1
        db.num_nodes = len(db.node_x)

        count = 0
        for orig, node in enumerate(design.nodes):
            for j, _ in enumerate(new_nodes[orig]):
                # all pins of a multi-shape macro go to its first shape
                pins = list(node.pins) if j == 0 else []
                db.node2pin_map.append(pins)
                db.flat_node2pin_map.extend(pins)
                db.flat_node2pin_start_map.append(count)
                count += len(pins)
        db.flat_node2pin_start_map.append(count)

        for pin_id, pin in enumerate(design.pins):
            node = design.nodes[pin.node]
            new_node = new_nodes[pin.node][0]
            pos_x, pos_y = design.pin_position(pin)
            db.pin_direct.append(pin.direct)
            db.pin_names.append(pin.name)
            db.pin_name2id_map[pin.name] = pin_id
            db.pin_offset_x.append(pos_x - db.node_x[new_node])
            db.pin_offset_y.append(pos_y - db.node_y[new_node])
            db.pin2node_map.append(new_node)
            db.pin2net_map.append(pin.net)
            if node.status is not PlaceStatus.FIXED:
                db.num_movable_pins += 1

        count = 0
        for net_id, net in enumerate(design.nets):
            db.net_weights.append(net.weight)
            db.net_weight_deltas.append(0.0)
            db.net_criticality.append(0.0)
            db.net_criticality_deltas.append(0.0)
            db.net_name2id_map[net.name] = net_id
            db.net_names.append(net.name)
            db.net2pin_map.append(list(net.pins))
            db.flat_net2pin_map.extend(net.pins)
            db.flat_net2pin_start_map.append(count)
            count += len(net.pins)
        db.flat_net2pin_start_map.append(count)

        db.rows = [(r.xl, r.yl, r.xh, r.yh) for r in design.rows]

        count = 0
        for region in design.regions:
            boxes = [(b.xl, b.yl, b.xh, b.yh) for b in region.boxes]
            db.regions.append(boxes)
            db.flat_region_boxes.extend(boxes)
            db.flat_region_boxes_start.append(count)
            count += len(boxes)
        db.flat_region_boxes_start.append(count)

        fence = [NO_FENCE_REGION] * (design.num_movable() + design.num_fixed())
        for group in design.groups:
            region = design.regions[group.region]
            if region.type is not RegionType.FENCE:
                continue
            for node_id in group.nodes:
                if design.nodes[node_id].status is not PlaceStatus.FIXED:
                    fence[node_id] = region.id
        db.node2fence_region_map = fence

        bbox = design.row_bbox()
        db.xl, db.yl, db.xh, db.yh = bbox.xl, bbox.yl, bbox.xh, bbox.yh
        db.row_height = design.row_height
        db.site_width = design.site_width

        maps = build_routing_maps(design)
        db.num_routing_grids_x = maps.num_grids_x
        db.num_routing_grids_y = maps.num_grids_y
        db.routing_grid_xl = maps.grid_xl
        db.routing_grid_yl = maps.grid_yl
        db.routing_grid_xh = maps.grid_xh
        db.routing_grid_yh = maps.grid_yh
        db.unit_horizontal_capacities = list(maps.unit_horizontal_capacities)
        db.unit_vertical_capacities = list(maps.unit_vertical_capacities)
        db.initial_horizontal_demand_map = list(maps.initial_horizontal_demand)
        db.initial_vertical_demand_map = list(maps.initial_vertical_demand)

        db.convert_orient()
        # must follow the orientation conversion
        db.compute_area_statistics()
        return db

    def _first_fixed(self) -> int:
        return self.num_nodes - self.num_terminals - self.num_terminal_NIs

    def convert_orient(self) -> dict[str, int]:
        """Rewrite fixed and IO nodes to orientation N, adjusting sizes and pin offsets.

        Movable nodes are left alone; the lower-left corner does not move.
        Return how many nodes were converted from each orientation.
        """
        counts: Counter[str] = Counter()
        dst_degree, dst_flip = orient_degree_flip("N")
        for node_id in range(self._first_fixed(), len(self.node_orient)):
            src = self.node_orient[node_id]
            if src in ("N", "UNKNOWN"):
                continue
            counts[src] += 1
            src_degree, src_flip = orient_degree_flip(src)
            rot = (dst_degree - src_degree + 360) % 360
            flip = dst_flip != src_flip

            width, height = self.node_size_x[node_id], self.node_size_y[node_id]
            pins = self.node2pin_map[node_id]
            for pin_id in pins:
                self.pin_offset_x[pin_id], self.pin_offset_y[pin_id] = rotated_pin_offsets(
                    rot, width, height, self.pin_offset_x[pin_id], self.pin_offset_y[pin_id]
                )
            width, height = rotated_sizes(rot, width, height)
            self.node_size_x[node_id], self.node_size_y[node_id] = width, height

            if flip:
                for pin_id in pins:
                    self.pin_offset_x[pin_id], self.pin_offset_y[pin_id] = flip_y_pin_offsets(
                        width, height, self.pin_offset_x[pin_id], self.pin_offset_y[pin_id]
                    )

        result = dict(sorted(counts.items()))
        for orient, number in result.items():
            _log.info("%s -> N: %d nodes", orient, number)
        return result

    def compute_area_statistics(self) -> float:
        """Set and return the placeable area left after removing fixed cells."""
        boxes: list[Rect] = []
        total_fixed = 0.0
        for i in range(self._first_fixed(), self.num_nodes - self.num_terminal_NIs):
            x, y = self.node_x[i], self.node_y[i]
            w, h = self.node_size_x[i], self.node_size_y[i]
            total_fixed += float(w) * float(h)
            boxes.append(Rect(x, y, x + w, y + h))
        overlap = float(union_area(boxes, Rect(self.xl, self.yl, self.xh, self.yh)))
        self.total_space_area = float(self.xh - self.xl) * float(self.yh - self.yl) - min(
            overlap, total_fixed
        )
        _log.info("fixed area overlap = %g", overlap)
        _log.info("fixed area total = %g", total_fixed)
        _log.info("space area = %g", self.total_space_area)
        return self.total_space_area