import pytest

from placeflat.design import Design, Node, PlaceStatus, RoutingInfo
from placeflat.geometry import Rect
from placeflat.routing import build_routing_maps

H_TRACKS = 4
V_TRACKS = 6


def _routing():
    return RoutingInfo(
        num_grids_x=2,
        num_grids_y=2,
        origin_x=0,
        origin_y=0,
        tile_size_x=10,
        tile_size_y=10,
        horizontal_tracks=[H_TRACKS],
        vertical_tracks=[V_TRACKS],
        layers=["M1"],
    )


def _fixed(obstructions, xl=0, yl=0):
    return Node("m", xl, yl, 10, 10, status=PlaceStatus.FIXED, obstructions=obstructions)


def _design(nodes, routing=None):
    return Design(nodes=nodes, rows=[Rect(0, 0, 20, 20)], routing=routing)


def test_without_routing_grid_spans_rows():
    maps = build_routing_maps(_design([Node("a", 0, 0, 1, 1)]))
    assert (maps.num_grids_x, maps.num_grids_y) == (0, 0)
    assert (maps.grid_xl, maps.grid_yl, maps.grid_xh, maps.grid_yh) == (0, 0, 20, 20)
    assert maps.initial_horizontal_demand == []
    assert maps.unit_vertical_capacities == []


def test_grid_bounds_and_unit_capacities():
    maps = build_routing_maps(_design([Node("a", 0, 0, 1, 1)], _routing()))
    assert (maps.grid_xh, maps.grid_yh) == (2 * 10, 2 * 10)
    assert maps.unit_horizontal_capacities == [pytest.approx(H_TRACKS / 10)]
    assert maps.unit_vertical_capacities == [pytest.approx(V_TRACKS / 10)]
    assert maps.initial_horizontal_demand == [0, 0, 0, 0]


def test_fully_covered_tile_demands_all_tracks():
    design = _design([_fixed({"M1": [Rect(0, 0, 10, 10)]})], _routing())
    maps = build_routing_maps(design)
    assert maps.initial_horizontal_demand == [H_TRACKS, 0, 0, 0]
    assert maps.initial_vertical_demand == [V_TRACKS, 0, 0, 0]


def test_partial_cover_rounds_up():
    design = _design([_fixed({"M1": [Rect(0, 0, 5, 10)]})], _routing())
    maps = build_routing_maps(design)
    assert maps.initial_horizontal_demand == [2, 0, 0, 0]
    assert maps.initial_vertical_demand[0] <= V_TRACKS


def test_overlapping_cells_are_clamped_to_track_count():
    nodes = [
        _fixed({"M1": [Rect(0, 0, 10, 10)]}, xl=10, yl=10),
        _fixed({"M1": [Rect(0, 0, 10, 10)]}, xl=10, yl=10),
    ]
    maps = build_routing_maps(_design(nodes, _routing()))
    assert maps.initial_horizontal_demand[3] == H_TRACKS
    assert maps.initial_vertical_demand[3] == V_TRACKS
    assert all(v <= V_TRACKS for v in maps.initial_vertical_demand)


def test_bookshelf_shape_layer_is_ignored():
    design = _design([_fixed({"Bookshelf.Shape": [Rect(0, 0, 10, 10)]})], _routing())
    maps = build_routing_maps(design)
    assert maps.initial_horizontal_demand == [0, 0, 0, 0]
    assert maps.initial_vertical_demand == [0, 0, 0, 0]


def test_movable_nodes_add_no_demand():
    node = Node("c", 0, 0, 10, 10, obstructions={"M1": [Rect(0, 0, 10, 10)]})
    maps = build_routing_maps(_design([node], _routing()))
    assert sum(maps.initial_horizontal_demand) == 0


def test_unknown_layer_raises():
    design = _design([_fixed({"M9": [Rect(0, 0, 10, 10)]})], _routing())
    with pytest.raises(KeyError):
        build_routing_maps(design)