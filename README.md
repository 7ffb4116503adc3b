# placeflat

`placeflat` turns a standard-cell placement design into flat, index-based
lists that an analytical placer can use straight away. These include node
positions and sizes, pin offsets, net-to-pin maps, rows, fence regions and
initial routing demand. It can also split placement rows into sub-rows around
blockages.

It has no runtime dependencies.

## Installation

```
pip install placeflat
```

To run the tests:

```
pip install "placeflat[test]"
pytest
```

## Modules

### `placeflat.geometry`

- `Rect` is a frozen, ordered box with the fields `xl`, `yl`, `xh` and `yh`.
- Its methods are `width()`, `height()`, `area()`, `translated(dx, dy)`,
  `intersection(other)` and `encompass(other)`.
  - `intersection` returns `None` when the interiors of the two boxes do not
    overlap.
  - `encompass` returns the bounding box of both rectangles.
- `intersect_area(a, b)` returns the area that two boxes share.
- `union_rectangles(rects)` splits the union of a set of boxes into
  rectangles that do not overlap. It sweeps along x and joins neighbouring
  slabs that cover the same vertical spans.
- `union_area(rects, clip=None)` returns the area of the union. Regions
  covered by more than one box are counted once. If `clip` is given, only the
  area inside it counts.

### `placeflat.orient`

These functions handle the orientations `N S W E FN FS FW FE`.

- `orient_degree_flip(orient)` returns a `(degree, flip)` pair. The degree is
  the clockwise rotation and `flip` says whether the cell is then mirrored
  about the Y axis. Any orientation not in the list is treated as `N`.
- `rotated_sizes(rot_degree, width, height)` returns the width and height
  after a rotation.
- `rotated_pin_offsets(rot_degree, width, height, offset_x, offset_y)`
  returns a pin's offset after a rotation.
- `flip_y_pin_offsets(width, height, offset_x, offset_y)` returns a pin's
  offset after a flip about the Y axis.

Rotations other than 0, 90, 180 and 270 are logged as a warning and treated
as 0.

### `placeflat.region`

- `RegionType` has the members `FENCE`, `GUIDE` and `UNKNOWN`.
- `Region` has the fields `name`, `type`, `boxes` and `id`.
- `Region.add_box(box)` appends a box.
- `Region.set_box(index, box)` replaces a box. It raises `IndexError` when
  the index is out of range.

### `placeflat.design`

This module holds the input data model.

- **`Design`** holds `nodes`, `pins`, `nets`, `rows`, `regions`, `groups`,
  `num_io_pins`, `row_height`, `site_width` and an optional `routing`.
  - IO-pin nodes take up the last `num_io_pins` entries of `nodes`.
  - Its methods are `fixed_nodes()`, `num_fixed()`, `num_movable()`,
    `row_bbox()` and `pin_position(pin)`.
  - `row_bbox()` raises `ValueError` when the design has no rows.
- **`Node`** holds the position and size, a `PlaceStatus`, the orientation
  string, pin indices, obstruction boxes by layer and a `place_blockage`
  flag.
  - Obstruction boxes are relative to the node's lower-left corner.
  - `Node.rect()` returns the node's bounding box at its current position.
- **`Pin`**, **`Net`** and **`Group`** are plain records that link nodes,
  nets and regions by index.
- **`RoutingInfo`** describes the routing grid, the tile sizes and the
  horizontal and vertical track counts for each layer.

### `placeflat.routing`

`build_routing_maps(design)` returns a `RoutingMaps` with:

- the grid bounds;
- the unit horizontal and vertical capacities for each layer;
- the initial demand that fixed-cell obstructions place on the grid, for
  horizontal and for vertical tracks.

The demand lists are flattened and indexed by `(layer, grid x, grid y)`. No
entry exceeds the track count of its layer. Obstructions on the
`Bookshelf.Shape` layer add no demand. An obstruction on a layer that is
missing from `RoutingInfo.layers` raises `KeyError`.

When the design has no routing information, the grid is empty and spans the
row bounding box.

### `placeflat.pyplacedb`

`PyPlaceDB.from_design(design)` builds the flattened database.

- **Fixed nodes with obstructions.** Each such node is split into shapes that
  do not overlap. The shapes are named `<node>.DREAMPlace.Shape<k>`, and
  `node2orig_node_map` maps each one back to its design node. All pins of the
  node are attached to its first shape.
- **Name maps.** Name-to-index maps are built for nodes, pins and nets.
- **Flat maps.** Nets, nodes and regions each get a flattened list of their
  members plus a list of start offsets into it.
- **Fence regions.** `node2fence_region_map` gives the fence region of each
  movable node. Nodes that belong to no fence region get `NO_FENCE_REGION`.
- **Orientations.** `convert_orient()` rewrites fixed and IO nodes to
  orientation `N` and adjusts their sizes and pin offsets. It returns how many
  nodes were converted from each orientation. Movable nodes are not changed.
- **Free area.** `compute_area_statistics()` sets and returns
  `total_space_area`. This is the area of the row bounding box minus the
  smaller of two values: the area covered by fixed cells, counting overlaps
  once, and the sum of the fixed-cell areas.

### `placeflat.rowmap`

- `merge_intervals(intervals)` sorts intervals and merges those that overlap
  or touch.
- `SubRowMap.build(rows, blockages, site_width)` cuts each row around the
  blockages. Blockages are first widened to site boundaries. Pieces narrower
  than one site are dropped. `site_width` must be positive.
- A built map can be queried with `num_rows()`, `num_sub_rows()`,
  `sub_rows_in_row(row_index)`, `sub_row_index_range(row_index)` and
  `sub_row(row_index, sub_row_index)`. It can also be iterated as a sequence
  of `SubRow` records.

## Example

```python
from placeflat.design import Design, Node, PlaceStatus
from placeflat.geometry import Rect
from placeflat.pyplacedb import PyPlaceDB

design = Design(
    nodes=[
        Node("a", 0, 0, 4, 10),
        Node("m", 20, 0, 10, 10, status=PlaceStatus.FIXED),
    ],
    rows=[Rect(0, 0, 100, 10)],
    row_height=10,
    site_width=1,
)
db = PyPlaceDB.from_design(design)
print(db.num_nodes, db.num_terminals, db.num_terminal_NIs)  # 2 1 0
print(db.total_space_area)                                   # 900.0
```

Sub-rows around blockages:

```python
from placeflat.geometry import Rect
from placeflat.rowmap import SubRowMap

rows = [Rect(0, 0, 100, 10), Rect(0, 10, 100, 20)]
blockages = [Rect(30, 0, 50, 20)]
srmap = SubRowMap.build(rows, blockages, site_width=1)
print(srmap.num_sub_rows())       # 4
print(srmap.sub_rows_in_row(0))   # [0, 1]
```

## What it does not do

`placeflat` does not read or write any design file format. It does not parse
LEF, DEF, Verilog or Bookshelf input, and it does not write placement
solutions. You build a `Design` in Python and pass it to the package. The
package has no command-line program.