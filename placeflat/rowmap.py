"""Sub rows: the parts of placement rows left free by fixed cells and blockages."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Union

from placeflat.geometry import Rect

Number = Union[int, float]
Interval = tuple[Number, Number]


def merge_intervals(intervals: Iterable[Interval]) -> list[Interval]:
    """Sort intervals by their low end and merge those that overlap or touch."""
    merged: list[Interval] = []
    for low, high in sorted(intervals, key=lambda span: span[0]):
        if merged and low <= merged[-1][1] and high >= merged[-1][0]:
            last_low, last_high = merged[-1]
            merged[-1] = (min(last_low, low), max(last_high, high))
        else:
            merged.append((low, high))
    return merged


def _trunc_div(numerator: Number, denominator: Number) -> Number:
    """Quotient rounded toward zero, exact for integers."""
    if isinstance(numerator, int) and isinstance(denominator, int):
        quotient = abs(numerator) // abs(denominator)
        return quotient if (numerator >= 0) == (denominator > 0) else -quotient
    return math.trunc(numerator / denominator)


def _align_to_sites(box: Rect, row_xl: Number, site_width: Number) -> Rect:
    """Widen ``box`` horizontally so both its ends fall on site boundaries."""
    xl = row_xl + _trunc_div(box.xl - row_xl, site_width) * site_width
    xh = row_xl + math.ceil((box.xh - row_xl) / site_width) * site_width
    return Rect(xl, box.yl, xh, box.yh)


def _overlaps(a: Rect, b: Rect) -> bool:
    """True when the interiors of two rectangles intersect."""
    return a.xl < b.xh and b.xl < a.xh and a.yl < b.yh and b.yl < a.yh


@dataclass(frozen=True)
class SubRow:
    """A free segment of a row.

    ``index`` is its position among all sub rows, ``row_id`` the row it lies in
    and ``sub_row_id`` its position within that row, counted from the left.
    """

    rect: Rect
    index: int
    row_id: int
    sub_row_id: int

    @property
    def xl(self) -> Number:
        return self.rect.xl

    @property
    def yl(self) -> Number:
        return self.rect.yl

    @property
    def xh(self) -> Number:
        return self.rect.xh

    @property
    def yh(self) -> Number:
        return self.rect.yh


@dataclass
class SubRowMap:
    """All sub rows, ordered bottom to top and left to right, indexed by row."""

    sub_rows: list[SubRow] = field(default_factory=list)
    row_sub_rows: list[list[int]] = field(default_factory=list)

    @classmethod
    def build(
        cls, rows: Iterable[Rect], blockages: Iterable[Rect], site_width: Number
    ) -> "SubRowMap":
        """Cut ``rows`` around ``blockages``, keeping pieces at least one site wide.

        Blockages are widened to site boundaries first; pieces narrower than a
        site are dropped.
        """
        if site_width <= 0:
            raise ValueError(f"site width must be positive, got {site_width}")
        row_list = list(rows)
        result = cls(row_sub_rows=[[] for _ in row_list])
        if not row_list:
            return result
        row_xl = min(row.xl for row in row_list)

        blocked: list[list[Interval]] = [[] for _ in row_list]
        for box in blockages:
            adjusted = _align_to_sites(box, row_xl, site_width)
            for row_id, row in enumerate(row_list):
                if _overlaps(row, adjusted):
                    blocked[row_id].append((adjusted.xl, adjusted.xh))

        for row_id, row in enumerate(row_list):
            spans = merge_intervals(blocked[row_id])
            lows = [row.xl] + [high for _, high in spans]
            highs = [low for low, _ in spans] + [row.xh]
            in_row = result.row_sub_rows[row_id]
            for xl, xh in zip(lows, highs):
                if xl + site_width <= xh:
                    sub_row = SubRow(
                        Rect(xl, row.yl, xh, row.yh),
                        index=len(result.sub_rows),
                        row_id=row_id,
                        sub_row_id=len(in_row),
                    )
                    result.sub_rows.append(sub_row)
                    in_row.append(sub_row.index)
        return result

    def num_rows(self) -> int:
        return len(self.row_sub_rows)

    def num_sub_rows(self) -> int:
        return len(self.sub_rows)

    def _check_row(self, row_index: int) -> None:
        if not 0 <= row_index < len(self.row_sub_rows):
            raise IndexError(f"no row {row_index}")

    def sub_rows_in_row(self, row_index: int) -> list[int]:
        """Indices of the sub rows that lie in a row, left to right."""
        self._check_row(row_index)
        return list(self.row_sub_rows[row_index])

    def sub_row_index_range(self, row_index: int) -> tuple[int, int]:
        """Half-open range of sub row indices belonging to a row."""
        self._check_row(row_index)
        start = sum(len(ids) for ids in self.row_sub_rows[:row_index])
        return start, start + len(self.row_sub_rows[row_index])

    def sub_row(self, row_index: int, sub_row_index: int) -> SubRow:
        """The ``sub_row_index``-th sub row of a row."""
        self._check_row(row_index)
        ids = self.row_sub_rows[row_index]
        if not 0 <= sub_row_index < len(ids):
            raise IndexError(f"row {row_index} has no sub row {sub_row_index}")
        return self.sub_rows[ids[sub_row_index]]

    def __iter__(self) -> Iterator[SubRow]:
        return iter(self.sub_rows)

    def __len__(self) -> int:
        return len(self.sub_rows)