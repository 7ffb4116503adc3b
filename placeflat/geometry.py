"""Axis-aligned rectangles and rectilinear union helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

Number = Union[int, float]


@dataclass(frozen=True, order=True)
class Rect:
    """A closed axis-aligned rectangle given by its low and high corners."""

    xl: Number
    yl: Number
    xh: Number
    yh: Number

    def width(self) -> Number:
        return self.xh - self.xl

    def height(self) -> Number:
        return self.yh - self.yl

    def area(self) -> Number:
        return self.width() * self.height()

    def translated(self, dx: Number, dy: Number) -> "Rect":
        """Return this rectangle shifted by (dx, dy)."""
        return Rect(self.xl + dx, self.yl + dy, self.xh + dx, self.yh + dy)

    def intersection(self, other: "Rect") -> Optional["Rect"]:
        """Return the overlap with ``other``, or None when the interiors are disjoint."""
        xl = max(self.xl, other.xl)
        yl = max(self.yl, other.yl)
        xh = min(self.xh, other.xh)
        yh = min(self.yh, other.yh)
        if xl < xh and yl < yh:
            return Rect(xl, yl, xh, yh)
        return None

    def encompass(self, other: "Rect") -> "Rect":
        """Return the bounding box of this rectangle and ``other``."""
        return Rect(
            min(self.xl, other.xl),
            min(self.yl, other.yl),
            max(self.xh, other.xh),
            max(self.yh, other.yh),
        )


def intersect_area(a: Rect, b: Rect) -> Number:
    """Area shared by two rectangles; zero when they only touch or are apart."""
    overlap = a.intersection(b)
    return overlap.area() if overlap is not None else 0


def _merge_spans(spans: list[tuple[Number, Number]]) -> list[tuple[Number, Number]]:
    merged: list[tuple[Number, Number]] = []
    for low, high in sorted(spans):
        if merged and low <= merged[-1][1]:
            last_low, last_high = merged[-1]
            merged[-1] = (last_low, max(last_high, high))
        else:
            merged.append((low, high))
    return merged


def union_rectangles(rects: Iterable[Rect]) -> list[Rect]:
    """Decompose the union of ``rects`` into non-overlapping rectangles.

    The union is swept along x; slabs with identical vertical coverage are
    joined, so the result is a set of maximal vertical-slab rectangles sorted
    by their low corner.
    """
    boxes = [r for r in rects if r.xl < r.xh and r.yl < r.yh]
    if not boxes:
        return []
    xs = sorted({c for r in boxes for c in (r.xl, r.xh)})
    result: list[Rect] = []
    open_spans: dict[tuple[Number, Number], Number] = {}
    for x0, x1 in zip(xs, xs[1:]):
        spans = _merge_spans([(r.yl, r.yh) for r in boxes if r.xl <= x0 and r.xh >= x1])
        current = {span: open_spans.pop(span, x0) for span in spans}
        result.extend(Rect(start, y0, x0, y1) for (y0, y1), start in open_spans.items())
        open_spans = current
    result.extend(Rect(start, y0, xs[-1], y1) for (y0, y1), start in open_spans.items())
    return sorted(result)


def union_area(rects: Iterable[Rect], clip: Optional[Rect] = None) -> Number:
    """Area covered by the union of ``rects``, restricted to ``clip`` if given."""
    boxes = list(rects)
    if clip is not None:
        boxes = [overlap for overlap in (r.intersection(clip) for r in boxes) if overlap is not None]
    return sum((r.area() for r in union_rectangles(boxes)), 0)