import pytest

from placeflat.geometry import Rect
from placeflat.rowmap import SubRow, SubRowMap, merge_intervals


def _rows(count, width=100, height=10):
    return [Rect(0, i * height, width, (i + 1) * height) for i in range(count)]


def test_merge_intervals_touching_and_overlapping():
    assert merge_intervals([(30, 40), (0, 10), (10, 20), (35, 50)]) == [(0, 20), (30, 50)]


def test_merge_intervals_disjoint_kept_sorted():
    assert merge_intervals([(50, 60), (0, 5)]) == [(0, 5), (50, 60)]


def test_merge_intervals_empty():
    assert merge_intervals([]) == []


def test_no_blockages_gives_whole_rows():
    rows = _rows(3)
    srm = SubRowMap.build(rows, [], 5)
    assert srm.num_rows() == 3
    assert srm.num_sub_rows() == 3
    assert [s.rect for s in srm] == rows


def test_aligned_blockage_splits_row():
    srm = SubRowMap.build(_rows(1), [Rect(20, 0, 30, 10)], 5)
    assert [(s.xl, s.xh) for s in srm] == [(0, 20), (30, 100)]
    assert [s.sub_row_id for s in srm] == [0, 1]


def test_unaligned_blockage_widened_to_sites():
    aligned = SubRowMap.build(_rows(1), [Rect(20, 0, 30, 10)], 5)
    unaligned = SubRowMap.build(_rows(1), [Rect(22, 0, 28, 10)], 5)
    assert [s.rect for s in unaligned] == [s.rect for s in aligned]


def test_narrow_gap_dropped():
    srm = SubRowMap.build(_rows(1), [Rect(0, 0, 40, 10), Rect(43, 0, 100, 10)], 5)
    # the gap between the two blockages is narrower than a site after alignment
    assert srm.num_sub_rows() == 0
    assert srm.sub_rows_in_row(0) == []


def test_blockage_touching_row_boundary_ignored():
    rows = _rows(2)
    srm = SubRowMap.build(rows, [Rect(20, 10, 30, 20)], 5)
    assert srm.sub_row(0, 0).rect == rows[0]
    assert len(srm.sub_rows_in_row(1)) == 2


def test_sub_rows_avoid_blockages_and_are_ordered():
    rows = _rows(4)
    blockages = [Rect(13, 5, 41, 27), Rect(60, 0, 70, 40), Rect(38, 31, 44, 33)]
    srm = SubRowMap.build(rows, blockages, 5)
    for s in srm:
        for b in blockages:
            assert s.rect.intersection(b) is None
        assert s.xh - s.xl >= 5
    for row_id in range(srm.num_rows()):
        subs = [srm.sub_rows[i] for i in srm.sub_rows_in_row(row_id)]
        assert all(a.xh <= b.xl for a, b in zip(subs, subs[1:]))
        assert all(s.row_id == row_id for s in subs)


def test_indices_and_ranges_consistent():
    rows = _rows(3)
    srm = SubRowMap.build(rows, [Rect(20, 0, 30, 10), Rect(50, 10, 60, 30)], 5)
    assert [s.index for s in srm] == list(range(srm.num_sub_rows()))
    end = 0
    for row_id in range(srm.num_rows()):
        start, stop = srm.sub_row_index_range(row_id)
        assert start == end
        assert list(range(start, stop)) == srm.sub_rows_in_row(row_id)
        for k, idx in enumerate(srm.sub_rows_in_row(row_id)):
            assert srm.sub_row(row_id, k) is srm.sub_rows[idx]
        end = stop
    assert end == len(srm)


def test_sub_row_is_frozen_value():
    s = SubRow(Rect(0, 0, 10, 10), index=0, row_id=0, sub_row_id=0)
    with pytest.raises(AttributeError):
        s.index = 1  # type: ignore[misc]
    assert s.index == 0
    assert s.rect == Rect(0, 0, 10, 10)


def test_bad_indices_raise():
    srm = SubRowMap.build(_rows(1), [], 5)
    with pytest.raises(IndexError):
        srm.sub_rows_in_row(1)
    with pytest.raises(IndexError):
        srm.sub_row(0, 1)
    with pytest.raises(IndexError):
        srm.sub_row_index_range(-1)


def test_nonpositive_site_width_rejected():
    with pytest.raises(ValueError):
        SubRowMap.build(_rows(1), [], 0)


def test_empty_rows():
    srm = SubRowMap.build([], [Rect(0, 0, 10, 10)], 5)
    assert srm.num_rows() == 0
    assert len(srm) == 0