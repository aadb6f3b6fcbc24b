import math

import pytest

from roundedbox.indexer import (
    PhysicalIndexer,
    StackKind,
    ZHalf,
    quarter_coords,
)


def _indexer(subdivisions, split):
    extra = 2 if split else 1
    if split:
        subdivisions += subdivisions % 2
    return PhysicalIndexer(
        subdivisions=subdivisions,
        extra_levels=extra,
        sectors=4 * subdivisions + 4 * extra,
        stacks=2 * subdivisions + 2 + 2 * extra,
    )


def test_zhalf_from_index_and_coord():
    assert ZHalf.from_index(0) is ZHalf.TOP
    assert ZHalf.from_index(3) is ZHalf.BOTTOM
    assert ZHalf.TOP.coord() == 1.0
    assert ZHalf.BOTTOM.coord() == -1.0


def test_quarter_coords_cycle():
    assert [quarter_coords(q) for q in range(5)] == [
        (1.0, 1.0),
        (-1.0, 1.0),
        (-1.0, -1.0),
        (1.0, -1.0),
        (1.0, 1.0),
    ]


def test_stack_kind_halves():
    ix = _indexer(1, split=False)
    kinds = [ix.stack_type(s) for s in range(ix.stacks)]
    assert [k.half for k in kinds] == [
        ZHalf.TOP,
        ZHalf.TOP,
        None,
        None,
        ZHalf.BOTTOM,
        ZHalf.BOTTOM,
    ]
    assert [k.is_ultimate for k in kinds] == [True, False, False, False, False, True]
    assert [k.is_penultimate for k in kinds] == [
        False,
        True,
        False,
        False,
        True,
        False,
    ]


def test_totals_pinned():
    plain = _indexer(1, split=False)
    assert (plain.sectors, plain.stacks) == (8, 6)
    assert plain.total_vertices() == 26
    assert plain.total_indices() == 144
    split = _indexer(2, split=True)
    assert (split.sectors, split.stacks) == (16, 10)
    assert split.total_vertices() == 106
    assert split.total_indices() == 336


def test_decode_stack_values():
    ix = _indexer(1, split=False)
    assert [ix.decode_stack(s) for s in range(ix.stacks)] == [
        (0, ZHalf.TOP),
        (0, ZHalf.TOP),
        (1, ZHalf.TOP),
        (1, ZHalf.BOTTOM),
        (2, ZHalf.BOTTOM),
        (2, ZHalf.BOTTOM),
    ]


def test_stack_type_sequence():
    ix = _indexer(1, split=False)
    assert [ix.stack_type(s) for s in range(ix.stacks)] == [
        StackKind.ULTIMATE_TOP,
        StackKind.PENULTIMATE_TOP,
        StackKind.ORDINARY,
        StackKind.ORDINARY,
        StackKind.PENULTIMATE_BOTTOM,
        StackKind.ULTIMATE_BOTTOM,
    ]


def test_stack_out_of_range_raises():
    ix = _indexer(1, split=False)
    with pytest.raises(IndexError):
        ix.stack_type(ix.stacks)
    with pytest.raises(IndexError):
        ix.decode_stack(-1)


def test_decode_sector_values():
    ix = _indexer(1, split=False)
    assert [ix.decode_sector(s, 2) for s in range(8)] == [
        (0, 0), (1, 0), (1, 1), (2, 1), (2, 2), (3, 2), (3, 3), (4, 3),
    ]
    assert [ix.decode_sector(s, 1) for s in range(4)] == [(0, 0), (1, 1), (2, 2), (3, 3)]
    assert ix.decode_sector(0, 0) == (0, 0)


def test_decode_sector_out_of_range_raises():
    ix = _indexer(1, split=False)
    with pytest.raises(IndexError):
        ix.decode_sector(1, 0)
    with pytest.raises(IndexError):
        ix.decode_sector(4, 1)
    with pytest.raises(IndexError):
        ix.decode_sector(8, 2)


def test_sectors_in_and_stretch():
    ix = _indexer(3, split=False)
    counts = [ix.sectors_in(s) for s in range(ix.stacks)]
    assert counts[0] == counts[-1] == 1
    assert counts[1] == counts[-2] == 4
    assert all(c == ix.sectors for c in counts[2:-2])
    assert sum(counts) == ix.total_vertices()
    assert not ix.stretch_xy(0)
    assert ix.stretch_xy(1)
    assert ix.stretch_xy(2)
    assert not ix.stretch_xy(ix.stacks - 1)


@pytest.mark.parametrize("subdivisions", range(1, 11))
@pytest.mark.parametrize("split", [False, True])
def test_index_covers_every_vertex(subdivisions, split):
    ix = _indexer(subdivisions, split)
    seen = {
        ix.index(sector, stack)
        for stack in range(ix.stacks)
        for sector in range(ix.sectors + 1)
    }
    assert seen == set(range(ix.total_vertices()))


@pytest.mark.parametrize("subdivisions", [1, 4, 7])
def test_index_follows_vertex_order(subdivisions):
    ix = _indexer(subdivisions, split=False)
    expected = 5
    for stack in range(2, ix.stacks - 2):
        for sector in range(ix.sectors):
            assert ix.index(sector, stack) == expected
            expected += 1
    assert ix.index(ix.sectors, 2) == ix.index(0, 2)
    assert ix.index(0, ix.stacks - 1) == ix.total_vertices() - 1


def test_face_values():
    ix = _indexer(2, split=True)
    assert ix.face(0, 0) == 0
    assert ix.face(3, 2) == 0
    assert ix.face(2, 3) == 1
    assert ix.face(0, 3) == 4
    assert ix.face(6, 4) == 2
    assert ix.face(0, 7) == 5
    assert ix.face(0, 9) == 5


def test_uv_side_face_values():
    ix = _indexer(2, split=True)
    core = (2.0, 2.0, 2.0)
    assert ix.uv_coords(1.0, core, 3, 3) == pytest.approx((0.25, 0.0))
    assert ix.uv_coords(1.0, core, 5, 3) == pytest.approx((1.0, 0.0))
    assert ix.uv_coords(1.0, core, 3, 4) == pytest.approx((0.25, 0.25))
    assert ix.uv_coords(1.0, core, 3, 5) == pytest.approx((0.25, 0.75))
    assert ix.uv_coords(1.0, core, 3, 6) == pytest.approx((0.25, 1.0))


def test_uv_end_face_values():
    ix = _indexer(2, split=True)
    core = (2.0, 2.0, 2.0)
    assert ix.uv_coords(1.0, core, 0, 0) == (0.5, 0.5)
    assert ix.uv_coords(1.0, core, 0, 1) == pytest.approx((0.75, 0.25))
    assert ix.uv_coords(1.0, core, 0, ix.stacks - 2) == pytest.approx((0.75, 0.75))


@pytest.mark.parametrize("subdivisions", [2, 4, 6])
def test_uv_within_unit_square(subdivisions):
    ix = _indexer(subdivisions, split=True)
    radius = 0.1
    core = (0.8, 0.6, 0.4)
    rounded_length = 0.125 * math.tau * radius
    for stack in range(ix.stacks):
        for sector in range(ix.sectors_in(stack)):
            u, v = ix.uv_coords(rounded_length, core, sector, stack)
            assert -1e-9 <= u <= 1 + 1e-9
            assert -1e-9 <= v <= 1 + 1e-9