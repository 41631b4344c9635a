from __future__ import annotations

import random

import pytest

from swiftris.game import (
    BOTTOM_CELLS,
    GEOMETRY,
    Block,
    BlockColor,
    GeometryError,
    Orientation,
    Piece,
    ShapeKind,
    random_kind,
    random_orientation,
)
from swiftris.game.pieces import offsets_for


ALL = [(kind, orientation) for kind in ShapeKind for orientation in Orientation]


@pytest.mark.parametrize("kind,orientation", ALL)
def test_geometry_has_four_distinct_cells(kind, orientation):
    offsets = GEOMETRY[kind][orientation]
    assert len(offsets) == 4
    assert len(set(offsets)) == 4


@pytest.mark.parametrize("kind,orientation", ALL)
def test_bottom_cells_have_nothing_beneath(kind, orientation):
    offsets = GEOMETRY[kind][orientation]
    bottom = set(BOTTOM_CELLS[kind][orientation])
    for index, (column, row) in enumerate(offsets):
        has_cell_beneath = (column, row + 1) in offsets
        assert (index in bottom) == (not has_cell_beneath)


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        GEOMETRY[ShapeKind.T] = {}  # type: ignore[index]
    with pytest.raises(TypeError):
        GEOMETRY[ShapeKind.T][Orientation.ZERO] = ()  # type: ignore[index]


def test_missing_table_entry_raises():
    with pytest.raises(GeometryError):
        offsets_for(ShapeKind.T, 7)  # type: ignore[arg-type]


def test_orientation_wraps_both_ways():
    assert Orientation.TWO_SEVENTY.rotate(clockwise=True) is Orientation.ZERO
    assert Orientation.ZERO.rotate(clockwise=False) is Orientation.TWO_SEVENTY
    assert Orientation.NINETY.rotate() is Orientation.ONE_EIGHTY
    assert str(Orientation.ONE_EIGHTY) == "180"


def test_piece_blocks_follow_anchor_and_table():
    piece = Piece(ShapeKind.T, 4, 0, BlockColor.PURPLE, Orientation.ZERO)
    assert piece.blocks == [
        Block(BlockColor.PURPLE, 5, 0),
        Block(BlockColor.PURPLE, 4, 1),
        Block(BlockColor.PURPLE, 5, 1),
        Block(BlockColor.PURPLE, 6, 1),
    ]
    assert piece.bottom_blocks() == piece.blocks[1:]


@pytest.mark.parametrize("kind,orientation", ALL)
def test_four_clockwise_rotations_return_to_start(kind, orientation):
    piece = Piece(kind, 4, 5, BlockColor.BLUE, orientation)
    start = list(piece.blocks)
    for _ in range(4):
        piece.rotate(clockwise=True)
    assert piece.orientation is orientation
    assert piece.blocks == start
    assert (piece.column, piece.row) == (4, 5)


@pytest.mark.parametrize("kind", list(ShapeKind))
def test_counter_clockwise_undoes_clockwise(kind):
    piece = Piece(kind, 4, 5, BlockColor.BLUE)
    start = list(piece.blocks)
    piece.rotate(clockwise=True)
    piece.rotate(clockwise=False)
    assert piece.blocks == start


def test_rotation_recomputes_around_unchanged_anchor():
    piece = Piece(ShapeKind.LINE, 4, 0, BlockColor.RED)
    piece.rotate()
    assert (piece.column, piece.row) == (4, 0)
    assert [(b.column, b.row) for b in piece.blocks] == [(3, 0), (4, 0), (5, 0), (6, 0)]
    assert piece.bottom_blocks() == piece.blocks


def test_translate_moves_anchor_and_blocks():
    piece = Piece(ShapeKind.S, 2, 3, BlockColor.ORANGE)
    before = [(b.column, b.row) for b in piece.blocks]
    piece.translate(3, -1)
    assert (piece.column, piece.row) == (5, 2)
    assert [(b.column, b.row) for b in piece.blocks] == [(c + 3, r - 1) for c, r in before]
    piece.move_to(0, 0)
    assert piece.cells_at() == list(GEOMETRY[ShapeKind.S][Orientation.ZERO])


def test_cells_at_does_not_mutate():
    piece = Piece(ShapeKind.J, 4, 0, BlockColor.TEAL)
    candidate = piece.cells_at(0, 1, Orientation.NINETY)
    assert candidate == [(6, 2), (5, 2), (4, 2), (4, 1)]
    assert piece.orientation is Orientation.ZERO
    assert (piece.column, piece.row) == (4, 0)


def test_pieces_compare_by_identity():
    a = Piece(ShapeKind.Z, 4, 0, BlockColor.RED)
    b = Piece(ShapeKind.Z, 4, 0, BlockColor.RED)
    assert a != b
    assert a == a


def test_random_choices_cover_every_value():
    rng = random.Random(7)
    kinds = {random_kind(rng) for _ in range(500)}
    orientations = {random_orientation(rng) for _ in range(200)}
    assert kinds == set(ShapeKind)
    assert orientations == set(Orientation)


def test_random_piece_is_reproducible():
    a = Piece.random(12, 1, random.Random(3))
    b = Piece.random(12, 1, random.Random(3))
    assert (a.kind, a.color, a.orientation) == (b.kind, b.color, b.orientation)
    assert (a.column, a.row) == (12, 1)
