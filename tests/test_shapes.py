import random

import numpy as np
import pytest

from tetris_engine.game.shapes import SHAPES, ShapeKind, color_for, entry_for, make_shape, random_shape


def test_catalog_order_and_colors():
    assert [e.kind for e in SHAPES] == [
        ShapeKind.T, ShapeKind.O, ShapeKind.S, ShapeKind.Z, ShapeKind.I, ShapeKind.L, ShapeKind.J
    ]
    assert len({e.color for e in SHAPES}) == 7
    assert entry_for(ShapeKind.T).color == "#FF0D72"
    assert entry_for(ShapeKind.J).color == "#3877FF"


def test_every_piece_has_four_cells():
    for entry in SHAPES:
        assert int(entry.shape.sum()) == 4
        assert entry.shape.dtype == bool


def test_catalog_shapes_are_read_only():
    with pytest.raises(ValueError):
        SHAPES[0].shape[0, 0] = False


def test_make_shape_rejects_empty_matrices():
    with pytest.raises(ValueError):
        make_shape([])
    with pytest.raises(ValueError):
        make_shape([[]])


def test_color_for_ignores_overlay_sign():
    assert color_for(int(ShapeKind.I)) == color_for(-int(ShapeKind.I)) == "#FF8E0D"


def test_random_shape_draws_all_kinds_with_repeats():
    rng = random.Random(3)
    draws = [random_shape(rng) for _ in range(700)]
    assert {d.kind for d in draws} == set(ShapeKind)
    assert any(a.kind == b.kind for a, b in zip(draws, draws[1:]))


def test_random_shape_is_reproducible_with_seed():
    rng_a, rng_b = random.Random(11), random.Random(11)
    a = [random_shape(rng_a) for _ in range(20)]
    b = [random_shape(rng_b) for _ in range(20)]
    assert [e.kind for e in a] == [e.kind for e in b]
    assert all(np.array_equal(e.shape, entry_for(e.kind).shape) for e in a)
