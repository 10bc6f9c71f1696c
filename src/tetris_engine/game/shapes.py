from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence, Tuple

import numpy as np


class ShapeKind(IntEnum):
    """Catalog identity of a piece; its value doubles as the board color id."""

    T = 1
    O = 2
    S = 3
    Z = 4
    I = 5
    L = 6
    J = 7


Shape = np.ndarray


def make_shape(rows: Sequence[Sequence[int]]) -> Shape:
    shape = np.array(rows, dtype=bool)
    if shape.ndim != 2 or shape.shape[0] < 1 or shape.shape[1] < 1:
        raise ValueError(f"shape must be a non-empty 2D matrix, got {rows!r}")
    shape.flags.writeable = False
    return shape


@dataclass(frozen=True)
class CatalogEntry:
    kind: ShapeKind
    shape: Shape
    color: str

    @property
    def color_id(self) -> int:
        return int(self.kind)


SHAPES: Tuple[CatalogEntry, ...] = (
    CatalogEntry(ShapeKind.T, make_shape([[1, 1, 1], [0, 1, 0]]), "#FF0D72"),
    CatalogEntry(ShapeKind.O, make_shape([[1, 1], [1, 1]]), "#0DC2FF"),
    CatalogEntry(ShapeKind.S, make_shape([[1, 1, 0], [0, 1, 1]]), "#0DFF72"),
    CatalogEntry(ShapeKind.Z, make_shape([[0, 1, 1], [1, 1, 0]]), "#F538FF"),
    CatalogEntry(ShapeKind.I, make_shape([[1, 1, 1, 1]]), "#FF8E0D"),
    CatalogEntry(ShapeKind.L, make_shape([[1, 0, 0], [1, 1, 1]]), "#FFE138"),
    CatalogEntry(ShapeKind.J, make_shape([[0, 0, 1], [1, 1, 1]]), "#3877FF"),
)

_BY_KIND = {entry.kind: entry for entry in SHAPES}


def entry_for(kind: ShapeKind | int) -> CatalogEntry:
    return _BY_KIND[ShapeKind(kind)]


def color_for(color_id: int) -> str:
    """Hex color for a board cell value (sign ignored, as for overlays)."""
    return entry_for(abs(int(color_id))).color


def random_shape(rng: random.Random) -> CatalogEntry:
    # Uniform with replacement; immediate repeats are allowed.
    return rng.choice(SHAPES)
