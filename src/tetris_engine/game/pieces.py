from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .board import COLUMNS
from .shapes import CatalogEntry, Shape, ShapeKind


def rotate_cw(shape: Shape) -> Shape:
    # new[c][rows - 1 - r] = old[r][c]
    rotated = np.rot90(shape, -1).copy()
    rotated.flags.writeable = False
    return rotated


@dataclass
class Piece:
    kind: ShapeKind
    shape: Shape
    x: int = 0
    y: int = 0

    @classmethod
    def spawn(cls, entry: CatalogEntry) -> "Piece":
        width = entry.shape.shape[1]
        return cls(entry.kind, entry.shape, COLUMNS // 2 - width // 2, 0)

    @property
    def color(self) -> int:
        return int(self.kind)

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def rotated_shape(self) -> Shape:
        return rotate_cw(self.shape)

    def cells(self) -> List[Tuple[int, int]]:
        rows, cols = np.nonzero(self.shape)
        return [(self.x + int(c), self.y + int(r)) for r, c in zip(rows, cols)]
