"""Fixed-size play-field surrounded by a wall ring."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

Position = tuple[int, int]


class Grid:
    """NumPy-backed play-field with an implicit border wall.

    Coordinates use (col, row) ordering; the wall mask is indexed
    ``[row, col]`` consistent with NumPy. The grid never changes after
    construction.
    """

    def __init__(self, width: int = 16, height: int = 16) -> None:
        if width < 3 or height < 3:
            raise ValueError("Grid dimensions must be at least 3×3.")
        self.width = width
        self.height = height
        mask = np.zeros((height, width), dtype=bool)
        mask[0, :] = True
        mask[-1, :] = True
        mask[:, 0] = True
        mask[:, -1] = True
        mask.setflags(write=False)
        self._walls = mask

    @property
    def interior_size(self) -> int:
        return (self.width - 2) * (self.height - 2)

    def in_bounds(self, pos: Position) -> bool:
        """Check whether a position lies within the grid."""
        col, row = pos
        return 0 <= col < self.width and 0 <= row < self.height

    def is_wall(self, pos: Position) -> bool:
        """Return True iff *pos* lies on the outer ring."""
        col, row = pos
        return col in (0, self.width - 1) or row in (0, self.height - 1)

    def is_interior(self, pos: Position) -> bool:
        col, row = pos
        return 0 < col < self.width - 1 and 0 < row < self.height - 1

    def wall_cells(self) -> list[Position]:
        """Return every wall position."""
        rows, cols = np.nonzero(self._walls)
        return list(zip(cols.tolist(), rows.tolist(), strict=True))

    def interior_cells(self) -> list[Position]:
        """Return every interior position in row-major order."""
        rows, cols = np.nonzero(~self._walls)
        return list(zip(cols.tolist(), rows.tolist(), strict=True))

    def free_cells(self, occupied: Iterable[Position]) -> list[Position]:
        """Return the interior positions not covered by *occupied*."""
        free = ~self._walls
        for col, row in occupied:
            if self.in_bounds((col, row)):
                free[row, col] = False
        rows, cols = np.nonzero(free)
        return list(zip(cols.tolist(), rows.tolist(), strict=True))

    def to_dict(self) -> dict:
        """Serialize grid dimensions to a dictionary."""
        return {"width": self.width, "height": self.height}
