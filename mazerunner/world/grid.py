"""
Square cell grid that holds the maze.

Cells are stored in a numpy array indexed as types[y, x]. The grid is
writable while the generator carves it and read-only after freeze().
"""
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from mazerunner.config import MazeConfig
from .cells import Cell, CellType, Position

ASCII_SYMBOLS = {
    CellType.WALL: "#",
    CellType.PATH: ".",
    CellType.UNKNOWN: "?",
}


class Grid:
    """
    N x N grid of WALL / PATH cells.

    Every cell starts as WALL. The per-cell discovered flag is kept for
    completeness but nothing in navigation reads or writes it.
    """

    def __init__(self, config: Optional[MazeConfig] = None):
        self.config = config or MazeConfig()
        self.size = self.config.maze_size

        self.types = np.full((self.size, self.size), CellType.WALL, dtype=np.int8)
        self._discovered = np.zeros((self.size, self.size), dtype=bool)

    @classmethod
    def from_rows(cls, rows: Sequence[str], config: Optional[MazeConfig] = None) -> "Grid":
        """
        Build a grid from text rows ('#' wall, '.' path), top row first.

        The config's maze_size must match the number of rows.
        """
        config = config or MazeConfig(maze_size=len(rows))
        if len(rows) != config.maze_size or any(len(r) != config.maze_size for r in rows):
            raise ValueError(
                f"Expected {config.maze_size} rows of {config.maze_size} characters"
            )

        grid = cls(config)
        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                if char == ".":
                    grid.set_type(x, y, CellType.PATH)
                elif char != "#":
                    raise ValueError(f"Unknown cell symbol {char!r} at ({x}, {y})")
        return grid

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def is_interior(self, x: int, y: int) -> bool:
        """Inside the outer wall ring: 1 <= x, y <= N-2."""
        return 0 < x < self.size - 1 and 0 < y < self.size - 1

    def get_type(self, x: int, y: int) -> CellType:
        return CellType(int(self.types[y, x]))

    def set_type(self, x: int, y: int, cell_type: CellType) -> None:
        self.types[y, x] = cell_type

    def is_path(self, x: int, y: int) -> bool:
        """Check if a cell is open. Out of bounds is never open."""
        if not self.in_bounds(x, y):
            return False
        return self.types[y, x] == CellType.PATH

    def is_wall(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return self.types[y, x] == CellType.WALL

    def cell(self, x: int, y: int) -> Cell:
        return Cell(x=x, y=y, type=self.get_type(x, y), discovered=self.is_discovered(x, y))

    # Reserved discovery state, unused by navigation
    def is_discovered(self, x: int, y: int) -> bool:
        return bool(self._discovered[y, x])

    def mark_discovered(self, x: int, y: int) -> None:
        self._discovered[y, x] = True

    def path_cells(self) -> List[Tuple[int, int]]:
        """All PATH cells as (x, y), row by row."""
        ys, xs = np.nonzero(self.types == CellType.PATH)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    @property
    def path_count(self) -> int:
        return int(np.sum(self.types == CellType.PATH))

    def first_path_in_row(self, y: int) -> Optional[int]:
        """x of the leftmost PATH cell in row y, or None."""
        if not 0 <= y < self.size:
            return None
        xs = np.flatnonzero(self.types[y] == CellType.PATH)
        if xs.size == 0:
            return None
        return int(xs[0])

    def cell_to_world(self, x: int, y: int, height: float = 0.0) -> Position:
        """Convert grid coordinates to a world position (cell centre)."""
        half = self.config.half_size
        size = self.config.cell_size
        return Position(x=(x - half) * size, y=height, z=(y - half) * size)

    def world_to_cell(self, position: Position) -> Tuple[int, int]:
        """Convert a world position to the nearest grid coordinates."""
        half = self.config.half_size
        size = self.config.cell_size
        x = int(round(half + position.x / size))
        y = int(round(half + position.z / size))
        return x, y

    def freeze(self) -> None:
        """Make the grid read-only."""
        self.types.flags.writeable = False
        self._discovered.flags.writeable = False

    @property
    def frozen(self) -> bool:
        return not self.types.flags.writeable

    def to_list(self) -> List[List[int]]:
        return self.types.tolist()

    def to_ascii(
        self,
        trail: Optional[Iterable[Tuple[int, int]]] = None,
        agent: Optional[Tuple[int, int]] = None,
        entrance: Optional[Tuple[int, int]] = None,
        exit_cell: Optional[Tuple[int, int]] = None,
    ) -> str:
        """
        Generate ASCII visualization of the grid.

        Args:
            trail: Cells to mark with '*'
            agent: Agent cell, marked 'A'
            entrance: Entrance cell, marked 'E'
            exit_cell: Exit cell, marked 'X'

        Returns:
            ASCII string, top row (y=0) first
        """
        trail_set = set(trail) if trail else set()
        lines = []

        for y in range(self.size):
            row = ""
            for x in range(self.size):
                if (x, y) == agent:
                    row += "A"
                elif (x, y) == exit_cell:
                    row += "X"
                elif (x, y) == entrance:
                    row += "E"
                elif (x, y) in trail_set:
                    row += "*"
                else:
                    row += ASCII_SYMBOLS[self.get_type(x, y)]
            lines.append(row)

        return "\n".join(lines)

    def __repr__(self) -> str:
        total = self.size * self.size
        return (
            f"Grid(size={self.size}x{self.size}, "
            f"path={self.path_count}/{total}, frozen={self.frozen})"
        )
