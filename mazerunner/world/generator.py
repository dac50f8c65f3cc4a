"""
Perfect maze generation.

Carves a spanning tree of corridors with a randomized depth-first search
(recursive backtracker with an explicit stack), then opens an entrance on the
top edge and an exit on the bottom edge.
"""
import logging
import random
from typing import List, NamedTuple, Optional, Tuple

from mazerunner.config import MazeConfig
from mazerunner.errors import NoEntranceFound, NoExitFound
from .cells import CellType
from .grid import Grid

logger = logging.getLogger(__name__)

# Two-cell jumps in N, E, S, W order; odd coordinates are the carved cells,
# the cell in between is the corridor.
NEIGHBOR_OFFSETS: List[Tuple[int, int]] = [(0, -2), (2, 0), (0, 2), (-2, 0)]

START_CELL: Tuple[int, int] = (1, 1)


class MazeLayout(NamedTuple):
    """A generated maze. Unpacks as (grid, entrance, exit)."""
    grid: Grid
    entrance: Optional[Tuple[int, int]]
    exit: Optional[Tuple[int, int]]

    @property
    def is_usable(self) -> bool:
        return self.entrance is not None and self.exit is not None

    def require_endpoints(self) -> "MazeLayout":
        """Return self, or raise if the entrance or exit is missing."""
        if self.entrance is None:
            raise NoEntranceFound("No PATH cell in the entrance window of row 1", self)
        if self.exit is None:
            raise NoExitFound(
                f"No PATH cell in the exit window of row {self.grid.size - 2}", self
            )
        return self

    def to_dict(self) -> dict:
        return {
            "maze_size": self.grid.size,
            "grid": self.grid.to_list(),
            "entrance": list(self.entrance) if self.entrance else None,
            "exit": list(self.exit) if self.exit else None,
        }


class MazeGenerator:
    """
    Builds perfect mazes.

    Usage:
        generator = MazeGenerator(MazeConfig(maze_size=21), seed=42)
        grid, entrance, exit_cell = generator.generate()

    The same seed (or an rng replaying the same draws) always produces the
    same maze.
    """

    def __init__(
        self,
        config: Optional[MazeConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or MazeConfig()
        self.seed = seed
        self.rng = rng or random.Random(seed)

    def generate(self) -> MazeLayout:
        """Carve a new maze, place the endpoints and freeze the grid."""
        grid = Grid(self.config)
        self.carve(grid)
        entrance, exit_cell = self.place_endpoints(grid)
        grid.freeze()

        logger.info(
            "Generated %dx%d maze: %d path cells, entrance=%s, exit=%s",
            grid.size, grid.size, grid.path_count, entrance, exit_cell,
        )
        return MazeLayout(grid=grid, entrance=entrance, exit=exit_cell)

    def carve(self, grid: Grid, start: Tuple[int, int] = START_CELL) -> None:
        """
        Recursive backtracker over the odd-coordinate lattice.

        Each step connects a still-WALL cell to the visited cell on top of
        the stack, so the carved cells always form a tree.
        """
        start_x, start_y = start
        stack = [start]
        grid.set_type(start_x, start_y, CellType.PATH)

        while stack:
            current_x, current_y = stack[-1]
            neighbors = self.get_unvisited_neighbors(grid, current_x, current_y)

            if not neighbors:
                stack.pop()
                continue

            next_x, next_y = self.rng.choice(neighbors)
            mid_x = (current_x + next_x) // 2
            mid_y = (current_y + next_y) // 2

            grid.set_type(mid_x, mid_y, CellType.PATH)
            grid.set_type(next_x, next_y, CellType.PATH)
            stack.append((next_x, next_y))

    def get_unvisited_neighbors(self, grid: Grid, x: int, y: int) -> List[Tuple[int, int]]:
        """Interior cells two steps away that are still WALL."""
        neighbors = []
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if grid.is_interior(nx, ny) and grid.get_type(nx, ny) == CellType.WALL:
                neighbors.append((nx, ny))
        return neighbors

    def place_endpoints(
        self, grid: Grid
    ) -> Tuple[Optional[Tuple[int, int]], Optional[Tuple[int, int]]]:
        """
        Open the entrance on row 0 and the exit on row N-1.

        The entrance sits above the first PATH cell of row 1 in
        x = 1 .. floor(N/4); the exit below the first PATH cell of row N-2
        scanning x = N-2 down to floor(3N/4). An empty window leaves that
        endpoint as None.
        """
        size = grid.size
        entrance = None
        exit_cell = None

        for x in range(1, size // 4 + 1):
            if grid.is_path(x, 1):
                entrance = (x, 0)
                grid.set_type(x, 0, CellType.PATH)
                break

        for x in range(size - 2, (3 * size) // 4 - 1, -1):
            if grid.is_path(x, size - 2):
                exit_cell = (x, size - 1)
                grid.set_type(x, size - 1, CellType.PATH)
                break

        if entrance is None:
            logger.warning("No entrance found in row 1, x=1..%d", size // 4)
        if exit_cell is None:
            logger.warning(
                "No exit found in row %d, x=%d..%d", size - 2, (3 * size) // 4, size - 2
            )

        return entrance, exit_cell
