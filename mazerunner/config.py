from dataclasses import dataclass

from .errors import InvalidGridSize

MIN_MAZE_SIZE = 5


@dataclass(frozen=True)
class MazeConfig:
    """
    Shared maze and agent settings.

    Built once per run and handed to Grid, MazeGenerator and NavigationAgent,
    so every component reads the same size and scale.
    """
    maze_size: int = 21        # Grid side N (odd, >= 5)
    cell_size: float = 40.0    # World units per cell
    wall_height: float = 80.0  # World height of a wall block (render hint)
    agent_speed: float = 2.0   # World units per tick
    agent_scale: float = 0.6   # Agent cube edge as a fraction of cell_size

    def __post_init__(self) -> None:
        size = self.maze_size
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidGridSize(f"maze_size must be an int, got {size!r}")
        if size < MIN_MAZE_SIZE or size % 2 == 0:
            raise InvalidGridSize(
                f"maze_size must be odd and >= {MIN_MAZE_SIZE}, got {size}"
            )
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.agent_speed <= 0:
            raise ValueError(f"agent_speed must be positive, got {self.agent_speed}")

    @property
    def half_size(self) -> float:
        """Offset that centres the grid on the world origin (N / 2, not floored)."""
        return self.maze_size / 2

    @property
    def agent_extent(self) -> float:
        return self.cell_size * self.agent_scale

    @property
    def agent_height_offset(self) -> float:
        """Fixed vertical coordinate of the agent."""
        return -self.agent_extent / 2
