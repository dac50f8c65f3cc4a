from enum import Enum
from typing import Dict, Tuple


class Direction(Enum):
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def delta(self) -> Tuple[int, int]:
        return DIRECTION_DELTAS[self]

    @property
    def right(self) -> "Direction":
        return RIGHT_TURNS[self]

    @property
    def left(self) -> "Direction":
        return LEFT_TURNS[self]

    def step(self, cell: Tuple[int, int]) -> Tuple[int, int]:
        """The cell adjacent to `cell` in this direction."""
        dx, dy = self.delta
        return cell[0] + dx, cell[1] + dy


# Grid deltas (dx, dy); y grows toward the exit row
DIRECTION_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}

RIGHT_TURNS: Dict[Direction, Direction] = {
    Direction.NORTH: Direction.EAST,
    Direction.EAST: Direction.SOUTH,
    Direction.SOUTH: Direction.WEST,
    Direction.WEST: Direction.NORTH,
}

LEFT_TURNS: Dict[Direction, Direction] = {turned: d for d, turned in RIGHT_TURNS.items()}
