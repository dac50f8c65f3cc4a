"""
Right-hand wall following.

The rule only looks at the cells to the right of and straight ahead of the
current cell:
1. Right is open: turn right and move there
2. Ahead is open: keep heading and move there
3. Otherwise: turn left in place and move nowhere

In a perfect maze this walks the whole tree and always finds an opening on
the outer wall, though not by the shortest route.
"""
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from .directions import Direction

# Order of openness flags in observations and of env actions
DIRECTION_ORDER = list(Direction)


@dataclass
class WallFollowDecision:
    """Heading after the decision and the cell to move into (None = stall)."""
    direction: Direction
    target: Optional[Tuple[int, int]]

    @property
    def moves(self) -> bool:
        return self.target is not None


def right_hand_rule(
    direction: Direction,
    cell: Tuple[int, int],
    is_open: Callable[[int, int], bool],
) -> WallFollowDecision:
    """
    Decide the next step from `cell` while heading `direction`.

    Args:
        direction: Current heading
        cell: Current (x, y)
        is_open: Called with (x, y) of a candidate cell

    Returns:
        WallFollowDecision with the new heading and target cell
    """
    right_cell = direction.right.step(cell)
    if is_open(*right_cell):
        return WallFollowDecision(direction=direction.right, target=right_cell)

    ahead_cell = direction.step(cell)
    if is_open(*ahead_cell):
        return WallFollowDecision(direction=direction, target=ahead_cell)

    return WallFollowDecision(direction=direction.left, target=None)


class WallFollowerPolicy:
    """
    Baseline policy for MazeNavigationEnv.

    Reads the N/E/S/W openness flags at the start of an observation and
    returns the action index of the direction to move. Unlike the animated
    agent, it resolves left turns within a single call, since every env step
    must be a move.
    """

    def __init__(self, initial_direction: Direction = Direction.SOUTH):
        self._initial_direction = initial_direction
        self.direction = initial_direction

    def reset(self) -> None:
        self.direction = self._initial_direction

    def act(self, observation: Sequence[float]) -> int:
        open_flags = {
            d: bool(observation[i] > 0.5) for i, d in enumerate(DIRECTION_ORDER)
        }

        # Relative cell coordinates: only the direction of each probe matters
        def is_open(x: int, y: int) -> bool:
            for d in DIRECTION_ORDER:
                if d.delta == (x, y):
                    return open_flags[d]
            return False

        for _ in range(len(DIRECTION_ORDER)):
            decision = right_hand_rule(self.direction, (0, 0), is_open)
            self.direction = decision.direction
            if decision.moves:
                return DIRECTION_ORDER.index(self.direction)

        # Boxed in on all sides; any action is a collision
        return DIRECTION_ORDER.index(self.direction)

    @property
    def name(self) -> str:
        return "WallFollowerPolicy"
