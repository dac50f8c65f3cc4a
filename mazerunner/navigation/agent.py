"""
Wall-following maze agent with continuous motion.

Each tick the agent either picks the next cell with the right-hand rule or
moves a fixed distance toward the cell it already picked. Exit detection
happens in two places:
- at decision time, when a candidate cell equals the known exit
- at arrival time, when the agent lands on the last row near its first opening
Both checks are kept as separate predicates; see is_exit_cell() and
arrived_at_exit_row().
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from mazerunner.config import MazeConfig
from mazerunner.world import Grid, Position
from .directions import Direction
from .wall_follower import right_hand_rule

logger = logging.getLogger(__name__)

EXIT_BY_DECISION = "decision"
EXIT_BY_ARRIVAL = "arrival"


class NavigationAgent:
    """
    Agent that walks a generated maze from its entrance.

    Usage:
        layout = MazeGenerator(config, seed=7).generate().require_endpoints()
        agent = NavigationAgent(layout.grid, layout.entrance, layout.exit)

        while not agent.has_reached_exit:
            agent.update()

    The grid is only read. Regenerating a maze means building a new agent.
    """

    def __init__(
        self,
        grid: Grid,
        entrance: Tuple[int, int],
        exit_cell: Tuple[int, int],
        config: Optional[MazeConfig] = None,
        direction: Direction = Direction.SOUTH,
    ):
        self.config = config or grid.config
        self.grid = grid
        self.entrance = entrance
        self.exit_cell = exit_cell
        self.speed = self.config.agent_speed

        extent = self.config.agent_extent
        self.size = {"width": extent, "height": extent, "depth": extent}

        self.position = grid.cell_to_world(*entrance, height=self.config.agent_height_offset)
        self.current_cell = grid.world_to_cell(self.position)
        self.direction = direction

        self.target_position: Optional[Position] = None
        self.target_cell: Optional[Tuple[int, int]] = None
        self.last_chosen_cell: Optional[Tuple[int, int]] = None
        self.trail: List[Position] = []

        self._has_reached_exit = False
        self.exit_detected_by: Optional[str] = None
        self.ticks = 0

    @property
    def has_reached_exit(self) -> bool:
        return self._has_reached_exit

    def _mark_exit_reached(self, source: str) -> None:
        if self._has_reached_exit:
            return
        self._has_reached_exit = True
        self.exit_detected_by = source
        logger.info(
            "Exit detected by %s check at tick %d (cell=%s)",
            source, self.ticks, self.current_cell,
        )

    def is_exit_cell(self, x: int, y: int) -> bool:
        """Primary exit check: the cell is the known exit coordinate."""
        return (x, y) == tuple(self.exit_cell)

    def arrived_at_exit_row(self) -> bool:
        """
        Secondary exit check, run after snapping onto a cell.

        True when the agent is on the last row within one cell width of that
        row's first PATH cell. With several openings in the last row this can
        disagree with is_exit_cell().
        """
        last_row = self.grid.size - 1
        if self.current_cell[1] != last_row:
            return False

        opening_x = self.grid.first_path_in_row(last_row)
        if opening_x is None:
            return False

        opening = self.grid.cell_to_world(opening_x, last_row)
        return abs(self.position.x - opening.x) < self.config.cell_size

    def is_valid_move(self, x: int, y: int) -> bool:
        """
        Check whether the agent may enter (x, y).

        Checking the exit cell marks the exit as reached.
        """
        if self.is_exit_cell(x, y):
            self._mark_exit_reached(EXIT_BY_DECISION)
            return True
        return self.grid.is_path(x, y)

    def get_next_move(self) -> Optional[Tuple[int, int]]:
        """Apply the right-hand rule; returns the chosen cell or None (turned left)."""
        decision = right_hand_rule(self.direction, self.current_cell, self.is_valid_move)
        self.direction = decision.direction

        if decision.target is None:
            logger.debug("Tick %d: blocked at %s, turning %s",
                         self.ticks, self.current_cell, self.direction.value)
        return decision.target

    def update(self) -> None:
        """Advance the agent by one tick."""
        if self._has_reached_exit:
            self.target_position = None
            self.target_cell = None
            return

        self.ticks += 1

        if self.target_position is None:
            next_cell = self.get_next_move()
            if next_cell is not None:
                self.target_cell = next_cell
                self.last_chosen_cell = next_cell
                self.target_position = self.grid.cell_to_world(
                    *next_cell, height=self.position.y
                )

        if self.target_position is None:
            return

        dx = self.target_position.x - self.position.x
        dz = self.target_position.z - self.position.z
        distance = (dx * dx + dz * dz) ** 0.5

        if distance > self.speed:
            self.position.x += (dx / distance) * self.speed
            self.position.z += (dz / distance) * self.speed
            self.trail.append(self.position.copy())
            return

        self.position = self.target_position.copy()
        self.current_cell = self.grid.world_to_cell(self.position)
        self.target_position = None
        self.target_cell = None

        if self.arrived_at_exit_row():
            if not self.is_exit_cell(*self.current_cell):
                logger.warning(
                    "Arrival check fired at %s but the known exit is %s",
                    self.current_cell, self.exit_cell,
                )
            self._mark_exit_reached(EXIT_BY_ARRIVAL)

    def trail_cells(self) -> List[Tuple[int, int]]:
        """Distinct grid cells the trail passes through, in visiting order."""
        cells: List[Tuple[int, int]] = []
        seen = set()
        for pos in self.trail:
            cell = self.grid.world_to_cell(pos)
            if cell not in seen:
                seen.add(cell)
                cells.append(cell)
        return cells

    def get_state(self) -> Dict[str, Any]:
        return {
            "position": self.position.to_dict(),
            "current_cell": list(self.current_cell),
            "direction": self.direction.value,
            "target_cell": list(self.target_cell) if self.target_cell else None,
            "trail_length": len(self.trail),
            "has_reached_exit": self._has_reached_exit,
            "exit_detected_by": self.exit_detected_by,
            "ticks": self.ticks,
        }
