"""
Simulation driver for maze runs.

Owns one maze and one agent at a time. The host calls step() once per frame
and reads positions, the trail and the exit flag from the result.
"""
import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from mazerunner.config import MazeConfig
from mazerunner.errors import UnreachableExit
from mazerunner.navigation import Direction, NavigationAgent
from mazerunner.world import MazeGenerator, MazeLayout, Position
from .events import Event, EventQueue, EventType

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Configuration for the simulation loop."""
    seed: Optional[int] = None
    enable_logging: bool = True       # Keep per-tick StepResults in memory
    max_ticks: int = 50_000           # Default cap for run()
    initial_direction: Direction = Direction.SOUTH


@dataclass
class StepResult:
    """Result of a single simulation tick."""
    tick: int
    position: Position
    current_cell: Tuple[int, int]
    direction: Direction
    has_reached_exit: bool
    trail_length: int
    events: List[Event]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tick": self.tick,
            "position": self.position.to_dict(),
            "current_cell": list(self.current_cell),
            "direction": self.direction.value,
            "has_reached_exit": self.has_reached_exit,
            "trail_length": self.trail_length,
            "events": [e.to_dict() for e in self.events],
        }


@dataclass
class RunSummary:
    """Outcome of Simulation.run()."""
    reached_exit: bool
    ticks: int
    trail_length: int
    cells_visited: int
    exit_detected_by: Optional[str]
    final_cell: Tuple[int, int]

    @property
    def timed_out(self) -> bool:
        return not self.reached_exit

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reached_exit": self.reached_exit,
            "ticks": self.ticks,
            "trail_length": self.trail_length,
            "cells_visited": self.cells_visited,
            "exit_detected_by": self.exit_detected_by,
            "final_cell": list(self.final_cell),
        }


class Simulation:
    """
    Runs a maze generator and agent pair, one tick at a time.

    Flow per tick:
    1. Process pending host events (regenerate requests)
    2. Advance the agent once
    3. Emit events for turns, cell arrivals and exit detection
    4. Return step result

    Usage:
        sim = Simulation(MazeConfig(), SimulationConfig(seed=42))

        while not sim.agent.has_reached_exit:
            result = sim.step()
            draw(result.position, sim.agent.trail)
    """

    def __init__(
        self,
        config: Optional[MazeConfig] = None,
        sim_config: Optional[SimulationConfig] = None,
    ):
        self.config = config or MazeConfig()
        self.sim_config = sim_config or SimulationConfig()

        self._rng = random.Random(self.sim_config.seed)
        self._event_queue = EventQueue()
        self._layout: Optional[MazeLayout] = None
        self._agent: Optional[NavigationAgent] = None
        self._tick = 0

        self._step_history: List[StepResult] = []
        self._tick_events: List[Event] = []

        self.regenerate()

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def layout(self) -> MazeLayout:
        return self._layout

    @property
    def agent(self) -> NavigationAgent:
        return self._agent

    @property
    def event_queue(self) -> EventQueue:
        return self._event_queue

    def regenerate(self, seed: Optional[int] = None) -> MazeLayout:
        """
        Replace the maze and the agent with fresh ones.

        Raises:
            NoEntranceFound, NoExitFound: the new maze has no usable endpoints
        """
        if seed is None:
            seed = self._rng.randint(0, 1_000_000)

        generator = MazeGenerator(self.config, seed=seed)
        layout = generator.generate().require_endpoints()

        self._layout = layout
        self._agent = NavigationAgent(
            layout.grid,
            layout.entrance,
            layout.exit,
            config=self.config,
            direction=self.sim_config.initial_direction,
        )
        self._tick = 0
        self._step_history.clear()

        logger.info("New run with maze seed %d", seed)
        self._emit_event(EventType.MAZE_GENERATED, {
            "seed": seed,
            "entrance": list(layout.entrance),
            "exit": list(layout.exit),
        })
        return layout

    def request_regenerate(self, seed: Optional[int] = None) -> None:
        """Queue a regeneration for the start of the next tick."""
        self._event_queue.push_regenerate(self._tick, seed)

    def step(self) -> StepResult:
        """Advance the simulation by one tick."""
        self._tick_events.clear()
        self._process_events()

        agent = self._agent
        cell_before = agent.current_cell
        direction_before = agent.direction
        had_exit = agent.has_reached_exit
        trail_before = len(agent.trail)

        agent.update()
        if not had_exit:
            self._tick += 1

        if agent.current_cell != cell_before:
            self._emit_event(EventType.CELL_REACHED, {"cell": list(agent.current_cell)})
        elif (
            agent.direction != direction_before
            and agent.target_position is None
            and len(agent.trail) == trail_before
            and not agent.has_reached_exit
        ):
            self._emit_event(EventType.TURNED, {"direction": agent.direction.value})

        if agent.has_reached_exit and not had_exit:
            self._emit_event(EventType.EXIT_REACHED, {
                "cell": list(agent.current_cell),
                "detected_by": agent.exit_detected_by,
            })

        result = StepResult(
            tick=self._tick,
            position=agent.position.copy(),
            current_cell=agent.current_cell,
            direction=agent.direction,
            has_reached_exit=agent.has_reached_exit,
            trail_length=len(agent.trail),
            events=list(self._tick_events),
        )

        if self.sim_config.enable_logging:
            self._step_history.append(result)

        return result

    def run(self, max_ticks: Optional[int] = None, strict: bool = False) -> RunSummary:
        """
        Step until the exit is detected or max_ticks elapse.

        Args:
            max_ticks: Tick cap (defaults to SimulationConfig.max_ticks)
            strict: Raise UnreachableExit instead of returning a timed-out summary

        Returns:
            RunSummary for the current agent
        """
        limit = max_ticks if max_ticks is not None else self.sim_config.max_ticks

        steps = 0
        while not self._agent.has_reached_exit and steps < limit:
            self.step()
            steps += 1

        agent = self._agent
        if not agent.has_reached_exit:
            logger.warning("Exit not reached after %d ticks", steps)
            if strict:
                raise UnreachableExit(steps)

        return RunSummary(
            reached_exit=agent.has_reached_exit,
            ticks=self._tick,
            trail_length=len(agent.trail),
            cells_visited=len(agent.trail_cells()),
            exit_detected_by=agent.exit_detected_by,
            final_cell=agent.current_cell,
        )

    def _process_events(self) -> None:
        """Process all pending events at the start of the tick."""
        for event in self._event_queue.pop_all():
            if event.event_type == EventType.REGENERATE:
                self.regenerate(seed=event.data.get("seed"))
            self._event_queue.record_processed(event)

    def _emit_event(self, event_type: EventType, data: Dict[str, Any]) -> None:
        event = Event(event_type=event_type, tick=self._tick, data=data)
        self._tick_events.append(event)

    def render_ascii(self) -> str:
        layout = self._layout
        return layout.grid.to_ascii(
            trail=self._agent.trail_cells(),
            agent=self._agent.current_cell,
            entrance=layout.entrance,
            exit_cell=layout.exit,
        )

    def get_state(self) -> Dict[str, Any]:
        """Get complete simulation state (for the host renderer/debugging)."""
        layout = self._layout
        return {
            "tick": self._tick,
            "maze": layout.to_dict(),
            "agent": self._agent.get_state(),
            "trail": [p.to_dict() for p in self._agent.trail],
            "pending_events": self._event_queue.pending_count,
        }

    def get_step_history(self, last_n: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get step history for analysis."""
        history = self._step_history[-last_n:] if last_n else self._step_history
        return [r.to_dict() for r in history]
