"""
Maze generation and wall-following navigation.

Example usage:
    from mazerunner import MazeConfig, Simulation

    sim = Simulation(MazeConfig(maze_size=21))
    summary = sim.run(max_ticks=20_000)
    print(summary.reached_exit, summary.ticks)
"""
from .config import MazeConfig
from .errors import (
    MazeError,
    InvalidGridSize,
    MissingEndpointError,
    NoEntranceFound,
    NoExitFound,
    UnreachableExit,
)
from .world import CellType, Cell, Position, Grid, MazeGenerator, MazeLayout
from .navigation import Direction, NavigationAgent, WallFollowerPolicy
from .runtime import Simulation, SimulationConfig, StepResult, RunSummary

__all__ = [
    "MazeConfig",
    # Errors
    "MazeError",
    "InvalidGridSize",
    "MissingEndpointError",
    "NoEntranceFound",
    "NoExitFound",
    "UnreachableExit",
    # World
    "CellType",
    "Cell",
    "Position",
    "Grid",
    "MazeGenerator",
    "MazeLayout",
    # Navigation
    "Direction",
    "NavigationAgent",
    "WallFollowerPolicy",
    # Runtime
    "Simulation",
    "SimulationConfig",
    "StepResult",
    "RunSummary",
]
