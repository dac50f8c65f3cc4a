from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .world.generator import MazeLayout


class MazeError(Exception):
    """Base class for maze errors."""


class InvalidGridSize(MazeError, ValueError):
    """Grid side is even, not an int, or below the minimum."""


class MissingEndpointError(MazeError):
    """The maze was carved but an entrance or exit could not be placed."""

    def __init__(self, message: str, layout: "MazeLayout"):
        super().__init__(message)
        self.layout = layout


class NoEntranceFound(MissingEndpointError):
    pass


class NoExitFound(MissingEndpointError):
    pass


class UnreachableExit(MazeError):
    """A capped run ended without the agent detecting the exit."""

    def __init__(self, ticks: int):
        super().__init__(f"Exit not reached after {ticks} ticks")
        self.ticks = ticks
