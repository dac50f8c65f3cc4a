from .cells import CellType, Cell, Position
from .grid import Grid
from .generator import MazeGenerator, MazeLayout

__all__ = [
    "CellType",
    "Cell",
    "Position",
    "Grid",
    "MazeGenerator",
    "MazeLayout",
]
