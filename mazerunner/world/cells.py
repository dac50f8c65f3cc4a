from dataclasses import dataclass
from enum import IntEnum


class CellType(IntEnum):
    PATH = 0
    WALL = 1
    UNKNOWN = -1  # Reserved, never assigned


@dataclass
class Position:
    """Continuous world position. x/z are the ground plane, y is height."""
    x: float
    y: float
    z: float

    def distance_to(self, other: "Position") -> float:
        """Distance on the ground plane (height ignored)."""
        return ((self.x - other.x) ** 2 + (self.z - other.z) ** 2) ** 0.5

    def copy(self) -> "Position":
        return Position(self.x, self.y, self.z)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass
class Cell:
    x: int
    y: int
    type: CellType
    discovered: bool = False

    @property
    def is_path(self) -> bool:
        return self.type == CellType.PATH

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "type": self.type.name.lower(),
        }
