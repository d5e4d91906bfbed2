"""Entity descriptors placed on a generated level."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(Enum):
    TOP = "TOP"
    RIGHT = "RIGHT"
    BOTTOM = "BOTTOM"
    LEFT = "LEFT"

    @property
    def delta(self) -> Tuple[int, int]:
        """(dx, dy) one step in this direction; y grows downward."""
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_DELTAS = {
    Direction.TOP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.BOTTOM: (0, 1),
    Direction.LEFT: (-1, 0),
}
_OPPOSITES = {
    Direction.TOP: Direction.BOTTOM,
    Direction.RIGHT: Direction.LEFT,
    Direction.BOTTOM: Direction.TOP,
    Direction.LEFT: Direction.RIGHT,
}


class EntityState(Enum):
    IDLE = "IDLE"
    TURNLEFT = "TURNLEFT"
    TURNRIGHT = "TURNRIGHT"


class EntityKind(Enum):
    PLAYER = "PLAYER"
    DOOR = "DOOR"
    SKELETON_WOODEN = "SKELETON_WOODEN"


@dataclass(frozen=True)
class Entity:
    x: int
    y: int
    direction: Direction
    state: EntityState
    type: EntityKind

    @property
    def pos(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def to_dict(self):
        return {
            "x": self.x,
            "y": self.y,
            "direction": self.direction.value,
            "state": self.state.value,
            "type": self.type.value,
        }


__all__ = ["Direction", "EntityState", "EntityKind", "Entity"]
