"""Tile variants and sprite indices for the expanded render grid."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple


class TileType(Enum):
    WALL_ROW = "WALL_ROW"
    WALL_COLUMN = "WALL_COLUMN"
    WALL_LEFT_TOP = "WALL_LEFT_TOP"
    WALL_RIGHT_TOP = "WALL_RIGHT_TOP"
    WALL_LEFT_BOTTOM = "WALL_LEFT_BOTTOM"
    WALL_RIGHT_BOTTOM = "WALL_RIGHT_BOTTOM"
    FLOOR = "FLOOR"

    @property
    def is_wall(self) -> bool:
        return self is not TileType.FLOOR


# Sprite sheet indices (``tile (<src>)``) used by the consuming renderer
TILE_SRC = {
    TileType.FLOOR: 1,
    TileType.WALL_COLUMN: 5,
    TileType.WALL_ROW: 9,
    TileType.WALL_LEFT_BOTTOM: 13,
    TileType.WALL_RIGHT_BOTTOM: 14,
    TileType.WALL_RIGHT_TOP: 15,
    TileType.WALL_LEFT_TOP: 16,
}


@dataclass(frozen=True)
class Tile:
    """One render-grid entry. ``type is None`` means no tile and passable."""

    src: Optional[int] = None
    type: Optional[TileType] = None

    @classmethod
    def of(cls, tile_type: TileType) -> "Tile":
        return cls(TILE_SRC[tile_type], tile_type)

    @property
    def passable(self) -> bool:
        return self.type is None or self.type is TileType.FLOOR

    def to_dict(self):
        return {"src": self.src, "type": self.type.value if self.type else None}


OPENING = Tile()
FLOOR_TILE = Tile.of(TileType.FLOOR)

# Column-major like the rest of the package: grid[x][y]
TileGrid = Sequence[Sequence[Tile]]
MutableTileGrid = List[List[Tile]]
Coord = Tuple[int, int]

__all__ = ["TileType", "TILE_SRC", "Tile", "OPENING", "FLOOR_TILE", "TileGrid", "MutableTileGrid", "Coord"]
