"""Immutable level value returned by the generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .entities import Entity
from .tiles import Coord, Tile, TileType


@dataclass(frozen=True)
class Level:
    tile_grid: Tuple[Tuple[Tile, ...], ...]
    player: Entity
    door: Entity
    enemies: Tuple[Entity, ...]
    entrance: Coord
    exit: Coord
    spikes: Tuple[Entity, ...] = field(default_factory=tuple)
    bursts: Tuple[Entity, ...] = field(default_factory=tuple)
    seed: Optional[int] = None

    @property
    def width(self) -> int:
        """Tile columns (``2 * cells + 1``)."""
        return len(self.tile_grid)

    @property
    def height(self) -> int:
        return len(self.tile_grid[0]) if self.tile_grid else 0

    def tile_at(self, x: int, y: int) -> Tile:
        return self.tile_grid[x][y]

    def floor_tiles(self) -> List[Coord]:
        return [
            (x, y)
            for x, column in enumerate(self.tile_grid)
            for y, tile in enumerate(column)
            if tile.type is TileType.FLOOR
        ]

    def occupants(self) -> List[Entity]:
        return [self.player, self.door, *self.enemies, *self.spikes, *self.bursts]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "tile_grid": [[tile.to_dict() for tile in column] for column in self.tile_grid],
            "entrance": list(self.entrance),
            "exit": list(self.exit),
            "player": self.player.to_dict(),
            "door": self.door.to_dict(),
            "enemies": [e.to_dict() for e in self.enemies],
            "spikes": [e.to_dict() for e in self.spikes],
            "bursts": [e.to_dict() for e in self.bursts],
        }

    def to_ascii(self) -> str:
        """Row-per-line map: ``#`` wall, ``P`` player, ``D`` door, ``E`` enemy, ``.`` walkable."""
        marks = {e.pos: "E" for e in self.enemies}
        marks[self.door.pos] = "D"
        marks[self.player.pos] = "P"
        lines = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                if (x, y) in marks:
                    row.append(marks[(x, y)])
                elif self.tile_grid[x][y].passable:
                    row.append(".")
                else:
                    row.append("#")
            lines.append("".join(row))
        return "\n".join(lines)


__all__ = ["Level"]
