"""Public maze package interface."""

from .assembler import assemble_level, enemy_count
from .carver import carve_cells
from .config import MazeConfig, coerce_seed
from .connectivity import is_reachable, repair_reachability, tile_path_exists
from .entities import Direction, Entity, EntityKind, EntityState
from .errors import GenerationInvariantError, InvalidConfiguration, MazeError, NoFloorAvailable
from .expander import Openings, choose_openings, expand_tiles
from .level import Level
from .pipeline import MazeGenerator, generate_level
from .tiles import Tile, TileType  # noqa: F401

__all__ = [
    "MazeConfig",
    "MazeGenerator",
    "generate_level",
    "coerce_seed",
    "Level",
    "Tile",
    "TileType",
    "Entity",
    "EntityKind",
    "EntityState",
    "Direction",
    "Openings",
    "choose_openings",
    "carve_cells",
    "is_reachable",
    "repair_reachability",
    "tile_path_exists",
    "expand_tiles",
    "assemble_level",
    "enemy_count",
    "MazeError",
    "InvalidConfiguration",
    "NoFloorAvailable",
    "GenerationInvariantError",
]
