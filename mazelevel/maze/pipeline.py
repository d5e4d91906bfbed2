"""Pipeline orchestration for level generation.

``MazeGenerator`` runs the ordered phases (validate, carve, open borders,
verify/repair, expand, verify tiles, assemble) against one config and
exposes per-run metrics. ``generate_level`` is the one-call entry point used
by the CLI and the HTTP layer.
"""
from __future__ import annotations

import os
import random
import time
from typing import Any, Dict, Optional

from ..logging_utils import get_logger
from .carver import carve_cells
from .cells import CellGrid, count_open_passages, open_border
from .config import MazeConfig, coerce_seed
from .connectivity import is_reachable, repair_reachability, tile_path_exists
from .errors import GenerationInvariantError
from .expander import Openings, choose_openings, expand_tiles
from .assembler import assemble_level
from .level import Level
from .metrics import init_metrics

log = get_logger("mazelevel.pipeline")


def _metrics_enabled_default() -> bool:
    return os.getenv("MAZELEVEL_ENABLE_METRICS", "1").lower() not in {"0", "false", "no", ""}


class MazeGenerator:
    def __init__(
        self,
        config: MazeConfig,
        rng: Optional[random.Random] = None,
        *,
        enable_metrics: Optional[bool] = None,
    ):
        # Fails before any grid is allocated
        self.config = config.validate()
        # 0 is a valid deterministic seed. An injected rng drives every draw,
        # so config.seed does not describe the run and seed stays None.
        if rng is not None:
            self.seed = None
        elif config.seed is not None:
            self.seed = config.seed
        else:
            self.seed = coerce_seed(None)
        self.rng = rng if rng is not None else random.Random(self.seed)
        self.enable_metrics = _metrics_enabled_default() if enable_metrics is None else enable_metrics
        self.metrics: Dict[str, Any] = init_metrics() if self.enable_metrics else {}
        self.cells: Optional[CellGrid] = None
        self.openings: Optional[Openings] = None

    def generate(self) -> Level:
        """Run every phase and return the populated level."""
        if self.enable_metrics:
            start = time.perf_counter()
            phase_times: Dict[str, int] = {}

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter()
                r = fn(*a, **k)
                phase_times[label] = int((time.perf_counter() - ps) * 1000)
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        width, height = self.config.width, self.config.height
        self.cells = _phase('carve', carve_cells, width, height, self.rng)
        if self.enable_metrics:
            self.metrics['walls_removed'] = count_open_passages(self.cells)
        self.openings = choose_openings(width, height)
        _phase('open_borders', self._open_borders)
        if self.config.ensure_reachable:
            _phase('verify_repair', self._verify_and_repair)
        tiles = _phase('expand', expand_tiles, self.cells, self.openings)
        if self.config.ensure_reachable:
            _phase('verify_tiles', self._verify_tiles, tiles)
        level = _phase(
            'assemble',
            assemble_level,
            tiles,
            self.openings,
            width,
            height,
            self.rng,
            seed=self.seed,
            metrics=self.metrics if self.enable_metrics else None,
        )

        if self.enable_metrics:
            self.metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
            self.metrics['phase_ms'] = phase_times
        log.debug(
            event="maze_generated",
            seed=self.seed,
            width=width,
            height=height,
            enemies=len(level.enemies),
            runtime_ms=self.metrics.get('runtime_ms'),
        )
        return level

    def _open_borders(self) -> None:
        o = self.openings
        open_border(self.cells, o.entrance_cell, o.entrance_side)
        open_border(self.cells, o.exit_cell, o.exit_side)

    def _verify_and_repair(self) -> None:
        o = self.openings
        if is_reachable(self.cells, o.entrance_cell, o.exit_cell):
            return
        result = repair_reachability(self.cells, o.entrance_cell, o.exit_cell, self.rng)
        if self.enable_metrics:
            self.metrics['reachable_before_repair'] = False
            self.metrics['repairs_performed'] += 1
            self.metrics['repair_path_length'] = len(result.path) - 1

    def _verify_tiles(self, tiles) -> None:
        o = self.openings
        if not tile_path_exists(tiles, o.entrance_tile, o.exit_tile):
            raise GenerationInvariantError(
                f"Exit {o.exit_tile} unreachable from entrance {o.entrance_tile} (seed={self.seed})"
            )


def generate_level(config: MazeConfig, rng: Optional[random.Random] = None) -> Level:
    """Generate one level. Pass a seeded ``rng`` (or ``config.seed``) for reproducible output."""
    return MazeGenerator(config, rng).generate()


__all__ = ["MazeGenerator", "generate_level"]
