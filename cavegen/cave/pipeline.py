"""Pipeline orchestration for cave generation.

Runs the fixed phase sequence

    init -> simulate(steps) -> enforce_border -> analyze_connectivity
         -> prune -> carve_corridors -> done

over a working ``Grid`` owned by a single ``Cave`` instance, then freezes the
result into an immutable ``CaveMap``. Each automaton iteration builds a new
grid; later phases mutate only the pipeline's own buffer, which is never
shared before freezing.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .automaton import enforce_border, initialize_grid, run_automaton
from .config import GenerationConfig
from .connectivity import Region, find_regions, largest_region_index
from .grid import CaveMap
from .metrics import init_metrics
from .pruning import prune_small_regions
from .rng import RandomSource
from .tiles import FLOOR, WALL
from .tunnels import Corridor, connect_regions

log = get_logger("cavegen.cave")


@dataclass
class Cave:
    config: GenerationConfig = field(default_factory=GenerationConfig)
    random_source: Optional[Any] = None
    enable_metrics: bool = True

    def __post_init__(self):
        # Reject bad parameters before anything is allocated
        self.config.validate()
        self.config = self.config.resolve_seed()
        self.seed: int = self.config.seed
        if self.random_source is None:
            self.random_source = RandomSource(self.seed)
        self.metrics: Dict[str, Any] = init_metrics() if self.enable_metrics else {}
        self.regions: List[Region] = []
        self.corridors: List[Corridor] = []
        self.map: CaveMap = self._run_pipeline()

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def _run_pipeline(self) -> CaveMap:
        """Execute ordered generation phases with per-phase timing.

        When metrics are enabled ``phase_ms`` maps phase name -> duration (ms).
        """
        if self.enable_metrics:
            start = time.perf_counter()
            phase_times = {}

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter()
                r = fn(*a, **k)
                phase_times[label] = int((time.perf_counter() - ps) * 1000)
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        cfg = self.config
        grid = _phase('init', initialize_grid, cfg.width, cfg.height, cfg.fill_percent, self.random_source)
        grid = _phase('simulate', run_automaton, grid, cfg.steps, cfg.birth_limit, cfg.death_limit)
        border = _phase('enforce_border', enforce_border, grid)
        regions = _phase('analyze_connectivity', find_regions, grid)
        largest = largest_region_index(regions)
        pruned, pruned_cells = _phase('prune', prune_small_regions, grid, regions, largest, cfg.min_cave_size)
        survivors, corridors, carved = _phase('carve_corridors', connect_regions, grid, cfg.min_cave_size)
        self.regions = survivors
        self.corridors = corridors
        cave_map = grid.freeze()

        largest_size = regions[largest].size if largest is not None else 0
        if self.enable_metrics:
            self.metrics.update(
                border_cells_set=border,
                regions_found=len(regions),
                largest_region_size=largest_size,
                regions_pruned=pruned,
                cells_pruned=pruned_cells,
                regions_connected=len(survivors),
                corridors_carved=len(corridors),
                cells_carved=carved,
                tiles_floor=cave_map.count(FLOOR),
                tiles_wall=cave_map.count(WALL),
            )
            self.metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
            self.metrics['phase_ms'] = phase_times
            log.debug(event="cave_phases", seed=self.seed, **{f"{k}_ms": v for k, v in phase_times.items()})
        log.info(
            event="cave_generated",
            seed=self.seed,
            width=cfg.width,
            height=cfg.height,
            regions=len(regions),
            largest=largest_size,
            corridors=len(corridors),
        )
        return cave_map


def generate_map(config: GenerationConfig, random_source=None) -> CaveMap:
    """Run the full pipeline and return only the finished map."""
    return Cave(config, random_source=random_source, enable_metrics=False).map


__all__ = ["Cave", "generate_map"]
