from typing import Dict


def init_metrics() -> Dict[str, int | float]:
    return {
        'border_cells_set': 0,
        'regions_found': 0,
        'largest_region_size': 0,
        'regions_pruned': 0,
        'cells_pruned': 0,
        'regions_connected': 0,
        'corridors_carved': 0,
        'cells_carved': 0,
        'tiles_floor': 0,
        'tiles_wall': 0,
        'runtime_ms': 0.0,
    }
