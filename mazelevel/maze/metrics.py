from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'walls_removed': 0,
        'reachable_before_repair': True,
        'repairs_performed': 0,
        'repair_path_length': 0,
        'floor_tiles': 0,
        'enemies_placed': 0,
        'placement_retries': 0,
        'runtime_ms': 0.0,
    }
