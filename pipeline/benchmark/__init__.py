"""
Compressor benchmarking: timing, size reduction and a recommended pick.
"""

from .metrics import (
    SPEED_WEIGHT,
    COMPRESSION_WEIGHT,
    calculate_reduction,
    calculate_recommended_score,
)
from .runner import (
    run_benchmark,
    benchmark_file,
    benchmark_compressor,
    calculate_summary,
    create_error_metrics,
)

__all__ = [
    'SPEED_WEIGHT',
    'COMPRESSION_WEIGHT',
    'calculate_reduction',
    'calculate_recommended_score',
    'run_benchmark',
    'benchmark_file',
    'benchmark_compressor',
    'calculate_summary',
    'create_error_metrics',
]
