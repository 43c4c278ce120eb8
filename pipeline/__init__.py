"""
Minify pipeline modules.
"""

# Import pipeline stages
from .stages.setup import setup
from .stages.execution import run, run_sync
from .stages.batch import compress, compress_in_memory
from .stages.formatting import OutputFormatter, get_reporter

__all__ = [
    'setup',
    'run',
    'run_sync',
    'compress',
    'compress_in_memory',
    'OutputFormatter',
    'get_reporter',
]
