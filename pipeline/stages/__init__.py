"""
Pipeline stages for the minify system.
"""

from .setup import setup
from .execution import run, run_sync, validate_compressor_result, write_output
from .batch import compress, compress_single_file, compress_in_memory
from .formatting import OutputFormatter, get_reporter

__all__ = [
    'setup',
    'run',
    'run_sync',
    'validate_compressor_result',
    'write_output',
    'compress',
    'compress_single_file',
    'compress_in_memory',
    'OutputFormatter',
    'get_reporter',
]
