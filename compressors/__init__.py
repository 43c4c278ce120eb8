"""
Compressors for the minify pipeline.

- Bundled adapters live in this package, one module per compressor
- The registry maps short names (e.g. "uglify-js") to exported functions
- The resolver finds a compressor by built-in name, module name or local path
"""

from .registry import (
    CompressorInfo,
    KNOWN_COMPRESSOR_EXPORTS,
    is_built_in,
    get_known_export_name,
    get_compressor_info,
    list_compressors,
)
from .resolver import (
    CompressorProvider,
    BuiltInProvider,
    PackageProvider,
    LocalFileProvider,
    ResolutionAttempt,
    extract_compressor,
    is_local_path,
    resolve_compressor,
    resolve_compressor_sync,
)
from .deprecation import DeprecationTracker

__all__ = [
    # Registry
    'CompressorInfo',
    'KNOWN_COMPRESSOR_EXPORTS',
    'is_built_in',
    'get_known_export_name',
    'get_compressor_info',
    'list_compressors',

    # Resolution
    'CompressorProvider',
    'BuiltInProvider',
    'PackageProvider',
    'LocalFileProvider',
    'ResolutionAttempt',
    'extract_compressor',
    'is_local_path',
    'resolve_compressor',
    'resolve_compressor_sync',

    'DeprecationTracker',
]
