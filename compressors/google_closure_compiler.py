"""
Google Closure Compiler adapter (``google-closure-compiler`` npm CLI).
"""

from typing import Optional

from base_classes import Settings, Content, CompressorResult
from .base import get_options, strip_source_map_options
from .command_line import run_cli_compressor

ALLOWED_FLAGS = {
    'angular_pass', 'assume_function_wrapper', 'compilation_level', 'create_source_map',
    'define', 'externs', 'jscomp_off', 'jscomp_warning', 'language_in', 'language_out',
    'rewrite_polyfills', 'use_types_for_optimization', 'warning_level',
}


async def gcc(*, settings: Settings, content: Optional[Content] = None,
              index: Optional[int] = None) -> CompressorResult:
    options = strip_source_map_options(get_options(settings))
    flags = {'compilation_level': 'SIMPLE', 'warning_level': 'QUIET'}
    flags.update({key: value for key, value in options.items() if key in ALLOWED_FLAGS})

    args = []
    for key, value in flags.items():
        if value is None or value is False:
            continue
        args.append(f"--{key}" if value is True else f"--{key}={value}")
    return await run_cli_compressor("google-closure-compiler", "google-closure-compiler",
                                    args, settings, content)
