"""
terser adapter (node CLI).

Options are passed as terser flags; ``compress`` and ``mangle`` default on.
A configured ``sourceMap`` makes terser emit a map alongside the code.
"""

from typing import Optional

from base_classes import Settings, Content, CompressorResult
from .base import get_options, build_args, get_source_map_url, strip_source_map_options
from .command_line import run_cli_compressor

DEFAULT_OPTIONS = {'compress': True, 'mangle': True}


async def terser(*, settings: Settings, content: Optional[Content] = None,
                 index: Optional[int] = None) -> CompressorResult:
    raw_options = get_options(settings)
    options = strip_source_map_options(raw_options)
    args = build_args({**DEFAULT_OPTIONS, **options})
    return await run_cli_compressor("terser", "terser", args, settings, content,
                                    source_map_url=get_source_map_url(raw_options))
