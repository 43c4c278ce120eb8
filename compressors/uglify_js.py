"""
UglifyJS adapter (node CLI).
"""

from typing import Optional

from base_classes import Settings, Content, CompressorResult
from .base import get_options, build_args, get_source_map_url, strip_source_map_options
from .command_line import run_cli_compressor


async def uglify_js(*, settings: Settings, content: Optional[Content] = None,
                    index: Optional[int] = None) -> CompressorResult:
    raw_options = get_options(settings)
    options = strip_source_map_options(raw_options)
    args = build_args({'compress': True, 'mangle': True, **options})
    return await run_cli_compressor("uglify-js", "uglifyjs", args, settings, content,
                                    source_map_url=get_source_map_url(raw_options))
