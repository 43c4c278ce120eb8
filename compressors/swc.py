"""
swc adapter (``@swc/cli``, content piped on stdin).
"""

import json
from typing import Optional

from base_classes import Settings, Content, CompressorResult
from .base import get_options, strip_source_map_options
from .command_line import run_cli_compressor


async def swc(*, settings: Settings, content: Optional[Content] = None,
              index: Optional[int] = None) -> CompressorResult:
    options = strip_source_map_options(get_options(settings))
    minify_options = {'compress': True, 'mangle': True, **options}
    config = {'minify': True, 'jsc': {'minify': minify_options}}
    args = ["--filename", "input.js", "--config-json", json.dumps(config)]
    return await run_cli_compressor("swc", "swc", args, settings, content)
