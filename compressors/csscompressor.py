"""
csscompressor adapter (python port of the YUI css compressor).
"""

from typing import Optional

import csscompressor as csscompressor_lib

from base_classes import Settings, Content, CompressorResult
from .base import get_options, ensure_string_content, run_in_thread


async def csscompressor(*, settings: Settings, content: Optional[Content] = None,
                        index: Optional[int] = None) -> CompressorResult:
    options = get_options(settings)
    style = ensure_string_content(content, "csscompressor")
    code = await run_in_thread(
        "csscompressor", csscompressor_lib.compress, style,
        max_linelen=int(options.get('max_linelen', 0)),
        preserve_exclamation_comments=bool(options.get('preserve_exclamation_comments', True))
    )
    return CompressorResult(code=code)
