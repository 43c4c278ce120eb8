"""
rCSSmin adapter.
"""

from typing import Optional

import rcssmin as rcssmin_lib

from base_classes import Settings, Content, CompressorResult
from .base import get_options, ensure_string_content, run_in_thread


async def rcssmin(*, settings: Settings, content: Optional[Content] = None,
                  index: Optional[int] = None) -> CompressorResult:
    options = get_options(settings)
    style = ensure_string_content(content, "rcssmin")
    code = await run_in_thread(
        "rcssmin", rcssmin_lib.cssmin, style,
        keep_bang_comments=bool(options.get('keep_bang_comments', False))
    )
    return CompressorResult(code=code)
