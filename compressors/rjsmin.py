"""
rJSmin adapter.
"""

from typing import Optional

import rjsmin as rjsmin_lib

from base_classes import Settings, Content, CompressorResult
from .base import get_options, ensure_string_content, run_in_thread


async def rjsmin(*, settings: Settings, content: Optional[Content] = None,
                 index: Optional[int] = None) -> CompressorResult:
    options = get_options(settings)
    script = ensure_string_content(content, "rjsmin")
    code = await run_in_thread(
        "rjsmin", rjsmin_lib.jsmin, script,
        keep_bang_comments=bool(options.get('keep_bang_comments', False))
    )
    return CompressorResult(code=code)
