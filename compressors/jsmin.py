"""
jsmin adapter.
"""

from typing import Optional

from jsmin import jsmin as jsmin_lib

from base_classes import Settings, Content, CompressorResult
from .base import get_options, ensure_string_content, run_in_thread


async def jsmin(*, settings: Settings, content: Optional[Content] = None,
                index: Optional[int] = None) -> CompressorResult:
    options = get_options(settings)
    script = ensure_string_content(content, "jsmin")
    code = await run_in_thread("jsmin", jsmin_lib, script,
                               quote_chars=options.get('quote_chars', "'\"`"))
    return CompressorResult(code=code)
