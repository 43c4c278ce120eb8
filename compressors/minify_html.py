"""
minify-html adapter. Options are passed through as keyword arguments.
"""

from typing import Optional

import minify_html as minify_html_lib

from base_classes import Settings, Content, CompressorResult
from .base import get_options, ensure_string_content, run_in_thread

DEFAULT_OPTIONS = {'minify_css': True, 'minify_js': True}


async def minify_html(*, settings: Settings, content: Optional[Content] = None,
                      index: Optional[int] = None) -> CompressorResult:
    markup = ensure_string_content(content, "minify-html")
    options = {**DEFAULT_OPTIONS, **get_options(settings)}
    code = await run_in_thread("minify-html", minify_html_lib.minify, markup, **options)
    return CompressorResult(code=code)
