"""
JSON minifier: parse and re-serialize without insignificant whitespace.
"""

import json
from typing import Optional

from base_classes import Settings, Content, CompressorResult
from .base import ensure_string_content, wrap_minification_error


async def json_minify(*, settings: Settings, content: Optional[Content] = None,
                      index: Optional[int] = None) -> CompressorResult:
    text = ensure_string_content(content, "jsonminify")
    if not text.strip():
        return CompressorResult(code="")
    try:
        data = json.loads(text)
    except ValueError as e:
        raise wrap_minification_error("jsonminify", e) from e
    return CompressorResult(code=json.dumps(data, separators=(',', ':'), ensure_ascii=False))
