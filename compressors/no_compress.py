"""
Pass-through compressor: output equals input.
"""

from typing import Optional

from base_classes import Settings, Content, CompressorResult


async def no_compress(*, settings: Settings, content: Optional[Content] = None,
                      index: Optional[int] = None) -> CompressorResult:
    if isinstance(content, list):
        content = b"".join(content)
    if isinstance(content, (bytes, bytearray)):
        return CompressorResult(code="", buffer=bytes(content))
    return CompressorResult(code=content or "")
