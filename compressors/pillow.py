"""
Image conversion with Pillow.

A single ``format`` produces a binary ``buffer``; a ``formats`` list
produces one output per format (e.g. webp and avif side by side).
"""

import io
from typing import Optional, Dict, Any

from PIL import Image

from base_classes import Settings, Content, CompressorResult, CompressorOutput
from resilience_patterns import ValidationError
from .base import get_options, run_in_thread

SUPPORTED_FORMATS = {'webp', 'avif', 'png', 'jpeg', 'jpg'}


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def convert_image(data: bytes, format: str, options: Dict[str, Any]) -> bytes:
    """Re-encode image bytes into ``format``"""
    format = format.lower()
    if format not in SUPPORTED_FORMATS:
        raise ValidationError(f"Unsupported image format: {format}")

    with Image.open(io.BytesIO(data)) as image:
        save_args: Dict[str, Any] = {}
        if format == 'webp':
            save_args = {'quality': _clamp(options.get('quality', 80), 1, 100),
                         'lossless': bool(options.get('lossless', False)),
                         'method': _clamp(options.get('effort', 4), 0, 6)}
        elif format == 'avif':
            save_args = {'quality': _clamp(options.get('quality', 50), 1, 100),
                         'speed': _clamp(10 - options.get('effort', 4), 0, 10)}
        elif format == 'png':
            save_args = {'optimize': True,
                         'compress_level': _clamp(options.get('compressionLevel', 6), 0, 9)}
        else:
            format = 'jpeg'
            save_args = {'quality': _clamp(options.get('quality', 90), 1, 100), 'optimize': True}
            if image.mode not in ('RGB', 'L'):
                image = image.convert('RGB')

        out = io.BytesIO()
        image.save(out, format=format.upper(), **save_args)
        return out.getvalue()


async def pillow(*, settings: Settings, content: Optional[Content] = None,
                 index: Optional[int] = None) -> CompressorResult:
    if not isinstance(content, (bytes, bytearray)):
        raise ValidationError(
            "pillow compressor requires binary content. Ensure input is a binary image file."
        )

    options = get_options(settings)
    data = bytes(content)

    formats = options.get('formats')
    if formats:
        outputs = []
        for format in formats:
            converted = await run_in_thread("pillow", convert_image, data, format, options)
            outputs.append(CompressorOutput(content=converted, format=format))
        return CompressorResult(code="", outputs=outputs)

    converted = await run_in_thread("pillow", convert_image, data,
                                    options.get('format', 'webp'), options)
    return CompressorResult(code="", buffer=converted)
