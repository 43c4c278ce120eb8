"""
Shared helpers for compressor adapters.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union, Callable

from base_classes import Settings, Content
from resilience_patterns import ValidationError

logger = logging.getLogger(__name__)


def get_options(settings: Optional[Settings]) -> Dict[str, Any]:
    """Compressor-specific options of a request (never None)"""
    if settings is None or not settings.options:
        return {}
    return dict(settings.options)


def ensure_string_content(content: Optional[Content], compressor_name: str) -> str:
    """Coerce compressor input to text"""
    if isinstance(content, list):
        raise ValidationError(f"{compressor_name} compressor does not support array content")
    if isinstance(content, (bytes, bytearray)):
        return bytes(content).decode('utf-8')
    return content or ""


def wrap_minification_error(compressor_name: str, error: BaseException) -> RuntimeError:
    """Prefix an underlying library error with the compressor name"""
    wrapped = RuntimeError(f"{compressor_name} minification failed: {error}")
    wrapped.__cause__ = error
    return wrapped


def get_source_map_url(options: Optional[Dict[str, Any]]) -> Optional[str]:
    """Destination of the source map: sourceMap.url, sourceMap.filename, then _sourceMap.url"""
    if not isinstance(options, Mapping):
        return None

    source_map = options.get('sourceMap')
    if isinstance(source_map, Mapping):
        if isinstance(source_map.get('url'), str):
            return source_map['url']
        if isinstance(source_map.get('filename'), str):
            return source_map['filename']

    legacy = options.get('_sourceMap')
    if isinstance(legacy, Mapping) and isinstance(legacy.get('url'), str):
        return legacy['url']

    return None


def strip_source_map_options(options: Dict[str, Any]) -> Dict[str, Any]:
    """Drop the source map destinations, which are not tool flags"""
    return {key: value for key, value in options.items()
            if key not in ('sourceMap', '_sourceMap')}


def build_args(options: Dict[str, Union[str, int, float, bool, None]]) -> List[str]:
    """
    Turn an options mapping into ``--key value`` command line arguments.

    ``True`` produces a bare flag, ``False``/``None`` are skipped, non-scalar
    values are ignored.
    """
    if not isinstance(options, dict):
        raise ValidationError("Options must be a valid object")

    args: List[str] = []
    for key, value in options.items():
        if value is None or value is False:
            continue
        if not isinstance(value, (str, int, float, bool)):
            continue
        args.append(f"--{key}")
        if value is not True:
            args.append(str(value))
    return args


async def run_in_thread(compressor_name: str, func: Callable[..., str], *args, **kwargs) -> str:
    """Run a blocking library call off the event loop, naming it on failure"""
    try:
        return await asyncio.to_thread(func, *args, **kwargs)
    except Exception as e:
        raise wrap_minification_error(compressor_name, e) from e
