"""
CSSO adapter (``csso-cli``).
"""

from typing import Optional

from base_classes import Settings, Content, CompressorResult
from .base import get_options, strip_source_map_options
from .command_line import run_cli_compressor


async def csso(*, settings: Settings, content: Optional[Content] = None,
               index: Optional[int] = None) -> CompressorResult:
    options = strip_source_map_options(get_options(settings))
    args = []
    if options.get('restructure') is False:
        args.append("--no-restructure")
    if options.get('comments') is not None:
        args.extend(["--comments", str(options['comments'])])
    return await run_cli_compressor("csso", "csso", args, settings, content)
