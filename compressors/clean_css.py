"""
clean-css adapter (``clean-css-cli``).
"""

from typing import Optional

from base_classes import Settings, Content, CompressorResult
from .base import get_options, strip_source_map_options
from .command_line import run_cli_compressor


async def clean_css(*, settings: Settings, content: Optional[Content] = None,
                    index: Optional[int] = None) -> CompressorResult:
    options = strip_source_map_options(get_options(settings))
    level = options.pop('level', 1)
    args = ["-O" + str(level)]
    if options.get('compatibility'):
        args.extend(["--compatibility", str(options['compatibility'])])
    return await run_cli_compressor("clean-css", "cleancss", args, settings, content)
