"""
esbuild adapter (node CLI). Handles both ``js`` and ``css`` requests.
"""

from typing import Optional

from base_classes import Settings, Content, CompressorResult
from resilience_patterns import ValidationError
from .base import get_options, strip_source_map_options
from .command_line import run_cli_compressor

LOADERS = {'js': 'js', 'css': 'css'}


async def esbuild(*, settings: Settings, content: Optional[Content] = None,
                  index: Optional[int] = None) -> CompressorResult:
    file_type = (settings.type if settings else None) or 'js'
    if file_type not in LOADERS:
        raise ValidationError(f"esbuild does not support type '{file_type}'")

    options = strip_source_map_options(get_options(settings))
    args = ["--minify", f"--loader={LOADERS[file_type]}"]
    args.extend(f"--{key}={value}" if value is not True else f"--{key}"
                for key, value in options.items()
                if value is not None and value is not False)
    return await run_cli_compressor("esbuild", "esbuild", args, settings, content)
