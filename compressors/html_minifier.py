"""
html-minifier adapter (``html-minifier-terser`` CLI).
"""

from typing import Optional

from base_classes import Settings, Content, CompressorResult
from .base import get_options, build_args
from .command_line import run_cli_compressor

DEFAULT_OPTIONS = {
    'collapse-boolean-attributes': True,
    'collapse-whitespace': True,
    'minify-css': True,
    'minify-js': True,
    'remove-attribute-quotes': True,
    'remove-comments': True,
    'remove-empty-attributes': True,
    'remove-redundant-attributes': True,
    'remove-script-type-attributes': True,
    'remove-style-link-type-attributes': True,
    'use-short-doctype': True,
}


async def html_minifier(*, settings: Settings, content: Optional[Content] = None,
                        index: Optional[int] = None) -> CompressorResult:
    args = build_args({**DEFAULT_OPTIONS, **get_options(settings)})
    return await run_cli_compressor("html-minifier", "html-minifier-terser", args, settings, content)
