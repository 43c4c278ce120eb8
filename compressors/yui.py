"""
YUI Compressor adapter (java).

The jar location comes from the ``jar`` option; YUI Compressor is no longer
maintained upstream.
"""

from typing import Optional

from base_classes import Settings, Content, CompressorResult
from resilience_patterns import ValidationError
from .base import get_options, build_args
from .command_line import run_cli_compressor
from .deprecation import warn_deprecation

DEFAULT_JAR = "yuicompressor.jar"


async def yui(*, settings: Settings, content: Optional[Content] = None,
              index: Optional[int] = None) -> CompressorResult:
    warn_deprecation(settings, "yui",
                     "YUI Compressor is no longer maintained. Use terser or esbuild for js, "
                     "csso or clean-css for css.")

    file_type = settings.type if settings else None
    if file_type not in ('js', 'css'):
        raise ValidationError("You must specify a type: js or css")

    options = get_options(settings)
    jar = options.pop('jar', DEFAULT_JAR)
    args = ["-Xss2048k", "-jar", str(jar), "--type", file_type, *build_args(options)]
    return await run_cli_compressor("yui", "java", args, settings, content)
