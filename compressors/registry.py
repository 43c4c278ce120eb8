"""
Compressor Registry
===================

Static table of the compressors bundled with this package: short name,
exported function name and the content type each one handles.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, List

logger = logging.getLogger(__name__)

BUILTIN_PACKAGE = "compressors"


@dataclass(frozen=True)
class CompressorInfo:
    """Information about a bundled compressor"""
    name: str
    export: str
    type: str
    description: str = ""
    deprecated: bool = False

    @property
    def module(self) -> str:
        """Import path of the adapter module"""
        return f"{BUILTIN_PACKAGE}.{self.name.replace('-', '_')}"


_BUILTIN_COMPRESSORS: List[CompressorInfo] = [
    # JavaScript
    CompressorInfo("esbuild", "esbuild", "js", "esbuild CLI"),
    CompressorInfo("google-closure-compiler", "gcc", "js", "Google Closure Compiler (java)"),
    CompressorInfo("swc", "swc", "js", "swc minify CLI"),
    CompressorInfo("terser", "terser", "js", "terser CLI"),
    CompressorInfo("uglify-js", "uglify_js", "js", "UglifyJS CLI"),
    CompressorInfo("yui", "yui", "js", "YUI Compressor (java)", deprecated=True),
    CompressorInfo("rjsmin", "rjsmin", "js", "rJSmin, pure python"),
    CompressorInfo("jsmin", "jsmin", "js", "jsmin, pure python"),
    # CSS
    CompressorInfo("clean-css", "clean_css", "css", "clean-css CLI"),
    CompressorInfo("csso", "csso", "css", "csso CLI"),
    CompressorInfo("rcssmin", "rcssmin", "css", "rCSSmin, pure python"),
    CompressorInfo("csscompressor", "csscompressor", "css", "YUI port, pure python"),
    # HTML
    CompressorInfo("html-minifier", "html_minifier", "html", "html-minifier-terser CLI"),
    CompressorInfo("minify-html", "minify_html", "html", "minify-html bindings"),
    # JSON
    CompressorInfo("jsonminify", "json_minify", "json", "json round-trip"),
    # Images
    CompressorInfo("pillow", "pillow", "image", "Pillow image conversion"),
    # Other
    CompressorInfo("no-compress", "no_compress", "any", "Copy content unchanged"),
]

KNOWN_COMPRESSOR_EXPORTS: Dict[str, str] = {
    info.name: info.export for info in _BUILTIN_COMPRESSORS
}

_INFO_BY_NAME: Dict[str, CompressorInfo] = {info.name: info for info in _BUILTIN_COMPRESSORS}


def is_built_in(name: str) -> bool:
    """Whether a name belongs to a bundled compressor"""
    return name in KNOWN_COMPRESSOR_EXPORTS


def get_known_export_name(name: str) -> Optional[str]:
    """Exported function name of a bundled compressor, or None"""
    return KNOWN_COMPRESSOR_EXPORTS.get(name)


def get_compressor_info(name: str) -> Optional[CompressorInfo]:
    return _INFO_BY_NAME.get(name)


def list_compressors(type: Optional[str] = None) -> List[CompressorInfo]:
    """List bundled compressors, optionally restricted to one content type"""
    if type is None:
        return list(_BUILTIN_COMPRESSORS)
    return [info for info in _BUILTIN_COMPRESSORS if info.type in (type, "any")]
