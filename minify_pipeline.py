#!/usr/bin/env python3
"""
Minify Pipeline
===============

Top-level entry point: resolve the compressor when given by name, set up
the request, then compress files or in-memory content.

Usage:
    code = await minify(Settings(compressor="terser", input="app.js", output="app.min.js"))
"""

import asyncio
import logging
from dataclasses import replace
from typing import List, Union

from base_classes import Settings
from compressors import DeprecationTracker, resolve_compressor
from pipeline.stages.batch import compress, compress_in_memory
from pipeline.stages.setup import setup

logger = logging.getLogger(__name__)


async def minify(settings: Settings) -> Union[str, List[str]]:
    """
    Run one compression request.

    ``settings.compressor`` may be a callable or an identifier understood by
    the resolver (built-in name, installed module or local path). A fresh
    DeprecationTracker is attached when the caller does not supply one.

    Returns:
        The minified code (one string per input for array outputs)
    """
    if isinstance(settings.compressor, str):
        resolution = await resolve_compressor(settings.compressor)
        settings = replace(
            settings,
            compressor=resolution.compressor,
            compressor_label=settings.compressor_label or resolution.label
        )

    if settings.deprecations is None:
        settings = replace(settings, deprecations=DeprecationTracker())

    settings = setup(settings)
    logger.debug(f"Minifying with {settings.label}")

    if settings.in_memory:
        return await compress_in_memory(settings)
    return await compress(settings)


def minify_sync(settings: Settings) -> Union[str, List[str]]:
    """Blocking wrapper around :func:`minify`"""
    return asyncio.run(minify(settings))
