"""
Batch Driver
============

Fans a request out over its inputs. Array outputs are processed as a strict
sequential chain: input ``i`` starts only after input ``i - 1`` finished, and
the first failure stops the chain.
"""

import asyncio
import logging
from typing import List, Optional, Union

from base_classes import Settings, Content
from resilience_patterns import ValidationError
from .execution import run, run_sync
from .files import (
    ensure_directory,
    get_content_from_files,
    get_content_from_files_async,
    is_image_file,
    read_file,
    read_file_async,
)

logger = logging.getLogger(__name__)


async def compress(settings: Settings) -> Union[str, List[str]]:
    """
    Compress files described by ``settings``.

    Returns:
        The minified code, or one code string per input for array outputs
    """
    if not callable(settings.compressor):
        raise ValidationError(
            "compressor should be a function, maybe you forgot to install the compressor"
        )

    ensure_directory(settings.output)

    if isinstance(settings.output, list):
        if settings.sync:
            return await asyncio.to_thread(compress_array_of_files_sync, settings)
        return await compress_array_of_files(settings)

    return await compress_single_file(settings)


def _inputs_for_outputs(settings: Settings) -> List[str]:
    inputs = settings.input if isinstance(settings.input, list) else [settings.input]
    if len(inputs) > len(settings.output):
        raise ValidationError(
            f"Got {len(inputs)} inputs but only {len(settings.output)} outputs"
        )
    return inputs


async def _read_chain_input(path: str) -> Content:
    if is_image_file(path):
        return await read_file_async(path, binary=True)
    return await get_content_from_files_async(path)


async def compress_array_of_files(settings: Settings) -> List[str]:
    """Compress each input into ``output[i]``, one after the other"""
    results = []
    for index, input in enumerate(_inputs_for_outputs(settings)):
        logger.debug(f"Compressing {input} -> {settings.output[index]}")
        content = await _read_chain_input(input)
        results.append(await run(settings, content, index))
    return results


def compress_array_of_files_sync(settings: Settings) -> List[str]:
    """Legacy blocking loop with the same index correspondence"""
    results = []
    for index, input in enumerate(_inputs_for_outputs(settings)):
        if is_image_file(input):
            content = read_file(input, binary=True)
        else:
            content = get_content_from_files(input)
        results.append(run_sync(settings, content, index))
    return results


async def compress_single_file(settings: Settings) -> str:
    content = await determine_content(settings)
    return await run(settings, content)


async def compress_in_memory(settings: Settings) -> str:
    """Compress ``settings.content`` without touching the filesystem"""
    if settings.content is None:
        raise ValidationError("content is mandatory.")
    return await run(settings, settings.content)


async def determine_content(settings: Settings) -> Optional[Content]:
    """Inline content, image bytes, or text inputs joined with newlines"""
    if settings.content is not None:
        return settings.content

    input = settings.input
    if isinstance(input, list):
        image_count = sum(1 for path in input if is_image_file(path))
        if image_count:
            if image_count != len(input):
                raise ValidationError("Cannot mix image and text files in the same input array")
            if len(input) == 1:
                return await read_file_async(input[0], binary=True)
            return [await read_file_async(path, binary=True) for path in input]
    elif isinstance(input, str) and is_image_file(input):
        return await read_file_async(input, binary=True)

    if input:
        return await get_content_from_files_async(input)
    return ""
