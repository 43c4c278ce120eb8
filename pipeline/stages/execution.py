"""
Execution Runner
================

Runs one compressor against one piece of content: invoke, validate the
result, then persist it (code, binary buffer, multi-format outputs and
source map) unless the request is in-memory.
"""

import asyncio
import inspect
import logging
import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any, List, Optional, Union

from base_classes import Settings, Content, CompressorResult, CompressorOutput
from resilience_patterns import CompressorTimeoutError, TimeoutHandler, ValidationError
from compressors.base import get_source_map_url
from .files import write_file_async

logger = logging.getLogger(__name__)


def check_settings(settings: Optional[Settings]) -> None:
    if settings is None:
        raise ValidationError("Settings must be provided")
    if settings.compressor is None:
        raise ValidationError("Compressor must be provided in settings")
    if not callable(settings.compressor):
        raise ValidationError(
            f"Compressor '{settings.label}' must be callable, got {type(settings.compressor).__name__}"
        )


def _describe_shape(result: Any) -> str:
    if result is None:
        return "None"
    if isinstance(result, CompressorResult):
        return f"CompressorResult with code of type {type(result.code).__name__}"
    if isinstance(result, Mapping):
        keys = ", ".join(str(key) for key in result.keys())
        if 'code' not in result:
            return f"mapping with keys [{keys}] and no 'code'"
        return f"mapping with keys [{keys}] and code of type {type(result['code']).__name__}"
    return type(result).__name__


def _normalize_outputs(outputs: Any, label: str) -> Optional[List[CompressorOutput]]:
    if outputs is None:
        return None
    if not isinstance(outputs, (list, tuple)):
        raise ValidationError(
            f"Compressor '{label}' returned invalid outputs: expected a list, got {type(outputs).__name__}"
        )

    normalized = []
    for position, entry in enumerate(outputs):
        if isinstance(entry, CompressorOutput):
            normalized.append(entry)
        elif isinstance(entry, Mapping) and 'content' in entry:
            normalized.append(CompressorOutput(content=entry['content'], format=entry.get('format')))
        else:
            raise ValidationError(
                f"Compressor '{label}' returned invalid output at index {position}: "
                f"expected an entry with 'content', got {_describe_shape(entry)}"
            )
    return normalized


def validate_compressor_result(result: Any, label: str) -> CompressorResult:
    """
    Check a compressor's return value and normalise it.

    Bundled adapters return ``CompressorResult``; custom compressors may
    return a mapping with the same keys.

    Raises:
        ValidationError: ``code`` is missing or not a string
    """
    if isinstance(result, CompressorResult):
        if isinstance(result.code, str):
            if result.outputs is not None:
                result = replace(result, outputs=_normalize_outputs(result.outputs, label))
            return result
    elif isinstance(result, Mapping) and isinstance(result.get('code'), str):
        return CompressorResult(
            code=result['code'],
            map=result.get('map'),
            buffer=result.get('buffer'),
            outputs=_normalize_outputs(result.get('outputs'), label),
        )

    raise ValidationError(
        f"Compressor '{label}' returned an invalid result. "
        f"Expected an object with a string 'code' property, got {_describe_shape(result)}."
    )


async def invoke_compressor(settings: Settings, content: Optional[Content] = None,
                            index: Optional[int] = None) -> Any:
    """Call the compressor, awaiting it (under the timeout when one is set)"""
    outcome = settings.compressor(settings=settings, content=content, index=index)
    if not inspect.isawaitable(outcome):
        return outcome
    if settings.timeout:
        try:
            return await TimeoutHandler.with_timeout(outcome, settings.timeout)
        except asyncio.TimeoutError as e:
            raise CompressorTimeoutError(settings.label, settings.timeout, e) from e
    return await outcome


async def run(settings: Settings, content: Optional[Content] = None,
              index: Optional[int] = None) -> str:
    """
    Compress ``content`` with ``settings.compressor`` and persist the result.

    Returns:
        The compressor's ``code``, whether or not anything was written
    """
    check_settings(settings)

    result = validate_compressor_result(
        await invoke_compressor(settings, content, index),
        settings.label
    )
    await write_output(result, settings, index)
    return result.code


def run_sync(settings: Settings, content: Optional[Content] = None,
             index: Optional[int] = None) -> str:
    """Blocking variant of :func:`run` for callers without an event loop"""
    check_settings(settings)
    return asyncio.run(run(settings, content, index))


async def write_output(result: CompressorResult, settings: Settings,
                       index: Optional[int] = None) -> None:
    """Persist a validated result according to the request's output"""
    if settings.in_memory or not settings.output:
        return

    if result.outputs:
        await _write_multiple_outputs(result.outputs, settings, index)
    elif result.buffer is not None:
        await write_file_async(settings.output, result.buffer, index)
    elif result.code == "" and settings.allow_empty_output:
        logger.debug(f"Skipping write of empty output from {settings.label}")
    else:
        await write_file_async(settings.output, result.code, index)

    if result.map:
        source_map_url = get_source_map_url(settings.options)
        if source_map_url:
            await write_file_async(source_map_url, result.map, index)
        else:
            logger.debug(f"No source map destination configured, discarding map from {settings.label}")


def _first_input(settings: Settings, index: Optional[int]) -> Optional[str]:
    input = settings.input
    if isinstance(input, list):
        if not input:
            return None
        return input[index] if index is not None and index < len(input) else input[0]
    return input


def resolve_output_paths(outputs: List[CompressorOutput], output: Union[str, List[str]],
                         input_file: Optional[str]) -> List[str]:
    """
    Target path for each multi-format output entry.

    - list: one explicit target per entry
    - ``"$1"``: ``<input dir>/<input stem>.<format>``
    - containing ``$1``: substitute the input stem, then append ``.<format>``
    - plain path: its suffix replaced by ``.<format>``
    """
    if isinstance(output, list):
        if len(output) < len(outputs):
            raise ValidationError(
                f"Expected {len(outputs)} output paths for multi-format result, got {len(output)}"
            )
        return list(output[:len(outputs)])

    input_path = Path(input_file) if input_file else None
    stem = input_path.stem if input_path else "output"
    fallback = input_path.suffix.lstrip('.') if input_path and input_path.suffix else None

    paths = []
    for entry in outputs:
        format = entry.format or fallback
        if not format:
            raise ValidationError("Output entry has no format and the input has no extension")

        if output == "$1":
            directory = input_path.parent if input_path else Path('.')
            paths.append(os.path.join(str(directory), f"{stem}.{format}"))
        elif "$1" in output:
            paths.append(f"{output.replace('$1', stem)}.{format}")
        else:
            paths.append(str(Path(output).with_suffix(f".{format}")))
    return paths


async def _write_multiple_outputs(outputs: List[CompressorOutput], settings: Settings,
                                  index: Optional[int]) -> None:
    targets = resolve_output_paths(outputs, settings.output, _first_input(settings, index))
    for entry, target in zip(outputs, targets):
        await write_file_async(target, entry.content)
        logger.info(f"Wrote {entry.format or 'output'} to {target}")
