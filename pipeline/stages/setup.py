"""
Settings Setup
==============

Merges defaults into a compression request, checks mandatory fields and
derives concrete inputs/outputs (wildcards, ``$1`` templating, public folder).
"""

import copy
import logging
from dataclasses import replace
from typing import List, Optional, Union

from base_classes import Settings
from pipeline_configs import MinifyDefaults
from resilience_patterns import ValidationError
from .files import wildcards, set_file_name_min, set_public_folder

logger = logging.getLogger(__name__)


def setup(settings: Settings, defaults: Optional[MinifyDefaults] = None) -> Settings:
    """
    Build the final settings for a compression request.

    Args:
        settings: Caller supplied request
        defaults: Values used where the request leaves a field empty

    Returns:
        A new Settings object; the caller's object is left untouched

    Raises:
        ValidationError: Missing mandatory fields, bad inputs or a
            compressor that is not callable
    """
    if settings is None:
        raise ValidationError("Settings must be provided")

    defaults = defaults or MinifyDefaults()
    merged = replace(
        settings,
        options=settings.options if settings.options is not None else copy.deepcopy(defaults.options),
        buffer=settings.buffer or defaults.buffer,
    )

    # In memory
    if merged.content is not None:
        _validate_mandatory_fields(merged, ['compressor', 'content'])
        return merged

    _validate_mandatory_fields(merged, ['compressor', 'input', 'output'])

    if isinstance(merged.input, list):
        for index, item in enumerate(merged.input):
            if not item or not isinstance(item, str):
                got = "empty string" if isinstance(item, str) else type(item).__name__
                raise ValidationError(
                    f"Invalid input at index {index}: expected non-empty string, got {got}"
                )

    return _enhance_settings(merged)


def _validate_mandatory_fields(settings: Settings, fields: List[str]) -> None:
    for name in fields:
        if not getattr(settings, name):
            raise ValidationError(f"{name} is mandatory.")

    if not callable(settings.compressor):
        raise ValidationError(
            "compressor should be a function, maybe you forgot to install the compressor"
        )


def _enhance_settings(settings: Settings) -> Settings:
    expanded = wildcards(settings.input, settings.public_folder)
    if expanded is not None:
        if not expanded:
            raise ValidationError(f"No input files matched {settings.input}")
        logger.debug(f"Expanded {settings.input} to {len(expanded)} file(s)")
        settings = replace(settings, input=expanded)

    if not isinstance(settings.output, list) and not settings.options.get('formats'):
        output = _check_output(settings.input, settings.output,
                               settings.public_folder, settings.replace_in_place)
        if output is not None:
            settings = replace(settings, output=output)

    if settings.public_folder:
        settings = replace(settings, input=set_public_folder(settings.input, settings.public_folder))

    return settings


def _check_output(input: Union[str, List[str]], output: str,
                  public_folder: Optional[str],
                  replace_in_place: bool) -> Optional[Union[str, List[str]]]:
    """Expand a ``$1`` output pattern into one output per input"""
    if "$1" not in output:
        return None

    folder = None if replace_in_place else public_folder
    if isinstance(input, list):
        return [set_file_name_min(item, output, folder, replace_in_place) for item in input]
    return set_file_name_min(input, output, folder, replace_in_place)
