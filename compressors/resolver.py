"""
Compressor Resolver
===================

Turns a compressor identifier into a callable. Identifiers are tried against
three providers in a fixed order:

1. Built-in adapters bundled in this package (registry names)
2. Any importable Python module
3. A local ``.py`` file (identifiers that look like paths)

Each provider reports a ``ResolutionAttempt`` instead of raising for the
recoverable "not here" case, so the precedence chain is a plain loop.
"""

import importlib
import importlib.util
import inspect
import logging
import re
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Optional, List, Any

from base_classes import Compressor, CompressorResolution
from resilience_patterns import (
    ResolutionError, CompressorNotFoundError, CompressorExportError, CompressorLoadError
)
from .registry import get_known_export_name, get_compressor_info

logger = logging.getLogger(__name__)

_LOCAL_SUFFIX = re.compile(r"\.(js|ts|mjs|cjs|py)$")
_DRIVE_PREFIX = re.compile(r"^[a-zA-Z]:[/\\]")


def is_local_path(name: str) -> bool:
    """Whether an identifier looks like a filesystem path"""
    return (
        name.startswith("./")
        or name.startswith("../")
        or name.startswith("/")
        or bool(_DRIVE_PREFIX.match(name))
    )


def to_camel_case(name: str) -> str:
    return re.sub(r"[-_](.)", lambda m: m.group(1).upper(), name)


def _base_name(name: str) -> str:
    base = re.split(r"[/\\]", name)[-1] or name
    return _LOCAL_SUFFIX.sub("", base) if is_local_path(name) else base


def generate_label(name: str) -> str:
    """Package name for packages, file stem for local paths"""
    if is_local_path(name):
        return _LOCAL_SUFFIX.sub("", re.split(r"[/\\]", name)[-1])
    return name


def _public_functions(module: ModuleType) -> List[Any]:
    exported = getattr(module, "__all__", None)
    if exported is not None:
        values = [getattr(module, attr, None) for attr in exported]
        return [value for value in values if inspect.isfunction(value)]
    return [
        value for attr, value in vars(module).items()
        if not attr.startswith("_")
        and inspect.isfunction(value)
        and value.__module__ == module.__name__
    ]


def extract_compressor(module: ModuleType, name: str) -> Optional[Compressor]:
    """
    Find the compressor function exported by a loaded module.

    Candidates in order: the registry export name, the camel-cased and
    snake-cased base name, ``compressor``, ``default``, then the first public
    function the module defines.

    Returns:
        The compressor, or None when the module exposes nothing usable
    """
    base = _base_name(name)
    candidates = [
        get_known_export_name(name),
        to_camel_case(base),
        base.replace("-", "_"),
        "compressor",
        "default",
    ]
    for attr in candidates:
        if attr and callable(getattr(module, attr, None)):
            return getattr(module, attr)

    functions = _public_functions(module)
    return functions[0] if functions else None


@dataclass
class ResolutionAttempt:
    """Outcome of one provider: a resolution, a terminal error, or neither"""
    resolution: Optional[CompressorResolution] = None
    error: Optional[ResolutionError] = None

    @property
    def found(self) -> bool:
        return self.resolution is not None


class CompressorProvider(ABC):
    """One strategy for locating a compressor"""

    name = "provider"

    @abstractmethod
    def try_resolve(self, identifier: str) -> ResolutionAttempt:
        pass


class BuiltInProvider(CompressorProvider):
    """Adapters bundled under the ``compressors`` package"""

    name = "builtin"

    def try_resolve(self, identifier: str) -> ResolutionAttempt:
        info = get_compressor_info(identifier)
        if info is None:
            return ResolutionAttempt()

        try:
            module = importlib.import_module(info.module)
        except ImportError as e:
            logger.debug(f"Built-in compressor {identifier} not available: {e}")
            return ResolutionAttempt()

        compressor = extract_compressor(module, identifier)
        if compressor is None:
            return ResolutionAttempt()
        return ResolutionAttempt(CompressorResolution(compressor, identifier, is_built_in=True))


class PackageProvider(CompressorProvider):
    """Any importable module named by the identifier"""

    name = "package"

    @staticmethod
    def module_name(identifier: str) -> str:
        return identifier.lstrip("@").replace("-", "_").replace("/", ".")

    def try_resolve(self, identifier: str) -> ResolutionAttempt:
        if is_local_path(identifier):
            return ResolutionAttempt()

        try:
            module = importlib.import_module(self.module_name(identifier))
        except Exception as e:
            logger.debug(f"Package {identifier} could not be imported: {e}")
            return ResolutionAttempt()

        compressor = extract_compressor(module, identifier)
        if compressor is None:
            return ResolutionAttempt(error=CompressorExportError(
                f"Package '{identifier}' doesn't export a valid compressor function. "
                f"Expected a function named 'compressor', 'default', or "
                f"'{to_camel_case(identifier)}'.",
                identifier
            ))
        return ResolutionAttempt(CompressorResolution(compressor, generate_label(identifier)))


class LocalFileProvider(CompressorProvider):
    """A Python file addressed relative to the working directory"""

    name = "local"

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = base_dir

    def _load(self, path: Path) -> ModuleType:
        if not path.is_file():
            raise FileNotFoundError(f"No such file: {path}")

        module_name = "_local_compressor_" + re.sub(r"\W", "_", path.stem)
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot import {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(module_name, None)
            raise
        return module

    def try_resolve(self, identifier: str) -> ResolutionAttempt:
        if not is_local_path(identifier):
            return ResolutionAttempt()

        path = ((self.base_dir or Path.cwd()) / identifier).resolve()
        try:
            module = self._load(path)
        except Exception as e:
            return ResolutionAttempt(error=CompressorLoadError(identifier, e))

        compressor = extract_compressor(module, identifier)
        if compressor is None:
            return ResolutionAttempt(error=CompressorExportError(
                f"Local file '{identifier}' doesn't export a valid compressor function. "
                f"Expected a function named 'compressor' or 'default'.",
                identifier
            ))
        return ResolutionAttempt(CompressorResolution(compressor, generate_label(identifier)))


def default_providers() -> List[CompressorProvider]:
    return [BuiltInProvider(), PackageProvider(), LocalFileProvider()]


def resolve_compressor_sync(identifier: str,
                            providers: Optional[List[CompressorProvider]] = None
                            ) -> CompressorResolution:
    """Blocking variant of :func:`resolve_compressor`"""
    for provider in providers or default_providers():
        attempt = provider.try_resolve(identifier)
        if attempt.error is not None:
            raise attempt.error
        if attempt.found:
            logger.info(f"Resolved compressor {identifier} via {provider.name} provider")
            return attempt.resolution

    raise CompressorNotFoundError(identifier)


async def resolve_compressor(identifier: str,
                             providers: Optional[List[CompressorProvider]] = None
                             ) -> CompressorResolution:
    """
    Resolve a compressor by built-in name, module name or local path.

    Args:
        identifier: e.g. "terser", "my_minifier", "./compressors/custom.py"
        providers: Override the provider chain (defaults to built-in,
            package, local file)

    Returns:
        CompressorResolution with the callable, its label and is_built_in

    Raises:
        CompressorExportError: A module was found but exports no compressor
        CompressorLoadError: A local file could not be imported
        CompressorNotFoundError: No provider produced a compressor
    """
    return resolve_compressor_sync(identifier, providers)
