"""
File Utilities
==============

Reading, writing and sizing of input/output files, output-name templating
and wildcard expansion.
"""

import glob
import gzip
import logging
import math
import os
from pathlib import Path
from typing import List, Optional, Union

import aiofiles
import brotli

from resilience_patterns import FileOperationError, ValidationError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {
    '.png', '.jpg', '.jpeg', '.gif', '.webp', '.avif',
    '.tiff', '.tif', '.heif', '.heic', '.svg',
}

_UNITS = ['B', 'kB', 'MB', 'GB', 'TB', 'PB', 'EB', 'ZB', 'YB']


def is_valid_file(path: Union[str, Path]) -> bool:
    return os.path.exists(path) and not os.path.isdir(path)


def is_image_file(path: str) -> bool:
    return Path(path).suffix.lower() in IMAGE_EXTENSIONS


def pretty_bytes(num: float) -> str:
    """
    Human readable size using SI units (1 kB = 1000 B).

    Examples:
        pretty_bytes(0) == "0 B", pretty_bytes(1500) == "1.5 kB"
    """
    if not isinstance(num, (int, float)) or not math.isfinite(num):
        raise ValidationError(f"Expected a finite number, got {type(num).__name__}: {num}")

    sign = "-" if num < 0 else ""
    num = abs(num)
    if num < 1:
        return f"{sign}{num:g} B"

    exponent = 0
    while num >= 1000 and exponent < len(_UNITS) - 1:
        num /= 1000
        exponent += 1
    value = float(f"{num:.3g}")
    return f"{sign}{value:g} {_UNITS[exponent]}"


def read_file(path: str, binary: bool = False) -> Union[str, bytes]:
    try:
        if binary:
            return Path(path).read_bytes()
        return Path(path).read_text(encoding='utf-8')
    except FileNotFoundError as e:
        raise FileOperationError("read", path, FileNotFoundError("File does not exist")) from e
    except IsADirectoryError as e:
        raise FileOperationError("read", path, IsADirectoryError("Path is not a valid file")) from e
    except (OSError, UnicodeDecodeError) as e:
        raise FileOperationError("read", path, e) from e


async def read_file_async(path: str, binary: bool = False) -> Union[str, bytes]:
    try:
        if binary:
            async with aiofiles.open(path, 'rb') as f:
                return await f.read()
        async with aiofiles.open(path, 'r', encoding='utf-8') as f:
            return await f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileOperationError("read", path, e) from e


def get_content_from_files(input: Union[str, List[str]]) -> str:
    """Read one file, or several joined with newlines"""
    if not input:
        raise ValidationError("Input must be a string or array of strings")
    if isinstance(input, str):
        return read_file(input)
    return "\n".join(read_file(path) for path in input)


async def get_content_from_files_async(input: Union[str, List[str]]) -> str:
    if not input:
        raise ValidationError("Input must be a string or array of strings")
    if isinstance(input, str):
        return await read_file_async(input)
    contents = [await read_file_async(path) for path in input]
    return "\n".join(contents)


def resolve_target_file(file: Union[str, List[str], None], index: Optional[int] = None) -> str:
    """Pick the target path, honouring ``index`` for list outputs"""
    if not file:
        raise ValidationError("No target file provided")
    target = file
    if index is not None and isinstance(file, list):
        if index >= len(file):
            raise ValidationError(f"No target file for index {index}")
        target = file[index]
    if not isinstance(target, str):
        raise ValidationError("Invalid target file path")
    return target


def _validate_content(content: Union[str, bytes]) -> None:
    if content is None or len(content) == 0:
        raise ValidationError("No content provided")


def write_file(file: Union[str, List[str]], content: Union[str, bytes],
               index: Optional[int] = None) -> Union[str, bytes]:
    target = resolve_target_file(file, index)
    _validate_content(content)
    try:
        if isinstance(content, (bytes, bytearray)):
            Path(target).write_bytes(content)
        else:
            Path(target).write_text(content, encoding='utf-8')
    except OSError as e:
        raise FileOperationError("write to", target, e) from e
    return content


async def write_file_async(file: Union[str, List[str]], content: Union[str, bytes],
                           index: Optional[int] = None) -> Union[str, bytes]:
    target = resolve_target_file(file, index)
    _validate_content(content)
    try:
        if isinstance(content, (bytes, bytearray)):
            async with aiofiles.open(target, 'wb') as f:
                await f.write(content)
        else:
            async with aiofiles.open(target, 'w', encoding='utf-8') as f:
                await f.write(content)
    except OSError as e:
        raise FileOperationError("write to", target, e) from e
    logger.debug(f"Wrote {len(content)} bytes to {target}")
    return content


def delete_file(path: str) -> None:
    try:
        os.unlink(path)
    except OSError as e:
        raise FileOperationError("delete", path, e) from e


def ensure_directory(file: Union[str, List[str], None]) -> None:
    """Create the parent directory of ``file`` (first entry for lists)"""
    if isinstance(file, list):
        file = file[0] if file else None
    if not file:
        return
    parent = Path(file).parent
    if str(parent) in ('', '.'):
        return
    parent.mkdir(parents=True, exist_ok=True)


def get_filesize_in_bytes(path: str) -> str:
    return pretty_bytes(os.stat(path).st_size)


async def get_gzip_size(path: str) -> int:
    """Size of the file once gzipped at maximum level"""
    if not is_valid_file(path):
        raise FileOperationError("get gzipped size of", path, FileNotFoundError("File does not exist"))
    data = await read_file_async(path, binary=True)
    return len(gzip.compress(data, compresslevel=9))


async def get_brotli_size(path: str) -> int:
    """Size of the file once brotli-compressed at maximum quality"""
    if not is_valid_file(path):
        raise FileOperationError("get brotli size of", path, FileNotFoundError("File does not exist"))
    data = await read_file_async(path, binary=True)
    return len(brotli.compress(data, quality=11))


def set_file_name_min(file: str, output: str, public_folder: Optional[str] = None,
                      replace_in_place: bool = False) -> str:
    """
    Substitute ``$1`` in an output pattern with the input's name.

    ``js/app.js`` with ``$1.min.js`` gives ``app.min.js``; with
    ``replace_in_place`` the input directory is kept (``js/app.min.js``).
    """
    if not file or not isinstance(file, str):
        raise ValidationError("File path must be a non-empty string")
    if not output or not isinstance(output, str) or "$1" not in output:
        raise ValidationError('Output pattern must be a string containing "$1"')

    slash = file.rfind('/')
    file_path = file[:slash + 1]
    file_name = file[slash + 1:]
    dot = file_name.rfind('.')
    if dot == -1:
        raise ValidationError("File must have an extension")

    stem = file_name[:dot]
    if public_folder:
        stem = public_folder + stem
    if replace_in_place:
        stem = file_path + stem
    return output.replace("$1", stem, 1)


def set_public_folder(input: Union[str, List[str]], public_folder: str) -> Union[str, List[str]]:
    """Prefix inputs with the public folder unless they already contain it"""
    folder = os.path.normpath(public_folder)

    def add_public_folder(item: str) -> str:
        normalized = os.path.normpath(item)
        if folder in normalized:
            return normalized
        return os.path.normpath(folder + os.sep + item)

    if isinstance(input, list):
        return [add_public_folder(item) for item in input]
    return add_public_folder(input)


def wildcards(input: Union[str, List[str]], public_folder: Optional[str] = None) -> Optional[List[str]]:
    """
    Expand glob patterns in the input.

    Returns:
        Sorted matches for patterns, the (prefixed) paths for plain lists,
        or None for a single plain path
    """
    items = input if isinstance(input, list) else [input]
    if public_folder:
        items = [public_folder + item for item in items]

    if not any('*' in item for item in items):
        return list(items) if isinstance(input, list) else None

    expanded: List[str] = []
    for item in items:
        if '*' in item:
            expanded.extend(sorted(glob.glob(item, recursive=True)))
        else:
            expanded.append(item)
    return [path for path in expanded if '*' not in path]
