"""
Command Line Runner
===================

Pipes content through an external minifier process (node binaries, java
jars) and returns its stdout. The process is killed when it exceeds the
output cap or the timeout.
"""

import asyncio
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional

from base_classes import Settings, Content, CompressorResult
from resilience_patterns import CommandLineError
from .base import ensure_string_content, wrap_minification_error

logger = logging.getLogger(__name__)

DEFAULT_MAX_BUFFER = 1024 * 1024  # 1MB
_READ_CHUNK = 64 * 1024


def find_executable(name: str, local_bin: str = "node_modules/.bin") -> Optional[str]:
    """Locate a CLI in the project's node_modules/.bin, then on PATH"""
    return shutil.which(name, path=local_bin) or shutil.which(name)


async def _read_capped(stream: asyncio.StreamReader, max_buffer: int, label: str) -> bytes:
    chunks: List[bytes] = []
    total = 0
    while True:
        chunk = await stream.read(_READ_CHUNK)
        if not chunk:
            return b"".join(chunks)
        chunks.append(chunk)
        total += len(chunk)
        if max_buffer > 0 and total > max_buffer:
            raise CommandLineError(f"{label} maxBuffer exceeded")


async def run_command_line(command: List[str],
                           data: str,
                           max_buffer: int = DEFAULT_MAX_BUFFER,
                           timeout: Optional[float] = None,
                           silence: bool = False) -> str:
    """
    Run a command, feed ``data`` on stdin and collect stdout.

    Args:
        command: Executable and arguments
        data: Text written to the process stdin
        max_buffer: Maximum bytes accepted on stdout/stderr (0 disables)
        timeout: Seconds before the process is killed
        silence: Suppress error logging

    Returns:
        Decoded stdout

    Raises:
        CommandLineError: Spawn failure, timeout, overflow or non-zero exit
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )
    except OSError as e:
        if not silence:
            logger.error(f"Could not start {command[0]}: {e}")
        raise CommandLineError(f"Process error: {e}", command=command) from e

    async def communicate():
        async def feed():
            try:
                process.stdin.write(data.encode('utf-8'))
                await process.stdin.drain()
            except (BrokenPipeError, ConnectionResetError) as e:
                if not silence:
                    logger.error(f"Error in child.stdin: {e}")
            finally:
                process.stdin.close()

        _, stdout, stderr = await asyncio.gather(
            feed(),
            _read_capped(process.stdout, max_buffer, "stdout"),
            _read_capped(process.stderr, max_buffer, "stderr"),
        )
        returncode = await process.wait()
        return stdout, stderr, returncode

    try:
        if timeout:
            stdout, stderr, returncode = await asyncio.wait_for(communicate(), timeout)
        else:
            stdout, stderr, returncode = await communicate()
    except asyncio.TimeoutError:
        await _terminate(process)
        raise CommandLineError(f"Process timed out after {timeout}s", command=command)
    except CommandLineError:
        await _terminate(process)
        raise

    if returncode != 0:
        message = stderr.decode('utf-8', errors='replace').strip()
        raise CommandLineError(
            message or f"Process exited with code {returncode}",
            command=command,
            returncode=returncode,
            stderr=message
        )

    return stdout.decode('utf-8')


async def _terminate(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.wait()


async def run_cli_compressor(compressor_name: str,
                             executable: str,
                             args: List[str],
                             settings: Settings,
                             content: Optional[Content],
                             source_map_url: Optional[str] = None) -> CompressorResult:
    """
    Run a CLI minifier against the request content.

    With ``source_map_url`` the tool writes code and map into a scratch
    directory (terser/uglify-js ``--source-map`` and ``-o`` flags); both are
    read back into the result and the directory is removed.
    """
    binary = find_executable(executable)
    if binary is None:
        raise wrap_minification_error(
            compressor_name,
            CommandLineError(f"'{executable}' executable not found in node_modules/.bin or PATH")
        )

    data = ensure_string_content(content, compressor_name)
    if not source_map_url:
        code = await _run(compressor_name, [binary, *args], data, settings)
        return CompressorResult(code=code)

    with tempfile.TemporaryDirectory(prefix="minify-") as work_dir:
        output_file = Path(work_dir) / "output.js"
        map_file = Path(f"{output_file}.map")
        command = [binary, *args,
                   "--source-map", f"url='{os.path.basename(source_map_url)}'",
                   "-o", str(output_file)]
        await _run(compressor_name, command, data, settings)

        if not output_file.exists():
            raise wrap_minification_error(
                compressor_name, CommandLineError(f"{executable} did not write {output_file.name}")
            )
        code = output_file.read_text(encoding='utf-8')
        if not map_file.exists():
            logger.warning(f"{compressor_name} produced no source map")
            return CompressorResult(code=code)
        return CompressorResult(code=code, map=map_file.read_text(encoding='utf-8'))


async def _run(compressor_name: str, command: List[str], data: str, settings: Settings) -> str:
    try:
        return await run_command_line(
            command,
            data,
            max_buffer=settings.buffer if settings else DEFAULT_MAX_BUFFER,
            timeout=settings.timeout if settings else None,
            silence=settings.silence if settings else False
        )
    except CommandLineError as e:
        raise wrap_minification_error(compressor_name, e) from e
