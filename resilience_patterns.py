"""
Resilience Patterns for Minify Pipeline
=======================================

Error taxonomy, timeout handling and best-effort cleanup shared by the
resolver, the execution runner and the benchmark harness.
"""

import asyncio
import logging
import os
import time
import traceback
from contextlib import contextmanager
from typing import Callable, Any, Optional, Dict, List, TypeVar, Awaitable, Iterator

logger = logging.getLogger(__name__)

T = TypeVar('T')


class MinifyError(Exception):
    """Base class for all pipeline errors"""

    def __init__(self, message: str, cause: Optional[BaseException] = None,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize a pipeline error.

        Args:
            message: Error description
            cause: Original exception that caused this error
            details: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}
        self.timestamp = time.time()
        self.traceback = traceback.format_exc() if cause else None

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(message={self.message!r}, "
                f"cause={self.cause!r}, details={self.details!r})")

    def log_context(self) -> Dict[str, Any]:
        """Get error context for structured logging"""
        return {
            'error_type': type(self).__name__,
            'message': str(self),
            'timestamp': self.timestamp,
            'details': self.details,
            'cause': str(self.cause) if self.cause else None
        }


class ValidationError(MinifyError):
    """Raised for bad settings or a malformed compressor result"""


class FileOperationError(MinifyError):
    """Raised when reading, writing or deleting a file fails"""

    def __init__(self, operation: str, path: str, cause: Optional[BaseException] = None):
        reason = str(cause) if cause else ""
        super().__init__(f"Failed to {operation} file {path}: {reason}", cause=cause,
                         details={'operation': operation, 'path': path})
        self.operation = operation
        self.path = path


class ResolutionError(MinifyError):
    """Base class for compressor resolution failures"""

    def __init__(self, message: str, name: str, cause: Optional[BaseException] = None):
        super().__init__(message, cause=cause, details={'compressor': name})
        self.name = name


class CompressorNotFoundError(ResolutionError):
    """No provider could resolve the compressor"""

    def __init__(self, name: str):
        super().__init__(
            f"Could not resolve compressor '{name}'. "
            f"Is it installed? For local files, use a path starting with './' or '/'.",
            name
        )


class CompressorExportError(ResolutionError):
    """A module was loaded but exposes no usable compressor function"""


class CompressorLoadError(ResolutionError):
    """A local compressor file could not be imported"""

    def __init__(self, name: str, cause: BaseException):
        super().__init__(
            f"Could not load local compressor '{name}'. "
            f"File not found or failed to import: {cause}",
            name,
            cause=cause
        )


class CompressorTimeoutError(MinifyError):
    """A compressor did not finish within the request timeout"""

    def __init__(self, label: str, timeout: float, cause: Optional[BaseException] = None):
        super().__init__(f"Compressor '{label}' timed out after {timeout}s", cause=cause,
                         details={'compressor': label, 'timeout': timeout})
        self.timeout = timeout


class CommandLineError(MinifyError):
    """An external compressor process failed"""

    def __init__(self, message: str, command: Optional[List[str]] = None,
                 returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message, details={'command': command, 'returncode': returncode})
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class TimeoutHandler:
    """Handles timeout with graceful cancellation"""

    @staticmethod
    async def with_timeout(coro: Awaitable[T], timeout: float,
                           cleanup: Optional[Callable] = None) -> T:
        """Execute coroutine with timeout and optional cleanup"""
        try:
            return await asyncio.wait_for(coro, timeout)
        except asyncio.TimeoutError:
            logger.error(f"Operation timed out after {timeout}s")
            if cleanup:
                try:
                    await cleanup() if asyncio.iscoroutinefunction(cleanup) else cleanup()
                except Exception as e:
                    logger.error(f"Cleanup failed: {e}")
            raise


@contextmanager
def best_effort_cleanup(paths: Optional[List[str]] = None) -> Iterator[List[str]]:
    """
    Collect temporary paths and delete them on every exit path.

    Deletion failures are logged and never replace the original result or
    exception.

    Yields:
        The list to append temporary paths to
    """
    tracked: List[str] = paths if paths is not None else []
    try:
        yield tracked
    finally:
        for path in tracked:
            try:
                os.unlink(path)
            except OSError as e:
                logger.debug(f"Ignoring cleanup failure for {path}: {e}")
