"""
Unit tests for error types and cleanup helpers
==============================================

Tests for resilience_patterns.py including:
- Error messages and log context
- TimeoutHandler
- best_effort_cleanup
"""

import asyncio
from unittest.mock import Mock

import pytest

from resilience_patterns import (
    CompressorLoadError,
    CompressorNotFoundError,
    FileOperationError,
    MinifyError,
    TimeoutHandler,
    ValidationError,
    best_effort_cleanup,
)


class TestErrors:
    """Test the error taxonomy"""

    def test_file_operation_error(self):
        cause = PermissionError("Permission denied")
        error = FileOperationError("write to", "/tmp/out.js", cause)
        assert str(error) == "Failed to write to file /tmp/out.js: Permission denied"
        assert error.cause is cause
        assert error.log_context()['details'] == {'operation': 'write to', 'path': '/tmp/out.js'}

    def test_not_found_message(self):
        error = CompressorNotFoundError("left-pad")
        assert str(error).startswith("Could not resolve compressor 'left-pad'. Is it installed?")
        assert error.name == "left-pad"

    def test_load_error_message(self):
        error = CompressorLoadError("./x.py", FileNotFoundError("No such file"))
        assert str(error) == ("Could not load local compressor './x.py'. "
                              "File not found or failed to import: No such file")

    def test_hierarchy(self):
        assert issubclass(ValidationError, MinifyError)
        assert issubclass(CompressorNotFoundError, MinifyError)

    def test_log_context(self):
        context = ValidationError("bad").log_context()
        assert context['error_type'] == "ValidationError"
        assert context['message'] == "bad"
        assert context['cause'] is None


class TestTimeoutHandler:
    """Test TimeoutHandler.with_timeout"""

    @pytest.mark.asyncio
    async def test_returns_result(self):
        async def quick():
            return "done"
        assert await TimeoutHandler.with_timeout(quick(), 1) == "done"

    @pytest.mark.asyncio
    async def test_cleanup_called_on_timeout(self):
        cleanup = Mock()
        with pytest.raises(asyncio.TimeoutError):
            await TimeoutHandler.with_timeout(asyncio.sleep(5), 0.05, cleanup)
        cleanup.assert_called_once()


class TestBestEffortCleanup:
    """Test temporary file cleanup"""

    def test_removes_files_on_success(self, temp_dir):
        path = temp_dir / "a.tmp"
        with best_effort_cleanup() as tracked:
            path.write_text("x")
            tracked.append(str(path))
        assert not path.exists()

    def test_removes_files_on_error_and_keeps_exception(self, temp_dir):
        path = temp_dir / "b.tmp"
        with pytest.raises(RuntimeError, match="original"):
            with best_effort_cleanup() as tracked:
                path.write_text("x")
                tracked.append(str(path))
                raise RuntimeError("original")
        assert not path.exists()

    def test_missing_files_ignored(self, temp_dir):
        with best_effort_cleanup([str(temp_dir / "never-created.tmp")]):
            pass
