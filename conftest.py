"""
Shared pytest fixtures for the minify pipeline tests.
"""

import shutil
import tempfile
from pathlib import Path

import pytest

from base_classes import Settings, CompressorResult
from compressors import DeprecationTracker


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    tmp_dir = Path(tempfile.mkdtemp())
    yield tmp_dir
    shutil.rmtree(tmp_dir, ignore_errors=True)


@pytest.fixture
def sample_js_file(temp_dir):
    """Create a small JavaScript file."""
    file_path = temp_dir / "app.js"
    file_path.write_text(
        "// greeting helper\n"
        "function greet(name) {\n"
        "    var message = 'Hello, ' + name;\n"
        "    return message;\n"
        "}\n"
    )
    return file_path


@pytest.fixture
def sample_css_file(temp_dir):
    """Create a small stylesheet."""
    file_path = temp_dir / "style.css"
    file_path.write_text(
        "/* layout */\n"
        "body {\n"
        "    margin: 0;\n"
        "    padding: 0;\n"
        "}\n"
    )
    return file_path


@pytest.fixture
def sample_png_file(temp_dir):
    """Create a tiny PNG image."""
    from PIL import Image

    file_path = temp_dir / "pixel.png"
    Image.new("RGB", (4, 4), (255, 0, 0)).save(file_path, format="PNG")
    return file_path


@pytest.fixture
def upper_compressor():
    """Compressor that upper-cases its input."""
    async def upper(*, settings, content=None, index=None):
        return CompressorResult(code=content.upper())
    return upper


@pytest.fixture
def make_settings():
    """Build Settings with a fresh deprecation tracker."""
    def factory(**kwargs):
        kwargs.setdefault('deprecations', DeprecationTracker())
        return Settings(**kwargs)
    return factory
