"""
Unit tests for the batch driver
===============================

Tests for pipeline/stages/batch.py including:
- Sequential chain ordering and fail-fast behavior
- Legacy synchronous loop
- Content determination for text and image inputs
- Directory creation
"""

import pytest

from base_classes import CompressorResult, Settings
from pipeline.stages.batch import (
    compress,
    compress_in_memory,
    compress_single_file,
    determine_content,
)
from resilience_patterns import ValidationError


class SpyCompressor:
    """Records invocation order and fails on a chosen call"""

    def __init__(self, fail_on_call=None):
        self.calls = []
        self.fail_on_call = fail_on_call

    async def __call__(self, *, settings, content=None, index=None):
        self.calls.append((index, content))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise RuntimeError(f"failed on {content}")
        return {'code': content.upper()}


@pytest.fixture
def three_inputs(temp_dir):
    paths = []
    for name in ["a", "b", "c"]:
        path = temp_dir / f"{name}.js"
        path.write_text(f"{name}-source")
        paths.append(str(path))
    return paths


class TestSequentialChain:
    """Test array outputs"""

    @pytest.mark.asyncio
    async def test_outputs_follow_input_order(self, temp_dir, three_inputs):
        spy = SpyCompressor()
        outputs = [str(temp_dir / "out" / f"{n}.min.js") for n in "abc"]

        codes = await compress(Settings(compressor=spy, input=three_inputs, output=outputs))

        assert codes == ["A-SOURCE", "B-SOURCE", "C-SOURCE"]
        assert [index for index, _ in spy.calls] == [0, 1, 2]
        assert (temp_dir / "out" / "c.min.js").read_text() == "C-SOURCE"

    @pytest.mark.asyncio
    async def test_failure_stops_the_chain(self, temp_dir, three_inputs):
        """Test that c.js never starts when b.js fails"""
        spy = SpyCompressor(fail_on_call=2)
        outputs = [str(temp_dir / f"{n}.min.js") for n in "abc"]

        with pytest.raises(RuntimeError, match="failed on b-source"):
            await compress(Settings(compressor=spy, input=three_inputs, output=outputs))

        assert [content for _, content in spy.calls] == ["a-source", "b-source"]
        assert (temp_dir / "a.min.js").exists()
        assert not (temp_dir / "c.min.js").exists()

    @pytest.mark.asyncio
    async def test_sync_mode(self, temp_dir, three_inputs):
        spy = SpyCompressor()
        outputs = [str(temp_dir / f"{n}.min.js") for n in "abc"]

        codes = await compress(Settings(compressor=spy, input=three_inputs, output=outputs, sync=True))

        assert codes == ["A-SOURCE", "B-SOURCE", "C-SOURCE"]
        assert (temp_dir / "b.min.js").read_text() == "B-SOURCE"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sync", [False, True])
    async def test_image_inputs_read_as_bytes(self, temp_dir, sample_png_file, sync):
        second = temp_dir / "second.png"
        second.write_bytes(sample_png_file.read_bytes())
        seen = []

        async def recode(*, settings, content=None, index=None):
            seen.append(content)
            return CompressorResult(code="", buffer=b"webp-" + bytes([index]))

        outputs = [str(temp_dir / "dist" / "pixel.webp"), str(temp_dir / "dist" / "second.webp")]
        codes = await compress(Settings(compressor=recode, input=[str(sample_png_file), str(second)],
                                        output=outputs, sync=sync))

        assert codes == ["", ""]
        assert all(isinstance(content, bytes) and content[:4] == b"\x89PNG" for content in seen)
        assert (temp_dir / "dist" / "pixel.webp").read_bytes() == b"webp-\x00"
        assert (temp_dir / "dist" / "second.webp").read_bytes() == b"webp-\x01"

    @pytest.mark.asyncio
    async def test_more_inputs_than_outputs(self, temp_dir, three_inputs):
        with pytest.raises(ValidationError, match="3 inputs but only 1 outputs"):
            await compress(Settings(compressor=SpyCompressor(), input=three_inputs,
                                    output=[str(temp_dir / "a.min.js")]))

    @pytest.mark.asyncio
    async def test_non_callable_compressor(self, temp_dir):
        with pytest.raises(ValidationError, match="compressor should be a function"):
            await compress(Settings(compressor=None, input="a.js", output=str(temp_dir / "a.min.js")))


class TestSingleFile:
    """Test single output requests"""

    @pytest.mark.asyncio
    async def test_list_input_concatenated(self, temp_dir, three_inputs):
        spy = SpyCompressor()
        output = temp_dir / "nested" / "bundle.js"

        code = await compress(Settings(compressor=spy, input=three_inputs, output=str(output)))

        assert code == "A-SOURCE\nB-SOURCE\nC-SOURCE"
        assert output.read_text() == code
        assert spy.calls == [(None, "a-source\nb-source\nc-source")]

    @pytest.mark.asyncio
    async def test_image_input_read_as_bytes(self, sample_png_file):
        content = await determine_content(Settings(input=str(sample_png_file)))
        assert content[:8] == b"\x89PNG\r\n\x1a\n"

    @pytest.mark.asyncio
    async def test_several_images_read_as_list(self, temp_dir, sample_png_file):
        second = temp_dir / "second.png"
        second.write_bytes(sample_png_file.read_bytes())
        content = await determine_content(Settings(input=[str(sample_png_file), str(second)]))
        assert isinstance(content, list) and len(content) == 2

    @pytest.mark.asyncio
    async def test_mixed_inputs_rejected(self, sample_png_file, sample_js_file):
        with pytest.raises(ValidationError, match="Cannot mix image and text files"):
            await determine_content(Settings(input=[str(sample_png_file), str(sample_js_file)]))

    @pytest.mark.asyncio
    async def test_compress_single_file(self, temp_dir, sample_css_file):
        output = temp_dir / "style.min.css"
        spy = SpyCompressor()
        await compress_single_file(Settings(compressor=spy, input=str(sample_css_file), output=str(output)))
        assert output.read_text() == sample_css_file.read_text().upper()


class TestInMemory:
    """Test content-only requests"""

    @pytest.mark.asyncio
    async def test_compress_in_memory(self, temp_dir):
        spy = SpyCompressor()
        assert await compress_in_memory(Settings(compressor=spy, content="abc")) == "ABC"
        assert list(temp_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_requires_content(self):
        with pytest.raises(ValidationError, match="content is mandatory."):
            await compress_in_memory(Settings(compressor=SpyCompressor()))
