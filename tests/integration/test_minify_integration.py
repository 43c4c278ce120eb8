"""
Integration tests for the minify pipeline
==========================================

Full requests through minify(): resolution by name, setup, compression
and output writing with real compressors.
"""

import shutil

import pytest

from base_classes import Settings
from minify_pipeline import minify
from resilience_patterns import CompressorNotFoundError, FileOperationError


class TestBuiltInCompressors:
    """Python compressors bundled with the package"""

    @pytest.mark.asyncio
    async def test_rjsmin_file(self, temp_dir, sample_js_file):
        output = temp_dir / "app.min.js"
        code = await minify(Settings(compressor="rjsmin", input=str(sample_js_file),
                                     output=str(output)))

        assert "greeting helper" not in code
        assert "function greet(name)" in code
        assert output.read_text() == code

    @pytest.mark.asyncio
    async def test_no_compress_is_identity(self, temp_dir, sample_css_file):
        output = temp_dir / "copy.css"
        code = await minify(Settings(compressor="no-compress", input=str(sample_css_file),
                                     output=str(output)))

        assert code == sample_css_file.read_text()
        assert output.read_text() == code

    @pytest.mark.asyncio
    async def test_in_memory(self):
        code = await minify(Settings(compressor="rcssmin", content="a {  color : red ; }"))
        assert code.startswith("a{color:red")

    @pytest.mark.asyncio
    async def test_wildcard_batch(self, temp_dir):
        src = temp_dir / "src"
        src.mkdir()
        (src / "a.js").write_text("var a = 1;  // one\n")
        (src / "b.js").write_text("var b = 2;  // two\n")

        codes = await minify(Settings(compressor="jsmin", input=f"{src}/*.js",
                                      output=f"{temp_dir}/dist/$1.min.js"))

        assert len(codes) == 2
        assert (temp_dir / "dist" / "a.min.js").read_text() == codes[0]
        assert (temp_dir / "dist" / "b.min.js").read_text() == codes[1]
        assert "one" not in codes[0]

    @pytest.mark.asyncio
    async def test_pillow_wildcard_batch(self, temp_dir, sample_png_file):
        (temp_dir / "copy.png").write_bytes(sample_png_file.read_bytes())

        await minify(Settings(compressor="pillow", input=f"{temp_dir}/*.png",
                              output=f"{temp_dir}/dist/$1.webp"))

        for name in ["copy.webp", "pixel.webp"]:
            data = (temp_dir / "dist" / name).read_bytes()
            assert data[:4] == b"RIFF" and data[8:12] == b"WEBP"

    @pytest.mark.asyncio
    async def test_non_utf8_input_is_wrapped(self, temp_dir):
        latin1 = temp_dir / "latin1.css"
        latin1.write_bytes("a{content:'café'}".encode('latin-1'))

        with pytest.raises(FileOperationError) as exc_info:
            await minify(Settings(compressor="rcssmin", input=str(latin1),
                                  output=str(temp_dir / "out.css")))
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    @pytest.mark.asyncio
    async def test_multiple_inputs_concatenated(self, temp_dir):
        (temp_dir / "a.css").write_text("a { color: red; }")
        (temp_dir / "b.css").write_text("b { color: blue; }")
        output = temp_dir / "bundle.css"

        await minify(Settings(compressor="rcssmin",
                              input=[str(temp_dir / "a.css"), str(temp_dir / "b.css")],
                              output=str(output)))

        bundle = output.read_text()
        assert bundle.startswith("a{color:red")
        assert "b{color:blue" in bundle
        assert " " not in bundle


class TestResolution:
    """Compressors given by identifier"""

    @pytest.mark.asyncio
    async def test_local_file_compressor(self, temp_dir, sample_js_file, monkeypatch):
        (temp_dir / "shout.py").write_text(
            "def compressor(*, settings, content=None, index=None):\n"
            "    return {'code': content.upper()}\n"
        )
        monkeypatch.chdir(temp_dir)
        output = temp_dir / "shout.js"

        code = await minify(Settings(compressor="./shout.py", input=str(sample_js_file),
                                     output=str(output)))

        assert code == sample_js_file.read_text().upper()
        assert output.read_text() == code

    @pytest.mark.asyncio
    async def test_unknown_package(self, sample_js_file, temp_dir):
        with pytest.raises(CompressorNotFoundError) as exc_info:
            await minify(Settings(compressor="not-a-real-package-xyz",
                                  input=str(sample_js_file), output=str(temp_dir / "x.js")))
        assert "Could not resolve compressor 'not-a-real-package-xyz'" in str(exc_info.value)


@pytest.mark.skipif(shutil.which("terser") is None, reason="terser CLI not installed")
class TestTerser:
    """terser end to end"""

    @pytest.mark.asyncio
    async def test_minifies(self, temp_dir, sample_js_file):
        output = temp_dir / "app.min.js"
        code = await minify(Settings(compressor="terser", input=str(sample_js_file),
                                     output=str(output)))
        assert "greeting helper" not in code
        assert output.exists()


@pytest.mark.skipif(shutil.which("esbuild") is None, reason="esbuild CLI not installed")
class TestEsbuild:
    """esbuild end to end"""

    @pytest.mark.asyncio
    async def test_minifies(self, temp_dir, sample_js_file):
        output = temp_dir / "app.min.js"
        code = await minify(Settings(compressor="esbuild", input=str(sample_js_file),
                                     output=str(output)))
        assert "greeting helper" not in code
        assert output.exists()
