"""
Unit tests for the command line interface
=========================================

Tests for compress.py including:
- Listing compressors
- minify and benchmark sub-commands
- Failure exit codes
"""

import json

import pytest

from compress import main, parse_arguments


class TestParseArguments:
    """Test argument parsing"""

    def test_command_required(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_arguments([])
        assert exc_info.value.code == 2

    def test_repeated_inputs(self):
        args = parse_arguments(["minify", "-c", "rjsmin", "-i", "a.js", "-i", "b.js", "-o", "out.js"])
        assert args.input == ["a.js", "b.js"]

    def test_benchmark_defaults(self):
        args = parse_arguments(["benchmark", "app.js"])
        assert args.iterations == 1
        assert args.warmup is None
        assert args.format == "console"

    def test_timeout_flag(self):
        assert parse_arguments(["benchmark", "app.js", "--timeout", "2.5"]).timeout == 2.5
        assert parse_arguments(["minify", "-c", "rjsmin", "-i", "a.js", "-o", "b.js"]).timeout is None


class TestMain:
    """Test end-to-end CLI runs with python compressors"""

    @pytest.mark.asyncio
    async def test_list(self, capsys):
        await main(["--list"])
        out = capsys.readouterr().out
        assert "terser" in out
        assert "yui" in out and "(deprecated)" in out

    @pytest.mark.asyncio
    async def test_minify(self, temp_dir, sample_js_file, capsys):
        output = temp_dir / "dist" / "app.min.js"
        await main(["minify", "-c", "rjsmin", "-i", str(sample_js_file), "-o", str(output)])

        assert output.exists()
        assert len(output.read_text()) < len(sample_js_file.read_text())
        assert "Compression complete" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_minify_unknown_compressor(self, sample_js_file, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            await main(["minify", "-c", "not-a-real-package-xyz", "-i", str(sample_js_file),
                        "-o", str(temp_dir / "out.js")])

        assert exc_info.value.code == 1
        assert "Compression failed: Could not resolve compressor" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_minify_bad_option_json(self, sample_js_file, temp_dir, capsys):
        with pytest.raises(SystemExit):
            await main(["minify", "-c", "rjsmin", "-i", str(sample_js_file),
                        "-o", str(temp_dir / "out.js"), "--option", "{bad"])
        assert "--option must be valid JSON" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_benchmark_json_report(self, temp_dir, sample_js_file):
        report = temp_dir / "report.json"
        await main(["benchmark", str(sample_js_file), "-c", "rjsmin,no-compress",
                    "-f", "json", "-o", str(report)])

        data = json.loads(report.read_text())
        assert [r['compressor'] for r in data['files'][0]['results']] == ["rjsmin", "no-compress"]
        assert data['summary']['bestCompression'] == "rjsmin"
