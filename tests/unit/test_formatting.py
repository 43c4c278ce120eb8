"""
Unit tests for benchmark report formatting
==========================================

Tests for pipeline/stages/formatting.py including:
- Reporter selection
- Console table columns
- Markdown escaping
- JSON output
"""

import json

import pytest

from base_classes import BenchmarkResult, BenchmarkSummary, CompressorMetrics, FileResult
from pipeline.stages.formatting import (
    OutputFormatter,
    format_console_output,
    format_json_output,
    format_markdown_output,
    get_reporter,
)


@pytest.fixture
def benchmark_result():
    """Benchmark result with one success and one failure."""
    return BenchmarkResult(
        timestamp="2026-01-01T00:00:00+00:00",
        options={'verbose': True, 'compressors': ['terser', 'my|tool']},
        files=[FileResult("src/app.js", 2000, "2 kB", [
            CompressorMetrics(compressor="terser", size_bytes=800, size="800 B", time_ms=12.4,
                              reduction_percent=60.0, iteration_times=[12.0, 12.8],
                              gzip_bytes=400, gzip_size="400 B"),
            CompressorMetrics(compressor="my|tool", success=False, error="bad \\ input | here"),
        ])],
        summary=BenchmarkSummary("terser", "terser", "terser"),
    )


class TestReporterSelection:
    """Test get_reporter"""

    def test_known_formats(self, benchmark_result):
        assert get_reporter("json")(benchmark_result) == format_json_output(benchmark_result)
        assert get_reporter("md")(benchmark_result) == format_markdown_output(benchmark_result)
        assert get_reporter("markdown")(benchmark_result) == format_markdown_output(benchmark_result)

    def test_unknown_falls_back_to_console(self, benchmark_result):
        assert get_reporter("xml")(benchmark_result) == format_console_output(benchmark_result)
        assert OutputFormatter().format_output(benchmark_result) == format_console_output(benchmark_result)


class TestConsoleOutput:
    """Test the console table"""

    def test_table(self, benchmark_result):
        output = format_console_output(benchmark_result)
        assert "src/app.js (2 kB)" in output
        assert "Gzip" in output
        assert "Brotli" not in output
        assert "60.0%" in output
        assert "12ms" in output
        assert "└─ 12ms, 13ms" in output
        assert "bad \\ input | here" in output
        assert "🏆 Best compression: terser" in output


class TestMarkdownOutput:
    """Test the Markdown report"""

    def test_header_and_rows(self, benchmark_result):
        output = format_markdown_output(benchmark_result)
        assert output.startswith("# Benchmark Results\n\n**Generated:** 2026-01-01T00:00:00+00:00")
        assert "| Compressor | Size | Reduction | Time | Gzip | Status |" in output
        assert "| terser | 800 B | 60.0% | 12ms | 400 B | OK |" in output

    def test_escaping(self, benchmark_result):
        output = format_markdown_output(benchmark_result)
        assert "| my\\|tool | - | - | - | - | ERROR: bad \\\\ input \\| here |" in output

    def test_summary(self, benchmark_result):
        assert "- 💡 **Recommended:** terser" in format_markdown_output(benchmark_result)


class TestJsonOutput:
    """Test JSON output"""

    def test_round_trips_camel_case(self, benchmark_result):
        data = json.loads(format_json_output(benchmark_result))
        first = data['files'][0]['results'][0]
        assert first['sizeBytes'] == 800
        assert first['reductionPercent'] == 60.0
        assert 'error' not in first
        assert data['summary'] == {'bestCompression': 'terser', 'bestPerformance': 'terser',
                                   'recommended': 'terser'}

    def test_indented(self, benchmark_result):
        assert format_json_output(benchmark_result).startswith('{\n  "timestamp"')
