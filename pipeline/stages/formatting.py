"""
Output Formatter
================

Render benchmark results as a console table, a Markdown report or JSON.
"""

import json
import logging
from typing import Any, Callable, Dict, List

from base_classes import BenchmarkResult, CompressorMetrics

logger = logging.getLogger(__name__)

COL_COMPRESSOR = 16
COL_SIZE = 10
COL_REDUCTION = 12
COL_TIME = 10
COL_GZIP = 10
COL_BROTLI = 10
COL_STATUS = 10


def _escape_markdown(text: str) -> str:
    return text.replace("\\", "\\\\").replace("|", "\\|")


def _columns(results: List[CompressorMetrics]) -> Dict[str, bool]:
    return {
        'gzip': any(r.gzip_size for r in results),
        'brotli': any(r.brotli_size for r in results),
    }


class OutputFormatter:
    """Format benchmark results for terminals, reports and tooling"""

    def __init__(self):
        self.format_templates: Dict[str, Callable[[BenchmarkResult], str]] = {
            'console': self._format_console,
            'markdown': self._format_markdown,
            'md': self._format_markdown,
            'json': self._format_json,
        }

    def get_reporter(self, format_type: str = 'console') -> Callable[[BenchmarkResult], str]:
        """Unknown formats fall back to the console table"""
        return self.format_templates.get(format_type, self._format_console)

    def format_output(self, result: BenchmarkResult, format_type: str = 'console') -> str:
        return self.get_reporter(format_type)(result)

    def _format_console(self, result: BenchmarkResult) -> str:
        rule = "━" * 60
        output = []

        for file in result.files:
            output.append(f"\n🔍 Benchmarking: {file.file} ({file.original_size})")
            output.append(f"{rule}\n")
            output.append(self._format_table(file.results, result.options))
            output.append(rule)

        output.append("")
        output.append(f"🏆 Best compression: {result.summary.best_compression}")
        output.append(f"⚡ Fastest: {result.summary.best_performance}")
        output.append(f"💡 Recommended: {result.summary.recommended}")

        return "\n".join(output) + "\n"

    def _format_table(self, results: List[CompressorMetrics], options: Dict[str, Any]) -> str:
        columns = _columns(results)
        verbose = bool(options.get('verbose')) if options else False

        headers = [("Compressor", COL_COMPRESSOR), ("Size", COL_SIZE),
                   ("Reduction", COL_REDUCTION), ("Time", COL_TIME)]
        if columns['gzip']:
            headers.append(("Gzip", COL_GZIP))
        if columns['brotli']:
            headers.append(("Brotli", COL_BROTLI))
        headers.append(("Status", COL_STATUS))

        total_width = sum(width for _, width in headers)
        lines = ["".join(name.ljust(width) for name, width in headers), "─" * total_width]

        for r in results:
            if r.success:
                row = [
                    r.compressor.ljust(COL_COMPRESSOR),
                    r.size.ljust(COL_SIZE),
                    f"{r.reduction_percent:.1f}%".ljust(COL_REDUCTION),
                    f"{round(r.time_ms)}ms".ljust(COL_TIME),
                ]
                if columns['gzip']:
                    row.append((r.gzip_size or "-").ljust(COL_GZIP))
                if columns['brotli']:
                    row.append((r.brotli_size or "-").ljust(COL_BROTLI))
                row.append("OK".ljust(COL_STATUS))
                lines.append("".join(row).rstrip())

                if verbose and r.iteration_times:
                    timings = ", ".join(f"{round(t)}ms" for t in r.iteration_times)
                    lines.append(f"  └─ {timings}")
            else:
                row = [r.compressor.ljust(COL_COMPRESSOR), "-".ljust(COL_SIZE),
                       "-".ljust(COL_REDUCTION), "-".ljust(COL_TIME)]
                if columns['gzip']:
                    row.append("-".ljust(COL_GZIP))
                if columns['brotli']:
                    row.append("-".ljust(COL_BROTLI))
                row.append(r.error or "Error")
                lines.append("".join(row))

        return "\n".join(lines) + "\n"

    def _format_markdown(self, result: BenchmarkResult) -> str:
        output = ["# Benchmark Results", "", f"**Generated:** {result.timestamp}", ""]

        for file in result.files:
            columns = _columns(file.results)
            output.append(f"## {file.file} ({file.original_size})")
            output.append("")

            headers = "| Compressor | Size | Reduction | Time |"
            separator = "|------------|------|-----------|------|"
            if columns['gzip']:
                headers += " Gzip |"
                separator += "------|"
            if columns['brotli']:
                headers += " Brotli |"
                separator += "--------|"
            output.append(headers + " Status |")
            output.append(separator + "--------|")

            for r in file.results:
                name = _escape_markdown(r.compressor)
                if r.success:
                    row = f"| {name} | {r.size} | {r.reduction_percent:.1f}% | {round(r.time_ms)}ms |"
                    if columns['gzip']:
                        row += f" {r.gzip_size or '-'} |"
                    if columns['brotli']:
                        row += f" {r.brotli_size or '-'} |"
                    row += " OK |"
                else:
                    row = f"| {name} | - | - | - |"
                    if columns['gzip']:
                        row += " - |"
                    if columns['brotli']:
                        row += " - |"
                    row += f" ERROR: {_escape_markdown(r.error or '-')} |"
                output.append(row)
            output.append("")

        output.append("### Summary")
        output.append("")
        output.append(f"- 🏆 **Best compression:** {result.summary.best_compression}")
        output.append(f"- ⚡ **Fastest:** {result.summary.best_performance}")
        output.append(f"- 💡 **Recommended:** {result.summary.recommended}")

        return "\n".join(output) + "\n"

    def _format_json(self, result: BenchmarkResult) -> str:
        return json.dumps(result.to_dict(), indent=2)


_formatter = OutputFormatter()


def format_console_output(result: BenchmarkResult) -> str:
    return _formatter.format_output(result, 'console')


def format_markdown_output(result: BenchmarkResult) -> str:
    return _formatter.format_output(result, 'markdown')


def format_json_output(result: BenchmarkResult) -> str:
    return _formatter.format_output(result, 'json')


def get_reporter(format_type: str = 'console') -> Callable[[BenchmarkResult], str]:
    return _formatter.get_reporter(format_type)
