#!/usr/bin/env python3
"""
Command line wrapper for the minify pipeline and the compressor benchmark.
"""

import asyncio
import sys
import argparse
import json
import logging
from pathlib import Path

# Add the current directory to Python path
sys.path.insert(0, str(Path(__file__).parent))

from base_classes import Settings
from compressors import list_compressors
from minify_pipeline import minify
from pipeline.benchmark import run_benchmark
from pipeline.stages.files import get_filesize_in_bytes, is_valid_file
from pipeline.stages.formatting import get_reporter
from pipeline_configs import BenchmarkConfig, FILE_TYPES

logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Minify JavaScript, CSS, HTML, JSON and images with pluggable compressors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  compress.py minify -c terser -i app.js -o app.min.js
  compress.py minify -c rcssmin -i 'css/*.css' -o 'dist/$1.min.css'
  compress.py minify -c ./my_compressor.py -i app.js -o app.min.js
  compress.py benchmark app.js -c terser,esbuild -n 5 --gzip
  compress.py --list
        """
    )
    parser.add_argument('--list', action='store_true',
                        help='List the built-in compressors and exit')

    subparsers = parser.add_subparsers(dest='command')

    # Minify
    minify_parser = subparsers.add_parser('minify', help='Compress files with one compressor')
    minify_parser.add_argument('-c', '--compressor', required=True,
                               help='Built-in name, installed module or local file (./x.py)')
    minify_parser.add_argument('-i', '--input', action='append', required=True,
                               help='Input file or glob; repeat for several inputs')
    minify_parser.add_argument('-o', '--output', required=True,
                               help="Output file; '$1' is replaced by the input name")
    minify_parser.add_argument('-t', '--type', choices=FILE_TYPES,
                               help='Content type for compressors that need one')
    minify_parser.add_argument('--option', dest='options', default='{}',
                               help='Compressor options as JSON')
    minify_parser.add_argument('-s', '--silence', action='store_true',
                               help='Hide compressor warnings')
    minify_parser.add_argument('--timeout', type=float,
                               help='Seconds before the compressor is abandoned')

    # Benchmark
    bench_parser = subparsers.add_parser('benchmark', help='Compare compressors on the same files')
    bench_parser.add_argument('input', nargs='+', help='Files or globs to benchmark')
    bench_parser.add_argument('-c', '--compressors',
                              help='Comma separated compressor names (default: terser,esbuild,swc)')
    bench_parser.add_argument('-n', '--iterations', type=int, default=1,
                              help='Timed iterations per compressor')
    bench_parser.add_argument('-w', '--warmup', type=int,
                              help='Untimed warmup runs (default: 1 if iterations > 1)')
    bench_parser.add_argument('-f', '--format', choices=['console', 'markdown', 'md', 'json'],
                              default='console', help='Report format')
    bench_parser.add_argument('-o', '--output', help='Write the report to a file')
    bench_parser.add_argument('--gzip', action='store_true', help='Include gzip sizes')
    bench_parser.add_argument('--brotli', action='store_true', help='Include brotli sizes')
    bench_parser.add_argument('-v', '--verbose', action='store_true',
                              help='Keep per-iteration timings and show progress')
    bench_parser.add_argument('-t', '--type', choices=FILE_TYPES,
                              help='Content type passed to each compressor')
    bench_parser.add_argument('--timeout', type=float,
                              help='Seconds before each compressor run is abandoned')

    args = parser.parse_args(argv)
    if not args.list and not args.command:
        parser.error("a command is required (minify or benchmark)")
    return args


def print_compressors():
    for info in list_compressors():
        deprecated = " (deprecated)" if info.deprecated else ""
        print(f"  {info.name:<24} {info.type:<6} {info.description}{deprecated}")


async def run_minify(args) -> None:
    try:
        options = json.loads(args.options)
    except json.JSONDecodeError as e:
        raise ValueError(f"--option must be valid JSON: {e}") from e
    if not isinstance(options, dict):
        raise ValueError("--option must be a JSON object")

    settings = Settings(
        compressor=args.compressor,
        input=args.input[0] if len(args.input) == 1 else args.input,
        output=args.output,
        type=args.type,
        options=options,
        silence=args.silence,
        timeout=args.timeout,
    )

    print(f"Compressing: {', '.join(args.input)}")
    print(f"Compressor: {args.compressor}")
    await minify(settings)

    print("\n✅ Compression complete!")
    if '$1' not in args.output and is_valid_file(args.output):
        print(f"📁 {args.output}: {get_filesize_in_bytes(args.output)}")


async def run_benchmark_command(args) -> None:
    def on_progress(name: str, file: str) -> None:
        print(f"  Running {name} on {file}...")

    config = BenchmarkConfig(
        input=args.input,
        compressors=[name.strip() for name in args.compressors.split(',') if name.strip()]
        if args.compressors else None,
        iterations=args.iterations,
        warmup=args.warmup,
        include_gzip=args.gzip,
        include_brotli=args.brotli,
        format=args.format,
        output=args.output,
        verbose=args.verbose,
        type=args.type,
        timeout=args.timeout,
        on_progress=on_progress if args.verbose else None,
    )

    result = await run_benchmark(config)
    report = get_reporter(config.format)(result)

    if config.output:
        Path(config.output).write_text(report, encoding='utf-8')
        print(f"📁 Report written to {config.output}")
    else:
        print(report)


async def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.INFO if getattr(args, 'verbose', False) else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.list:
        print("Available compressors:")
        print_compressors()
        return

    try:
        if args.command == 'minify':
            await run_minify(args)
        else:
            await run_benchmark_command(args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\n❌ Compression failed: {e}")
        sys.exit(1)


def cli():
    asyncio.run(main())


if __name__ == "__main__":
    cli()
