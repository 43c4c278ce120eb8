"""
Benchmark Runner
================

Runs every requested compressor against every input file and records
timing and size metrics. Failures are isolated per (file, compressor)
pair: a compressor that cannot be resolved or that raises produces a
``success=False`` record and the rest of the matrix still runs.
"""

import logging
import os
import time
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from base_classes import (
    Settings,
    Compressor,
    CompressorMetrics,
    FileResult,
    BenchmarkResult,
    BenchmarkSummary,
)
from compressors import DeprecationTracker, resolve_compressor
from minify_pipeline import minify
from pipeline_configs import BenchmarkConfig
from resilience_patterns import FileOperationError, best_effort_cleanup
from pipeline.stages.files import (
    get_brotli_size,
    get_gzip_size,
    pretty_bytes,
    wildcards,
)
from .metrics import calculate_reduction, calculate_recommended_score

logger = logging.getLogger(__name__)


def _unique_id() -> str:
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def _settings_for(file: str, output: str, compressor: Compressor, name: str,
                  config: BenchmarkConfig,
                  deprecations: Optional[DeprecationTracker]) -> Settings:
    return Settings(
        compressor=compressor,
        compressor_label=name,
        input=file,
        output=output,
        type=config.type,
        options=dict(config.compressor_options),
        timeout=config.timeout,
        deprecations=deprecations,
    )


async def run_warmup(file: str, compressor: Compressor, name: str, warmup_file: str,
                     count: int, config: BenchmarkConfig,
                     deprecations: Optional[DeprecationTracker] = None) -> None:
    """Untimed runs that absorb cold-start costs"""
    for _ in range(count):
        await minify(_settings_for(file, warmup_file, compressor, name, config, deprecations))


async def run_iterations(file: str, compressor: Compressor, name: str, output_file: str,
                         count: int, config: BenchmarkConfig,
                         deprecations: Optional[DeprecationTracker] = None) -> List[float]:
    """
    Timed runs.

    Returns:
        Wall-clock duration of each iteration in milliseconds
    """
    if count < 1:
        raise ValueError(f"iteration count must be at least 1, got {count}")

    times = []
    for _ in range(count):
        start = time.perf_counter()
        await minify(_settings_for(file, output_file, compressor, name, config, deprecations))
        times.append((time.perf_counter() - start) * 1000)
    return times


async def calculate_compressor_metrics(name: str, times: List[float], output_file: str,
                                       original_size_bytes: int,
                                       config: BenchmarkConfig) -> CompressorMetrics:
    if not times:
        raise ValueError(f"Cannot calculate metrics for '{name}': no timing data provided")

    size_bytes = os.stat(output_file).st_size
    metrics = CompressorMetrics(
        compressor=name,
        size_bytes=size_bytes,
        size=pretty_bytes(size_bytes),
        time_ms=sum(times) / len(times),
        time_min_ms=min(times),
        time_max_ms=max(times),
        iteration_times=list(times) if config.verbose else None,
        reduction_percent=calculate_reduction(original_size_bytes, size_bytes),
        success=True,
    )

    if config.include_gzip:
        metrics.gzip_bytes = await get_gzip_size(output_file)
        metrics.gzip_size = pretty_bytes(metrics.gzip_bytes)

    if config.include_brotli:
        metrics.brotli_bytes = await get_brotli_size(output_file)
        metrics.brotli_size = pretty_bytes(metrics.brotli_bytes)

    return metrics


def create_error_metrics(name: str, error) -> CompressorMetrics:
    return CompressorMetrics(
        compressor=name,
        size_bytes=0,
        size="0 B",
        time_ms=0,
        reduction_percent=0,
        success=False,
        error=str(error),
    )


async def benchmark_compressor(file: str, name: str, config: BenchmarkConfig,
                               original_size_bytes: int,
                               deprecations: Optional[DeprecationTracker] = None) -> CompressorMetrics:
    """Resolve, warm up, measure and clean up one (file, compressor) pair"""
    try:
        resolution = await resolve_compressor(name)
    except Exception as e:
        logger.warning(f"Skipping {name}: {e}")
        return create_error_metrics(name, e)

    unique_id = _unique_id()
    with best_effort_cleanup() as temp_files:
        try:
            if config.warmup > 0:
                warmup_file = f"{file}.warmup.{unique_id}.tmp"
                temp_files.append(warmup_file)
                await run_warmup(file, resolution.compressor, name, warmup_file,
                                 config.warmup, config, deprecations)

            output_file = f"{file}.{name}.{unique_id}.tmp"
            temp_files.append(output_file)
            times = await run_iterations(file, resolution.compressor, name, output_file,
                                         config.iterations, config, deprecations)

            return await calculate_compressor_metrics(name, times, output_file,
                                                      original_size_bytes, config)
        except Exception as e:
            logger.warning(f"{name} failed on {file}: {e}")
            return create_error_metrics(name, e)


async def benchmark_file(file: str, config: BenchmarkConfig,
                         deprecations: Optional[DeprecationTracker] = None) -> FileResult:
    try:
        original_size_bytes = os.stat(file).st_size
    except OSError as e:
        error = FileOperationError("read", file, e)
        logger.warning(f"Skipping {file}: {error}")
        return FileResult(
            file=file,
            original_size_bytes=0,
            original_size=pretty_bytes(0),
            results=[create_error_metrics(name, error) for name in config.compressors],
        )

    results = []
    for name in config.compressors:
        if config.on_progress:
            config.on_progress(name, file)
        results.append(await benchmark_compressor(file, name, config, original_size_bytes,
                                                  deprecations))

    return FileResult(
        file=file,
        original_size_bytes=original_size_bytes,
        original_size=pretty_bytes(original_size_bytes),
        results=results,
    )


def expand_inputs(config: BenchmarkConfig) -> List[str]:
    """Expand glob patterns and drop duplicates, keeping first-seen order"""
    files: List[str] = []
    for pattern in config.inputs:
        matched = wildcards(pattern)
        files.extend(matched if matched is not None else [pattern])
    return list(dict.fromkeys(files))


def calculate_summary(files: List[FileResult]) -> BenchmarkSummary:
    """
    Pick the best compressors across all successful results.

    Ties keep the first result encountered.
    """
    successful = [r for f in files for r in f.results if r.success]
    if not successful:
        return BenchmarkSummary()

    best_compression = successful[0]
    best_performance = successful[0]
    recommended = successful[0]
    for result in successful[1:]:
        if result.reduction_percent > best_compression.reduction_percent:
            best_compression = result
        if result.time_ms < best_performance.time_ms:
            best_performance = result
        if (calculate_recommended_score(result.time_ms, result.reduction_percent) >
                calculate_recommended_score(recommended.time_ms, recommended.reduction_percent)):
            recommended = result

    return BenchmarkSummary(
        best_compression=best_compression.compressor,
        best_performance=best_performance.compressor,
        recommended=recommended.compressor,
    )


async def run_benchmark(config: BenchmarkConfig) -> BenchmarkResult:
    """
    Benchmark ``config.compressors`` against ``config.input``.

    Work runs sequentially; ``files`` and each file's ``results`` follow the
    input and compressor order.
    """
    files = expand_inputs(config)
    logger.info(f"Benchmarking {len(config.compressors)} compressor(s) on {len(files)} file(s)")

    deprecations = DeprecationTracker()
    file_results = []
    for file in files:
        file_results.append(await benchmark_file(file, config, deprecations))

    return BenchmarkResult(
        timestamp=datetime.now(timezone.utc).isoformat(),
        options=config.to_dict(),
        files=file_results,
        summary=calculate_summary(file_results),
    )
