"""
Base Classes for Minify Pipeline
================================

Contains core data structures shared by the resolver, the execution runner
and the benchmark harness.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Union, Callable

Content = Union[str, bytes, List[bytes]]

# compressor(*, settings, content, index=None) -> CompressorResult
Compressor = Callable[..., Any]


@dataclass
class CompressorOutput:
    """One artifact of a multi-format compression (e.g. webp + avif)"""
    content: Union[str, bytes]
    format: Optional[str] = None


@dataclass
class CompressorResult:
    """Result every compressor must produce"""
    code: str
    map: Optional[str] = None
    buffer: Optional[bytes] = None
    outputs: Optional[List[CompressorOutput]] = None


@dataclass
class CompressorResolution:
    """Compressor function located by the resolver"""
    compressor: Compressor
    label: str
    is_built_in: bool = False


@dataclass
class Settings:
    """A single compression request"""
    compressor: Optional[Compressor] = None
    compressor_label: str = ""
    content: Optional[Content] = None
    input: Optional[Union[str, List[str]]] = None
    output: Optional[Union[str, List[str]]] = None
    options: Dict[str, Any] = field(default_factory=dict)
    sync: bool = False
    buffer: int = 1000 * 1024
    timeout: Optional[float] = None
    type: Optional[str] = None
    silence: bool = False
    public_folder: Optional[str] = None
    replace_in_place: bool = False
    allow_empty_output: bool = False
    # Per-run DeprecationTracker handed to adapters
    deprecations: Optional[Any] = None

    @property
    def label(self) -> str:
        if self.compressor_label:
            return self.compressor_label
        return getattr(self.compressor, '__name__', 'compressor')

    @property
    def in_memory(self) -> bool:
        return self.content is not None


@dataclass
class CompressorMetrics:
    """Benchmark record for one (file, compressor) pair"""
    compressor: str
    size_bytes: int = 0
    size: str = "0 B"
    time_ms: float = 0.0
    reduction_percent: float = 0.0
    success: bool = True
    time_min_ms: Optional[float] = None
    time_max_ms: Optional[float] = None
    iteration_times: Optional[List[float]] = None
    gzip_bytes: Optional[int] = None
    gzip_size: Optional[str] = None
    brotli_bytes: Optional[int] = None
    brotli_size: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'compressor': self.compressor,
            'sizeBytes': self.size_bytes,
            'size': self.size,
            'timeMs': self.time_ms,
            'timeMinMs': self.time_min_ms,
            'timeMaxMs': self.time_max_ms,
            'iterationTimes': self.iteration_times,
            'reductionPercent': self.reduction_percent,
            'gzipBytes': self.gzip_bytes,
            'gzipSize': self.gzip_size,
            'brotliBytes': self.brotli_bytes,
            'brotliSize': self.brotli_size,
            'error': self.error,
            'success': self.success,
        }
        return {key: value for key, value in data.items() if value is not None}


@dataclass
class FileResult:
    """Benchmark results for one input file"""
    file: str
    original_size_bytes: int
    original_size: str
    results: List[CompressorMetrics] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': self.file,
            'originalSizeBytes': self.original_size_bytes,
            'originalSize': self.original_size,
            'results': [r.to_dict() for r in self.results],
        }


@dataclass
class BenchmarkSummary:
    best_compression: str = "N/A"
    best_performance: str = "N/A"
    recommended: str = "N/A"

    def to_dict(self) -> Dict[str, str]:
        return {
            'bestCompression': self.best_compression,
            'bestPerformance': self.best_performance,
            'recommended': self.recommended,
        }


@dataclass
class BenchmarkResult:
    """Top-level benchmark aggregate"""
    timestamp: str
    options: Dict[str, Any]
    files: List[FileResult]
    summary: BenchmarkSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp,
            'options': self.options,
            'files': [f.to_dict() for f in self.files],
            'summary': self.summary.to_dict(),
        }
