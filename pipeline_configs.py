"""
Pipeline Configurations
=======================

Default settings for compression requests and benchmark runs, plus
pre-configured benchmark presets for common use cases.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List, Union, Callable
import logging

logger = logging.getLogger(__name__)

DEFAULT_BENCHMARK_COMPRESSORS = ["terser", "esbuild", "swc"]

FILE_TYPES = ['js', 'css', 'html', 'json']


@dataclass
class MinifyDefaults:
    """Defaults merged into every compression request"""
    options: Dict[str, Any] = field(default_factory=dict)
    buffer: int = 1000 * 1024

    def __post_init__(self) -> None:
        if self.buffer <= 0:
            raise ValueError("buffer must be positive")


@dataclass
class BenchmarkConfig:
    """Configuration settings for a benchmark run"""

    input: Union[str, List[str]] = ""
    compressors: Optional[List[str]] = None
    iterations: int = 1
    warmup: Optional[int] = None

    # Size settings
    include_gzip: bool = False
    include_brotli: bool = False

    # Output settings
    format: str = 'console'
    output: Optional[str] = None
    verbose: bool = False

    # Per-run compressor timeout in seconds
    timeout: Optional[float] = None

    type: Optional[str] = None
    compressor_options: Dict[str, Any] = field(default_factory=dict)
    on_progress: Optional[Callable[[str, str], None]] = None

    def __post_init__(self) -> None:
        """Validate configuration parameters"""
        if not self.input:
            raise ValueError("input is mandatory")
        if self.compressors is None:
            self.compressors = list(DEFAULT_BENCHMARK_COMPRESSORS)
        if not self.compressors:
            raise ValueError("compressors cannot be empty")
        if self.iterations < 1:
            raise ValueError(f"iterations must be at least 1, got {self.iterations}")
        if self.warmup is None:
            self.warmup = 1 if self.iterations > 1 else 0
        if self.warmup < 0:
            raise ValueError("warmup cannot be negative")
        if self.type is not None and self.type not in FILE_TYPES:
            raise ValueError(f"Invalid type: {self.type}")
        if self.format not in ['console', 'json', 'markdown', 'md']:
            raise ValueError(f"Invalid format: {self.format}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @property
    def inputs(self) -> List[str]:
        return list(self.input) if isinstance(self.input, (list, tuple)) else [self.input]

    def to_dict(self) -> Dict[str, Any]:
        """Echo of the options, as stored in the benchmark result"""
        return {
            'input': self.input,
            'compressors': self.compressors,
            'iterations': self.iterations,
            'warmup': self.warmup,
            'includeGzip': self.include_gzip,
            'includeBrotli': self.include_brotli,
            'format': self.format,
            'output': self.output,
            'verbose': self.verbose,
            'type': self.type,
            'timeout': self.timeout,
            'compressorOptions': self.compressor_options,
        }


class ConfigPresets:
    """Pre-configured benchmark settings for common use cases"""

    @staticmethod
    def quick(input: Union[str, List[str]]) -> BenchmarkConfig:
        """
        Single timed run of the default JavaScript compressors
        - No warmup
        - No gzip/brotli sizing
        """
        return BenchmarkConfig(input=input, iterations=1)

    @staticmethod
    def thorough(input: Union[str, List[str]],
                 compressors: Optional[List[str]] = None) -> BenchmarkConfig:
        """
        Repeated runs with compressed transfer sizes
        - 5 iterations after 2 warmup runs
        - gzip and brotli sizes
        - Per-iteration timings kept
        """
        return BenchmarkConfig(
            input=input,
            compressors=compressors,
            iterations=5,
            warmup=2,
            include_gzip=True,
            include_brotli=True,
            verbose=True
        )

    @staticmethod
    def css(input: Union[str, List[str]]) -> BenchmarkConfig:
        """Stylesheet compressors that work without a Node.js toolchain"""
        return BenchmarkConfig(
            input=input,
            compressors=["rcssmin", "csscompressor", "clean-css", "csso"],
            type='css',
            include_gzip=True
        )
