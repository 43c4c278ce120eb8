"""
Unit tests for pipeline configuration
=====================================

Tests for pipeline_configs.py including:
- BenchmarkConfig defaults and validation
- Presets
"""

import pytest

from pipeline_configs import BenchmarkConfig, ConfigPresets, MinifyDefaults


class TestBenchmarkConfig:
    """Test BenchmarkConfig"""

    def test_defaults(self):
        config = BenchmarkConfig(input="app.js")
        assert config.compressors == ["terser", "esbuild", "swc"]
        assert config.iterations == 1
        assert config.warmup == 0
        assert config.inputs == ["app.js"]

    def test_warmup_default_with_iterations(self):
        assert BenchmarkConfig(input="app.js", iterations=3).warmup == 1
        assert BenchmarkConfig(input="app.js", iterations=3, warmup=0).warmup == 0

    @pytest.mark.parametrize("kwargs", [
        {'input': ""},
        {'input': "app.js", 'compressors': []},
        {'input': "app.js", 'iterations': 0},
        {'input': "app.js", 'warmup': -1},
        {'input': "app.js", 'type': "php"},
        {'input': "app.js", 'format': "xml"},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            BenchmarkConfig(**kwargs)

    def test_to_dict_excludes_callback(self):
        data = BenchmarkConfig(input=["a.js"], on_progress=print).to_dict()
        assert data['input'] == ["a.js"]
        assert data['includeGzip'] is False
        assert 'on_progress' not in data and 'onProgress' not in data


class TestPresets:
    """Test ConfigPresets"""

    def test_thorough(self):
        config = ConfigPresets.thorough("app.js")
        assert (config.iterations, config.warmup) == (5, 2)
        assert config.include_gzip and config.include_brotli and config.verbose

    def test_css(self):
        config = ConfigPresets.css("style.css")
        assert config.type == "css"
        assert "rcssmin" in config.compressors

    def test_minify_defaults(self):
        assert MinifyDefaults().buffer == 1000 * 1024
        with pytest.raises(ValueError):
            MinifyDefaults(buffer=0)
